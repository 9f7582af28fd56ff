"""Plain-text rendering of grids and solve reports."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List

from solver.constraints import BOX_SIZE, Grid
from solver.search import TraceEntry

if TYPE_CHECKING:
    from ports.solver_port import SolveOutcome

ROW_DIVIDER = "------+-------+------"
BANNER_RULE = "-" * 21


def format_grid(grid: Grid) -> str:
    lines: List[str] = []
    for row_index, row in enumerate(grid):
        if row_index and row_index % BOX_SIZE == 0:
            lines.append(ROW_DIVIDER)
        cells: List[str] = []
        for col_index, value in enumerate(row):
            if col_index and col_index % BOX_SIZE == 0:
                cells.append("|")
            cells.append(str(value))
        lines.append(" ".join(cells))
    return "\n".join(lines)


def format_banner(title: str) -> str:
    return f"   {title}\n{BANNER_RULE}"


def format_trace(entries: Iterable[TraceEntry]) -> str:
    """Render trace entries one per line, indented by search depth."""

    lines = []
    for entry in entries:
        row, col = entry.cell
        indent = "  " * entry.depth
        if entry.kind == "assign":
            lines.append(f"{indent}r{row}c{col} = {entry.value}")
        else:
            lines.append(f"{indent}r{row}c{col} cleared")
    return "\n".join(lines)


def format_report(outcome: SolveOutcome, *, trace: bool = False) -> str:
    """Render a :class:`ports.solver_port.SolveOutcome` for the terminal."""

    status = "Puzzle solved." if outcome.solved else "No solution exists for this puzzle."
    parts = [
        format_banner("Unsolved Puzzle"),
        format_grid(outcome.puzzle),
        "",
        "",
        format_banner("Solved Puzzle"),
        format_grid(outcome.grid),
        "",
        status,
        f"Time taken: {outcome.elapsed_us}  microseconds.",
    ]
    if trace:
        parts.extend(["", format_banner("Search Trace")])
        if outcome.trace:
            parts.append(format_trace(outcome.trace))
    return "\n".join(parts)


__all__ = [
    "BANNER_RULE",
    "ROW_DIVIDER",
    "format_banner",
    "format_grid",
    "format_report",
    "format_trace",
]
