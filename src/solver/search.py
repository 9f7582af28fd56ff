"""Backtracking search with the minimum-remaining-values heuristic."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .constraints import EMPTY, GRID_SIZE, Cell, Grid, candidates_for

TRACE_LEVELS = ("none", "moves")


@dataclass(frozen=True)
class NoEmptyCell:
    """Selection outcome for a grid without empty cells."""


@dataclass(frozen=True)
class DeadEnd:
    """Selection outcome for a grid holding an empty cell with no candidates."""

    cell: Cell


@dataclass(frozen=True)
class CellChoice:
    """The most constrained empty cell and its candidates in ascending order."""

    cell: Cell
    candidates: Tuple[int, ...]


Selection = Union[NoEmptyCell, DeadEnd, CellChoice]


@dataclass
class SearchStats:
    """Counters collected during a single search."""

    nodes: int = 0
    assignments: int = 0
    backtracks: int = 0
    dead_ends: int = 0
    max_depth: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "nodes": self.nodes,
            "assignments": self.assignments,
            "backtracks": self.backtracks,
            "dead_ends": self.dead_ends,
            "max_depth": self.max_depth,
        }


@dataclass(frozen=True)
class TraceEntry:
    kind: str
    cell: Cell
    value: int
    depth: int


@dataclass
class SearchTrace:
    """In-memory move recorder honouring the ``trace_level`` setting."""

    trace_level: str = "none"
    entries: List[TraceEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.trace_level not in TRACE_LEVELS:
            raise ValueError(f"Unsupported trace level: {self.trace_level!r}")

    def record(self, entry: TraceEntry) -> None:
        if self.trace_level == "none":
            return
        self.entries.append(entry)

    def snapshot(self) -> Tuple[TraceEntry, ...]:
        return tuple(self.entries)

    def assignments(self) -> List[Tuple[Cell, int]]:
        return [(entry.cell, entry.value) for entry in self.entries if entry.kind == "assign"]

    def reset(self) -> None:
        self.entries.clear()


_NO_EMPTY_CELL = NoEmptyCell()


def select_best_cell(grid: Grid) -> Selection:
    """Pick the empty cell with the fewest candidates.

    Cells are scanned in row-major order. The scan stops early on an empty
    cell without candidates (the grid is a dead end) and on a cell with a
    single candidate (no cell can do better). Ties keep the cell found first.
    """

    best: Optional[CellChoice] = None
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            if grid[row][col] != EMPTY:
                continue
            candidates = candidates_for(grid, row, col)
            if not candidates:
                return DeadEnd((row, col))
            if len(candidates) == 1:
                return CellChoice((row, col), candidates)
            if best is None or len(candidates) < len(best.candidates):
                best = CellChoice((row, col), candidates)
    if best is None:
        return _NO_EMPTY_CELL
    return best


def solve(
    grid: Grid,
    *,
    stats: SearchStats | None = None,
    trace: SearchTrace | None = None,
) -> bool:
    """Fill ``grid`` in place and report whether a solution was found.

    On success the grid holds the first solution reached when candidates are
    tried in ascending order. On failure every assignment made by the search
    has been undone and the grid is exactly as it was before the call.

    Parameters
    ----------
    grid:
        9x9 list of lists with ``0`` for empty cells. Pre-existing conflicts
        between filled cells are not detected here; use
        :func:`contracts.validator.validate_grid` beforehand.
    stats:
        Optional counters updated while searching.
    trace:
        Optional recorder receiving ``assign`` and ``revert`` entries.
    """

    if stats is None:
        stats = SearchStats()
    return _search(grid, stats, trace, 0)


def _search(grid: Grid, stats: SearchStats, trace: SearchTrace | None, depth: int) -> bool:
    stats.nodes += 1
    if depth > stats.max_depth:
        stats.max_depth = depth

    selection = select_best_cell(grid)
    if isinstance(selection, NoEmptyCell):
        return True
    if isinstance(selection, DeadEnd):
        stats.dead_ends += 1
        return False

    row, col = selection.cell
    for value in selection.candidates:
        grid[row][col] = value
        stats.assignments += 1
        if trace is not None:
            trace.record(TraceEntry("assign", selection.cell, value, depth))
        if _search(grid, stats, trace, depth + 1):
            return True

    grid[row][col] = EMPTY
    stats.backtracks += 1
    if trace is not None:
        trace.record(TraceEntry("revert", selection.cell, EMPTY, depth))
    return False


__all__ = [
    "CellChoice",
    "DeadEnd",
    "NoEmptyCell",
    "SearchStats",
    "SearchTrace",
    "Selection",
    "TRACE_LEVELS",
    "TraceEntry",
    "select_best_cell",
    "solve",
]
