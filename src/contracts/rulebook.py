"""Central registry of grid invariants."""

from __future__ import annotations


from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from solver.constraints import BOX_SIZE, DIGITS, EMPTY, GRID_SIZE

from .errors import ValidationIssue, make_error, make_warning

# Fewest clues known to admit a unique solution.
MIN_UNIQUE_CLUES = 17


@dataclass(frozen=True)
class InvariantRule:
    name: str
    check: Callable[[Sequence[Sequence[int]]], Iterable[ValidationIssue]]


def _grid_shape(grid: Sequence[Sequence[int]]) -> Iterable[ValidationIssue]:
    if not isinstance(grid, (list, tuple)):
        return [make_error("type.mismatch", "grid must be a list of rows", "$")]
    if len(grid) != GRID_SIZE:
        return [
            make_error(
                "invariant.grid.shape",
                f"grid has {len(grid)} rows, expected {GRID_SIZE}",
                "$",
            )
        ]
    issues: List[ValidationIssue] = []
    for row_index, row in enumerate(grid):
        if not isinstance(row, (list, tuple)) or len(row) != GRID_SIZE:
            issues.append(
                make_error(
                    "invariant.grid.shape",
                    f"row {row_index} must hold {GRID_SIZE} cells",
                    f"$[{row_index}]",
                )
            )
    return issues


def _digit_range(grid: Sequence[Sequence[int]]) -> Iterable[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for row_index, row in enumerate(grid):
        for col_index, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, int) or not EMPTY <= value <= GRID_SIZE:
                issues.append(
                    make_error(
                        "invariant.grid.digit_range",
                        f"cell value {value!r} is not a digit 0-9",
                        f"$[{row_index}][{col_index}]",
                    )
                )
    return issues


def _duplicates(
    code: str,
    label: str,
    units: Iterable[Tuple[int, List[Tuple[int, int]]]],
    grid: Sequence[Sequence[int]],
) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for unit_index, cells in units:
        seen: Dict[int, Tuple[int, int]] = {}
        for row, col in cells:
            value = grid[row][col]
            if value == EMPTY:
                continue
            if value in seen:
                first_row, first_col = seen[value]
                issues.append(
                    make_error(
                        code,
                        f"digit {value} repeated in {label} {unit_index} "
                        f"(first at row {first_row}, col {first_col})",
                        f"$[{row}][{col}]",
                    )
                )
            else:
                seen[value] = (row, col)
    return issues


def _row_units() -> Iterable[Tuple[int, List[Tuple[int, int]]]]:
    for row in range(GRID_SIZE):
        yield row, [(row, col) for col in range(GRID_SIZE)]


def _col_units() -> Iterable[Tuple[int, List[Tuple[int, int]]]]:
    for col in range(GRID_SIZE):
        yield col, [(row, col) for row in range(GRID_SIZE)]


def _box_units() -> Iterable[Tuple[int, List[Tuple[int, int]]]]:
    for box in range(GRID_SIZE):
        top = (box // BOX_SIZE) * BOX_SIZE
        left = (box % BOX_SIZE) * BOX_SIZE
        yield box, [
            (row, col)
            for row in range(top, top + BOX_SIZE)
            for col in range(left, left + BOX_SIZE)
        ]


def _duplicate_row(grid: Sequence[Sequence[int]]) -> Iterable[ValidationIssue]:
    return _duplicates("invariant.grid.duplicate_row", "row", _row_units(), grid)


def _duplicate_col(grid: Sequence[Sequence[int]]) -> Iterable[ValidationIssue]:
    return _duplicates("invariant.grid.duplicate_col", "column", _col_units(), grid)


def _duplicate_box(grid: Sequence[Sequence[int]]) -> Iterable[ValidationIssue]:
    return _duplicates("invariant.grid.duplicate_box", "box", _box_units(), grid)


def _min_clues(grid: Sequence[Sequence[int]]) -> Iterable[ValidationIssue]:
    clues = sum(1 for row in grid for value in row if value in DIGITS)
    if clues < MIN_UNIQUE_CLUES:
        return [
            make_warning(
                "invariant.grid.min_clues",
                f"{clues} clues cannot determine a unique solution (need at least {MIN_UNIQUE_CLUES})",
                "$",
            )
        ]
    return []


# Shape rules gate the rest: cell rules index into the grid.
SHAPE_RULES: Tuple[InvariantRule, ...] = (InvariantRule("grid_shape", _grid_shape),)

CELL_RULES: Tuple[InvariantRule, ...] = (
    InvariantRule("digit_range", _digit_range),
    InvariantRule("duplicate_row", _duplicate_row),
    InvariantRule("duplicate_col", _duplicate_col),
    InvariantRule("duplicate_box", _duplicate_box),
    InvariantRule("min_clues", _min_clues),
)


def run_rules(rules: Iterable[InvariantRule], grid: Sequence[Sequence[int]]) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for rule in rules:
        issues.extend(rule.check(grid))
    return issues


__all__ = [
    "CELL_RULES",
    "InvariantRule",
    "MIN_UNIQUE_CLUES",
    "SHAPE_RULES",
    "run_rules",
]
