"""Constraint evaluation for the classic 9x9 Sudoku grid."""

from __future__ import annotations

from typing import List, Set, Tuple

Grid = List[List[int]]
Cell = Tuple[int, int]

GRID_SIZE = 9
BOX_SIZE = 3
EMPTY = 0
DIGITS: Tuple[int, ...] = tuple(range(1, GRID_SIZE + 1))


def box_origin(row: int, col: int) -> Cell:
    """Return the top-left cell of the 3x3 box containing ``(row, col)``."""

    return row - row % BOX_SIZE, col - col % BOX_SIZE


def used_digits(grid: Grid, row: int, col: int) -> Set[int]:
    """Collect every value present in the row, column and box of a cell.

    The result may contain ``0`` when peers are empty; callers only ever
    subtract it from the digit range so it is left in place.
    """

    used = set(grid[row])
    used.update(grid[r][col] for r in range(GRID_SIZE))
    origin_row, origin_col = box_origin(row, col)
    for r in range(origin_row, origin_row + BOX_SIZE):
        used.update(grid[r][origin_col:origin_col + BOX_SIZE])
    return used


def candidates_for(grid: Grid, row: int, col: int) -> Tuple[int, ...]:
    """Return the digits that can legally be placed at ``(row, col)``.

    Legality is local: a digit is a candidate when it does not already appear
    in the cell's row, column or box. A filled cell counts its own digit as
    used, so that digit never appears among its candidates. Digits are
    returned in ascending order.
    """

    used = used_digits(grid, row, col)
    return tuple(digit for digit in DIGITS if digit not in used)


def empty_cells(grid: Grid) -> List[Cell]:
    """List the empty cells in row-major order."""

    return [
        (row, col)
        for row in range(GRID_SIZE)
        for col in range(GRID_SIZE)
        if grid[row][col] == EMPTY
    ]


def grid_copy(grid: Grid) -> Grid:
    return [row[:] for row in grid]


__all__ = [
    "BOX_SIZE",
    "Cell",
    "DIGITS",
    "EMPTY",
    "GRID_SIZE",
    "Grid",
    "box_origin",
    "candidates_for",
    "empty_cells",
    "grid_copy",
    "used_digits",
]
