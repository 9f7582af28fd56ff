from __future__ import annotations

from solver.constraints import box_origin, candidates_for, empty_cells, grid_copy


PUZZLE = (
    "530070000",
    "600195000",
    "098000060",
    "800060003",
    "400803001",
    "700020006",
    "060000280",
    "000419005",
    "000080079",
)


def _grid(rows) -> list[list[int]]:
    return [[int(ch) for ch in row] for row in rows]


def test_box_origin_snaps_to_three_by_three_blocks():
    assert box_origin(0, 0) == (0, 0)
    assert box_origin(4, 7) == (3, 6)
    assert box_origin(8, 8) == (6, 6)
    assert box_origin(2, 3) == (0, 3)


def test_candidates_exclude_row_column_and_box():
    grid = _grid(PUZZLE)
    assert candidates_for(grid, 0, 2) == (1, 2, 4)
    assert candidates_for(grid, 4, 4) == (5,)


def test_empty_grid_allows_every_digit():
    grid = [[0] * 9 for _ in range(9)]
    assert candidates_for(grid, 5, 5) == tuple(range(1, 10))


def test_filled_cell_excludes_its_own_digit():
    grid = _grid(PUZZLE)
    assert 5 not in candidates_for(grid, 0, 0)


def test_cell_without_candidates_yields_empty_tuple():
    grid = [[0] * 9 for _ in range(9)]
    grid[0] = [0, 2, 3, 4, 5, 6, 7, 8, 9]
    grid[1][0] = 1
    assert candidates_for(grid, 0, 0) == ()


def test_candidates_are_pure_and_repeatable():
    grid = _grid(PUZZLE)
    snapshot = grid_copy(grid)
    first = candidates_for(grid, 6, 0)
    second = candidates_for(grid, 6, 0)
    assert first == second
    assert grid == snapshot


def test_empty_cells_are_listed_row_major():
    grid = _grid(PUZZLE)
    cells = empty_cells(grid)
    assert len(cells) == 51
    assert cells[:3] == [(0, 2), (0, 3), (0, 5)]
    assert cells == sorted(cells)
