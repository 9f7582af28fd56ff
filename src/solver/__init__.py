"""MRV backtracking solver for the classic 9x9 Sudoku."""

from __future__ import annotations

from .constraints import Cell, Grid, box_origin, candidates_for, grid_copy
from .search import (
    CellChoice,
    DeadEnd,
    NoEmptyCell,
    SearchStats,
    SearchTrace,
    TraceEntry,
    select_best_cell,
    solve,
)

__all__ = [
    "Cell",
    "CellChoice",
    "DeadEnd",
    "Grid",
    "NoEmptyCell",
    "SearchStats",
    "SearchTrace",
    "TraceEntry",
    "box_origin",
    "candidates_for",
    "grid_copy",
    "select_best_cell",
    "solve",
]
