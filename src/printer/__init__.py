"""Text printer for Sudoku grids."""

from __future__ import annotations

from .text import format_banner, format_grid, format_report, format_trace

__all__ = ["format_banner", "format_grid", "format_report", "format_trace"]
