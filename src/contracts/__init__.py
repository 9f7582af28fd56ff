"""Puzzle file contracts and grid validation."""

from __future__ import annotations

from .errors import ManagedValidationError, PuzzleLoadError, ValidationIssue, ValidationReport
from .loader import dump_puzzle, load_puzzle, parse_puzzle
from .validator import assert_valid, validate_grid

__all__ = [
    "ManagedValidationError",
    "PuzzleLoadError",
    "ValidationIssue",
    "ValidationReport",
    "assert_valid",
    "dump_puzzle",
    "load_puzzle",
    "parse_puzzle",
    "validate_grid",
]
