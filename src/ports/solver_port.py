"""Facade running the MRV search with validation, timing and event logging."""

from __future__ import annotations

import hashlib
import logging
import os
import time
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from contracts import validator
from contracts.errors import ValidationReport
from feature_flags import get_trace_level, is_event_log_enabled, is_prevalidation_enabled
from solver.constraints import EMPTY, Grid, grid_copy
from solver.search import SearchStats, SearchTrace, TraceEntry, solve
from telemetry import log as event_log

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveOutcome:
    """Result of a single solve through the port.

    ``puzzle`` is a copy of the input grid and ``grid`` the state after the
    search: the solution when ``solved`` is true, otherwise a grid equal to
    ``puzzle``.
    """

    puzzle: Grid
    grid: Grid
    solved: bool
    elapsed_us: int
    stats: SearchStats
    trace: Tuple[TraceEntry, ...]
    validation: Optional[ValidationReport]


def build_env(overrides: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Merge process environment with optional overrides."""

    env: Dict[str, str] = {str(k): str(v) for k, v in os.environ.items()}
    if overrides:
        env.update({str(k): str(v) for k, v in overrides.items()})
    return env


def puzzle_digest(grid: Grid) -> str:
    encoded = "".join(str(value) for row in grid for value in row)
    return f"sha256-{hashlib.sha256(encoded.encode('ascii')).hexdigest()}"


def _clue_count(grid: Grid) -> int:
    return sum(1 for row in grid for value in row if value != EMPTY)


def solve_puzzle(
    grid: Grid,
    *,
    env: Mapping[str, str] | None = None,
    prevalidate: bool | None = None,
    trace_level: str | None = None,
) -> SolveOutcome:
    """Solve a copy of ``grid`` and describe the outcome.

    The caller's grid is never mutated. Pre-validation, the trace level and
    event logging follow ``config/features.toml`` unless overridden through
    ``env`` (``SUDOKU_*`` / ``CLI_SUDOKU_*`` keys) or the explicit arguments.

    Raises
    ------
    ManagedValidationError
        When pre-validation is enabled and the grid is malformed or holds
        duplicate digits in a row, column or box.
    FeatureFlagError
        When the trace level resolved from ``config/features.toml`` or the
        environment is not ``none`` or ``moves``.
    """

    env_map = build_env(env)
    if prevalidate is None:
        prevalidate = is_prevalidation_enabled(env_map)
    if trace_level is None:
        trace_level = get_trace_level(env_map)

    report: Optional[ValidationReport] = None
    if prevalidate:
        report = validator.assert_valid(grid)
        for warning in report.warnings:
            _LOGGER.warning("%s: %s", warning.code, warning.msg)

    puzzle = grid_copy(grid)
    working = grid_copy(grid)
    stats = SearchStats()
    trace = SearchTrace(trace_level=trace_level)

    start = time.perf_counter_ns()
    solved = solve(working, stats=stats, trace=trace)
    elapsed_us = (time.perf_counter_ns() - start) // 1000

    _LOGGER.info(
        "solve finished: solved=%s elapsed_us=%d nodes=%d backtracks=%d",
        solved,
        elapsed_us,
        stats.nodes,
        stats.backtracks,
    )

    if is_event_log_enabled(env_map):
        path = event_log.append_event(
            {
                "event": "solve.completed",
                "puzzle_digest": puzzle_digest(puzzle),
                "clues": _clue_count(puzzle),
                "solved": solved,
                "elapsed_us": elapsed_us,
                "prevalidated": bool(prevalidate),
                **stats.as_dict(),
            }
        )
        _LOGGER.debug("solve event appended to %s", path)

    return SolveOutcome(
        puzzle=puzzle,
        grid=working,
        solved=solved,
        elapsed_us=elapsed_us,
        stats=stats,
        trace=trace.snapshot(),
        validation=report,
    )


__all__ = ["SolveOutcome", "build_env", "puzzle_digest", "solve_puzzle"]
