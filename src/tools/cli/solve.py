"""Command line entry point: load a puzzle file, solve it and print the result."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from contracts.errors import ManagedValidationError, PuzzleLoadError
from contracts.loader import dump_puzzle, load_puzzle
from feature_flags import FeatureFlagError
from ports.solver_port import solve_puzzle
from printer.text import format_report
from project_config import ConfigError, get_section

_LOGGER = logging.getLogger(__name__)

_DEFAULT_PUZZLE = "puzzle0.dat"

EXIT_OK = 0
EXIT_UNSOLVED = 1
EXIT_USAGE = 2
EXIT_NAMED_FILE = 3
EXIT_DEFAULT_FILE = 4
EXIT_INVALID_PUZZLE = 5
EXIT_CONFIG = 6


def _default_puzzle() -> str:
    value = get_section("puzzle.default_file", _DEFAULT_PUZZLE)
    return str(value) if value else _DEFAULT_PUZZLE


def _build_env(args: argparse.Namespace) -> Dict[str, str]:
    env: Dict[str, str] = {}
    if args.skip_validation:
        env["CLI_SUDOKU_PREVALIDATE"] = "0"
    if args.trace:
        env["CLI_SUDOKU_TRACE_LEVEL"] = "moves"
    if args.events:
        env["CLI_SUDOKU_EVENTS_ENABLED"] = "1"
    return env


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sudoku-solve",
        description="Solve a 9x9 Sudoku puzzle with MRV backtracking search.",
    )
    parser.add_argument(
        "puzzle",
        nargs="?",
        default=None,
        help=(
            "Puzzle file: nine rows of nine digits, 0 for empty cells. "
            "Defaults to 'puzzle.default_file' from config.toml."
        ),
    )
    parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Do not reject puzzles with duplicate digits before solving.",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Record and print every assignment and backtrack.",
    )
    parser.add_argument(
        "--events",
        action="store_true",
        help="Append a solve event to the JSONL event log.",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the solved grid to this file in puzzle format.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (defaults to 'cli.log_level' from config.toml).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    named = args.puzzle is not None
    try:
        level = args.log_level or str(get_section("cli.log_level", "WARNING")).upper()
        path = Path(args.puzzle if named else _default_puzzle())
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_CONFIG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        grid = load_puzzle(path)
    except PuzzleLoadError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_NAMED_FILE if named else EXIT_DEFAULT_FILE
    _LOGGER.debug("loaded puzzle from %s", path)

    try:
        outcome = solve_puzzle(grid, env=_build_env(args))
    except ManagedValidationError as exc:
        print(str(exc), file=sys.stderr)
        for issue in exc.report.errors:
            print(f"  {issue.path}: {issue.msg}", file=sys.stderr)
        return EXIT_INVALID_PUZZLE
    except (ConfigError, FeatureFlagError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_CONFIG

    print(format_report(outcome, trace=args.trace))

    if not outcome.solved:
        if args.output:
            print(f"No solution to write; {args.output} was not created.", file=sys.stderr)
        return EXIT_UNSOLVED
    if args.output:
        Path(args.output).write_text(dump_puzzle(outcome.grid), encoding="ascii")
    return EXIT_OK


__all__ = [
    "EXIT_CONFIG",
    "EXIT_DEFAULT_FILE",
    "EXIT_INVALID_PUZZLE",
    "EXIT_NAMED_FILE",
    "EXIT_OK",
    "EXIT_UNSOLVED",
    "EXIT_USAGE",
    "build_parser",
    "main",
]


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
