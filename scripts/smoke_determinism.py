#!/usr/bin/env python3
"""Smoke-test deterministic behaviour of the search on the bundled puzzle."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from contracts.loader import load_puzzle
from ports.solver_port import solve_puzzle


def _run(path: Path):
    grid = load_puzzle(path)
    return solve_puzzle(grid, trace_level="moves", env={"SUDOKU_EVENTS_ENABLED": "0"})


def main() -> int:
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else ROOT / "puzzle0.dat"
    first = _run(path)
    second = _run(path)

    if first.solved != second.solved:
        print(f"determinism failed for solved: {first.solved} vs {second.solved}")
        return 1
    if first.grid != second.grid:
        print("determinism failed: different resulting grids")
        return 1
    if first.trace != second.trace:
        print(f"determinism failed: traces differ ({len(first.trace)} vs {len(second.trace)} entries)")
        return 1
    if first.stats != second.stats:
        print(f"determinism failed for stats: {first.stats} vs {second.stats}")
        return 1

    print(f"Determinism smoke-test passed ({len(first.trace)} trace entries).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
