"""Port facades over the solver core."""

from __future__ import annotations

from .solver_port import SolveOutcome, solve_puzzle

__all__ = [
    "SolveOutcome",
    "solve_puzzle",
]
