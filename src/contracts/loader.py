"""Strict loader for the nine-line puzzle file format.

A puzzle file holds exactly nine rows of exactly nine ASCII digits, ``0``
marking an empty cell. Rows end with ``\\n`` or ``\\r\\n``; the last row may
omit its terminator. Anything after the ninth row is rejected.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from solver.constraints import GRID_SIZE, Grid

from .errors import PuzzleLoadError

_ALLOWED = frozenset("0123456789")
_INVALID = "Invalid puzzle file format."


def _split_rows(text: str) -> List[str]:
    if text.endswith("\r\n"):
        text = text[:-2]
    elif text.endswith("\n"):
        text = text[:-1]
    rows = text.split("\n")
    return [row[:-1] if row.endswith("\r") else row for row in rows]


def parse_puzzle(text: str, *, source: str = "<string>") -> Grid:
    """Parse puzzle ``text`` into a 9x9 grid of ints."""

    if not text:
        raise PuzzleLoadError(f"{_INVALID} (File is empty.)", source=source)

    rows = _split_rows(text)
    grid: Grid = []
    for index, row in enumerate(rows[:GRID_SIZE]):
        line = index + 1
        if len(row) != GRID_SIZE:
            raise PuzzleLoadError(
                f"{_INVALID} (Row has {len(row)} characters, expected {GRID_SIZE}.)",
                source=source,
                line=line,
            )
        for char in row:
            if char not in _ALLOWED:
                raise PuzzleLoadError(
                    f"{_INVALID} (Unexpected character {char!r}.)",
                    source=source,
                    line=line,
                )
        grid.append([int(char) for char in row])

    if len(rows) < GRID_SIZE:
        raise PuzzleLoadError(
            f"{_INVALID} (Unexpected end of file after {len(rows)} rows.)",
            source=source,
            line=len(rows) + 1,
        )
    if len(rows) > GRID_SIZE:
        raise PuzzleLoadError(
            f"{_INVALID} (Unexpected content after the last row.)",
            source=source,
            line=GRID_SIZE + 1,
        )
    return grid


def load_puzzle(path: str | Path) -> Grid:
    """Read and parse the puzzle stored at ``path``."""

    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise PuzzleLoadError(f"File {path} not found.", source=str(path)) from exc
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as exc:
        raise PuzzleLoadError(
            f"{_INVALID} (File is not ASCII text.)",
            source=str(path),
        ) from exc
    return parse_puzzle(text, source=str(path))


def dump_puzzle(grid: Grid) -> str:
    """Serialise ``grid`` back into the nine-line format."""

    return "".join("".join(str(value) for value in row) + "\n" for row in grid)


__all__ = ["dump_puzzle", "load_puzzle", "parse_puzzle"]
