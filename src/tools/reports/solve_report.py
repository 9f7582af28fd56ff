"""Aggregation helpers for JSONL solve event logs."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

__all__ = ["aggregate", "main"]

_EVENT = "solve.completed"


def _load_events(paths: Iterable[Path]) -> Iterable[Mapping[str, object]]:
    for path in paths:
        for line in path.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            yield json.loads(line)


def aggregate(paths: Iterable[Path]) -> Mapping[str, object]:
    total = 0
    solved = 0
    nodes = 0
    elapsed: List[int] = []
    for event in _load_events(paths):
        if event.get("event") != _EVENT:
            continue
        total += 1
        if event.get("solved") is True:
            solved += 1
        nodes += int(event.get("nodes", 0))
        elapsed.append(int(event.get("elapsed_us", 0)))

    return {
        "total_events": total,
        "solved": solved,
        "unsolved": total - solved,
        "total_nodes": nodes,
        "elapsed_us": {
            "min": min(elapsed) if elapsed else 0,
            "max": max(elapsed) if elapsed else 0,
            "mean": round(sum(elapsed) / len(elapsed), 1) if elapsed else 0.0,
        },
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Summarise solve events from JSONL logs")
    parser.add_argument("path", help="Directory containing JSONL logs")
    args = parser.parse_args(argv)

    base_dir = Path(args.path)
    files = sorted(base_dir.glob("**/*.jsonl"))
    if not files:
        raise SystemExit(f"No JSONL logs found under {base_dir}")
    print(json.dumps(aggregate(files), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
