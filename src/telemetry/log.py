"""Light-weight JSONL event logger with rotation support."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from project_config import get_section

__all__ = ["configure", "reset", "append_event", "current_log_path", "log_dir"]

_DEFAULT_MAX_BYTES = 100 * 1024 * 1024
_DEFAULT_DIR = "logs/solve"
_LOCK = threading.Lock()
_LOG_DIR: Path | None = None
_MAX_BYTES: int | None = None
_CURRENT_PATH: Path | None = None


def configure(base_dir: str | Path, *, max_bytes: int | None = None) -> None:
    """Configure the logger to use ``base_dir`` for all files."""

    global _LOG_DIR, _MAX_BYTES, _CURRENT_PATH
    _LOG_DIR = Path(base_dir)
    _MAX_BYTES = max_bytes or _DEFAULT_MAX_BYTES
    _CURRENT_PATH = None


def reset() -> None:
    """Forget any configured directory and size limit and fall back to config.toml."""

    global _LOG_DIR, _MAX_BYTES, _CURRENT_PATH
    _LOG_DIR = None
    _MAX_BYTES = None
    _CURRENT_PATH = None


def log_dir() -> Path:
    if _LOG_DIR is not None:
        return _LOG_DIR
    return Path(str(get_section("events.dir", _DEFAULT_DIR)))


def _max_bytes() -> int:
    if _MAX_BYTES is not None:
        return _MAX_BYTES
    return int(get_section("events.max_bytes", _DEFAULT_MAX_BYTES))


def _date_prefix() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d")


def _resolve_log_path() -> Path:
    global _CURRENT_PATH
    date_dir = log_dir() / _date_prefix()
    date_dir.mkdir(parents=True, exist_ok=True)
    limit = _max_bytes()

    if _CURRENT_PATH is not None and _CURRENT_PATH.parent == date_dir and _CURRENT_PATH.exists():
        if _CURRENT_PATH.stat().st_size < limit:
            return _CURRENT_PATH

    counter = 0
    while True:
        candidate = date_dir / f"solve_{counter:02d}.jsonl"
        if not candidate.exists() or candidate.stat().st_size < limit:
            _CURRENT_PATH = candidate
            return candidate
        counter += 1


def append_event(event: Dict[str, Any]) -> Path:
    """Append ``event`` to the active JSONL file and return the file path."""

    payload = dict(event)
    payload.setdefault("ts", datetime.now(timezone.utc).isoformat(timespec="milliseconds"))

    line = json.dumps(payload, sort_keys=True, ensure_ascii=False)
    with _LOCK:
        path = _resolve_log_path()
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
    return path


def current_log_path() -> Path | None:
    return _CURRENT_PATH
