"""Access to ``config.toml``: default puzzle file, event log location and CLI log level."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]


_CONFIG_FILENAME = "config.toml"
CONFIG_ENV = "SUDOKU_CONFIG"

_MISSING = object()


class ConfigError(RuntimeError):
    """Raised when ``config.toml`` cannot be found or parsed."""


def config_path() -> Path:
    """Return the active config file: ``$SUDOKU_CONFIG`` or the repository's ``config.toml``."""

    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[1] / _CONFIG_FILENAME


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    path = config_path()
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError as exc:
        raise ConfigError(
            f"Solver configuration '{path}' was not found; point {CONFIG_ENV} at a file "
            "with [puzzle], [events] and [cli] tables"
        ) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Solver configuration '{path}' is not valid TOML: {exc}") from exc


def get_section(path: str, default: Any = _MISSING) -> Any:
    """Look up a dotted key such as ``events.dir``.

    ``default`` is returned for a missing key whenever it is given, ``None``
    included. Without it a :class:`KeyError` names the table that lacked the key
    and the keys it does hold.
    """

    data: Any = get_config()
    walked: list[str] = []
    for part in path.split("."):
        if isinstance(data, dict) and part in data:
            data = data[part]
            walked.append(part)
            continue
        if default is not _MISSING:
            return default
        table = ".".join(walked) or "<root>"
        known = ", ".join(sorted(data)) if isinstance(data, dict) else "none"
        raise KeyError(
            f"'{path}' is not set in {config_path()} (table {table} has: {known})"
        )
    return data


def reload() -> None:
    """Drop the cached configuration so the next access re-reads the file."""

    get_config.cache_clear()


__all__ = ["CONFIG_ENV", "ConfigError", "config_path", "get_config", "get_section", "reload"]
