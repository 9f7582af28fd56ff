"""Runtime feature flag helpers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]

from solver.search import TRACE_LEVELS

__all__ = [
    "FeatureFlagError",
    "get_feature",
    "get_trace_level",
    "is_event_log_enabled",
    "is_prevalidation_enabled",
    "reload",
]

_FEATURES_FILENAME = "config/features.toml"

# CLI overrides win over plain environment overrides.
_PREVALIDATION_KEYS = ("CLI_SUDOKU_PREVALIDATE", "SUDOKU_PREVALIDATE")
_EVENT_LOG_KEYS = ("CLI_SUDOKU_EVENTS_ENABLED", "SUDOKU_EVENTS_ENABLED")
_TRACE_LEVEL_KEYS = ("CLI_SUDOKU_TRACE_LEVEL", "SUDOKU_TRACE_LEVEL")


class FeatureFlagError(ValueError):
    """Raised when a feature setting holds a value the solver cannot use."""

    def __init__(self, message: str, *, source: str) -> None:
        super().__init__(f"{message} (from {source})")
        self.source = source


def _features_path() -> Path:
    return Path(__file__).resolve().parents[1] / _FEATURES_FILENAME


@lru_cache(maxsize=1)
def _load_features() -> dict[str, Any]:
    path = _features_path()
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def reload() -> None:
    """Clear the cached feature configuration."""

    _load_features.cache_clear()


def _coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in {"1", "true", "yes", "on"}:
            return True
        if normalised in {"0", "false", "no", "off"}:
            return False
    return None


def get_feature(name: str) -> dict[str, Any]:
    """Return the feature block called ``name`` (empty when absent)."""

    entry = _load_features().get(name)
    return dict(entry) if isinstance(entry, dict) else {}


def _flag(name: str, default: bool, env: Mapping[str, str] | None, keys: tuple[str, ...]) -> bool:
    configured = _coerce_bool(get_feature(name).get("enabled"))
    enabled = default if configured is None else configured

    if env:
        for key in keys:
            override = _coerce_bool(env.get(key))
            if override is not None:
                enabled = override
                break

    return enabled


def is_prevalidation_enabled(env: Mapping[str, str] | None = None) -> bool:
    """Return ``True`` when grids are validated before the search starts."""

    return _flag("prevalidation", True, env, _PREVALIDATION_KEYS)


def is_event_log_enabled(env: Mapping[str, str] | None = None) -> bool:
    """Return ``True`` when solve events are appended to the JSONL log."""

    return _flag("events", False, env, _EVENT_LOG_KEYS)


def get_trace_level(env: Mapping[str, str] | None = None) -> str:
    """Return the configured search trace level (``none`` or ``moves``).

    Raises :class:`FeatureFlagError` naming the offending setting when the
    resolved level is not one the search understands.
    """

    level = str(get_feature("trace").get("level", "none")).strip().lower()
    source = f"{_FEATURES_FILENAME} [trace] level"
    if env:
        for key in _TRACE_LEVEL_KEYS:
            value = env.get(key)
            if isinstance(value, str) and value.strip():
                level = value.strip().lower()
                source = key
                break
    if level not in TRACE_LEVELS:
        allowed = ", ".join(TRACE_LEVELS)
        raise FeatureFlagError(
            f"Unsupported trace level {level!r}; expected one of: {allowed}",
            source=source,
        )
    return level
