"""Shared error types for puzzle loading and grid validation."""

from __future__ import annotations


from dataclasses import dataclass
from typing import List, Optional

SEVERITY_ERROR = "ERROR"
SEVERITY_WARN = "WARN"


@dataclass(frozen=True)
class ValidationIssue:
    """Single finding produced by a grid rule."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    """Aggregate result of running the grid rulebook."""

    ok: bool
    errors: List[ValidationIssue]
    warnings: List[ValidationIssue]
    timings_ms: dict[str, int]


class ManagedValidationError(RuntimeError):
    """Raised when a grid fails validation; carries the full report."""

    def __init__(self, message: str, report: ValidationReport) -> None:
        super().__init__(message)
        self.report = report


class PuzzleLoadError(ValueError):
    """Raised when a puzzle file cannot be read or is malformed."""

    def __init__(self, message: str, *, source: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} ({self.source}, line {self.line})"


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct an error-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


def make_warning(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct a warning-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_WARN)


__all__ = [
    "SEVERITY_ERROR",
    "SEVERITY_WARN",
    "ManagedValidationError",
    "PuzzleLoadError",
    "ValidationIssue",
    "ValidationReport",
    "make_error",
    "make_warning",
]
