"""Public facade for grid validation."""

from __future__ import annotations

import time
from typing import List, Sequence

from . import rulebook
from .errors import (
    SEVERITY_WARN,
    ManagedValidationError,
    ValidationIssue,
    ValidationReport,
)


def _split(issues: List[ValidationIssue]) -> tuple[List[ValidationIssue], List[ValidationIssue]]:
    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []
    for issue in issues:
        if issue.severity == SEVERITY_WARN:
            warnings.append(issue)
        else:
            errors.append(issue)
    return errors, warnings


def validate_grid(grid: Sequence[Sequence[int]]) -> ValidationReport:
    """Check the grid shape, digit range and row/column/box uniqueness."""

    timings = {"shape": 0, "invariants": 0}

    shape_start = time.perf_counter()
    shape_issues = rulebook.run_rules(rulebook.SHAPE_RULES, grid)
    timings["shape"] = int((time.perf_counter() - shape_start) * 1000)
    if shape_issues:
        errors, warnings = _split(shape_issues)
        return ValidationReport(ok=False, errors=errors, warnings=warnings, timings_ms=timings)

    invariants_start = time.perf_counter()
    errors, warnings = _split(rulebook.run_rules(rulebook.CELL_RULES, grid))
    timings["invariants"] = int((time.perf_counter() - invariants_start) * 1000)

    return ValidationReport(ok=not errors, errors=errors, warnings=warnings, timings_ms=timings)


def assert_valid(grid: Sequence[Sequence[int]], *, warn_as_error: bool = False) -> ValidationReport:
    """Validate ``grid`` and raise :class:`ManagedValidationError` on failure."""

    report = validate_grid(grid)
    if report.ok and not (warn_as_error and report.warnings):
        return report
    issues = report.errors[:]
    if warn_as_error:
        issues.extend(report.warnings)
    codes = ", ".join(issue.code for issue in issues[:5])
    if len(issues) > 5:
        codes += ", …"
    raise ManagedValidationError(f"Validation failed for grid: {codes}", report)


__all__ = [
    "ManagedValidationError",
    "assert_valid",
    "validate_grid",
]
