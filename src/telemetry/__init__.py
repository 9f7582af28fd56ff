"""Structured solve event logging."""

from . import log

__all__ = ["log"]
