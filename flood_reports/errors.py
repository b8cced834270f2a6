"""
Exceptions raised across the flood-control reports package.

Malformed rows are never raised; they are dropped and counted by the
validator. Exceptions are reserved for conditions the caller must act on.
"""
from __future__ import annotations


class FloodReportsError(Exception):
    """Base class for package errors."""


class DatasetNotLoadedError(FloodReportsError):
    """Reports were requested before any dataset was loaded."""


class UnknownReportError(FloodReportsError, ValueError):
    """A report name that is not in the registry."""


__all__ = ["DatasetNotLoadedError", "FloodReportsError", "UnknownReportError"]
