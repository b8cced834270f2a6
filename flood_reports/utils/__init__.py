"""
Utilities package for the flood-control reports pipeline.

Exports shared helpers for logging and profiling. Keep this package
lightweight and free of domain-specific logic.
"""

from flood_reports.utils.logging import configure_logging, get_logger
from flood_reports.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
