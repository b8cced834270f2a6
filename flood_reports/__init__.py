"""
Flood-control reports - analytics over public infrastructure project records.

This package validates a flat CSV of flood-control projects and derives:

- A regional efficiency ranking by (MainIsland, Region)
- A contractor performance ranking with reliability and risk flags
- Annual cost-overrun trends against the 2021 baseline
- Dataset-wide summary statistics

The pipeline and report generators are pure functions over in-memory
records; file I/O and console rendering live at the edges.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from flood_reports.config import Settings, get_settings
from flood_reports.orchestrator import available_reports, load_dataset, run_reports
from flood_reports.pipeline import (
    derive_fields,
    filter_by_year,
    normalize,
    process_records,
    validate,
)
from flood_reports.reports import (
    generate_annual_overrun_trends,
    generate_contractor_ranking,
    generate_efficiency_report,
    generate_summary,
)
from flood_reports.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Pipeline
    "derive_fields",
    "filter_by_year",
    "normalize",
    "process_records",
    "validate",
    # Reports
    "generate_annual_overrun_trends",
    "generate_contractor_ranking",
    "generate_efficiency_report",
    "generate_summary",
    # Orchestration
    "available_reports",
    "load_dataset",
    "run_reports",
    # Logging
    "configure_logging",
    "get_logger",
]
