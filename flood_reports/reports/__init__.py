"""
Report generators for the flood-control reports pipeline.

Re-exports the pure `generate_*` functions and the class-based generators so
downstream code can import from `flood_reports.reports` directly.
"""

from flood_reports.reports.abstract import AbstractReportGenerator, ReportGenerator
from flood_reports.reports.contractors import (
    ContractorRankingReport,
    generate_contractor_ranking,
)
from flood_reports.reports.efficiency import (
    RegionalEfficiencyReport,
    generate_efficiency_report,
)
from flood_reports.reports.stats import mean, median
from flood_reports.reports.summary import generate_summary
from flood_reports.reports.trends import (
    AnnualOverrunTrendReport,
    generate_annual_overrun_trends,
)

__all__ = [
    # Abstracts
    "AbstractReportGenerator",
    "ReportGenerator",
    # Concrete generators
    "AnnualOverrunTrendReport",
    "ContractorRankingReport",
    "RegionalEfficiencyReport",
    # Functions
    "generate_annual_overrun_trends",
    "generate_contractor_ranking",
    "generate_efficiency_report",
    "generate_summary",
    "mean",
    "median",
]
