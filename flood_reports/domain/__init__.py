"""
Domain package for the flood-control reports pipeline.

Exports the record shapes that flow through the pipeline and the row
contracts of each report. Keep this package focused on data definitions.
"""

from flood_reports.domain.models import (
    REQUIRED_FIELDS,
    CleanedRecord,
    EnrichedRecord,
    RawRecord,
    ValidatedRecord,
)
from flood_reports.domain.reports import (
    AnnualTrendRow,
    ContractorRankingRow,
    HighRisk,
    RegionalEfficiencyRow,
    ReliabilityScore,
    RiskFlag,
    SummaryReport,
)

__all__ = [
    "REQUIRED_FIELDS",
    "AnnualTrendRow",
    "CleanedRecord",
    "ContractorRankingRow",
    "EnrichedRecord",
    "HighRisk",
    "RawRecord",
    "RegionalEfficiencyRow",
    "ReliabilityScore",
    "RiskFlag",
    "SummaryReport",
    "ValidatedRecord",
]
