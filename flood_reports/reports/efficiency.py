"""
Regional efficiency report.

Groups projects by (MainIsland, Region) and ranks the groups by an efficiency
score: median cost savings per day of average completion delay, min-max
normalized to [0, 100] across all groups.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from flood_reports.domain.models import CleanedRecord
from flood_reports.domain.reports import RegionalEfficiencyRow
from flood_reports.reports.abstract import AbstractReportGenerator
from flood_reports.reports.stats import mean, median, percent
from flood_reports.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_DELAY_THRESHOLD_DAYS = 30

# Raw score for groups with positive savings and no average delay. Finite so
# min-max scaling stays finite.
SENTINEL_SCORE = 1e12


@dataclass
class _RegionGroup:
    budgets: List[float] = field(default_factory=list)
    savings: List[float] = field(default_factory=list)
    delays: List[int] = field(default_factory=list)

    def add(self, record: CleanedRecord) -> None:
        self.budgets.append(record.approved_budget)
        self.savings.append(record.cost_savings)
        self.delays.append(record.completion_delay_days)


def raw_efficiency_score(median_savings: float, average_delay: float) -> float:
    """
    Unnormalized score rewarding high savings achieved with little delay.

    Non-positive median savings always score 0.
    """
    if median_savings <= 0:
        return 0.0
    if average_delay <= 0:
        return SENTINEL_SCORE
    return 100.0 * median_savings / average_delay


def normalize_scores(raw_scores: Sequence[float]) -> List[float]:
    """
    Min-max scale scores to [0, 100].

    When every score is equal the result is 100 for a positive common value
    and 0 otherwise.
    """
    if not raw_scores:
        return []
    low, high = min(raw_scores), max(raw_scores)
    if high > low:
        return [
            100.0 if score == high else (score - low) / (high - low) * 100.0
            for score in raw_scores
        ]
    common = 100.0 if high > 0 else 0.0
    return [common] * len(raw_scores)


def generate_efficiency_report(
    records: Sequence[CleanedRecord],
    delay_threshold_days: int = DEFAULT_DELAY_THRESHOLD_DAYS,
) -> List[RegionalEfficiencyRow]:
    """
    Build the regional efficiency report, best score first.

    Parameters
    ----------
    records : Sequence[CleanedRecord]
        Cleaned project records.
    delay_threshold_days : int
        Projects delayed strictly longer than this count towards
        PercentProjectsDelayedOver30Days.
    """
    groups: Dict[Tuple[str, str], _RegionGroup] = {}
    for record in records:
        key = (record.main_island, record.region)
        groups.setdefault(key, _RegionGroup()).add(record)

    summaries = []
    raw_scores = []
    for (main_island, region), group in groups.items():
        median_savings = median(group.savings)
        average_delay = mean(group.delays)
        delayed = sum(1 for delay in group.delays if delay > delay_threshold_days)
        summaries.append(
            {
                "main_island": main_island,
                "region": region,
                "total_approved_budget": sum(group.budgets),
                "median_cost_savings": median_savings,
                "average_completion_delay_days": average_delay,
                "percent_projects_delayed_over_30_days": percent(delayed, len(group.delays)),
            }
        )
        raw_scores.append(raw_efficiency_score(median_savings, average_delay))

    rows = [
        RegionalEfficiencyRow(**summary, efficiency_score=score)
        for summary, score in zip(summaries, normalize_scores(raw_scores))
    ]
    rows.sort(key=lambda row: row.efficiency_score, reverse=True)

    log.info("Regional efficiency report generated", extra={"groups": len(rows)})
    return rows


class RegionalEfficiencyReport(AbstractReportGenerator):
    name = "regional_efficiency"
    title = "Report 1: Regional Flood Mitigation Efficiency Summary"
    filename = "report1_regional_efficiency.csv"

    def __init__(self, delay_threshold_days: int = DEFAULT_DELAY_THRESHOLD_DAYS) -> None:
        self.delay_threshold_days = delay_threshold_days

    def generate(self, records: Sequence[CleanedRecord]) -> List[RegionalEfficiencyRow]:
        return generate_efficiency_report(records, delay_threshold_days=self.delay_threshold_days)


__all__ = [
    "RegionalEfficiencyReport",
    "SENTINEL_SCORE",
    "generate_efficiency_report",
    "normalize_scores",
    "raw_efficiency_score",
]
