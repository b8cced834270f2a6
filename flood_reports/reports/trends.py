"""
Annual cost-overrun trends.

Summarizes each (FundingYear, TypeOfWork) pair and compares its average cost
savings with the same work type's 2021 average.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from flood_reports.domain.models import CleanedRecord
from flood_reports.domain.reports import AnnualTrendRow
from flood_reports.reports.abstract import AbstractReportGenerator
from flood_reports.reports.stats import mean, percent
from flood_reports.utils.logging import get_logger

log = get_logger(__name__)

BASELINE_YEAR = 2021


@dataclass
class _YearWorkGroup:
    savings: List[float] = field(default_factory=list)

    @property
    def overruns(self) -> int:
        return sum(1 for value in self.savings if value < 0)


def yoy_change(
    funding_year: int,
    average_savings: float,
    baseline: Optional[float],
) -> Optional[float]:
    """
    Percent change of `average_savings` against the baseline-year average.

    Returns None when the change is not meaningful: no baseline exists for the
    work type, or the baseline is 0 while the current average is not.
    """
    if funding_year == BASELINE_YEAR:
        return 0.0
    if baseline is None:
        return None
    if baseline == 0:
        return 0.0 if average_savings == 0 else None
    return 100.0 * (average_savings - baseline) / abs(baseline)


def generate_annual_overrun_trends(records: Sequence[CleanedRecord]) -> List[AnnualTrendRow]:
    """
    Build the annual trend report ordered by year, then work type.
    """
    groups: Dict[Tuple[int, str], _YearWorkGroup] = {}
    for record in records:
        key = (record.funding_year, record.type_of_work)
        groups.setdefault(key, _YearWorkGroup()).savings.append(record.cost_savings)

    averages = {key: mean(group.savings) for key, group in groups.items()}
    # Region-agnostic: one baseline per work type across every region.
    baselines = {
        type_of_work: average
        for (year, type_of_work), average in averages.items()
        if year == BASELINE_YEAR
    }

    rows = []
    for (year, type_of_work) in sorted(groups):
        group = groups[(year, type_of_work)]
        average = averages[(year, type_of_work)]
        rows.append(
            AnnualTrendRow(
                funding_year=year,
                type_of_work=type_of_work,
                total_projects=len(group.savings),
                average_cost_savings=average,
                overrun_rate=percent(group.overruns, len(group.savings)),
                yoy_change=yoy_change(year, average, baselines.get(type_of_work)),
            )
        )

    log.info(
        "Annual overrun trends generated",
        extra={"groups": len(rows), "baseline_work_types": len(baselines)},
    )
    return rows


class AnnualOverrunTrendReport(AbstractReportGenerator):
    name = "annual_trends"
    title = "Report 3: Annual Project Type Cost Overrun Trends"
    filename = "report3_annual_trends.csv"

    def generate(self, records: Sequence[CleanedRecord]) -> List[AnnualTrendRow]:
        return generate_annual_overrun_trends(records)


__all__ = [
    "AnnualOverrunTrendReport",
    "BASELINE_YEAR",
    "generate_annual_overrun_trends",
    "yoy_change",
]
