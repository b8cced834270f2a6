"""
Contractor performance ranking.

Ranks contractors with enough projects by total contract cost and scores each
with a reliability index that rewards short delays and positive net savings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Union

from flood_reports.domain.models import CleanedRecord
from flood_reports.domain.reports import ContractorRankingRow, HighRisk, ReliabilityScore
from flood_reports.reports.abstract import AbstractReportGenerator
from flood_reports.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_MIN_PROJECTS = 5
DEFAULT_TOP_N = 15
DEFAULT_DELAY_NORMALIZER_DAYS = 90.0
HIGH_RISK_THRESHOLD = 50.0
MAX_RELIABILITY_INDEX = 100.0


@dataclass
class _ContractorTotals:
    count: int = 0
    total_cost: float = 0.0
    total_savings: float = 0.0
    total_delay: int = 0

    def add(self, record: CleanedRecord) -> None:
        self.count += 1
        self.total_cost += record.contract_cost
        self.total_savings += record.cost_savings
        self.total_delay += record.completion_delay_days


def reliability_index(
    average_delay: float,
    total_savings: float,
    total_cost: float,
    delay_normalizer_days: float = DEFAULT_DELAY_NORMALIZER_DAYS,
) -> float:
    """
    Composite reliability score, capped at 100 and not floored.

    Delays at or beyond `delay_normalizer_days` turn the delay factor
    negative. The savings factor is 0 when total cost is 0.
    """
    delay_factor = 1 - average_delay / delay_normalizer_days
    savings_factor = total_savings / total_cost if total_cost != 0 else 0.0
    return min(MAX_RELIABILITY_INDEX, delay_factor * savings_factor * 100)


def risk_flag(index: float) -> Union[HighRisk, ReliabilityScore]:
    if index < HIGH_RISK_THRESHOLD:
        return HighRisk()
    return ReliabilityScore(value=index)


def generate_contractor_ranking(
    records: Sequence[CleanedRecord],
    min_projects: int = DEFAULT_MIN_PROJECTS,
    top_n: int = DEFAULT_TOP_N,
    delay_normalizer_days: float = DEFAULT_DELAY_NORMALIZER_DAYS,
) -> List[ContractorRankingRow]:
    """
    Build the contractor ranking, highest total contract cost first.

    Contractors with fewer than `min_projects` projects are left out and at
    most `top_n` rows are returned.
    """
    totals: Dict[str, _ContractorTotals] = {}
    for record in records:
        totals.setdefault(record.contractor, _ContractorTotals()).add(record)

    ranked = []
    for contractor, group in totals.items():
        if group.count < min_projects:
            continue
        average_delay = group.total_delay / group.count
        index = reliability_index(
            average_delay,
            group.total_savings,
            group.total_cost,
            delay_normalizer_days=delay_normalizer_days,
        )
        ranked.append(
            ContractorRankingRow(
                contractor=contractor,
                num_projects=group.count,
                total_contract_cost=group.total_cost,
                average_completion_delay_days=average_delay,
                total_cost_savings=group.total_savings,
                reliability_index=index,
                risk_flag=risk_flag(index),
            )
        )

    ranked.sort(key=lambda row: row.total_contract_cost, reverse=True)
    rows = ranked[:top_n]

    log.info(
        "Contractor ranking generated",
        extra={"contractors": len(totals), "eligible": len(ranked), "ranked": len(rows)},
    )
    return rows


class ContractorRankingReport(AbstractReportGenerator):
    name = "contractor_ranking"
    title = "Report 2: Top Contractors Performance Ranking"
    filename = "report2_contractor_ranking.csv"

    def __init__(
        self,
        min_projects: int = DEFAULT_MIN_PROJECTS,
        top_n: int = DEFAULT_TOP_N,
        delay_normalizer_days: float = DEFAULT_DELAY_NORMALIZER_DAYS,
    ) -> None:
        self.min_projects = min_projects
        self.top_n = top_n
        self.delay_normalizer_days = delay_normalizer_days

    def generate(self, records: Sequence[CleanedRecord]) -> List[ContractorRankingRow]:
        return generate_contractor_ranking(
            records,
            min_projects=self.min_projects,
            top_n=self.top_n,
            delay_normalizer_days=self.delay_normalizer_days,
        )


__all__ = [
    "ContractorRankingReport",
    "generate_contractor_ranking",
    "reliability_index",
    "risk_flag",
]
