"""Dataset-wide summary statistics."""

from __future__ import annotations

from typing import Sequence

from flood_reports.domain.models import CleanedRecord
from flood_reports.domain.reports import SummaryReport
from flood_reports.utils.logging import get_logger

log = get_logger(__name__)


def generate_summary(records: Sequence[CleanedRecord]) -> SummaryReport:
    """
    Summarize the whole dataset in a single object.

    Provinces are counted from the Province column when the first record has
    one, otherwise from District; the choice applies to every record.
    `records` must not be empty.
    """
    area_field = "province" if records[0].province is not None else "district"
    summary = SummaryReport(
        total_projects=len(records),
        total_contractors=len({record.contractor for record in records}),
        total_provinces=len({getattr(record, area_field) for record in records}),
        global_avg_delay=sum(r.completion_delay_days for r in records) / len(records),
        total_savings=sum(r.cost_savings for r in records),
    )
    log.info("Summary generated", extra={"area_field": area_field, **summary.model_dump()})
    return summary


__all__ = ["generate_summary"]
