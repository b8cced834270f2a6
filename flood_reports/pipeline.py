"""
Validation and derivation pipeline.

Turns header-keyed raw rows into CleanedRecords in four pure stages:

    validate -> filter_by_year -> derive_fields -> normalize

`process_records` threads a dataset through all four and reports how many
rows were dropped at validation. Malformed rows never raise; they are
excluded and counted.

Usage:
    from flood_reports.pipeline import process_records

    result = process_records(raw_rows, start_year=2021, end_year=2023)
    print(len(result.records), result.dropped)
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from flood_reports.domain.models import (
    MODELLED_COLUMNS,
    REQUIRED_FIELDS,
    CleanedRecord,
    EnrichedRecord,
    RawRecord,
    ValidatedRecord,
)
from flood_reports.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_START_YEAR = 2021
DEFAULT_END_YEAR = 2023

# Validation failure buckets, in the order the checks run.
MISSING_FIELD = "missing_field"
NON_NUMERIC = "non_numeric"
INVALID_DATE = "invalid_date"
NEGATIVE_DURATION = "negative_duration"


def parse_number(value: Optional[str]) -> Optional[float]:
    """Parse a finite number from a CSV cell, or None."""
    if value is None:
        return None
    text = value.strip()
    if not text or "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse an ISO-8601 date or datetime cell down to its calendar day."""
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def check_record(record: RawRecord) -> Optional[str]:
    """
    Return the first failing check for a raw row, or None when it is valid.
    """
    for name in REQUIRED_FIELDS:
        value = record.get(name)
        if value is None or not value.strip():
            return MISSING_FIELD

    if (
        parse_number(record["ApprovedBudgetForContract"]) is None
        or parse_number(record["ContractCost"]) is None
    ):
        return NON_NUMERIC

    start = parse_date(record["StartDate"])
    end = parse_date(record["ActualCompletionDate"])
    if start is None or end is None:
        return INVALID_DATE

    if end < start:
        return NEGATIVE_DURATION
    return None


@dataclass(frozen=True)
class ValidationReport:
    """Counts produced by one validation pass."""

    total: int
    valid: int
    invalid_by_reason: Dict[str, int] = field(default_factory=dict)

    @property
    def invalid(self) -> int:
        return self.total - self.valid


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of `process_records`."""

    records: List[CleanedRecord]
    validation: ValidationReport
    filtered_out: int = 0

    @property
    def dropped(self) -> int:
        """Input rows rejected by validation."""
        return self.validation.invalid


def validate_with_report(
    records: Iterable[RawRecord],
) -> Tuple[List[ValidatedRecord], ValidationReport]:
    """
    Keep rows passing every check and count the rest by failing check.
    """
    valid: List[ValidatedRecord] = []
    failures: Counter = Counter()
    total = 0
    for record in records:
        total += 1
        reason = check_record(record)
        if reason is None:
            valid.append(ValidatedRecord(raw=dict(record)))
        else:
            failures[reason] += 1

    report = ValidationReport(total=total, valid=len(valid), invalid_by_reason=dict(failures))
    log.info(
        f"Validated {report.valid} valid records, removed {report.invalid} invalid records",
        extra={"valid": report.valid, "invalid": report.invalid, **report.invalid_by_reason},
    )
    return valid, report


def validate(records: Iterable[RawRecord]) -> List[ValidatedRecord]:
    """Drop structurally or semantically invalid rows."""
    valid, _ = validate_with_report(records)
    return valid


def filter_by_year(
    records: Iterable[ValidatedRecord],
    start_year: int = DEFAULT_START_YEAR,
    end_year: int = DEFAULT_END_YEAR,
) -> List[ValidatedRecord]:
    """
    Keep records whose FundingYear lies in [start_year, end_year].

    Records with a non-numeric FundingYear are excluded.
    """
    filtered = []
    for record in records:
        year = parse_number(record.get("FundingYear"))
        if year is not None and start_year <= year <= end_year:
            filtered.append(record)

    log.info(
        f"Filtered records (FundingYear {start_year}-{end_year}): {len(filtered)}",
        extra={"start_year": start_year, "end_year": end_year, "kept": len(filtered)},
    )
    return filtered


def derive_fields(records: Iterable[ValidatedRecord]) -> List[EnrichedRecord]:
    """
    Compute CostSavings and CompletionDelayDays for each record.

    Missing amounts count as 0 and missing dates as a zero-day duration;
    validated input never hits either case.
    """
    enriched = []
    for record in records:
        budget = parse_number(record.get("ApprovedBudgetForContract")) or 0.0
        cost = parse_number(record.get("ContractCost")) or 0.0
        start = parse_date(record.get("StartDate"))
        end = parse_date(record.get("ActualCompletionDate"))
        delay = (end - start).days if start is not None and end is not None else 0
        enriched.append(
            EnrichedRecord(
                raw=record.raw,
                cost_savings=budget - cost,
                completion_delay_days=delay,
            )
        )

    log.info("Derived fields computed", extra={"records": len(enriched)})
    return enriched


def _to_cleaned(record: EnrichedRecord) -> CleanedRecord:
    raw = record.raw
    year = parse_number(raw.get("FundingYear"))
    if year is None:
        raise ValueError(f"FundingYear {raw.get('FundingYear')!r} is not numeric")
    return CleanedRecord(
        region=raw["Region"],
        main_island=raw.get("MainIsland", ""),
        province=raw.get("Province"),
        district=raw.get("District"),
        contractor=raw.get("Contractor", ""),
        type_of_work=raw.get("TypeOfWork", ""),
        funding_year=int(year),
        approved_budget=parse_number(raw["ApprovedBudgetForContract"]),
        contract_cost=parse_number(raw["ContractCost"]),
        start_date=parse_date(raw["StartDate"]),
        actual_completion_date=parse_date(raw["ActualCompletionDate"]),
        cost_savings=record.cost_savings,
        completion_delay_days=record.completion_delay_days,
        extra={k: v for k, v in raw.items() if k not in MODELLED_COLUMNS},
    )


def normalize(records: Iterable[EnrichedRecord]) -> List[CleanedRecord]:
    """
    Coerce numeric and date fields to their canonical types.

    Expects year-filtered input: a non-numeric FundingYear raises ValueError.
    """
    cleaned = [_to_cleaned(record) for record in records]
    log.info("Data cleaned and normalized", extra={"records": len(cleaned)})
    return cleaned


def process_records(
    records: Sequence[RawRecord],
    start_year: int = DEFAULT_START_YEAR,
    end_year: int = DEFAULT_END_YEAR,
) -> PipelineResult:
    """
    Run validate, filter_by_year, derive_fields and normalize in order.
    """
    valid, report = validate_with_report(records)
    in_window = filter_by_year(valid, start_year=start_year, end_year=end_year)
    cleaned = normalize(derive_fields(in_window))

    log.info(
        "Data has been processed",
        extra={
            "loaded": report.total,
            "dropped": report.invalid,
            "filtered_out": len(valid) - len(in_window),
            "records": len(cleaned),
        },
    )
    return PipelineResult(
        records=cleaned,
        validation=report,
        filtered_out=len(valid) - len(in_window),
    )


__all__ = [
    "DEFAULT_END_YEAR",
    "DEFAULT_START_YEAR",
    "INVALID_DATE",
    "MISSING_FIELD",
    "NEGATIVE_DURATION",
    "NON_NUMERIC",
    "PipelineResult",
    "ValidationReport",
    "check_record",
    "derive_fields",
    "filter_by_year",
    "normalize",
    "parse_date",
    "parse_number",
    "process_records",
    "validate",
    "validate_with_report",
]
