"""
Pytest configuration for the flood-control reports pipeline.

Provides fixtures for:
- Building raw CSV rows and cleaned records with sensible defaults
- Writing small CSV datasets to a temporary directory
- Resetting cached settings between tests
"""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import Callable, Dict, List

import pytest

from flood_reports.config import get_settings
from flood_reports.domain.models import CleanedRecord

RAW_DEFAULTS: Dict[str, str] = {
    "MainIsland": "Luzon",
    "Region": "Region III",
    "Province": "Pampanga",
    "Contractor": "Acme Builders",
    "TypeOfWork": "Construction of Revetment",
    "FundingYear": "2022",
    "ApprovedBudgetForContract": "1000000.00",
    "ContractCost": "950000.00",
    "StartDate": "2022-03-01",
    "ActualCompletionDate": "2022-04-15",
}


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """
    Ensure each test sees settings built from its own environment.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_raw() -> Callable[..., Dict[str, str]]:
    """
    Factory for raw CSV rows; keyword arguments override or add columns.
    """

    def _make(**overrides: str) -> Dict[str, str]:
        row = dict(RAW_DEFAULTS)
        row.update(overrides)
        return row

    return _make


@pytest.fixture
def make_record() -> Callable[..., CleanedRecord]:
    """
    Factory for cleaned records.

    CostSavings and CompletionDelayDays are derived from the budget, cost and
    dates unless given explicitly.
    """

    def _make(**overrides) -> CleanedRecord:
        fields = {
            "region": "Region III",
            "main_island": "Luzon",
            "province": "Pampanga",
            "contractor": "Acme Builders",
            "type_of_work": "Construction of Revetment",
            "funding_year": 2022,
            "approved_budget": 100.0,
            "contract_cost": 80.0,
            "start_date": date(2022, 1, 1),
            "actual_completion_date": date(2022, 1, 11),
        }
        fields.update(overrides)
        fields.setdefault("cost_savings", fields["approved_budget"] - fields["contract_cost"])
        fields.setdefault(
            "completion_delay_days",
            (fields["actual_completion_date"] - fields["start_date"]).days,
        )
        return CleanedRecord(**fields)

    return _make


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[List[Dict[str, str]], str], Path]:
    """
    Write rows to a CSV in the test's temporary directory and return its path.
    """

    def _write(rows: List[Dict[str, str]], name: str = "projects.csv") -> Path:
        path = tmp_path / name
        header: List[str] = []
        for row in rows:
            header.extend(key for key in row if key not in header)
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=header)
            writer.writeheader()
            writer.writerows(rows)
        return path

    return _write
