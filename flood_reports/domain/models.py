"""
Record models for the flood-control reports pipeline.

A row moves through four shapes, each a distinct type:

- RawRecord: the header-keyed strings exactly as read from the CSV.
- ValidatedRecord: a RawRecord that passed every validation check.
- EnrichedRecord: a ValidatedRecord plus CostSavings and CompletionDelayDays.
- CleanedRecord: every numeric and date field coerced; the only shape the
  report generators accept.

All models are frozen; stages build new values instead of mutating records.
"""
from __future__ import annotations

from datetime import date
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, Field

RawRecord = Mapping[str, str]

REQUIRED_FIELDS = (
    "StartDate",
    "ActualCompletionDate",
    "ApprovedBudgetForContract",
    "ContractCost",
    "Region",
    "FundingYear",
)

# Columns that CleanedRecord models explicitly; anything else lands in `extra`.
MODELLED_COLUMNS = frozenset(
    REQUIRED_FIELDS
    + ("MainIsland", "Contractor", "TypeOfWork", "Province", "District")
)


class ValidatedRecord(BaseModel):
    """
    A raw row known to hold every required field with parseable values.
    """

    raw: Dict[str, str] = Field(..., description="Header-keyed values, untouched.")

    model_config = {"frozen": True}

    def get(self, name: str, default: str = "") -> str:
        return self.raw.get(name, default)


class EnrichedRecord(BaseModel):
    """
    A validated row carrying the two derived attributes.
    """

    raw: Dict[str, str] = Field(..., description="Header-keyed values, untouched.")
    cost_savings: float = Field(..., description="Approved budget minus contract cost.")
    completion_delay_days: int = Field(
        ..., description="Calendar days between start and actual completion."
    )

    model_config = {"frozen": True}


class CleanedRecord(BaseModel):
    """
    Canonical, fully typed project record fed to the report generators.

    Field aliases match the CSV header names, so a record can be built from
    either the Python names or the original column names.
    """

    region: str = Field(..., alias="Region")
    main_island: str = Field("", alias="MainIsland")
    province: Optional[str] = Field(None, alias="Province")
    district: Optional[str] = Field(None, alias="District")
    contractor: str = Field("", alias="Contractor")
    type_of_work: str = Field("", alias="TypeOfWork")
    funding_year: int = Field(..., alias="FundingYear")
    approved_budget: float = Field(..., alias="ApprovedBudgetForContract", allow_inf_nan=False)
    contract_cost: float = Field(..., alias="ContractCost", allow_inf_nan=False)
    start_date: date = Field(..., alias="StartDate")
    actual_completion_date: date = Field(..., alias="ActualCompletionDate")
    cost_savings: float = Field(..., alias="CostSavings", allow_inf_nan=False)
    completion_delay_days: int = Field(..., alias="CompletionDelayDays")
    extra: Dict[str, str] = Field(default_factory=dict, description="Unmodelled columns.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


__all__ = [
    "CleanedRecord",
    "EnrichedRecord",
    "MODELLED_COLUMNS",
    "REQUIRED_FIELDS",
    "RawRecord",
    "ValidatedRecord",
]
