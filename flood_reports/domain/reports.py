"""
Row contracts for the generated reports.

Each model's aliases are the output column names; `model_dump(by_alias=True)`
yields exactly the columns written to disk, in declaration order.
"""
from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_serializer

HIGH_RISK_LABEL = "High Risk"
YOY_COLUMN = "YoY % Change (vs 2021)"

_ROW_CONFIG = {"frozen": True, "populate_by_name": True}


class HighRisk(BaseModel):
    """Contractor flagged by label instead of score."""

    kind: Literal["flagged"] = "flagged"
    reason: str = HIGH_RISK_LABEL

    model_config = {"frozen": True}

    def cell(self) -> str:
        return self.reason


class ReliabilityScore(BaseModel):
    """Contractor not flagged; the reliability index itself is surfaced."""

    kind: Literal["score"] = "score"
    value: float

    model_config = {"frozen": True}

    def cell(self) -> float:
        return self.value


RiskFlag = Annotated[Union[HighRisk, ReliabilityScore], Field(discriminator="kind")]


class RegionalEfficiencyRow(BaseModel):
    main_island: str = Field(..., alias="MainIsland")
    region: str = Field(..., alias="Region")
    total_approved_budget: float = Field(..., alias="TotalApprovedBudget")
    median_cost_savings: float = Field(..., alias="MedianCostSavings")
    average_completion_delay_days: float = Field(..., alias="AverageCompletionDelayDays")
    percent_projects_delayed_over_30_days: float = Field(
        ..., alias="PercentProjectsDelayedOver30Days"
    )
    efficiency_score: float = Field(..., alias="EfficiencyScore", ge=0.0, le=100.0)

    model_config = _ROW_CONFIG


class ContractorRankingRow(BaseModel):
    contractor: str = Field(..., alias="Contractor")
    num_projects: int = Field(..., alias="NumProjects")
    total_contract_cost: float = Field(..., alias="TotalContractCost", exclude=True)
    average_completion_delay_days: float = Field(..., alias="AverageCompletionDelayDays")
    total_cost_savings: float = Field(..., alias="TotalCostSavings")
    reliability_index: float = Field(..., alias="ReliabilityIndex", le=100.0)
    risk_flag: RiskFlag = Field(..., alias="RiskFlag")

    model_config = _ROW_CONFIG

    @field_serializer("risk_flag")
    def _risk_flag_cell(self, flag: Union[HighRisk, ReliabilityScore]) -> Union[str, float]:
        return flag.cell()


class AnnualTrendRow(BaseModel):
    funding_year: int = Field(..., alias="FundingYear")
    type_of_work: str = Field(..., alias="TypeOfWork")
    total_projects: int = Field(..., alias="TotalProjects")
    average_cost_savings: float = Field(..., alias="AverageCostSavings")
    overrun_rate: float = Field(..., alias="OverrunRate")
    # None when the change from the baseline year is not meaningful.
    yoy_change: Optional[float] = Field(..., alias=YOY_COLUMN)

    model_config = _ROW_CONFIG


class SummaryReport(BaseModel):
    total_projects: int
    total_contractors: int
    total_provinces: int
    global_avg_delay: float
    total_savings: float

    model_config = {"frozen": True}


__all__ = [
    "AnnualTrendRow",
    "ContractorRankingRow",
    "HIGH_RISK_LABEL",
    "HighRisk",
    "RegionalEfficiencyRow",
    "ReliabilityScore",
    "RiskFlag",
    "SummaryReport",
    "YOY_COLUMN",
]
