"""Data contracts for the projection endpoints."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from wealth_odyssey.core.currency import Currency, format_currency, format_years, to_base
from wealth_odyssey.core.projection import (
    MILESTONE_THRESHOLDS,
    MilestoneSet,
    ProjectionResult,
    SimulationParameters,
)

MILESTONE_LABELS: Dict[str, str] = {
    "hundred_thousand": "100k",
    "quarter_million": "250k",
    "half_million": "500k",
    "million": "1M",
}


class ProjectionRequest(BaseModel):
    """Inputs for one projection, with money expressed in ``currency``."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    startingAmount: float = Field(..., ge=0, description="Balance before the first month.")
    monthlyContribution: float = Field(
        0.0,
        description="Added at the start of every month; negative values withdraw.",
    )
    annualRatePercent: float = Field(
        ...,
        description="Expected annual return in percent (8 means 8%).",
    )
    horizonYears: int = Field(..., ge=1, le=200, description="Number of years to simulate.")
    targetYearlySpend: float = Field(
        0.0,
        ge=0,
        description="Yearly spending the FIRE target has to cover.",
    )
    currency: Currency = Currency.USD

    def to_parameters(self, idr_rate: float) -> SimulationParameters:
        """Convert the request into engine parameters in base units."""
        return SimulationParameters(
            starting_amount=to_base(self.startingAmount, self.currency, idr_rate),
            monthly_contribution=to_base(self.monthlyContribution, self.currency, idr_rate),
            annual_rate_percent=self.annualRatePercent,
            horizon_years=self.horizonYears,
            target_yearly_spend=to_base(self.targetYearlySpend, self.currency, idr_rate),
        )


class SweepRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    parameters: ProjectionRequest
    annualRatePercents: List[float] = Field(..., min_length=1)


class ProjectionPointOut(BaseModel):
    monthIndex: int
    yearFraction: float
    label: str
    balance: float


class MilestonesOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hundred_thousand: Optional[float] = Field(None, alias="100k")
    quarter_million: Optional[float] = Field(None, alias="250k")
    half_million: Optional[float] = Field(None, alias="500k")
    million: Optional[float] = Field(None, alias="1M")

    @classmethod
    def from_milestones(cls, milestones: MilestoneSet) -> "MilestonesOut":
        return cls(**milestones.model_dump())


class DisplaySummary(BaseModel):
    """Pre-formatted strings in the requested display currency."""

    currency: Currency
    finalBalance: str
    fireTarget: str
    totalContributed: str
    totalGain: str
    yearsToFire: str
    milestones: Dict[str, str]


class ProjectionResponse(BaseModel):
    series: List[ProjectionPointOut]
    milestones: MilestonesOut
    fireTarget: float
    fireYearFraction: Optional[float]
    totalContributed: float
    totalGain: float
    finalBalance: float
    display: DisplaySummary

    @classmethod
    def from_result(
        cls,
        result: ProjectionResult,
        currency: Currency,
        idr_rate: float,
    ) -> "ProjectionResponse":
        def fmt(amount: float) -> str:
            return format_currency(amount, currency, idr_rate)

        display = DisplaySummary(
            currency=currency,
            finalBalance=fmt(result.final_balance),
            fireTarget=fmt(result.fire_target),
            totalContributed=fmt(result.total_contributed),
            totalGain=fmt(result.total_gain),
            yearsToFire=format_years(result.fire_year_fraction),
            milestones={
                MILESTONE_LABELS[name]: format_years(
                    getattr(result.milestones, name), missing="Pending..."
                )
                for name, _ in MILESTONE_THRESHOLDS
            },
        )

        return cls(
            series=[
                ProjectionPointOut(
                    monthIndex=point.month_index,
                    yearFraction=point.year_fraction,
                    label=point.label,
                    balance=point.balance,
                )
                for point in result.series
            ],
            milestones=MilestonesOut.from_milestones(result.milestones),
            fireTarget=result.fire_target,
            fireYearFraction=result.fire_year_fraction,
            totalContributed=result.total_contributed,
            totalGain=result.total_gain,
            finalBalance=result.final_balance,
            display=display,
        )


class SweepScenario(BaseModel):
    annualRatePercent: float
    finalBalance: float
    totalGain: float
    fireYearFraction: Optional[float]
    milestones: MilestonesOut


class SweepResponse(BaseModel):
    scenarios: List[SweepScenario]
