from __future__ import annotations

import math
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from wealth_odyssey.core.errors import (
    ArithmeticOverflowError,
    InvalidParameterError,
    ProjectionCancelled,
)

# (field on MilestoneSet, balance threshold in base units)
MILESTONE_THRESHOLDS: Tuple[Tuple[str, float], ...] = (
    ("hundred_thousand", 100_000.0),
    ("quarter_million", 250_000.0),
    ("half_million", 500_000.0),
    ("million", 1_000_000.0),
)

# 25x yearly spend, i.e. a 4% withdrawal rate
FIRE_MULTIPLE = 25.0


class SimulationParameters(BaseModel):
    """Inputs for one projection run. All money is in base (USD) units."""

    model_config = ConfigDict(frozen=True)

    starting_amount: float
    monthly_contribution: float
    annual_rate_percent: float
    horizon_years: int
    target_yearly_spend: float


class ProjectionPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    month_index: int
    # series label: completed years plus the fraction of the current one
    year_fraction: float
    label: str
    balance: float

    @property
    def elapsed_years(self) -> float:
        return self.month_index / 12


class MilestoneSet(BaseModel):
    """Year fraction at which each fixed threshold was first reached (None = not reached)."""

    model_config = ConfigDict(frozen=True)

    hundred_thousand: Optional[float] = None
    quarter_million: Optional[float] = None
    half_million: Optional[float] = None
    million: Optional[float] = None

    def reached(self) -> List[str]:
        return [name for name, _ in MILESTONE_THRESHOLDS if getattr(self, name) is not None]


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    series: Tuple[ProjectionPoint, ...]
    milestones: MilestoneSet
    fire_target: float
    fire_year_fraction: Optional[float]
    total_contributed: float
    total_gain: float
    final_balance: float


def validate_parameters(params: SimulationParameters) -> List[str]:
    """Return every problem that prevents ``params`` from being simulated."""
    errors: List[str] = []
    for field in (
        "starting_amount",
        "monthly_contribution",
        "annual_rate_percent",
        "target_yearly_spend",
    ):
        if not math.isfinite(getattr(params, field)):
            errors.append(f"{field} must be a finite number")
    if params.horizon_years < 1:
        errors.append("horizon_years must be at least 1")
    return errors


def _series_year_fraction(month: int) -> float:
    return month // 12 + (month % 12) / 12


def run(
    params: SimulationParameters,
    fire_multiple: float = FIRE_MULTIPLE,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> ProjectionResult:
    """
    Simulate the balance month by month and derive the summary metrics.

    Order of operations (per month):
      1) Add the monthly contribution (so it earns this month's growth).
      2) Apply growth at annual_rate_percent / 100 / 12.
      3) Record the point and any milestone crossed for the first time.

    Milestones and the FIRE year use the plain ratio month / 12; the point's
    year_fraction is the series label and is kept separate.
    """
    errors = validate_parameters(params)
    if not math.isfinite(fire_multiple):
        errors.append("fire_multiple must be a finite number")
    if errors:
        raise InvalidParameterError(errors)

    monthly_rate = params.annual_rate_percent / 100 / 12
    total_months = params.horizon_years * 12

    balance = float(params.starting_amount)
    series: List[ProjectionPoint] = []
    found: Dict[str, float] = {}

    for month in range(1, total_months + 1):
        if should_cancel is not None and should_cancel():
            raise ProjectionCancelled(month)

        balance += params.monthly_contribution
        balance *= 1 + monthly_rate
        if not math.isfinite(balance):
            raise ArithmeticOverflowError(month)

        series.append(
            ProjectionPoint(
                month_index=month,
                year_fraction=_series_year_fraction(month),
                label=f"Year {math.ceil(month / 12)}",
                balance=balance,
            )
        )

        for name, threshold in MILESTONE_THRESHOLDS:
            if name not in found and balance >= threshold:
                found[name] = month / 12

    fire_target = params.target_yearly_spend * fire_multiple
    fire_year_fraction = next(
        (point.elapsed_years for point in series if point.balance >= fire_target),
        None,
    )

    total_contributed = params.starting_amount + params.monthly_contribution * total_months
    final_balance = series[-1].balance if series else 0.0
    total_gain = final_balance - total_contributed

    # derived metrics can overflow even when every balance stayed finite
    for quantity, value in (
        ("fire_target", fire_target),
        ("total_contributed", total_contributed),
        ("total_gain", total_gain),
    ):
        if not math.isfinite(value):
            raise ArithmeticOverflowError(total_months, quantity)

    return ProjectionResult(
        series=tuple(series),
        milestones=MilestoneSet(**found),
        fire_target=fire_target,
        fire_year_fraction=fire_year_fraction,
        total_contributed=total_contributed,
        total_gain=total_gain,
        final_balance=final_balance,
    )


def run_rate_sweep(
    params: SimulationParameters,
    rates: Iterable[float],
    fire_multiple: float = FIRE_MULTIPLE,
) -> List[ProjectionResult]:
    """Run one independent projection per annual rate, in the order given."""
    return [
        run(params.model_copy(update={"annual_rate_percent": rate}), fire_multiple=fire_multiple)
        for rate in rates
    ]


__all__ = [
    "FIRE_MULTIPLE",
    "MILESTONE_THRESHOLDS",
    "SimulationParameters",
    "ProjectionPoint",
    "MilestoneSet",
    "ProjectionResult",
    "validate_parameters",
    "run",
    "run_rate_sweep",
]
