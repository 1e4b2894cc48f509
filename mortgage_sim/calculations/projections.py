"""
Investment and Savings Projections

Compound growth of an investment with monthly contributions, and the
time left to reach a savings goal.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from mortgage_sim.calculations.money import (
    MONTHS_PER_YEAR,
    ONE,
    ZERO,
    Number,
    monthly_rate,
    round2,
    to_decimal,
)


@dataclass(frozen=True)
class ProjectionPoint:
    year: int
    value: Decimal


@dataclass(frozen=True)
class InvestmentProjection:
    final_capital: Decimal
    total_contributed: Decimal
    total_interest: Decimal
    points: List[ProjectionPoint] = field(default_factory=list)


@dataclass(frozen=True)
class SavingsGoalProgress:
    """Progress towards a savings goal. Time fields are None when unreachable."""

    progress_percent: Decimal
    remaining_amount: Decimal
    months_remaining: Optional[int]
    years: Optional[int]
    months: Optional[int]


def project_investment(
    initial: Number,
    monthly_contribution: Number,
    years: int,
    annual_return_percent: Number,
) -> InvestmentProjection:
    """
    Project an investment with monthly compounding and contributions.

    Each month the capital grows by the monthly rate and then receives
    the contribution.

    Args:
        initial: Starting capital
        monthly_contribution: Amount added at the end of each month
        years: Investment horizon in years
        annual_return_percent: Expected annual return as percent

    Returns:
        InvestmentProjection with one point per year
    """
    capital = to_decimal(initial)
    contribution = to_decimal(monthly_contribution)
    growth = ONE + monthly_rate(annual_return_percent)
    total_months = max(0, years) * MONTHS_PER_YEAR

    points = []
    for month in range(1, total_months + 1):
        capital = capital * growth + contribution
        if month % MONTHS_PER_YEAR == 0:
            points.append(
                ProjectionPoint(year=month // MONTHS_PER_YEAR, value=round2(capital))
            )

    total_contributed = round2(to_decimal(initial) + contribution * total_months)
    return InvestmentProjection(
        final_capital=round2(capital),
        total_contributed=total_contributed,
        total_interest=round2(capital - total_contributed),
        points=points,
    )


def track_savings_goal(
    target: Number, current: Number, monthly_saving: Number
) -> SavingsGoalProgress:
    """Percent achieved and months left to reach a savings target."""
    target = to_decimal(target)
    current = to_decimal(current)
    monthly_saving = to_decimal(monthly_saving)

    if target > 0:
        progress = round2(max(ZERO, min(Decimal(100), current / target * 100)))
    else:
        progress = ZERO
    remaining = round2(max(ZERO, target - current))

    if monthly_saving <= 0 or target <= 0:
        return SavingsGoalProgress(
            progress_percent=progress,
            remaining_amount=remaining,
            months_remaining=None,
            years=None,
            months=None,
        )

    if remaining == 0:
        return SavingsGoalProgress(
            progress_percent=Decimal("100.00"),
            remaining_amount=ZERO,
            months_remaining=0,
            years=0,
            months=0,
        )

    months_remaining = math.ceil(remaining / monthly_saving)
    years, months = divmod(months_remaining, MONTHS_PER_YEAR)
    return SavingsGoalProgress(
        progress_percent=progress,
        remaining_amount=remaining,
        months_remaining=months_remaining,
        years=years,
        months=months,
    )
