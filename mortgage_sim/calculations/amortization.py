"""
Loan Amortization Calculations

Implements the constant-payment (French) amortization system:
the monthly payment stays fixed for the whole term, early payments
are mostly interest and late payments mostly principal.

    payment = P * r(1+r)^n / ((1+r)^n - 1)

All amounts are Decimal, rounded half-up to cents.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

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
class AmortizationRow:
    """A single month of an amortization schedule."""

    month: int  # 1-based
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal  # remaining after this payment


@dataclass(frozen=True)
class AmortizationResult:
    """Monthly payment, total interest and the full schedule."""

    monthly_payment: Decimal
    total_interest: Decimal
    rows: List[AmortizationRow] = field(default_factory=list)

    @property
    def total_paid(self) -> Decimal:
        return round2(sum((row.payment for row in self.rows), ZERO))


@dataclass(frozen=True)
class YearlySummary:
    """Interest and principal paid during one loan year."""

    year: int  # 1-based loan year
    interest: Decimal
    principal: Decimal
    balance: Decimal  # balance at the end of the year


def calculate_monthly_payment(
    principal: Number, annual_rate_percent: Number, term_months: int
) -> Decimal:
    """
    Calculate the constant monthly payment of a fixed-rate loan.

    Args:
        principal: Outstanding loan amount
        annual_rate_percent: Annual nominal rate as percent (e.g., 3.5 for 3.5%)
        term_months: Remaining term in months

    Returns:
        Monthly payment rounded to cents, 0 for a non-positive principal or term
    """
    principal = to_decimal(principal)
    if principal <= 0 or term_months <= 0:
        return ZERO

    rate = monthly_rate(annual_rate_percent)
    if rate == 0:
        return round2(principal / term_months)

    growth = (ONE + rate) ** term_months
    payment = principal * (rate * growth) / (growth - 1)

    return round2(payment)


def build_amortization_table(
    principal: Number, annual_rate_percent: Number, term_months: int
) -> AmortizationResult:
    """
    Generate the full amortization schedule.

    The last month pays off whatever balance is left, so the schedule
    always closes at exactly 0 and its payment absorbs the rounding
    residue of the previous months. No month repays more than the
    outstanding balance.

    Args:
        principal: Outstanding loan amount
        annual_rate_percent: Annual nominal rate as percent
        term_months: Term in months

    Returns:
        AmortizationResult with one row per month
    """
    payment = calculate_monthly_payment(principal, annual_rate_percent, term_months)
    rate = monthly_rate(annual_rate_percent)

    balance = max(to_decimal(principal), ZERO)
    total_interest = ZERO
    rows = []

    for month in range(1, term_months + 1):
        interest = round2(balance * rate)

        if month == term_months:
            # Final payment clears the balance exactly
            principal_paid = balance
            balance = ZERO
        else:
            # A rounded-up payment can clear a small loan before the last month
            principal_paid = min(payment - interest, balance)
            balance = max(ZERO, balance - principal_paid)

        principal_paid = round2(principal_paid)
        row_payment = principal_paid + interest

        total_interest += interest
        rows.append(
            AmortizationRow(
                month=month,
                payment=row_payment,
                principal=principal_paid,
                interest=interest,
                balance=round2(balance),
            )
        )

    return AmortizationResult(
        monthly_payment=payment,
        total_interest=round2(total_interest),
        rows=rows,
    )


def summarize_by_year(result: AmortizationResult) -> List[YearlySummary]:
    """Aggregate a monthly schedule into loan years (last year may be partial)."""
    summaries = []
    year_interest = ZERO
    year_principal = ZERO

    for row in result.rows:
        year_interest += row.interest
        year_principal += row.principal
        if row.month % MONTHS_PER_YEAR == 0 or row.month == len(result.rows):
            summaries.append(
                YearlySummary(
                    year=math.ceil(row.month / MONTHS_PER_YEAR),
                    interest=round2(year_interest),
                    principal=round2(year_principal),
                    balance=row.balance,
                )
            )
            year_interest = ZERO
            year_principal = ZERO

    return summaries
