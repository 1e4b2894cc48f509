"""
Prepayment Scenario Calculations

Compares what to do with a lump sum while a mortgage is outstanding:

A. Amortize reducing the monthly payment (same term)
B. Amortize reducing the term (same monthly payment)
C. Invest the capital instead, compounding monthly over the original term

The strategic comparison weighs the amortize benefit (interest saved, plus
the reinvested freed payments when the term is shortened) against the
investment return over the original horizon of the mortgage.
"""

import enum
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional

from mortgage_sim.calculations.amortization import (
    build_amortization_table,
    summarize_by_year,
)
from mortgage_sim.calculations.money import (
    ONE,
    ZERO,
    Number,
    monthly_rate,
    round2,
    to_decimal,
)

DEFAULT_INVESTMENT_RATE = Decimal("3.5")


class AmortizationType(str, enum.Enum):
    """How a prepayment is applied to the loan."""

    reduce_payment = "reduce_payment"
    reduce_term = "reduce_term"


class Recommendation(str, enum.Enum):
    reduce_payment = "reduce_payment"
    reduce_term = "reduce_term"
    invest = "invest"


class Winner(str, enum.Enum):
    amortize = "amortize"
    invest = "invest"


class WinnerRule(str, enum.Enum):
    """
    Rule used to declare the winner of a strategic comparison.

    net_difference: invest wins when the net difference is positive.
    rate: invest wins when the investment rate beats the loan rate.

    Both rules can disagree for the same inputs; net_difference is the
    default because it agrees with the reported net difference.
    """

    net_difference = "net_difference"
    rate = "rate"


@dataclass(frozen=True)
class ReducePaymentOutcome:
    new_monthly_payment: Decimal
    total_interest_paid: Decimal


@dataclass(frozen=True)
class ReduceTermOutcome:
    new_term_months: int
    total_interest_paid: Decimal
    saved_interest: Decimal


@dataclass(frozen=True)
class InvestOutcome:
    total_return: Decimal
    net_vs_amortize: Decimal


@dataclass(frozen=True)
class SavingsScenarioComparison:
    """Scenarios A, B and C side by side with the recommended option."""

    scenario_a: ReducePaymentOutcome
    scenario_b: ReduceTermOutcome
    scenario_c: InvestOutcome
    recommendation: Recommendation


@dataclass(frozen=True)
class StrategicComparisonInput:
    debt: Number
    annual_rate: Number  # loan rate as percent
    term_months: int
    lump_sum_payment: Number
    investment_rate: Number  # investment return as percent
    amortization_type: AmortizationType = AmortizationType.reduce_term


@dataclass(frozen=True)
class BaseSummary:
    monthly_payment: Decimal
    total_interest: Decimal


@dataclass(frozen=True)
class AmortizeSummary:
    total_interest_paid: Decimal
    interest_saved: Decimal
    new_monthly_payment: Decimal
    new_term_months: int


@dataclass(frozen=True)
class StrategicComparisonResult:
    """
    Base loan, amortize option and invest option.

    net_difference is invest benefit minus amortize benefit:
    positive favors investing, negative favors amortizing.
    """

    base: BaseSummary
    amortize: AmortizeSummary
    invest: InvestOutcome
    net_difference: Decimal
    winner: Winner


@dataclass(frozen=True)
class ChartPoint:
    year: int
    bank_balance: Decimal  # balance of the unchanged loan
    strategy_balance: Decimal  # balance after applying the lump sum


def reduce_payment_scenario(
    debt: Number, annual_rate: Number, term_months: int, lump_sum: Number
) -> ReducePaymentOutcome:
    """Scenario A: apply the lump sum and re-amortize over the same term."""
    new_principal = max(ZERO, to_decimal(debt) - to_decimal(lump_sum))
    if new_principal == 0:
        return ReducePaymentOutcome(new_monthly_payment=ZERO, total_interest_paid=ZERO)

    result = build_amortization_table(new_principal, annual_rate, term_months)
    return ReducePaymentOutcome(
        new_monthly_payment=result.monthly_payment,
        total_interest_paid=result.total_interest,
    )


def solve_term_months(
    principal: Number, annual_rate: Number, payment: Number
) -> Optional[int]:
    """
    Number of months needed to repay a principal with a fixed payment.

    Closed-form amortization period:

        n = ceil(-ln(1 - P*r/PMT) / ln(1 + r))

    Args:
        principal: Amount to repay
        annual_rate: Annual nominal rate as percent
        payment: Fixed monthly payment

    Returns:
        Months needed, or None when the payment never amortizes the
        principal (it does not even cover the interest)
    """
    principal = to_decimal(principal)
    payment = to_decimal(payment)
    if payment <= 0:
        return None

    rate = monthly_rate(annual_rate)
    if rate == 0:
        return math.ceil(principal / payment)

    inner = ONE - principal * rate / payment
    if inner <= 0:
        return None

    return math.ceil(-inner.ln() / (ONE + rate).ln())


def reduce_term_scenario(
    debt: Number, annual_rate: Number, term_months: int, lump_sum: Number
) -> ReduceTermOutcome:
    """
    Scenario B: apply the lump sum and keep paying the original payment.

    When the original payment cannot amortize the reduced principal the
    loan is left unchanged (original term, nothing saved).
    """
    new_principal = max(ZERO, to_decimal(debt) - to_decimal(lump_sum))
    original = build_amortization_table(debt, annual_rate, term_months)

    if new_principal == 0:
        return ReduceTermOutcome(
            new_term_months=0,
            total_interest_paid=ZERO,
            saved_interest=original.total_interest,
        )

    months = solve_term_months(new_principal, annual_rate, original.monthly_payment)
    if months is None:
        return ReduceTermOutcome(
            new_term_months=term_months,
            total_interest_paid=original.total_interest,
            saved_interest=ZERO,
        )

    # Payment rounding can push the solution one month past the original term
    months = min(max(1, months), term_months)
    result = build_amortization_table(new_principal, annual_rate, months)
    saved = round2(original.total_interest - result.total_interest)

    return ReduceTermOutcome(
        new_term_months=months,
        total_interest_paid=result.total_interest,
        saved_interest=max(ZERO, saved),
    )


def invest_scenario(
    savings: Number, annual_return_percent: Number, term_months: int
) -> InvestOutcome:
    """Scenario C: compound the lump sum monthly over the original term."""
    savings = to_decimal(savings)
    if savings <= 0 or term_months <= 0:
        return InvestOutcome(total_return=ZERO, net_vs_amortize=ZERO)

    rate = monthly_rate(annual_return_percent)
    future_value = savings * (ONE + rate) ** term_months
    total_return = round2(future_value - savings)

    return InvestOutcome(total_return=total_return, net_vs_amortize=total_return)


def compound_interest_from_monthly_payments(
    monthly_payment: Number, months: int, annual_return_percent: Number
) -> Decimal:
    """
    Interest earned by investing a monthly payment for a number of months.

    Each payment compounds monthly for the months left until the end,
    the first one for `months` periods and the last one for a single period.

    Returns:
        Future value of all payments minus the amount contributed
    """
    payment = to_decimal(monthly_payment)
    if payment <= 0 or months <= 0:
        return ZERO

    growth = ONE + monthly_rate(annual_return_percent)
    total_value = ZERO
    for month in range(1, months + 1):
        total_value += payment * growth ** (months - month + 1)

    return round2(total_value - payment * months)


def compare_savings_scenarios(
    debt: Number,
    annual_rate: Number,
    term_months: int,
    savings: Number,
    investment_return_rate: Number = DEFAULT_INVESTMENT_RATE,
) -> SavingsScenarioComparison:
    """
    Compare scenarios A, B and C and recommend one.

    Investing is recommended when its return beats the interest saved by
    shortening the term and the investment rate beats the loan rate.
    Otherwise shortening the term is preferred whenever it saves at least
    as much interest as lowering the payment.
    """
    scenario_a = reduce_payment_scenario(debt, annual_rate, term_months, savings)
    scenario_b = reduce_term_scenario(debt, annual_rate, term_months, savings)
    scenario_c = invest_scenario(savings, investment_return_rate, term_months)

    original = build_amortization_table(debt, annual_rate, term_months)
    saved_by_b = original.total_interest - scenario_b.total_interest_paid
    saved_by_a = original.total_interest - scenario_a.total_interest_paid

    if scenario_c.total_return > saved_by_b and to_decimal(
        investment_return_rate
    ) > to_decimal(annual_rate):
        recommendation = Recommendation.invest
    elif saved_by_b >= saved_by_a and to_decimal(savings) > 0:
        recommendation = Recommendation.reduce_term
    else:
        recommendation = Recommendation.reduce_payment

    return SavingsScenarioComparison(
        scenario_a=scenario_a,
        scenario_b=scenario_b,
        scenario_c=scenario_c,
        recommendation=recommendation,
    )


def determine_winner(
    net_difference: Decimal,
    annual_rate: Number,
    investment_rate: Number,
    rule: WinnerRule = WinnerRule.net_difference,
) -> Winner:
    """Declare the winner of a strategic comparison. Ties go to amortizing."""
    if rule == WinnerRule.rate:
        invest_wins = to_decimal(investment_rate) > to_decimal(annual_rate)
    else:
        invest_wins = net_difference > 0
    return Winner.invest if invest_wins else Winner.amortize


def strategic_comparison(
    inputs: StrategicComparisonInput,
    winner_rule: WinnerRule = WinnerRule.net_difference,
) -> StrategicComparisonResult:
    """
    Compare amortizing with a lump sum against investing it.

    Both benefits are measured at the end of the original mortgage term:
    - Invest: return of the lump sum compounded over the original term
    - Amortize (reduce payment): interest saved
    - Amortize (reduce term): interest saved plus the interest earned by
      investing the freed monthly payments for the months saved

    Args:
        inputs: Loan, lump sum and investment parameters
        winner_rule: Rule used to declare the winner

    Returns:
        StrategicComparisonResult
    """
    debt = inputs.debt
    annual_rate = inputs.annual_rate
    term_months = inputs.term_months
    lump_sum = to_decimal(inputs.lump_sum_payment)

    base = build_amortization_table(debt, annual_rate, term_months)
    base_summary = BaseSummary(
        monthly_payment=base.monthly_payment, total_interest=base.total_interest
    )

    if lump_sum <= 0:
        return StrategicComparisonResult(
            base=base_summary,
            amortize=AmortizeSummary(
                total_interest_paid=base.total_interest,
                interest_saved=ZERO,
                new_monthly_payment=base.monthly_payment,
                new_term_months=term_months,
            ),
            invest=invest_scenario(ZERO, inputs.investment_rate, term_months),
            net_difference=ZERO,
            winner=determine_winner(
                ZERO, annual_rate, inputs.investment_rate, winner_rule
            ),
        )

    invest = invest_scenario(lump_sum, inputs.investment_rate, term_months)

    if inputs.amortization_type == AmortizationType.reduce_payment:
        scenario_a = reduce_payment_scenario(debt, annual_rate, term_months, lump_sum)
        interest_saved = max(ZERO, base.total_interest - scenario_a.total_interest_paid)
        benefit_amortize = interest_saved
        amortize = AmortizeSummary(
            total_interest_paid=scenario_a.total_interest_paid,
            interest_saved=interest_saved,
            new_monthly_payment=scenario_a.new_monthly_payment,
            new_term_months=term_months,
        )
    else:
        scenario_b = reduce_term_scenario(debt, annual_rate, term_months, lump_sum)
        months_saved = term_months - scenario_b.new_term_months
        freed_payments_interest = compound_interest_from_monthly_payments(
            base.monthly_payment, months_saved, inputs.investment_rate
        )
        benefit_amortize = scenario_b.saved_interest + freed_payments_interest
        amortize = AmortizeSummary(
            total_interest_paid=scenario_b.total_interest_paid,
            interest_saved=scenario_b.saved_interest,
            new_monthly_payment=(
                base.monthly_payment if scenario_b.new_term_months > 0 else ZERO
            ),
            new_term_months=scenario_b.new_term_months,
        )

    net_difference = round2(invest.total_return - benefit_amortize)

    return StrategicComparisonResult(
        base=base_summary,
        amortize=amortize,
        invest=invest,
        net_difference=net_difference,
        winner=determine_winner(
            net_difference, annual_rate, inputs.investment_rate, winner_rule
        ),
    )


def mortgage_chart_data(
    debt: Number,
    annual_rate: Number,
    term_months: int,
    lump_sum: Number,
    amortization_type: AmortizationType = AmortizationType.reduce_term,
) -> List[ChartPoint]:
    """
    Year-end balances of the unchanged loan and of the prepaid loan.

    Years after the prepaid loan is repaid report a strategy balance of 0.
    """
    base = build_amortization_table(debt, annual_rate, term_months)
    base_years = summarize_by_year(base)

    lump_sum = to_decimal(lump_sum)
    if lump_sum <= 0:
        return [
            ChartPoint(
                year=row.year, bank_balance=row.balance, strategy_balance=row.balance
            )
            for row in base_years
        ]

    new_principal = max(ZERO, to_decimal(debt) - lump_sum)
    strategy_by_year: Dict[int, Decimal] = {}

    if new_principal > 0:
        if amortization_type == AmortizationType.reduce_payment:
            new_term = term_months
        else:
            new_term = reduce_term_scenario(
                debt, annual_rate, term_months, lump_sum
            ).new_term_months
        strategy = build_amortization_table(new_principal, annual_rate, new_term)
        strategy_by_year = {row.year: row.balance for row in summarize_by_year(strategy)}

    return [
        ChartPoint(
            year=row.year,
            bank_balance=row.balance,
            strategy_balance=strategy_by_year.get(row.year, ZERO),
        )
        for row in base_years
    ]
