"""
Financial calculation API endpoints.

These endpoints accept inputs and return calculated results.
The frontend calls them again whenever a form value changes.
"""

import logging
from dataclasses import asdict
from decimal import Decimal
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, PlainSerializer

from mortgage_sim.calculations import amortization, projections, scenarios
from mortgage_sim.calculations.scenarios import (
    AmortizationType,
    Recommendation,
    Winner,
    WinnerRule,
)
from mortgage_sim.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

# Currency and percentages go out as JSON numbers, not strings
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Form limits of the simulator
MIN_DEBT = 1000
MAX_LOAN_RATE = 15
MAX_INVESTMENT_RATE = 20
MAX_TERM_YEARS = 40
MAX_TERM_MONTHS = MAX_TERM_YEARS * 12


class LoanInput(BaseModel):
    """Fixed-rate loan parameters."""

    principal: Decimal = Field(ge=MIN_DEBT)
    annual_rate: Decimal = Field(ge=0, le=MAX_LOAN_RATE)  # percent, e.g. 3.5
    term_months: int = Field(ge=1, le=MAX_TERM_MONTHS)


class PaymentResponse(BaseModel):
    monthly_payment: Money


@router.post("/payment", response_model=PaymentResponse)
async def calculate_payment(inputs: LoanInput):
    """Calculate the constant monthly payment."""
    payment = amortization.calculate_monthly_payment(
        inputs.principal, inputs.annual_rate, inputs.term_months
    )
    logger.debug(f"Monthly payment for {inputs.principal}: {payment}")
    return PaymentResponse(monthly_payment=payment)


class AmortizationInput(LoanInput):
    """Input for amortization calculation."""

    include_rows: bool = True


class AmortizationRowOut(BaseModel):
    month: int
    payment: Money
    principal: Money
    interest: Money
    balance: Money


class YearlySummaryOut(BaseModel):
    year: int
    interest: Money
    principal: Money
    balance: Money


class AmortizationResponse(BaseModel):
    """Schedule totals, monthly rows and yearly summary."""

    monthly_payment: Money
    total_interest: Money
    total_paid: Money
    rows: List[AmortizationRowOut] = []
    yearly: List[YearlySummaryOut] = []


@router.post("/amortization", response_model=AmortizationResponse)
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    result = amortization.build_amortization_table(
        inputs.principal, inputs.annual_rate, inputs.term_months
    )
    logger.debug(
        f"Amortization schedule: {len(result.rows)} months, "
        f"total interest {result.total_interest}"
    )

    return AmortizationResponse(
        monthly_payment=result.monthly_payment,
        total_interest=result.total_interest,
        total_paid=result.total_paid,
        rows=[asdict(row) for row in result.rows] if inputs.include_rows else [],
        yearly=[asdict(year) for year in amortization.summarize_by_year(result)],
    )


class SavingsScenarioInput(BaseModel):
    """Input for comparing what to do with available savings."""

    debt: Decimal = Field(ge=MIN_DEBT)
    annual_rate: Decimal = Field(ge=0, le=MAX_LOAN_RATE)
    term_months: int = Field(ge=1, le=MAX_TERM_MONTHS)
    savings: Decimal = Field(ge=0)
    investment_return_rate: Optional[Decimal] = Field(
        default=None, ge=0, le=MAX_INVESTMENT_RATE
    )


class ReducePaymentOut(BaseModel):
    new_monthly_payment: Money
    total_interest_paid: Money


class ReduceTermOut(BaseModel):
    new_term_months: int
    total_interest_paid: Money
    saved_interest: Money


class InvestOut(BaseModel):
    total_return: Money
    net_vs_amortize: Money


class SavingsScenarioResponse(BaseModel):
    scenario_a: ReducePaymentOut
    scenario_b: ReduceTermOut
    scenario_c: InvestOut
    recommendation: Recommendation


@router.post("/savings-scenarios", response_model=SavingsScenarioResponse)
async def calculate_savings_scenarios(
    inputs: SavingsScenarioInput, settings: Settings = Depends(get_settings)
):
    """Compare reducing the payment, reducing the term and investing."""
    investment_rate = inputs.investment_return_rate
    if investment_rate is None:
        investment_rate = settings.default_investment_rate

    comparison = scenarios.compare_savings_scenarios(
        debt=inputs.debt,
        annual_rate=inputs.annual_rate,
        term_months=inputs.term_months,
        savings=inputs.savings,
        investment_return_rate=investment_rate,
    )
    logger.debug(f"Savings scenarios recommendation: {comparison.recommendation.value}")

    return SavingsScenarioResponse.model_validate(asdict(comparison))


class StrategicComparisonInput(BaseModel):
    """Input for the amortize vs. invest simulator."""

    debt: Decimal = Field(ge=MIN_DEBT)
    annual_rate: Decimal = Field(ge=0, le=MAX_LOAN_RATE)
    term_years: Optional[int] = Field(default=None, ge=1, le=MAX_TERM_YEARS)
    term_months: Optional[int] = Field(default=None, ge=1, le=MAX_TERM_MONTHS)
    lump_sum_payment: Decimal = Field(default=Decimal(0), ge=0)
    investment_rate: Optional[Decimal] = Field(
        default=None, ge=0, le=MAX_INVESTMENT_RATE
    )
    amortization_type: AmortizationType = AmortizationType.reduce_term


class BaseOut(BaseModel):
    monthly_payment: Money
    total_interest: Money


class AmortizeOut(BaseModel):
    total_interest_paid: Money
    interest_saved: Money
    new_monthly_payment: Money
    new_term_months: int


class ChartPointOut(BaseModel):
    year: int
    bank_balance: Money
    strategy_balance: Money


class StrategicComparisonResponse(BaseModel):
    """Comparison result plus the yearly balance chart."""

    base: BaseOut
    amortize: AmortizeOut
    invest: InvestOut
    net_difference: Money
    winner: Winner
    winner_rule: WinnerRule
    chart: List[ChartPointOut] = []


@router.post("/strategic-comparison", response_model=StrategicComparisonResponse)
async def calculate_strategic_comparison(
    inputs: StrategicComparisonInput, settings: Settings = Depends(get_settings)
):
    """Compare amortizing a lump sum against investing it."""
    if inputs.term_months is not None:
        term_months = inputs.term_months
    elif inputs.term_years is not None:
        term_months = inputs.term_years * 12
    else:
        raise HTTPException(
            status_code=400, detail="Either term_years or term_months is required"
        )

    investment_rate = inputs.investment_rate
    if investment_rate is None:
        investment_rate = settings.default_investment_rate

    comparison = scenarios.strategic_comparison(
        scenarios.StrategicComparisonInput(
            debt=inputs.debt,
            annual_rate=inputs.annual_rate,
            term_months=term_months,
            lump_sum_payment=inputs.lump_sum_payment,
            investment_rate=investment_rate,
            amortization_type=inputs.amortization_type,
        ),
        winner_rule=settings.winner_rule,
    )
    chart = scenarios.mortgage_chart_data(
        inputs.debt,
        inputs.annual_rate,
        term_months,
        inputs.lump_sum_payment,
        inputs.amortization_type,
    )
    logger.info(
        f"Strategic comparison: winner={comparison.winner.value} "
        f"net_difference={comparison.net_difference} rule={settings.winner_rule.value}"
    )

    return StrategicComparisonResponse(
        **asdict(comparison),
        winner_rule=settings.winner_rule,
        chart=[asdict(point) for point in chart],
    )


class InvestmentProjectionInput(BaseModel):
    """Input for the compound interest projection."""

    initial: Decimal = Field(ge=0)
    monthly_contribution: Decimal = Field(default=Decimal(0), ge=0)
    years: int = Field(ge=1, le=MAX_TERM_YEARS)
    annual_return: Decimal = Field(ge=0, le=MAX_INVESTMENT_RATE)


class ProjectionPointOut(BaseModel):
    year: int
    value: Money


class InvestmentProjectionResponse(BaseModel):
    final_capital: Money
    total_contributed: Money
    total_interest: Money
    points: List[ProjectionPointOut] = []


@router.post("/investment-projection", response_model=InvestmentProjectionResponse)
async def calculate_investment_projection(inputs: InvestmentProjectionInput):
    """Project an investment with monthly contributions."""
    projection = projections.project_investment(
        inputs.initial,
        inputs.monthly_contribution,
        inputs.years,
        inputs.annual_return,
    )
    logger.debug(f"Investment projection final capital: {projection.final_capital}")
    return InvestmentProjectionResponse.model_validate(asdict(projection))


class SavingsGoalInput(BaseModel):
    """Input for the savings goal tracker."""

    target: Decimal = Field(ge=0)
    current: Decimal = Field(default=Decimal(0), ge=0)
    monthly_saving: Decimal = Field(default=Decimal(0), ge=0)


class SavingsGoalResponse(BaseModel):
    progress_percent: Money
    remaining_amount: Money
    months_remaining: Optional[int] = None
    years: Optional[int] = None
    months: Optional[int] = None


@router.post("/savings-goal", response_model=SavingsGoalResponse)
async def calculate_savings_goal(inputs: SavingsGoalInput):
    """Progress and time left to reach a savings goal."""
    progress = projections.track_savings_goal(
        inputs.target, inputs.current, inputs.monthly_saving
    )
    return SavingsGoalResponse.model_validate(asdict(progress))
