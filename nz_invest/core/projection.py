from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, List

from nz_invest.core.tax import tax_rate
from nz_invest.schemas.projection import (
    ChartPoint,
    InvestmentType,
    ProjectionParameters,
    ProjectionResult,
    TaxRule,
)

logger = logging.getLogger(__name__)


def round_currency(amount: float) -> int:
    """Round half-up to a whole currency unit (the calculator's display rounding)."""
    return int(math.floor(amount + 0.5))


# -----------------------------
# Period scheduler
# -----------------------------


@dataclass(frozen=True)
class PeriodInfo:
    index: int
    year_frac: float
    year: int
    is_year_boundary: bool


def schedule_periods(years: int, frequency: int) -> Iterator[PeriodInfo]:
    """Yield periods 1..years*frequency with their position in the calendar.

    `year` indexes salary growth. A year boundary closes a tax year and
    records a chart point; the last period is always a boundary.
    """
    total_periods = years * frequency
    for period in range(1, total_periods + 1):
        year_frac = period // frequency + (period % frequency) / frequency
        yield PeriodInfo(
            index=period,
            year_frac=year_frac,
            year=math.floor(year_frac),
            is_year_boundary=period % frequency == 0 or period == total_periods,
        )


# -----------------------------
# Running state
# -----------------------------


@dataclass
class SimulationState:
    """Accumulators owned by a single projection run."""

    portfolio_value: float = 0.0
    total_invested: float = 0.0
    total_entry_fees: float = 0.0
    total_mgmt_fees: float = 0.0
    total_tax: float = 0.0
    # current tax year only
    yearly_gross_growth: float = 0.0
    yearly_mgmt_fees: float = 0.0
    chart: List[ChartPoint] = field(default_factory=list)

    def close_tax_year(self) -> None:
        self.yearly_gross_growth = 0.0
        self.yearly_mgmt_fees = 0.0

    def snapshot(self, year: int) -> ChartPoint:
        point = ChartPoint(
            year=year,
            invested=round_currency(self.total_invested),
            portfolioValue=round_currency(self.portfolio_value),
            totalWealth=round_currency(self.portfolio_value),
        )
        self.chart.append(point)
        return point


# -----------------------------
# Cashflow & entry fee
# -----------------------------


def income_for_year(params: ProjectionParameters, year: int) -> float:
    return params.startingIncome * (1 + params.salaryGrowthRate / 100) ** year


def contribution_for_period(params: ProjectionParameters, income: float) -> float:
    """Gross contribution for one period, never negative."""
    if params.investmentType == InvestmentType.FIXED:
        contribution = params.fixedAmount
    else:
        contribution = (income / params.frequency) * (params.salaryPercentage / 100)
    return max(0.0, contribution)


def invest(state: SimulationState, amount: float, entry_fee_pct: float) -> float:
    """Buy in with `amount`; the entry fee comes off before it is invested.

    Returns the entry fee charged.
    """
    entry_fee = amount * (entry_fee_pct / 100)
    state.total_invested += amount
    state.total_entry_fees += entry_fee
    state.portfolio_value += amount - entry_fee
    return entry_fee


def apply_contribution(state: SimulationState, params: ProjectionParameters, income: float) -> float:
    contribution = contribution_for_period(params, income)
    invest(state, contribution, params.entryFee)
    return contribution


# -----------------------------
# Growth, management fee & tax
# -----------------------------


def apply_growth(state: SimulationState, return_per_period: float) -> float:
    if state.portfolio_value <= 0:
        return 0.0
    growth = state.portfolio_value * return_per_period
    state.portfolio_value += growth
    state.yearly_gross_growth += growth
    return growth


def apply_management_fee(state: SimulationState, fee_per_period: float) -> float:
    if state.portfolio_value <= 0:
        return 0.0
    mgmt_fee = state.portfolio_value * fee_per_period
    state.portfolio_value -= mgmt_fee
    state.total_mgmt_fees += mgmt_fee
    state.yearly_mgmt_fees += mgmt_fee
    return mgmt_fee


def apply_tax(state: SimulationState, rule: TaxRule, income: float) -> float:
    """Tax the year's gross growth net of management fees, floored at zero."""
    if state.portfolio_value <= 0:
        return 0.0
    taxable_gain = max(0.0, state.yearly_gross_growth - state.yearly_mgmt_fees)
    tax = taxable_gain * tax_rate(rule, income)
    state.portfolio_value -= tax
    state.total_tax += tax
    return tax


def apply_exit_fee(state: SimulationState, entry_fee_pct: float) -> float:
    """Charge the entry fee once more when the portfolio is liquidated."""
    if state.portfolio_value <= 0 or entry_fee_pct <= 0:
        return 0.0
    withdrawal_fee = state.portfolio_value * (entry_fee_pct / 100)
    state.portfolio_value -= withdrawal_fee
    state.total_entry_fees += withdrawal_fee
    return withdrawal_fee


# -----------------------------
# Projection
# -----------------------------


def project_investment(params: ProjectionParameters) -> ProjectionResult:
    """
    Simulate the plan period by period and summarise it.

    Order of operations (per period):
      1) Contribution, less entry fee, is added to the portfolio.
      2) Growth at expectedReturn / frequency on the whole balance.
      3) Management fee at managementFee / frequency on the grown balance.
      4) At a year boundary: tax on the year's growth net of management
         fees, then a chart point.

    The initial lump sum is invested (less entry fee) before period 1 and
    recorded as the year-0 chart point. After the last period the entry
    fee is charged again on the ending balance as an exit cost.
    """
    return_per_period = params.expectedReturn / 100 / params.frequency
    fee_per_period = params.managementFee / 100 / params.frequency

    state = SimulationState()

    if params.initialInvestment > 0:
        entry_fee = invest(state, params.initialInvestment, params.entryFee)
        logger.debug(
            "period 0: invested %.2f, entry fee %.2f, portfolio %.2f",
            params.initialInvestment,
            entry_fee,
            state.portfolio_value,
        )
    state.snapshot(year=0)

    for period in schedule_periods(params.years, params.frequency):
        income = income_for_year(params, period.year)

        apply_contribution(state, params, income)
        growth = apply_growth(state, return_per_period)
        mgmt_fee = apply_management_fee(state, fee_per_period)
        logger.debug(
            "period %d: growth %.2f, management fee %.2f, portfolio %.2f",
            period.index,
            growth,
            mgmt_fee,
            state.portfolio_value,
        )

        if period.is_year_boundary:
            tax = apply_tax(state, params.taxRule, income)
            logger.debug(
                "period %d: year closed, tax %.2f, total tax %.2f, portfolio %.2f",
                period.index,
                tax,
                state.total_tax,
                state.portfolio_value,
            )
            state.close_tax_year()
            state.snapshot(year=period.year)

    if params.total_periods:
        withdrawal_fee = apply_exit_fee(state, params.entryFee)
        if withdrawal_fee:
            logger.debug(
                "exit fee %.2f, final portfolio %.2f", withdrawal_fee, state.portfolio_value
            )

    result = _assemble_result(state)
    logger.info(
        "projected %d periods: invested %d, wealth %d, tax %d",
        params.total_periods,
        result.totalInvested,
        result.totalWealth,
        result.tax,
    )
    return result


def _assemble_result(state: SimulationState) -> ProjectionResult:
    total_wealth = state.portfolio_value
    if state.total_invested > 0:
        net_return = (total_wealth - state.total_invested) / state.total_invested * 100
    else:
        net_return = 0.0

    return ProjectionResult(
        totalInvested=round_currency(state.total_invested),
        portfolioValue=round_currency(state.portfolio_value),
        totalEntryFees=round_currency(state.total_entry_fees),
        totalMgmtFees=round_currency(state.total_mgmt_fees),
        tax=round_currency(state.total_tax),
        totalWealth=round_currency(total_wealth),
        netReturn=net_return,
        chartData=list(state.chart),
    )


__all__ = [
    "PeriodInfo",
    "SimulationState",
    "schedule_periods",
    "round_currency",
    "income_for_year",
    "contribution_for_period",
    "invest",
    "apply_contribution",
    "apply_growth",
    "apply_management_fee",
    "apply_tax",
    "apply_exit_fee",
    "project_investment",
]
