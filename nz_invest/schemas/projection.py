"""Data contracts for investment projections."""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InvestmentType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class TaxRule(str, Enum):
    PIR = "pir"
    FIF = "fif"
    NONE = "none"


# Labels older clients send for the untaxed rule.
_TAX_RULE_ALIASES = {"nz": TaxRule.NONE.value, "": TaxRule.NONE.value}

_NUMERIC_FIELDS = (
    "startingIncome",
    "salaryGrowthRate",
    "initialInvestment",
    "fixedAmount",
    "salaryPercentage",
    "years",
    "frequency",
    "expectedReturn",
    "entryFee",
    "managementFee",
)

_LEADING_NUMBER = re.compile(
    r"\s*[-+]?(?:\d+(?P<point>\.\d*)?|(?P<bare_point>\.\d+))(?P<exponent>[eE][-+]?\d+)?"
)


def _parse_number(value: Any) -> Any:
    """Parse form-style numeric input the way a browser form does.

    A leading number is read and trailing junk ignored ("12abc" is 12).
    Blanks, junk and strings that overflow to a non-finite value become 0.
    """
    if value is None:
        return 0
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match is None:
            return 0
        number = float(match.group(0))
        if not math.isfinite(number):
            return 0
        if not any(match.group(part) for part in ("point", "bare_point", "exponent")):
            return int(match.group(0))
        return number
    return value


def _normalise_tax_rule(value: Any) -> Any:
    if value is None:
        return TaxRule.NONE.value
    if isinstance(value, str):
        key = value.strip().lower()
        return _TAX_RULE_ALIASES.get(key, key)
    return value


class ProjectionParameters(BaseModel):
    """Inputs for a single projection run.

    Rates and fees are percentages (8 means 8%). Defaults mirror the
    calculator form's starting values.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    # Upper bounds keep a 100-year run finite at every frequency.
    # Income
    startingIncome: float = Field(120000.0, gt=0, le=1e9, description="Annual income in year 0.")
    salaryGrowthRate: float = Field(3.0, ge=-100, le=100, description="Annual salary growth, percent.")

    # Contributions
    initialInvestment: float = Field(42000.0, ge=0, le=1e12, description="Lump sum invested at period 0.")
    investmentType: InvestmentType = InvestmentType.FIXED
    fixedAmount: float = Field(1000.0, ge=0, le=1e9, description="Contribution per period when fixed.")
    salaryPercentage: float = Field(10.0, le=100, description="Percent of per-period income contributed.")

    # Horizon
    years: int = Field(21, ge=0, le=100)
    frequency: Literal[1, 4, 12, 26] = Field(1, description="Periods per year.")
    expectedReturn: float = Field(8.0, ge=-100, le=100, description="Nominal annual return, percent.")

    # Fees
    entryFee: float = Field(0.5, ge=0, le=100, description="Charged on every contribution and on exit.")
    managementFee: float = Field(0.2, ge=0, le=100, description="Annual fee on the period-end balance.")

    # Tax
    taxRule: TaxRule = TaxRule.NONE

    @field_validator(*_NUMERIC_FIELDS, mode="before")
    @classmethod
    def coerce_numeric(cls, value: Any) -> Any:
        return _parse_number(value)

    @field_validator("investmentType", mode="before")
    @classmethod
    def normalise_investment_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("taxRule", mode="before")
    @classmethod
    def coerce_tax_rule(cls, value: Any) -> Any:
        return _normalise_tax_rule(value)

    @property
    def total_periods(self) -> int:
        return self.years * self.frequency


class ChartPoint(BaseModel):
    """One yearly snapshot of the projection, in whole currency units."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=0)
    invested: int
    portfolioValue: int
    totalWealth: int


class ProjectionResult(BaseModel):
    """Summary totals and yearly series for one projection run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    totalInvested: int
    portfolioValue: int
    totalEntryFees: int
    totalMgmtFees: int
    tax: int
    totalWealth: int
    netReturn: float = Field(..., description="Gain over invested capital, percent.")
    chartData: List[ChartPoint]


class TaxRateQuery(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    rule: TaxRule
    income: float = Field(..., ge=0)

    @field_validator("rule", mode="before")
    @classmethod
    def normalise_rule(cls, value: Any) -> Any:
        return _normalise_tax_rule(value)


class TaxRateResponse(BaseModel):
    rule: TaxRule
    income: float
    rate: float
