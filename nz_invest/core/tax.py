"""Simplified New Zealand tax brackets for investment gains.

Each table is an ordered tuple of ``(upper_bound_inclusive, rate)`` pairs
keyed on annual income; the first bound the income does not exceed wins.
Rates are decimals. These are fixed lookup tables, not live IRD data.
"""

from typing import Dict, Tuple

from nz_invest.schemas.projection import TaxRule

Bracket = Tuple[float, float]

# Prescribed investor rate (PIE funds, KiwiSaver)
PIR_BRACKETS: Tuple[Bracket, ...] = (
    (48000, 0.105),
    (78000, 0.175),
    (float("inf"), 0.28),
)

# Foreign investment fund income taxed at the marginal rate
FIF_BRACKETS: Tuple[Bracket, ...] = (
    (15600, 0.105),
    (53500, 0.175),
    (78100, 0.30),
    (180000, 0.33),
    (float("inf"), 0.39),
)

_TABLES: Dict[TaxRule, Tuple[Bracket, ...]] = {
    TaxRule.PIR: PIR_BRACKETS,
    TaxRule.FIF: FIF_BRACKETS,
}


def bracket_rate(brackets: Tuple[Bracket, ...], income: float) -> float:
    """Return the rate of the first bracket whose upper bound covers income."""
    for upper, rate in brackets:
        if income <= upper:
            return rate
    return brackets[-1][1]


def tax_rate(rule: TaxRule, income: float) -> float:
    """Rate applied to a year's taxable gain; zero for untaxed rules."""
    brackets = _TABLES.get(TaxRule(rule))
    if brackets is None:
        return 0.0
    return bracket_rate(brackets, income)


__all__ = [
    "PIR_BRACKETS",
    "FIF_BRACKETS",
    "bracket_rate",
    "tax_rate",
]
