from __future__ import annotations

from math import isclose

import pytest

from nz_invest.core.projection import project_investment
from nz_invest.schemas.projection import ProjectionParameters


@pytest.mark.parametrize("frequency", [1, 4, 12, 26])
@pytest.mark.parametrize("investment_type", ["fixed", "percentage"])
def test_zero_growth_accumulates_contributions_only(frequency, investment_type):
    """
    With no return, no fees and no tax, wealth is exactly what went in.
    """
    params = ProjectionParameters(
        startingIncome=85000,
        salaryGrowthRate=2.5,
        initialInvestment=5000,
        investmentType=investment_type,
        fixedAmount=250,
        salaryPercentage=6,
        years=10,
        frequency=frequency,
        expectedReturn=0,
        entryFee=0,
        managementFee=0,
        taxRule="none",
    )

    result = project_investment(params)

    assert result.totalWealth == result.totalInvested
    assert result.tax == 0
    assert result.totalEntryFees == 0
    assert result.totalMgmtFees == 0
    assert isclose(result.netReturn, 0.0, abs_tol=1e-9)
    for point in result.chartData:
        assert abs(point.totalWealth - point.invested) <= 1


def test_zero_growth_with_fees_loses_exactly_the_fees():
    params = ProjectionParameters(
        initialInvestment=10000,
        fixedAmount=1000,
        years=5,
        expectedReturn=0,
        entryFee=1,
        managementFee=0,
        taxRule="pir",
    )

    result = project_investment(params)

    # no gains, so no tax
    assert result.tax == 0
    assert abs(result.totalInvested - result.totalEntryFees - result.totalWealth) <= 1
    assert result.netReturn < 0
