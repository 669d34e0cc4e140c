from __future__ import annotations

import pytest
from pydantic import ValidationError

from nz_invest.schemas.projection import (
    InvestmentType,
    ProjectionParameters,
    TaxRule,
    TaxRateQuery,
)
from nz_invest.schemas.scenarios import CompareRequest


def test_defaults_match_the_calculator_form():
    params = ProjectionParameters()

    assert params.startingIncome == 120000
    assert params.initialInvestment == 42000
    assert params.investmentType is InvestmentType.FIXED
    assert params.years == 21
    assert params.frequency == 1
    assert params.taxRule is TaxRule.NONE
    assert params.total_periods == 21


def test_form_strings_are_parsed():
    params = ProjectionParameters.model_validate(
        {"fixedAmount": "250.5", "years": "10", "frequency": "12", "entryFee": " 1 "}
    )

    assert params.fixedAmount == 250.5
    assert params.years == 10
    assert params.frequency == 12
    assert params.entryFee == 1


@pytest.mark.parametrize("raw", ["", "abc", None, "nan"])
def test_unparseable_numbers_become_zero(raw):
    params = ProjectionParameters.model_validate({"fixedAmount": raw, "salaryGrowthRate": raw})

    assert params.fixedAmount == 0
    assert params.salaryGrowthRate == 0


@pytest.mark.parametrize(
    "raw, expected",
    [("12abc", 12), (" 7.5%", 7.5), (".5", 0.5), ("2e3 per month", 2000), ("250.", 250)],
)
def test_leading_number_is_read_like_a_form(raw, expected):
    assert ProjectionParameters.model_validate({"fixedAmount": raw}).fixedAmount == expected


@pytest.mark.parametrize("raw", ["Infinity", "-Infinity", "inf", "1e999", "NaN"])
def test_non_finite_strings_become_zero(raw):
    params = ProjectionParameters.model_validate({"fixedAmount": raw, "expectedReturn": raw})

    assert params.fixedAmount == 0
    assert params.expectedReturn == 0


@pytest.mark.parametrize("field", ["fixedAmount", "expectedReturn", "salaryGrowthRate"])
@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_numbers_are_rejected(field, value):
    with pytest.raises(ValidationError):
        ProjectionParameters.model_validate({field: value})


def test_integer_strings_stay_integers():
    params = ProjectionParameters.model_validate({"years": "15 years", "frequency": "26"})

    assert params.years == 15
    assert params.frequency == 26


def test_zero_income_is_rejected_after_coercion():
    with pytest.raises(ValidationError):
        ProjectionParameters.model_validate({"startingIncome": "not a number"})


@pytest.mark.parametrize("raw", ["NZ", "nz", "none", "None", "", None])
def test_untaxed_aliases(raw):
    assert ProjectionParameters.model_validate({"taxRule": raw}).taxRule is TaxRule.NONE


def test_tax_rule_is_case_insensitive():
    assert ProjectionParameters(taxRule="PIR").taxRule is TaxRule.PIR
    assert ProjectionParameters(investmentType="Percentage").investmentType is InvestmentType.PERCENTAGE


@pytest.mark.parametrize(
    "field, value",
    [
        ("taxRule", "capital-gains"),
        ("investmentType", "lump"),
        ("frequency", 3),
        ("frequency", 0),
        ("years", -1),
        ("entryFee", -0.1),
        ("managementFee", 101),
        ("expectedReturn", -150),
        ("initialInvestment", -1),
        ("expectedReturn", 1e308),
        ("fixedAmount", 1e308),
        ("startingIncome", 1e10),
        ("initialInvestment", 1e13),
        ("salaryGrowthRate", 101),
        ("salaryPercentage", 150),
    ],
)
def test_out_of_domain_values_are_rejected(field, value):
    with pytest.raises(ValidationError):
        ProjectionParameters.model_validate({field: value})


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError):
        ProjectionParameters.model_validate({"investmentPauses": []})


def test_parameters_are_immutable():
    params = ProjectionParameters()
    with pytest.raises(ValidationError):
        params.years = 5


def test_compare_request_rejects_duplicate_names():
    with pytest.raises(ValidationError, match="duplicate"):
        CompareRequest.model_validate(
            {"scenarios": [{"name": "KiwiSaver"}, {"name": "KiwiSaver"}]}
        )


@pytest.mark.parametrize("name", ["current", "Year", "   "])
def test_compare_request_rejects_reserved_or_blank_names(name):
    with pytest.raises(ValidationError):
        CompareRequest.model_validate({"scenarios": [{"name": name}]})


def test_tax_rate_query_accepts_query_strings():
    query = TaxRateQuery.model_validate({"rule": "FIF", "income": "53500"})

    assert query.rule is TaxRule.FIF
    assert query.income == 53500
