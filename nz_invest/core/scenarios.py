"""Run several projections side by side and overlay their wealth series."""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from nz_invest.core.projection import project_investment
from nz_invest.schemas.projection import ChartPoint, ProjectionParameters
from nz_invest.schemas.scenarios import (
    CURRENT_SCENARIO,
    CompareResponse,
    NamedScenario,
    ScenarioOutcome,
)


def merge_chart_series(series: Mapping[str, Sequence[ChartPoint]]) -> List[Dict[str, int]]:
    """Merge chart series into one row per year, keyed by series name.

    Each row holds ``year`` plus the ``totalWealth`` of every series that has
    a point for that year; rows are ordered by year.
    """
    rows: Dict[int, Dict[str, int]] = {}
    for name, points in series.items():
        for point in points:
            row = rows.setdefault(point.year, {"year": point.year})
            row[name] = point.totalWealth
    return [rows[year] for year in sorted(rows)]


def run_scenarios(
    current: ProjectionParameters,
    scenarios: Sequence[NamedScenario],
) -> CompareResponse:
    """Project the live inputs and every named scenario independently."""
    current_result = project_investment(current)
    outcomes = [
        ScenarioOutcome(
            name=scenario.name.strip(),
            inputs=scenario.inputs,
            results=project_investment(scenario.inputs),
        )
        for scenario in scenarios
    ]

    series = {CURRENT_SCENARIO: current_result.chartData}
    for outcome in outcomes:
        series[outcome.name] = outcome.results.chartData

    return CompareResponse(
        current=current_result,
        scenarios=outcomes,
        chart=merge_chart_series(series),
    )
