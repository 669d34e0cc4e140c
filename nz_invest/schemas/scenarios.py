"""Data contracts for comparing named projection scenarios."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from nz_invest.schemas.projection import ProjectionParameters, ProjectionResult

CURRENT_SCENARIO = "current"

# Column names the merged chart already uses.
RESERVED_NAMES = frozenset({CURRENT_SCENARIO, "year"})


class NamedScenario(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    inputs: ProjectionParameters = Field(default_factory=ProjectionParameters)


class CompareRequest(BaseModel):
    """The live inputs plus any saved scenarios to overlay against them."""

    model_config = ConfigDict(extra="forbid")

    current: ProjectionParameters = Field(default_factory=ProjectionParameters)
    scenarios: List[NamedScenario] = Field(default_factory=list)

    @model_validator(mode="after")
    def ensure_unique_names(self) -> "CompareRequest":
        seen = set()
        for scenario in self.scenarios:
            name = scenario.name.strip()
            if not name:
                raise ValueError("scenario names must not be blank")
            if name.lower() in RESERVED_NAMES:
                raise ValueError(f"scenario name {name!r} is reserved")
            if name in seen:
                raise ValueError(f"duplicate scenario name {name!r}")
            seen.add(name)
        return self


class ScenarioOutcome(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    inputs: ProjectionParameters
    results: ProjectionResult


class CompareResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    current: ProjectionResult
    scenarios: List[ScenarioOutcome]
    # One row per year: {"year": 3, "current": 55802, "<name>": ...}
    chart: List[Dict[str, int]]
