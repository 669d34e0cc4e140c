"""HTTP routes for the Flask API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from nz_invest.core.ping import build_ping
from nz_invest.core.projection import project_investment
from nz_invest.core.scenarios import run_scenarios
from nz_invest.core.tax import tax_rate
from nz_invest.schemas.projection import (
    ProjectionParameters,
    TaxRateQuery,
    TaxRateResponse,
)
from nz_invest.schemas.scenarios import CompareRequest

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


class BadRequest(Exception):
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected request: %d validation error(s)", exc.error_count())
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.BAD_REQUEST,
    )


@api_bp.errorhandler(BadRequest)
def _handle_bad_request(exc: BadRequest):
    logger.info("rejected request: %s", exc.detail)
    return jsonify({"detail": exc.detail}), HTTPStatus.BAD_REQUEST


def _json_object() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        raise BadRequest("request body must be a JSON object")
    return payload


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    return jsonify(build_ping().model_dump())


@api_bp.get("/projection/defaults")
def projection_defaults() -> Any:
    """The parameter record a blank form starts from."""
    return jsonify(ProjectionParameters().model_dump(mode="json"))


@api_bp.post("/projection")
def projection() -> Any:
    """Project a single parameter record."""
    params = ProjectionParameters.model_validate(_json_object())
    result = project_investment(params)
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/projection/compare")
def compare_projections() -> Any:
    """Project the live inputs alongside named scenarios for overlay charts."""
    compare = CompareRequest.model_validate(_json_object())
    limit = current_app.config["MAX_SCENARIOS"]
    if len(compare.scenarios) > limit:
        raise BadRequest(f"at most {limit} scenarios can be compared at once")
    response = run_scenarios(compare.current, compare.scenarios)
    return jsonify(response.model_dump(mode="json"))


@api_bp.get("/tax/rates")
def tax_rates() -> Any:
    """Look up the bracket rate a rule applies at a given annual income."""
    query = TaxRateQuery.model_validate(request.args.to_dict())
    response = TaxRateResponse(
        rule=query.rule,
        income=query.income,
        rate=tax_rate(query.rule, query.income),
    )
    return jsonify(response.model_dump(mode="json"))
