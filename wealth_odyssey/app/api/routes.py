"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from wealth_odyssey import __version__
from wealth_odyssey.core.errors import ArithmeticOverflowError, InvalidParameterError
from wealth_odyssey.core.projection import run, run_rate_sweep
from wealth_odyssey.schemas.ping import PingResponse
from wealth_odyssey.schemas.projection import (
    MilestonesOut,
    ProjectionRequest,
    ProjectionResponse,
    SweepRequest,
    SweepResponse,
    SweepScenario,
)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    current_app.logger.warning("rejected payload: %d validation error(s)", exc.error_count())
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.BAD_REQUEST,
    )


@api_bp.errorhandler(InvalidParameterError)
def _handle_invalid_parameters(exc: InvalidParameterError):
    current_app.logger.warning("invalid projection parameters: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(ArithmeticOverflowError)
def _handle_overflow(exc: ArithmeticOverflowError):
    current_app.logger.warning("projection overflowed: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", version=__version__)
    return jsonify(response.model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Run a single projection and return the series plus summary metrics."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ProjectionRequest.model_validate(raw_payload)
    idr_rate = current_app.config["USD_TO_IDR_RATE"]

    result = run(
        payload.to_parameters(idr_rate),
        fire_multiple=current_app.config["FIRE_MULTIPLE"],
    )
    current_app.logger.info(
        "projection horizon=%dy rate=%.2f%% final=%.2f",
        payload.horizonYears,
        payload.annualRatePercent,
        result.final_balance,
    )

    response = ProjectionResponse.from_result(result, payload.currency, idr_rate)
    return jsonify(response.model_dump(mode="json", by_alias=True))


@api_bp.post("/projection/sweep")
def projection_sweep() -> Any:
    """Run the same parameters across several annual rates."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = SweepRequest.model_validate(raw_payload)

    max_rates = current_app.config["MAX_SWEEP_RATES"]
    if len(payload.annualRatePercents) > max_rates:
        raise InvalidParameterError([f"at most {max_rates} rates per sweep"])

    params = payload.parameters.to_parameters(current_app.config["USD_TO_IDR_RATE"])
    results = run_rate_sweep(
        params,
        payload.annualRatePercents,
        fire_multiple=current_app.config["FIRE_MULTIPLE"],
    )
    current_app.logger.info("sweep of %d rates", len(results))

    response = SweepResponse(
        scenarios=[
            SweepScenario(
                annualRatePercent=rate,
                finalBalance=result.final_balance,
                totalGain=result.total_gain,
                fireYearFraction=result.fire_year_fraction,
                milestones=MilestonesOut.from_milestones(result.milestones),
            )
            for rate, result in zip(payload.annualRatePercents, results)
        ]
    )
    return jsonify(response.model_dump(mode="json", by_alias=True))
