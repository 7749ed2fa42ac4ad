"""
Claiming-age analysis blueprint.

This module provides API endpoints for benefit lookups, present and future
value calculations, bank-balance projections and claiming-age optimization.
"""

from typing import Annotated, Any, List, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import BaseModel, BeforeValidator, Field, ValidationError

from claiming_planner.models.formatting import parse_age
from claiming_planner.models.projection import (
    InvalidProjectionError,
    ProjectionParameters,
)
from claiming_planner.models.retirement_age import full_retirement_age_description
from claiming_planner.services.claiming_service import ClaimingAnalysisService

claiming_bp = Blueprint("claiming", __name__, url_prefix="/api")


def _age_value(value: Any) -> Any:
    """Accept ages as numbers or year:month text."""
    if isinstance(value, str):
        return parse_age(value)
    return value


# Same ranges as validate_projection_parameters
BirthYear = Annotated[int, Field(ge=1900, le=2050)]
BirthMonth = Annotated[int, Field(ge=1, le=12)]
ClaimingAge = Annotated[
    float, BeforeValidator(_age_value), Field(ge=62, le=70, allow_inf_nan=False)
]
AgeAtDeath = Annotated[
    float, BeforeValidator(_age_value), Field(ge=62, le=200, allow_inf_nan=False)
]
InterestRate = Annotated[float, Field(ge=-20, le=40, allow_inf_nan=False)]
Cola = Annotated[float, Field(ge=-20, le=20, allow_inf_nan=False)]
Pia = Annotated[float, Field(ge=0, le=10000, allow_inf_nan=False)]


class MonthlyBenefitQuery(BaseModel):
    birth_year: BirthYear
    claiming_age: ClaimingAge
    pia: Optional[Pia] = None


class BenefitScheduleRequest(BaseModel):
    birth_year: BirthYear
    birth_month: BirthMonth = 1
    pia: Optional[Pia] = None


class PresentValueRequest(BaseModel):
    birth_year: BirthYear
    claiming_age: ClaimingAge
    age_at_death: Optional[AgeAtDeath] = None
    annual_rate: InterestRate = 0.0
    pia: Optional[Pia] = None


class FutureValueRequest(PresentValueRequest):
    cola: Cola = 0.0
    birth_month: BirthMonth = 1


class NpvOptimizeRequest(BaseModel):
    birth_year: BirthYear
    age_at_death: Optional[AgeAtDeath] = None
    annual_rate: InterestRate = 0.0
    pia: Optional[Pia] = None


class BalanceOptimizeRequest(NpvOptimizeRequest):
    cola: Cola = 0.0
    birth_month: BirthMonth = 1


class SummaryRequest(BaseModel):
    birth_year: BirthYear
    birth_month: BirthMonth = 1
    cola: Cola = 0.0
    pia: Optional[Pia] = None
    age_at_death: Optional[AgeAtDeath] = None
    rates: Optional[List[InterestRate]] = Field(
        default=None, min_length=1, max_length=61
    )


def _service() -> ClaimingAnalysisService:
    return current_app.extensions["claiming_service"]


def _validation_messages(error: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in detail['loc'])}: {detail['msg']}"
        for detail in error.errors()
    ]


def _bad_request(message: str, errors: Optional[List[str]] = None) -> Any:
    body: dict = {"error": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), 400


@claiming_bp.route("/full-retirement-age", methods=["GET"])
def get_full_retirement_age() -> Any:
    """Get the Full Retirement Age for a birth year.

    Returns:
        JSON response with FRA in fractional years and a description
    """
    birth_year = request.args.get("birth_year", type=int)
    if birth_year is None:
        return _bad_request("birth_year must be an integer")

    return jsonify(
        {
            "birth_year": birth_year,
            "full_retirement_age": _service().full_retirement_age(birth_year),
            "description": full_retirement_age_description(birth_year),
        }
    )


@claiming_bp.route("/monthly-benefit", methods=["GET"])
def get_monthly_benefit() -> Any:
    """Get the monthly benefit for a claiming age.

    Returns:
        JSON response with the monthly benefit in dollars
    """
    try:
        query = MonthlyBenefitQuery.model_validate(request.args.to_dict())
        benefit = _service().monthly_benefit(
            query.birth_year, query.claiming_age, query.pia
        )
        return jsonify(
            {
                "birth_year": query.birth_year,
                "claiming_age": query.claiming_age,
                "monthly_benefit": benefit,
            }
        )

    except ValidationError as e:
        return _bad_request("Invalid request", _validation_messages(e))
    except Exception as e:
        current_app.logger.error(f"Error computing monthly benefit: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@claiming_bp.route("/benefit-schedule", methods=["POST"])
def post_benefit_schedule() -> Any:
    """Get the monthly benefit schedule for every claiming month.

    Returns:
        JSON response with one row per claiming month
    """
    try:
        data = BenefitScheduleRequest.model_validate(request.get_json(silent=True) or {})
        schedule = _service().benefit_schedule(data.birth_year, data.birth_month, data.pia)
        return jsonify(schedule.model_dump())

    except ValidationError as e:
        return _bad_request("Invalid request", _validation_messages(e))
    except Exception as e:
        current_app.logger.error(f"Error building benefit schedule: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@claiming_bp.route("/net-present-value", methods=["POST"])
def post_net_present_value() -> Any:
    """Compute the net present value at 62 for one claiming age.

    Returns:
        JSON response with the NPV in dollars
    """
    try:
        data = PresentValueRequest.model_validate(request.get_json(silent=True) or {})
        npv = _service().net_present_value(
            data.birth_year,
            data.claiming_age,
            data.age_at_death,
            data.annual_rate,
            data.pia,
        )
        return jsonify({"net_present_value": npv})

    except ValidationError as e:
        return _bad_request("Invalid request", _validation_messages(e))
    except Exception as e:
        current_app.logger.error(f"Error computing net present value: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@claiming_bp.route("/future-value", methods=["POST"])
def post_future_value() -> Any:
    """Compute the bank balance at death for one claiming age.

    Returns:
        JSON response with the future value in dollars
    """
    try:
        data = FutureValueRequest.model_validate(request.get_json(silent=True) or {})
        value = _service().future_value(
            data.birth_year,
            data.claiming_age,
            data.age_at_death,
            data.annual_rate,
            data.cola,
            data.birth_month,
            data.pia,
        )
        return jsonify({"future_value": value})

    except ValidationError as e:
        return _bad_request("Invalid request", _validation_messages(e))
    except Exception as e:
        current_app.logger.error(f"Error computing future value: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


def _choice_response(choice: Any) -> Any:
    return jsonify(
        {
            "best_month_index": choice.best_month_index,
            "best_value": choice.best_value,
            "claiming_age": choice.claiming_age,
            "label": choice.label,
        }
    )


@claiming_bp.route("/optimize/npv", methods=["POST"])
def post_optimize_npv() -> Any:
    """Find the claiming age with the highest net present value.

    Returns:
        JSON response with the best month index and NPV
    """
    try:
        data = NpvOptimizeRequest.model_validate(request.get_json(silent=True) or {})
        choice = _service().best_by_npv(
            data.birth_year, data.age_at_death, data.annual_rate, data.pia
        )
        return _choice_response(choice)

    except ValidationError as e:
        return _bad_request("Invalid request", _validation_messages(e))
    except Exception as e:
        current_app.logger.error(f"Error optimizing by NPV: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@claiming_bp.route("/optimize/balance", methods=["POST"])
def post_optimize_balance() -> Any:
    """Find the claiming age with the highest bank balance at death.

    Returns:
        JSON response with the best month index and balance
    """
    try:
        data = BalanceOptimizeRequest.model_validate(request.get_json(silent=True) or {})
        choice = _service().best_by_balance(
            data.birth_year,
            data.age_at_death,
            data.annual_rate,
            data.cola,
            data.birth_month,
            data.pia,
        )
        return _choice_response(choice)

    except ValidationError as e:
        return _bad_request("Invalid request", _validation_messages(e))
    except Exception as e:
        current_app.logger.error(f"Error optimizing by balance: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@claiming_bp.route("/bank-balance", methods=["POST"])
def post_bank_balance() -> Any:
    """Run a month-by-month bank-balance projection.

    Returns:
        JSON response with combination labels and monthly rows
    """
    try:
        params = ProjectionParameters.model_validate(request.get_json(silent=True) or {})
        result = _service().bank_balance(params)
        return jsonify(
            {
                "combinations": [c.model_dump() for c in result.combinations],
                "final_balances": [float(b) for b in result.final_balances()],
                "rows": result.to_rows(),
            }
        )

    except InvalidProjectionError as e:
        return _bad_request("Invalid projection parameters", e.errors)
    except ValidationError as e:
        return _bad_request("Invalid request", _validation_messages(e))
    except ValueError as e:
        return _bad_request("Invalid request", [str(e)])
    except Exception as e:
        current_app.logger.error(f"Error running bank balance projection: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@claiming_bp.route("/summary", methods=["POST"])
def post_summary() -> Any:
    """Build the optimum claiming-age summary grid.

    Returns:
        JSON response with rates, ages at death and best claiming ages
    """
    try:
        data = SummaryRequest.model_validate(request.get_json(silent=True) or {})
        grid = _service().summary_grid(
            data.birth_year,
            data.birth_month,
            data.cola,
            data.pia,
            data.age_at_death,
            data.rates,
        )
        return jsonify(
            {
                "rates": grid.rates,
                "ages_at_death": grid.ages_at_death,
                "best_claiming_ages": grid.to_table(),
                "descriptions": grid.descriptions(),
                "shades": grid.shades(),
                "best_month_indices": grid.best_month_indices.tolist(),
                "best_values": grid.best_values.tolist(),
            }
        )

    except ValidationError as e:
        return _bad_request("Invalid request", _validation_messages(e))
    except Exception as e:
        current_app.logger.error(f"Error building summary grid: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500
