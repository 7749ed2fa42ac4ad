"""Health check blueprint."""

from flask import Blueprint, Response, current_app, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Response:
    """Health check endpoint.

    Returns:
        JSON response with status and benefit-table cache information
    """
    service = current_app.extensions["claiming_service"]
    return jsonify({"status": "ok", "cached_birth_year": service.cache.birth_year})
