"""Claiming-Age Planner Flask Application Factory."""

from typing import Optional

from flask import Flask

from claiming_planner.config import get_global_settings
from claiming_planner.services.claiming_service import ClaimingAnalysisService


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_name: Configuration name (development, testing, production);
            overrides APP_ENV when given

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = get_global_settings()
    app_env = config_name or settings.app_env
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["ENV"] = settings.flask_env
    app.config["APP_ENV"] = app_env
    app.config["DEBUG"] = app_env == "development"
    app.config["TESTING"] = app_env == "testing"
    app.logger.setLevel(settings.log_level)

    # One service per app; it owns the benefit-table cache
    app.extensions["claiming_service"] = ClaimingAnalysisService(settings)

    # Register blueprints
    from claiming_planner.blueprints.claiming import claiming_bp
    from claiming_planner.blueprints.health import health_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(claiming_bp)

    return app
