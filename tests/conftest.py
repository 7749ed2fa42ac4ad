"""
Pytest configuration and shared fixtures for the claiming-age planner tests.
"""

import os
from unittest.mock import patch

import pytest

from claiming_planner import create_app
from claiming_planner.config import reset_global_settings
from claiming_planner.models.benefit_table import BenefitTableCache


@pytest.fixture
def cache():
    """A fresh benefit-table cache."""
    return BenefitTableCache()


@pytest.fixture
def app():
    """Create an application configured for testing."""
    reset_global_settings()
    with patch.dict(
        os.environ,
        {"SECRET_KEY": "test-secret-key-123", "APP_ENV": "testing"},
        clear=True,
    ):
        application = create_app()
        yield application
    reset_global_settings()


@pytest.fixture
def client(app):
    """Test client for the application."""
    return app.test_client()
