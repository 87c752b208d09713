"""Fixtures for backend tests."""

from __future__ import annotations

import pytest

from charterskg.backend.app import create_app
from charterskg.backend.config import TestConfig


@pytest.fixture()
def app():
    """Create a test Flask application."""
    application = create_app(TestConfig)
    yield application


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture()
def cache(app):
    """Direct access to the application's query cache."""
    return app.config["QUERY_CACHE"]
