"""
Pytest configuration and shared fixtures for Stocklist tests.
"""
import pytest
from cachelib import SimpleCache

from stocklist import create_app


@pytest.fixture(scope='function')
def app():
    """Create and configure a new app instance for each test."""
    app = create_app({
        'FLASK_ENV': 'testing',
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'SESSION_TYPE': 'cachelib',
        'SESSION_CACHELIB': SimpleCache(),
    })
    yield app


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()
