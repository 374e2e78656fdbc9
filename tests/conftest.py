"""
Shared test setup.

Environment variables must be set before app is imported: the app reads
them at import time (session backend, rate limiting, preference backend).
"""

import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

os.environ['FLASK_ENV'] = 'testing'
os.environ['FLASK_SECRET_KEY'] = 'test-secret-key-for-testing'
os.environ['TESTING'] = 'true'
os.environ['PREFERENCES_BACKEND'] = 'memory'
os.environ.pop('REDIS_URL', None)

from app import app, preference_store  # noqa: E402
from preferences import DARK  # noqa: E402


@pytest.fixture
def client():
    """Create test client"""
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False  # Disable CSRF for testing
    app.config['SERVER_NAME'] = 'localhost'
    with app.test_client() as client:
        yield client


@pytest.fixture
def csrf_client():
    """Test client with CSRF protection left on"""
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = True
    app.config['SERVER_NAME'] = 'localhost'
    with app.test_client() as client:
        yield client
    app.config['WTF_CSRF_ENABLED'] = False


@pytest.fixture(autouse=True)
def reset_theme():
    """The theme is process-wide; put it back to dark after every test"""
    yield
    preference_store.set(DARK)
