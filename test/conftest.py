"""
Pytest configuration and fixtures for Regional Blog API tests

No test needs a live database: routes run against in-memory entity stores
through FastAPI dependency overrides, services against AsyncSession mocks.
"""

import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))  # noqa: PTH100, PTH120

from regional_blog.api.deps import get_session_factory, get_tracking_channel  # noqa: E402
from regional_blog.config import settings  # noqa: E402
from regional_blog.database import get_db  # noqa: E402
from utils.fixtures import empty_store, recording_channel, registry, us_fr_registry  # noqa: E402, F401
from utils.mocks import make_async_mock_db  # noqa: E402

ADMIN_KEY = "test-admin-key"


@pytest.fixture
def mock_db():
    return make_async_mock_db()


@pytest.fixture
def app(registry, recording_channel, mock_db):
    """Application with the seed registry, a recording channel and a mock DB session."""
    from regional_blog.main import create_app

    application = create_app()
    application.state.locale_registry = registry

    async def override_get_db():
        yield mock_db

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_tracking_channel] = lambda: recording_channel
    application.dependency_overrides[get_session_factory] = lambda: None
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_key(monkeypatch):
    monkeypatch.setattr(settings, "admin_api_key", ADMIN_KEY)
    return ADMIN_KEY
