"""Shared test configuration and pytest markers."""

import os

# Keep the app's own engine off the working directory during API tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("GEMINI_API_KEY", "")

import pytest  # noqa: E402

from api.router import limiter  # noqa: E402
from services import session_store  # noqa: E402
from services.sources import registry  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: runs against a real SQLite database file"
    )


@pytest.fixture(autouse=True)
def _reset_state():
    limiter.enabled = False
    registry.clear()
    session_store.clear()
    yield
    registry.clear()
    session_store.clear()
