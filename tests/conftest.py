"""
Pytest fixtures for Switchboard API testing.

This module provides:
1. Test environment settings
2. Authentication fixtures
3. Catalog and sample-data fixtures

Unit tests never touch a database: repositories are mocked or replaced
through FastAPI dependency overrides.
"""

import os
from datetime import datetime
from typing import Any
from uuid import uuid4

import pytest

# Settings are read lazily; set the environment before anything calls get_settings()
os.environ.setdefault("SWITCHBOARD_ENVIRONMENT", "testing")
os.environ.setdefault("SWITCHBOARD_SECRET_KEY", "test-secret-key-for-testing-must-be-32-chars")
os.environ.pop("SWITCHBOARD_STRIPE_SECRET_KEY", None)

from switchboard.catalog.registry import CatalogRegistry, get_catalog  # noqa: E402
from switchboard.config import get_settings  # noqa: E402
from switchboard.models.enums import AgentPurpose, AgentType, ToneOfVoice  # noqa: E402
from switchboard.models.orm import Agent  # noqa: E402

pytest_plugins = [
    "tests.fixtures.auth",
]


@pytest.fixture(autouse=True)
def clear_cached_singletons():
    """Reset cached settings and catalog between tests."""
    get_settings.cache_clear()
    get_catalog.cache_clear()
    yield
    get_settings.cache_clear()
    get_catalog.cache_clear()


@pytest.fixture(scope="session")
def catalog() -> CatalogRegistry:
    """The bundled integration catalog, loaded once."""
    return CatalogRegistry.from_directory(get_settings().catalog_path)


@pytest.fixture
def make_agent():
    """Factory for transient Agent ORM objects."""

    def _make(user_id: str = "user-1", **overrides: Any) -> Agent:
        now = datetime(2026, 1, 15, 12, 0, 0)
        values: dict[str, Any] = {
            "id": uuid4(),
            "user_id": user_id,
            "name": "Support Bot",
            "website_url": "https://example.com",
            "description": "Answers questions",
            "system_prompt": None,
            "tone_of_voice": ToneOfVoice.FRIENDLY,
            "purpose": AgentPurpose.SUPPORT,
            "welcome_message": None,
            "suggested_questions": [],
            "is_active": True,
            "agent_type": AgentType.WEBSITE,
            "language": "en",
            "widget_config": None,
            "created_at": now,
            "updated_at": now,
        }
        values.update(overrides)
        return Agent(**values)

    return _make
