"""API test fixtures — fully wired app over ASGITransport.

Invariants:
    - Every test gets a fresh app with a fresh VolatilePetStore
    - Google OAuth is enabled and talks to FakeGoogle, never the network

Design Decisions:
    - Dependencies injected through create_app arguments, not dependency_overrides:
      the same seam production uses
"""

import pytest
from httpx import ASGITransport, AsyncClient

from petstore.config import Settings
from petstore.infrastructure.memory_store import VolatilePetStore
from petstore.main import create_app

from tests.services.fake_google import FakeGoogle, oauth_settings


@pytest.fixture
def provider():
    return FakeGoogle()


@pytest.fixture
def test_settings():
    return Settings(
        storage_backend="memory",
        google_oauth=oauth_settings(),
        log_format="text",
    )


@pytest.fixture
def test_app(test_settings, provider):
    return create_app(
        test_settings,
        pet_store=VolatilePetStore(),
        oauth_transport=provider.transport(),
    )


@pytest.fixture
async def client(test_app):
    async with AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://testserver",
    ) as c:
        yield c
