"""Root conftest — shared test configuration and storage fixtures.

Invariants:
    - Importing petstore.main never touches a real database or provider
    - Every test gets fresh stores; the relational one runs on in-memory SQLite

Design Decisions:
    - pet_store is parametrized over both backends so the storage contract is
      asserted once and run twice
"""

import os

import pytest

# Module-level app in petstore.main must not build a PostgreSQL engine
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("GOOGLE_OAUTH__ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "text")

from petstore.infrastructure.database import DatabaseSessionManager  # noqa: E402
from petstore.infrastructure.memory_store import VolatilePetStore  # noqa: E402
from petstore.infrastructure.sql_store import RelationalPetStore  # noqa: E402

SQLITE_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def memory_store():
    store = VolatilePetStore()
    yield store
    await store.close()


@pytest.fixture
async def sql_store():
    store = RelationalPetStore(DatabaseSessionManager(SQLITE_MEMORY_URL))
    yield store
    await store.close()


@pytest.fixture(params=["memory", "database"])
async def pet_store(request):
    """Each backend in turn — for tests of the shared storage contract."""
    if request.param == "memory":
        store = VolatilePetStore()
    else:
        store = RelationalPetStore(DatabaseSessionManager(SQLITE_MEMORY_URL))
    yield store
    await store.close()
