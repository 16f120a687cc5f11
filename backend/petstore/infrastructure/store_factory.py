"""Store factory — picks the pet storage backend from settings at startup."""

import logging

from petstore.config import Settings
from petstore.core.domain_types import StorageBackend
from petstore.core.repository_protocols import PetStore
from petstore.infrastructure.database import DatabaseSessionManager
from petstore.infrastructure.memory_store import VolatilePetStore
from petstore.infrastructure.sql_store import RelationalPetStore

logger = logging.getLogger(__name__)


def build_pet_store(settings: Settings) -> PetStore:
    if settings.storage_backend == StorageBackend.MEMORY:
        logger.info("Using volatile in-memory pet store")
        return VolatilePetStore()
    if not settings.database_url:
        raise ValueError("database_url is required for the database backend")
    logger.info("Using relational pet store")
    return RelationalPetStore(
        DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        ),
    )
