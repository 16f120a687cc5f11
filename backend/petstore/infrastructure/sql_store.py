"""Relational Pet Store — SQLAlchemy-backed storage on the pets table.

Invariants:
    - The pets table is created on first use, once per store (idempotent DDL)
    - Unique-key violations surface as PetAlreadyExistsError, missing rows and
      zero-rowcount updates/deletes as PetNotFoundError
    - Every other database failure surfaces as StorageError (no driver text)
    - Positive limits and start_id are pushed into the SQL query

Design Decisions:
    - Single-statement autocommit-style sessions: no operation spans two statements
      that must agree, read-committed isolation is enough
    - Task cancellation propagates into the awaited round trip; the session
      manager's rollback/close still runs
"""

import asyncio
import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from petstore.core.domain_types import PetId
from petstore.core.errors import PetAlreadyExistsError, PetNotFoundError
from petstore.core.pet import Pet
from petstore.db.base import Base
from petstore.infrastructure.database import DatabaseSessionManager
from petstore.models.pet import PetRow

logger = logging.getLogger(__name__)


class RelationalPetStore:
    """PetStore persisted through a DatabaseSessionManager."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager
        self._schema_ready = False
        self._schema_lock = asyncio.Lock()

    async def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        async with self._schema_lock:
            if self._schema_ready:
                return
            async with self._db.session() as db:
                conn = await db.connection()
                await conn.run_sync(
                    Base.metadata.create_all,
                    tables=[PetRow.__table__],
                    checkfirst=True,
                )
                await db.commit()
            self._schema_ready = True
            logger.info("pets table ensured")

    async def list_pets(
        self, limit: int = 0, start_id: PetId | None = None,
    ) -> list[Pet]:
        await self._ensure_schema()
        query = select(PetRow).order_by(PetRow.id.asc())
        if start_id is not None:
            query = query.where(PetRow.id >= start_id)
        if limit > 0:
            query = query.limit(limit)
        async with self._db.session() as db:
            result = await db.execute(query)
            return [row.to_pet() for row in result.scalars().all()]

    async def create_pet(self, pet: Pet) -> None:
        await self._ensure_schema()
        async with self._db.session() as db:
            db.add(PetRow(id=pet.id, name=pet.name, tag=pet.tag))
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                raise PetAlreadyExistsError(pet.id) from None

    async def get_pet(self, pet_id: PetId) -> Pet:
        await self._ensure_schema()
        async with self._db.session() as db:
            row = await db.get(PetRow, pet_id)
            if row is None:
                raise PetNotFoundError(pet_id)
            return row.to_pet()

    async def update_pet(self, pet: Pet) -> None:
        await self._ensure_schema()
        async with self._db.session() as db:
            result = await db.execute(
                update(PetRow)
                .where(PetRow.id == pet.id)
                .values(name=pet.name, tag=pet.tag),
            )
            await db.commit()
        if result.rowcount == 0:
            raise PetNotFoundError(pet.id)

    async def delete_pet(self, pet_id: PetId) -> None:
        await self._ensure_schema()
        async with self._db.session() as db:
            result = await db.execute(
                delete(PetRow).where(PetRow.id == pet_id),
            )
            await db.commit()
        if result.rowcount == 0:
            raise PetNotFoundError(pet_id)

    async def health_check(self) -> bool:
        return await self._db.health_check()

    async def close(self) -> None:
        await self._db.dispose()
