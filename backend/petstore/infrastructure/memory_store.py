"""Volatile Pet Store — in-process storage guarded by a reader/writer lock.

Invariants:
    - Readers run concurrently with each other; a writer excludes everyone
    - _order holds every stored id exactly once, in insertion order, and is
      always consistent with _pets (both change under the same write lock)
    - list_pets sorts by id at read time: callers need id order, not insertion order
    - Records are immutable Pet values, so readers never see a partial write

Design Decisions:
    - Writer-preferring lock: a waiting writer blocks new readers, so a steady
      stream of list calls cannot starve creates
    - asyncio primitives: every request runs as a task on one event loop, the
      lock only has to order tasks, not OS threads
    - State is lost on restart (volatile by definition)
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from petstore.core.domain_types import PetId
from petstore.core.errors import PetAlreadyExistsError, PetNotFoundError
from petstore.core.pet import Pet

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Async many-readers / one-writer lock."""

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer_active and self._writers_waiting == 0,
            )
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer_active and self._readers == 0,
                )
            finally:
                self._writers_waiting -= 1
                # readers gated on waiting writers must re-check after a cancel
                self._cond.notify_all()
            self._writer_active = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer_active = False
                self._cond.notify_all()


class VolatilePetStore:
    """PetStore kept in memory for the lifetime of the process."""

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._pets: dict[PetId, Pet] = {}
        self._order: list[PetId] = []

    async def list_pets(
        self, limit: int = 0, start_id: PetId | None = None,
    ) -> list[Pet]:
        async with self._lock.read():
            pets = sorted(
                (self._pets[pet_id] for pet_id in self._order),
                key=lambda p: p.id,
            )
        if start_id is not None:
            pets = [p for p in pets if p.id >= start_id]
        if limit > 0:
            pets = pets[:limit]
        return pets

    async def create_pet(self, pet: Pet) -> None:
        async with self._lock.write():
            if pet.id in self._pets:
                raise PetAlreadyExistsError(pet.id)
            self._pets[pet.id] = pet
            self._order.append(pet.id)
        logger.debug("Pet stored in memory", extra={"pet_id": pet.id})

    async def get_pet(self, pet_id: PetId) -> Pet:
        async with self._lock.read():
            pet = self._pets.get(pet_id)
        if pet is None:
            raise PetNotFoundError(pet_id)
        return pet

    async def update_pet(self, pet: Pet) -> None:
        async with self._lock.write():
            if pet.id not in self._pets:
                raise PetNotFoundError(pet.id)
            self._pets[pet.id] = pet

    async def delete_pet(self, pet_id: PetId) -> None:
        async with self._lock.write():
            if pet_id not in self._pets:
                raise PetNotFoundError(pet_id)
            del self._pets[pet_id]
            self._order.remove(pet_id)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        return None
