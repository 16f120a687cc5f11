"""Boundary Protocols — the storage contract between core/services and backends.

Invariants:
    - list_pets returns pets in ascending id order, whatever the backend
    - limit == 0 means unbounded; start_id is an inclusive lower bound
    - create_pet raises PetAlreadyExistsError; get/update/delete raise
      PetNotFoundError — backends translate driver errors before returning
    - A read never observes a partially written record

Design Decisions:
    - Protocol over ABC: structural subtyping, the two backends share no base class
    - Async methods: the relational backend does IO; the volatile one awaits
      its lock, so both fit one signature
"""

from typing import Protocol

from petstore.core.domain_types import PetId
from petstore.core.pet import Pet


class PetStore(Protocol):
    """Contract for pet persistence — implemented by infrastructure."""
    async def list_pets(
        self, limit: int = 0, start_id: PetId | None = None,
    ) -> list[Pet]: ...
    async def create_pet(self, pet: Pet) -> None: ...
    async def get_pet(self, pet_id: PetId) -> Pet: ...
    async def update_pet(self, pet: Pet) -> None: ...
    async def delete_pet(self, pet_id: PetId) -> None: ...
    async def health_check(self) -> bool: ...
    async def close(self) -> None: ...
