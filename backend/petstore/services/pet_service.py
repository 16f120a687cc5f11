"""Pet Service — validation, storage and pagination composed into request semantics.

Invariants:
    - Negative limits and out-of-range after cursors are rejected here;
      the store never sees them
    - Pets with id == 0 or empty name never reach the store
    - PetAlreadyExistsError / PetNotFoundError pass through unchanged (409 / 404)
    - Any other store failure becomes InternalError with a fixed message;
      the original exception is logged, never returned

Design Decisions:
    - Store injected through the constructor: tests hand in a VolatilePetStore
      or a fake, production gets whatever the factory built
    - Payload parsing lives at the HTTP boundary (PetCreate); this layer checks
      the semantic rules the schema cannot express
"""

import logging

from petstore.core.domain_types import INT64_MAX, INT64_MIN, PetId
from petstore.core.errors import (
    BadRequestError, InternalError, PetAlreadyExistsError, PetNotFoundError,
)
from petstore.core.pagination import (
    PetPage, fetch_size, normalize_limit, paginate,
)
from petstore.core.pet import Pet, parse_pet_id, validate_new_pet
from petstore.core.repository_protocols import PetStore
from petstore.schemas.pet import PetCreate

logger = logging.getLogger(__name__)

_PASSTHROUGH = (PetAlreadyExistsError, PetNotFoundError)


class PetService:
    """Use cases behind the /pets routes."""

    def __init__(self, store: PetStore):
        self.store = store

    async def list_pets(
        self, limit: int | None = None, after: int | None = None,
    ) -> PetPage:
        """One page of pets in ascending id order, plus a continuation hint."""
        if limit is not None and limit < 0:
            raise BadRequestError("limit must be non-negative", field="limit")
        if after is not None and not INT64_MIN <= after <= INT64_MAX:
            raise BadRequestError("after must be a 64-bit integer", field="after")
        effective = normalize_limit(limit)
        start_id = PetId(after) if after is not None else None
        try:
            pets = await self.store.list_pets(fetch_size(effective), start_id)
        except Exception as e:
            logger.error(f"Failed to list pets: {e}", exc_info=True)
            raise InternalError("failed to list pets") from e
        return paginate(pets, effective)

    async def create_pet(self, payload: PetCreate) -> Pet:
        pet = Pet(id=PetId(payload.id), name=payload.name, tag=payload.tag)
        validate_new_pet(pet)
        try:
            await self.store.create_pet(pet)
        except _PASSTHROUGH:
            raise
        except Exception as e:
            logger.error(
                f"Failed to create pet: {e}", exc_info=True,
                extra={"pet_id": pet.id},
            )
            raise InternalError("failed to create pet") from e
        logger.info("Pet created", extra={"pet_id": pet.id})
        return pet

    async def get_pet(self, id_text: str) -> Pet:
        pet_id = parse_pet_id(id_text)
        try:
            return await self.store.get_pet(pet_id)
        except _PASSTHROUGH:
            raise
        except Exception as e:
            logger.error(
                f"Failed to fetch pet: {e}", exc_info=True,
                extra={"pet_id": pet_id},
            )
            raise InternalError("failed to fetch pet") from e
