"""Pet Schemas — Pydantic models for the /pets HTTP boundary.

Invariants:
    - PetCreate rejects wrong JSON types (strict): "7" is not an id
    - PetCreate.id fits a signed 64-bit integer
    - Missing id/name parse as 0/"" so the service can name the missing field
    - Responses omit tag when it is absent

Design Decisions:
    - Defaults instead of required fields: presence is a business rule checked in
      PetService, so both "missing" and "zero/empty" produce the same message
"""

from pydantic import BaseModel, ConfigDict, Field

from petstore.core.domain_types import INT64_MAX, INT64_MIN
from petstore.core.pet import Pet


class PetCreate(BaseModel):
    """Body of POST /pets."""
    model_config = ConfigDict(strict=True)

    id: int = Field(0, ge=INT64_MIN, le=INT64_MAX)
    name: str = ""
    tag: str | None = None


class PetResponse(BaseModel):
    id: int
    name: str
    tag: str | None = None

    @classmethod
    def from_pet(cls, pet: Pet) -> "PetResponse":
        return cls(id=pet.id, name=pet.name, tag=pet.tag)


class ErrorResponse(BaseModel):
    code: int
    message: str
