"""Pet Entity — the stored record and its creation invariants.

Invariants:
    - A pet with id == 0 or an empty name is never persisted
    - tag is None when absent, never "" (absent round-trips as absent)
    - Pet is immutable; updates replace the whole record

Design Decisions:
    - Frozen dataclass over ORM/Pydantic model: backends exchange plain values,
      so the Volatile Store can hand out records without defensive copies
"""

import re
from dataclasses import dataclass

from petstore.core.domain_types import INT64_MAX, INT64_MIN, PetId
from petstore.core.errors import BadRequestError

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Pet:
    id: PetId
    name: str
    tag: str | None = None


def validate_new_pet(pet: Pet) -> None:
    """Raise BadRequestError naming the first missing required field."""
    if pet.id == 0:
        raise BadRequestError("id is required", field="id")
    if pet.name == "":
        raise BadRequestError("name is required", field="name")


def parse_pet_id(text: str) -> PetId:
    """Parse a decimal int64 path segment, rejecting anything else."""
    if not _INTEGER_PATTERN.fullmatch(text):
        raise BadRequestError("petId must be an integer", field="petId")
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise BadRequestError("petId must be an integer", field="petId")
    return PetId(value)
