"""Pets Routes — list, create and fetch pets.

Invariants:
    - Routes never contain business logic (delegate to PetService)
    - The continuation hint travels in the x-next response header, never in the body
    - Absent tags are omitted from JSON, not rendered as null or ""

Design Decisions:
    - petId taken as a raw string: PetService owns the int64 parsing rule,
      so "abc" and "99999999999999999999" both produce its 400 message
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from petstore.api.dependencies import get_pet_service
from petstore.schemas.pet import ErrorResponse, PetCreate, PetResponse
from petstore.services.pet_service import PetService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/pets", tags=["pets"])

NEXT_PAGE_HEADER = "x-next"


@router.get(
    "",
    response_model=list[PetResponse],
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
)
async def list_pets(
    response: Response,
    limit: int | None = Query(None),
    after: int | None = Query(None),
    service: PetService = Depends(get_pet_service),
):
    """List pets in ascending id order, at most 100 per page."""
    page = await service.list_pets(limit=limit, after=after)
    if page.next_hint:
        response.headers[NEXT_PAGE_HEADER] = page.next_hint
    return [PetResponse.from_pet(p) for p in page.pets]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_pet(
    body: PetCreate, service: PetService = Depends(get_pet_service),
):
    """Create a pet. Empty 201 on success."""
    await service.create_pet(body)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get(
    "/{pet_id}",
    response_model=PetResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def get_pet(
    pet_id: str, service: PetService = Depends(get_pet_service),
):
    """Fetch a single pet by id."""
    pet = await service.get_pet(pet_id)
    return PetResponse.from_pet(pet)
