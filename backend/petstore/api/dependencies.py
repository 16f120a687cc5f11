"""FastAPI dependencies — hand route handlers the services built by create_app."""

from fastapi import Request

from petstore.core.repository_protocols import PetStore
from petstore.services.google_oauth import GoogleOAuthExchange
from petstore.services.pet_service import PetService


def get_pet_service(request: Request) -> PetService:
    return request.app.state.pet_service


def get_pet_store(request: Request) -> PetStore:
    return request.app.state.pet_store


def get_oauth_exchange(request: Request) -> GoogleOAuthExchange:
    return request.app.state.oauth_exchange
