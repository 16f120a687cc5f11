"""Petstore API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PetstoreError → structured JSON responses
    - Settings, store and HTTP client are built once here and handed to the
      services as constructor arguments; no service reads ambient globals
    - Google OAuth routes exist only when google_oauth.enabled
    - Shutdown closes the outbound HTTP client and the store's connection pool

Design Decisions:
    - Services built in create_app, not in lifespan: test transports that skip
      lifespan events still get a fully wired app
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from petstore.api.error_handlers import register_error_handlers
from petstore.api.middleware import register_request_middleware
from petstore.api.routes import google_auth, health, pets
from petstore.config import Settings, get_settings
from petstore.core.repository_protocols import PetStore
from petstore.infrastructure.google_client import (
    GoogleOAuthClient, build_oauth_session,
)
from petstore.infrastructure.observability import setup_logging
from petstore.infrastructure.store_factory import build_pet_store
from petstore.services.google_oauth import GoogleOAuthExchange
from petstore.services.pet_service import PetService

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    pet_store: PetStore | None = None,
    oauth_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build a fully wired application.

    ``pet_store`` and ``oauth_transport`` replace the configured backend and
    the real network transport; tests use them to inject doubles.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    store = pet_store if pet_store is not None else build_pet_store(settings)
    http_client: httpx.AsyncClient | None = None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        logger.info("Petstore API started")
        yield
        logger.info("Petstore API shutting down")
        if http_client is not None:
            await http_client.aclose()
        await store.close()

    app = FastAPI(title="Petstore API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.pet_store = store
    app.state.pet_service = PetService(store)

    register_request_middleware(app)
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(pets.router)

    oauth = settings.google_oauth
    if oauth.enabled:
        http_client = build_oauth_session(oauth, transport=oauth_transport)
        app.state.oauth_exchange = GoogleOAuthExchange(
            GoogleOAuthClient(http_client), oauth.state_cookie,
        )
        app.include_router(google_auth.router)
        logger.info("Google OAuth routes enabled")

    return app


app = create_app()
