"""Google Auth Routes — login redirect and OAuth callback.

Invariants:
    - Mounted only when google_oauth.enabled (see main.create_app)
    - login sets the state cookie and answers 302
    - callback clears the state cookie on every outcome, success or error

Design Decisions:
    - callback builds its own error response instead of deferring to the global
      handler: the handler's fresh response would drop the cookie-clearing header
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from petstore.api.dependencies import get_oauth_exchange
from petstore.core.errors import PetstoreError
from petstore.schemas.pet import ErrorResponse
from petstore.services.google_oauth import GoogleOAuthExchange

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth/google", tags=["auth"])


@router.get("/login", status_code=status.HTTP_302_FOUND)
async def login(exchange: GoogleOAuthExchange = Depends(get_oauth_exchange)):
    """Start the authorization-code flow."""
    redirect = exchange.login()
    response = RedirectResponse(
        redirect.url, status_code=status.HTTP_302_FOUND,
    )
    exchange.set_state_cookie(response, redirect.state)
    return response


@router.get(
    "/callback",
    responses={
        400: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def callback(
    request: Request,
    exchange: GoogleOAuthExchange = Depends(get_oauth_exchange),
):
    """Finish the flow and return the provider's user-info object."""
    cookie_value = request.cookies.get(exchange.cookie.name)
    try:
        user_info = await exchange.complete(request.query_params, cookie_value)
        response = JSONResponse(content=user_info)
    except PetstoreError as exc:
        logger.warning(
            f"OAuth callback failed: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        response = JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )
    exchange.clear_state_cookie(response)
    return response
