"""Google OAuth Exchange — authorization-code flow with a single-use CSRF state cookie.

Invariants:
    - login() issues a fresh 256-bit state per attempt; nothing is stored server-side
    - complete() never contacts the token endpoint unless the state query
      parameter and the state cookie match (constant-time content comparison)
    - Any check failing before the exchange ends the flow in REJECTED (400);
      provider/network failures after it are UpstreamError (502)
    - The state cookie is cleared on every callback response (routes call
      clear_state_cookie), so a consumed token cannot be replayed

Design Decisions:
    - Cookie writing stays here, not in the route: name/path/domain/secure must
      be identical when setting and clearing, or browsers keep the old cookie
    - Flow stage is logged, not stored: the flow spans two requests and the
      browser cookie is the only state
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from starlette.responses import Response

from petstore.config import StateCookieSettings
from petstore.core.domain_types import OAuthFlowStage
from petstore.core.errors import BadRequestError, OAuthStateError
from petstore.core.oauth_state import OAuthState, generate_state, states_match
from petstore.infrastructure.google_client import GoogleOAuthClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginRedirect:
    url: str
    state: OAuthState


class GoogleOAuthExchange:
    """Runs the login and callback legs of the Google sign-in flow."""

    def __init__(self, client: GoogleOAuthClient, cookie: StateCookieSettings):
        self.client = client
        self.cookie = cookie

    # ─── Login leg ───────────────────────────────────────────────

    def login(self) -> LoginRedirect:
        state = generate_state()
        logger.info(
            "OAuth login started",
            extra={"oauth_stage": OAuthFlowStage.AWAITING_CALLBACK.value},
        )
        return LoginRedirect(
            url=self.client.authorization_url(state.token), state=state,
        )

    def set_state_cookie(self, response: Response, state: OAuthState) -> None:
        response.set_cookie(
            key=self.cookie.name,
            value=state.token,
            max_age=self.cookie.max_age,
            expires=self.cookie.max_age,
            path=self.cookie.path,
            domain=self.cookie.domain or None,
            secure=self.cookie.secure,
            httponly=True,
            samesite="lax",
        )

    def clear_state_cookie(self, response: Response) -> None:
        response.delete_cookie(
            key=self.cookie.name,
            path=self.cookie.path,
            domain=self.cookie.domain or None,
            secure=self.cookie.secure,
            httponly=True,
            samesite="lax",
        )

    # ─── Callback leg ────────────────────────────────────────────

    def verify_callback(
        self, query: Mapping[str, str], cookie_value: str | None,
    ) -> str:
        """Check provider error, state and code; return the authorization code."""
        if query.get("error"):
            description = query.get("error_description") or "authorization failed"
            self._reject("provider_error")
            raise BadRequestError(f"google oauth error: {description}")

        state = query.get("state")
        if not state:
            self._reject("missing_state")
            raise OAuthStateError("missing state parameter")
        if not cookie_value:
            self._reject("missing_cookie")
            raise OAuthStateError("oauth state cookie not found")
        if not states_match(cookie_value, state):
            self._reject("state_mismatch")
            raise OAuthStateError("invalid oauth state")

        code = query.get("code")
        if not code:
            self._reject("missing_code")
            raise BadRequestError("missing authorization code")
        return code

    async def complete(
        self, query: Mapping[str, str], cookie_value: str | None,
    ) -> dict:
        """Validate the callback, exchange the code and return raw user-info."""
        code = self.verify_callback(query, cookie_value)
        access_token = await self.client.exchange_code(code)
        logger.info(
            "OAuth code exchanged",
            extra={"oauth_stage": OAuthFlowStage.EXCHANGED.value},
        )
        user_info = await self.client.fetch_user_info(access_token)
        logger.info(
            "OAuth flow complete",
            extra={"oauth_stage": OAuthFlowStage.COMPLETE.value},
        )
        return user_info

    def _reject(self, reason: str) -> None:
        logger.warning(
            f"OAuth callback rejected: {reason}",
            extra={"oauth_stage": OAuthFlowStage.REJECTED.value},
        )
