"""Google OAuth Client — authorization URL, code exchange and user-info via authlib.

Invariants:
    - Transport errors, timeouts, OAuth error replies, non-2xx replies and
      undecodable bodies are all mapped to UpstreamError (core/errors.py);
      nothing is retried
    - Client secret and tokens never appear in log lines
    - One AsyncOAuth2Client is shared by every request; the token it stores
      after fetch_token is never used for auth (user-info sends the token of
      the current flow explicitly, with withhold_token)

Design Decisions:
    - authlib's httpx integration: it is an httpx.AsyncClient, so tests swap
      the transport and the app lifespan closes it like any httpx client
    - client_secret_post: credentials travel in the token request body, the
      style Google's token endpoint documents
    - State is generated and checked by the caller (core/oauth_state.py);
      authlib only renders it into the consent URL
"""

import logging

import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.httpx_client import AsyncOAuth2Client

from petstore.config import GoogleOAuthSettings
from petstore.core.errors import UpstreamError

logger = logging.getLogger(__name__)

AUTH_ENDPOINT = "https://accounts.google.com/o/oauth2/auth"
TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
USERINFO_ENDPOINT = "https://www.googleapis.com/oauth2/v3/userinfo"


def build_oauth_session(
    settings: GoogleOAuthSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncOAuth2Client:
    """OAuth2 session for the configured Google client."""
    return AsyncOAuth2Client(
        client_id=settings.client_id,
        client_secret=settings.client_secret,
        scope=settings.scopes,
        redirect_uri=settings.redirect_url,
        token_endpoint_auth_method="client_secret_post",
        timeout=settings.http_timeout_seconds,
        transport=transport,
    )


class GoogleOAuthClient:
    """Talks to Google's OAuth 2.0 endpoints for one configured client."""

    def __init__(
        self,
        session: AsyncOAuth2Client,
        auth_endpoint: str = AUTH_ENDPOINT,
        token_endpoint: str = TOKEN_ENDPOINT,
        userinfo_endpoint: str = USERINFO_ENDPOINT,
    ):
        self.session = session
        self.auth_endpoint = auth_endpoint
        self.token_endpoint = token_endpoint
        self.userinfo_endpoint = userinfo_endpoint

    def authorization_url(self, state: str) -> str:
        """Consent-screen URL requesting offline access for the configured scopes."""
        url, _ = self.session.create_authorization_url(
            self.auth_endpoint, state=state, access_type="offline",
        )
        return url

    async def exchange_code(self, code: str) -> str:
        """Trade an authorization code for an access token."""
        try:
            token = await self.session.fetch_token(
                self.token_endpoint,
                grant_type="authorization_code",
                code=code,
            )
        except (httpx.HTTPError, AuthlibBaseError, ValueError) as e:
            logger.error(
                f"Token exchange failed: {type(e).__name__}",
                extra={"event": "google_oauth_exchange_failed"},
            )
            raise UpstreamError(
                "failed to exchange authorization code",
            ) from e
        access_token = token.get("access_token")
        if not access_token:
            logger.error(
                "Token response carried no access_token",
                extra={"event": "google_oauth_exchange_failed"},
            )
            raise UpstreamError("failed to exchange authorization code")
        return access_token

    async def fetch_user_info(self, access_token: str) -> dict:
        """Fetch the signed-in user's profile with a bearer token."""
        try:
            response = await self.session.request(
                "GET",
                self.userinfo_endpoint,
                headers={"Authorization": f"Bearer {access_token}"},
                withhold_token=True,
            )
        except httpx.HTTPError as e:
            logger.error(
                f"User-info request failed: {type(e).__name__}",
                extra={"event": "google_oauth_userinfo_request_failed"},
            )
            raise UpstreamError("failed to retrieve user information") from e

        if response.status_code != httpx.codes.OK:
            logger.error(
                f"User-info endpoint returned {response.status_code}",
                extra={
                    "event": "google_oauth_userinfo_http_error",
                    "status_code": response.status_code,
                },
            )
            raise UpstreamError(
                "unexpected response from google userinfo endpoint",
            )

        try:
            user_info = response.json()
        except ValueError as e:
            logger.error(
                "User-info body is not JSON",
                extra={"event": "google_oauth_userinfo_decode_failed"},
            )
            raise UpstreamError("failed to decode user information") from e
        if not isinstance(user_info, dict):
            raise UpstreamError("failed to decode user information")
        return user_info
