"""Fake Google OAuth provider — httpx MockTransport with a request log.

Usage:
    provider = FakeGoogle()
    session = build_oauth_session(settings, provider.transport())
    ...
    assert provider.token_requests == []
"""

import json

import httpx

from petstore.config import GoogleOAuthSettings, StateCookieSettings
from petstore.infrastructure.google_client import (
    TOKEN_ENDPOINT, USERINFO_ENDPOINT,
)

USER_INFO = {
    "sub": "1234567890",
    "email": "ada@example.com",
    "email_verified": True,
    "name": "Ada Lovelace",
}


def oauth_settings(**cookie) -> GoogleOAuthSettings:
    return GoogleOAuthSettings(
        enabled=True,
        client_id="client-123",
        client_secret="s3cret",
        redirect_url="http://testserver/auth/google/callback",
        state_cookie=StateCookieSettings(**cookie),
    )


class FakeGoogle:
    """Scriptable token + user-info endpoints."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.token_status = 200
        self.token_body: object = {"access_token": "ya29.token", "token_type": "Bearer"}
        self.userinfo_status = 200
        self.userinfo_body: object = USER_INFO
        self.raise_on_token: Exception | None = None

    @property
    def token_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) == TOKEN_ENDPOINT]

    @property
    def userinfo_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) == USERINFO_ENDPOINT]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url == TOKEN_ENDPOINT:
            if self.raise_on_token:
                raise self.raise_on_token
            return _response(self.token_status, self.token_body)
        if url == USERINFO_ENDPOINT:
            return _response(self.userinfo_status, self.userinfo_body)
        return httpx.Response(404)


def _response(status: int, body: object) -> httpx.Response:
    if isinstance(body, (bytes, str)):
        return httpx.Response(status, content=body)
    return httpx.Response(
        status, content=json.dumps(body),
        headers={"content-type": "application/json"},
    )
