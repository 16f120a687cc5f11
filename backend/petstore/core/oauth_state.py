"""OAuth CSRF State — single-use random token bound to one login attempt.

Invariants:
    - Tokens carry 256 bits from the OS CSPRNG, URL-safe base64 without padding
    - states_match() compares content in constant time; only the length check
      may short-circuit
    - Empty values never match

Design Decisions:
    - Opaque token, not a signed structure: the browser cookie is the only
      server-issued copy, so there is nothing to sign against
"""

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone

STATE_TOKEN_BYTES = 32


@dataclass(frozen=True)
class OAuthState:
    token: str
    issued_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


def generate_state() -> OAuthState:
    return OAuthState(token=secrets.token_urlsafe(STATE_TOKEN_BYTES))


def states_match(cookie_value: str | None, query_value: str | None) -> bool:
    """Timing-safe comparison of the cookie state and the callback state."""
    if not cookie_value or not query_value:
        return False
    if len(cookie_value) != len(query_value):
        return False
    return secrets.compare_digest(
        cookie_value.encode("utf-8"), query_value.encode("utf-8"),
    )
