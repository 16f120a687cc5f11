"""Server entry point — runs the app under uvicorn with graceful shutdown.

uvicorn owns signal handling: on SIGINT/SIGTERM it stops accepting
connections, waits up to ``server.shutdown_grace_seconds`` for in-flight
requests, then runs the lifespan shutdown (HTTP client and pool cleanup).

Run with::

    python -m petstore.server
"""

import logging

import uvicorn

from petstore.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


def parse_address(address: str) -> tuple[str, int]:
    """Split "host:port" / ":port" / "host" into (host, port)."""
    address = address.strip()
    if not address:
        return DEFAULT_HOST, DEFAULT_PORT
    if address.startswith("[") and "]" in address:
        host, _, rest = address[1:].partition("]")
        port_text = rest.lstrip(":")
    elif address.count(":") == 1:
        host, _, port_text = address.partition(":")
    else:
        host, port_text = address, ""
    host = host or DEFAULT_HOST
    if not port_text:
        return host, DEFAULT_PORT
    if not port_text.isdigit() or not 0 < int(port_text) < 65536:
        raise ValueError(f"invalid server address {address!r}")
    return host, int(port_text)


def run() -> None:
    """Serve petstore.main:app, which is built from the same cached settings."""
    settings = get_settings()
    host, port = parse_address(settings.server.address)
    logger.info(f"Listening on {host}:{port}")
    uvicorn.run(
        "petstore.main:app",
        host=host,
        port=port,
        timeout_graceful_shutdown=settings.server.shutdown_grace_seconds,
        log_config=None,
    )


if __name__ == "__main__":
    run()
