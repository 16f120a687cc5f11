"""Request Context Middleware — request ids and one access-log line per request.

Invariants:
    - Every response carries X-Request-ID (incoming value reused when present)
    - Exactly one access log line per completed request, with status and duration
"""

import logging
import time
import uuid

from fastapi import FastAPI, Request

logger = logging.getLogger("petstore.access")

REQUEST_ID_HEADER = "X-Request-ID"


def register_request_middleware(app: FastAPI) -> None:

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response
