"""Error Handlers — global exception handlers for the Petstore API.

Invariants:
    - PetstoreError → its http_status with {"code", "message"}
    - RequestValidationError → 400 naming the first offending field
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (PetstoreError), validation (Pydantic), catch-all (Exception)
    - Validation errors are 400, not FastAPI's default 422: malformed input is a
      plain bad request for this API
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from petstore.core.errors import PetstoreError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_petstore_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_petstore_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(PetstoreError)
    async def petstore_error_handler(request: Request, exc: PetstoreError):
        """Handle all Petstore domain/infrastructure errors."""
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"PetstoreError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "code": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "message": "internal server error",
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Describe the first failing location, e.g. "invalid body.id: ..."."""
    errors = exc.errors()
    if not errors:
        return {"code": status.HTTP_400_BAD_REQUEST, "message": "invalid request"}
    first = errors[0]
    if first.get("type") == "json_invalid":
        message = "invalid JSON body"
    else:
        location = ".".join(str(loc) for loc in first.get("loc", ()))
        message = f"invalid {location}: {first.get('msg', 'invalid value')}"
    return {"code": status.HTTP_400_BAD_REQUEST, "message": message}
