"""Error Hierarchy — typed, categorized exceptions for all Petstore failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status
    - to_response() produces the wire envelope {"code": <http status>, "message": str}
    - Storage backends translate driver errors into PetAlreadyExistsError /
      PetNotFoundError / StorageError before anything reaches the service layer
    - 5xx messages are generic: no driver text, no stack detail

Design Decisions:
    - Single hierarchy with PetstoreError base: FastAPI global handler catches all
      (uniform error shape)
    - PetAlreadyExistsError / PetNotFoundError double as the storage vocabulary
      and the HTTP outcome: the mapping is 1:1, a second layer would only rename
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    REJECTED = "rejected"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


class PetstoreError(Exception):
    """Base exception for all Petstore errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the standard error body."""
        return {"code": self.http_status, "message": self.message}


# ─── Caller Errors (400-level) ──────────────────────────────────

class BadRequestError(PetstoreError):
    """Malformed or invalid caller input."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION, 400,
        )
        self.field = field


class OAuthStateError(PetstoreError):
    """CSRF state missing, forged, or already consumed."""
    def __init__(self, message: str):
        super().__init__(
            message, "OAUTH_STATE_REJECTED", ErrorCategory.REJECTED, 400,
        )


class PetNotFoundError(PetstoreError):
    """No pet with the requested id."""
    def __init__(self, pet_id: int):
        super().__init__(
            "pet not found", "PET_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, 404,
        )
        self.pet_id = pet_id


class PetAlreadyExistsError(PetstoreError):
    """A pet with this id is already stored."""
    def __init__(self, pet_id: int):
        super().__init__(
            "pet already exists", "PET_ALREADY_EXISTS",
            ErrorCategory.CONFLICT, 409,
        )
        self.pet_id = pet_id


# ─── Server Errors (500-level) ──────────────────────────────────

class InternalError(PetstoreError):
    """Unexpected failure; message is safe to show to callers."""
    def __init__(self, message: str = "internal server error"):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL, 500,
        )


class StorageError(PetstoreError):
    """Database operation failed."""
    def __init__(self, operation: str):
        super().__init__(
            f"storage {operation} failed", "STORAGE_ERROR",
            ErrorCategory.DATABASE, 500,
        )
        self.operation = operation


class UpstreamError(PetstoreError):
    """Identity provider unreachable or returned something unusable."""
    def __init__(self, message: str):
        super().__init__(
            message, "UPSTREAM_ERROR", ErrorCategory.EXTERNAL_API, 502,
        )
