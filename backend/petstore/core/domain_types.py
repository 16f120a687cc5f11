"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PetId is a signed 64-bit integer; 0 is reserved as "missing"
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: compare equal to their config/env string values
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PetId = NewType("PetId", int)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# ─── Enums ───────────────────────────────────────────────────────

class StorageBackend(str, Enum):
    """Selectable pet storage implementations."""
    MEMORY = "memory"
    DATABASE = "database"


class OAuthFlowStage(str, Enum):
    """Stages of one authorization-code flow instance (never persisted)."""
    START = "start"
    AWAITING_CALLBACK = "awaiting_callback"
    EXCHANGED = "exchanged"
    COMPLETE = "complete"
    REJECTED = "rejected"
