"""Pagination — bounds list requests and derives the continuation hint.

Invariants:
    - Absent limit or 0 means "all"; explicit limits clamp into [0, MAX_PAGE_LIMIT]
    - Negative limits never reach here (Pet Service rejects them first)
    - With a limit L in effect the backend is asked for L + 1 rows; row L + 1,
      when present, names the first id of the next page
    - Hint format: "limit=<L>&after=<id of row L + 1>"

Design Decisions:
    - Fetch L + 1 instead of issuing a COUNT: one extra row, no extra round trip
    - The after cursor is inclusive: the hint names the first excluded record,
      so resuming from it loses nothing
"""

from dataclasses import dataclass, field

from petstore.core.pet import Pet

MAX_PAGE_LIMIT = 100


@dataclass(frozen=True)
class PetPage:
    pets: list[Pet] = field(default_factory=list)
    next_hint: str | None = None


def normalize_limit(limit: int | None) -> int:
    """Clamp a caller limit into [0, MAX_PAGE_LIMIT]; None means unbounded (0)."""
    if limit is None or limit <= 0:
        return 0
    return min(limit, MAX_PAGE_LIMIT)


def fetch_size(limit: int) -> int:
    """Rows to request from the backend for an effective limit."""
    return limit + 1 if limit > 0 else 0


def format_next_hint(limit: int, next_id: int) -> str:
    return f"limit={limit}&after={next_id}"


def paginate(pets: list[Pet], limit: int) -> PetPage:
    """Cut a fetch_size() result down to one page plus an optional hint."""
    if limit <= 0 or len(pets) <= limit:
        return PetPage(pets=list(pets))
    return PetPage(
        pets=list(pets[:limit]),
        next_hint=format_next_hint(limit, pets[limit].id),
    )
