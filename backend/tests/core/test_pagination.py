"""Pagination — tests for limit clamping, over-fetch sizing and hint derivation.

Tests cover:
    - normalize_limit: None/0 unbounded, clamp to MAX_PAGE_LIMIT
    - fetch_size asks for one extra row only when a limit is in effect
    - paginate emits a hint naming the first excluded id, or none on the last page
"""

from petstore.core.pagination import (
    MAX_PAGE_LIMIT,
    fetch_size,
    format_next_hint,
    normalize_limit,
    paginate,
)
from petstore.core.pet import Pet


def _pets(*ids):
    return [Pet(id=i, name=f"pet-{i}") for i in ids]


# ─── normalize_limit ─────────────────────────────────────────────

def test_absent_limit_means_unbounded():
    assert normalize_limit(None) == 0


def test_zero_limit_means_unbounded():
    assert normalize_limit(0) == 0


def test_limit_within_range_is_kept():
    assert normalize_limit(2) == 2
    assert normalize_limit(MAX_PAGE_LIMIT) == MAX_PAGE_LIMIT


def test_limit_above_max_clamps_down():
    assert normalize_limit(1000) == MAX_PAGE_LIMIT
    assert normalize_limit(MAX_PAGE_LIMIT + 1) == MAX_PAGE_LIMIT


# ─── fetch_size ──────────────────────────────────────────────────

def test_fetch_size_reads_one_extra_row():
    assert fetch_size(2) == 3
    assert fetch_size(MAX_PAGE_LIMIT) == MAX_PAGE_LIMIT + 1


def test_fetch_size_unbounded_stays_unbounded():
    assert fetch_size(0) == 0


# ─── paginate ────────────────────────────────────────────────────

def test_paginate_truncates_and_hints_next_id():
    page = paginate(_pets(1, 3, 5), 2)
    assert [p.id for p in page.pets] == [1, 3]
    assert page.next_hint == "limit=2&after=5"


def test_paginate_exact_fit_has_no_hint():
    page = paginate(_pets(1, 3), 2)
    assert [p.id for p in page.pets] == [1, 3]
    assert page.next_hint is None


def test_paginate_short_page_has_no_hint():
    page = paginate(_pets(7), 2)
    assert [p.id for p in page.pets] == [7]
    assert page.next_hint is None


def test_paginate_unbounded_returns_everything():
    page = paginate(_pets(1, 2, 3, 4), 0)
    assert len(page.pets) == 4
    assert page.next_hint is None


def test_paginate_empty():
    page = paginate([], 5)
    assert page.pets == []
    assert page.next_hint is None


def test_hint_format():
    assert format_next_hint(10, -4) == "limit=10&after=-4"
