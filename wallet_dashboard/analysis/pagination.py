"""Fixed-size page windows over an in-memory collection."""

import math
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def page_count(total: int, items_per_page: int) -> int:
    """Number of pages needed for ``total`` items (0 when there are none)."""
    if total <= 0:
        return 0
    return math.ceil(total / items_per_page)


def page_bounds(page: int, items_per_page: int) -> tuple:
    """Half-open index range ``[start, end)`` of a 1-based page."""
    end = page * items_per_page
    return end - items_per_page, end


def paginate(items: Sequence[T], items_per_page: int, page: int) -> List[T]:
    """Return the rows of ``page``; empty if the page lies outside the collection."""
    if page < 1:
        return []
    start, end = page_bounds(page, items_per_page)
    return list(items[start:end])


def previous_page(page: int) -> int:
    """Page before ``page``, staying on page 1 at the start."""
    return page - 1 if page > 1 else page


def next_page(page: int, total_pages: int) -> int:
    """Page after ``page``, staying on the last page at the end."""
    return page + 1 if page < total_pages else page


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp a requested page into ``[1, total_pages]`` (1 when empty)."""
    if total_pages <= 0:
        return 1
    return max(1, min(page, total_pages))


def page_numbers(total: int, items_per_page: int) -> List[int]:
    """All page numbers for the pagination strip, 1..N."""
    return list(range(1, page_count(total, items_per_page) + 1))
