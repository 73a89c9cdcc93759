"""Windowing of ordered product collections into pages."""
from __future__ import annotations

from typing import Optional, Sequence

from ..models import Page, PaginationMetadata, Product


def total_pages_for(count: int, items_per_page: int) -> int:
    return -(-count // items_per_page) if count > 0 else 0


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp ``page`` into ``[1, max(total_pages, 1)]``."""

    return max(1, min(page, max(total_pages, 1)))


def paginate(products: Sequence[Product], page: int, items_per_page: int) -> Page:
    """Return the window of ``products`` for ``page``.

    Out-of-range page numbers are corrected rather than rejected.
    """

    if isinstance(items_per_page, bool) or not isinstance(items_per_page, int) or items_per_page < 1:
        raise ValueError(f"items_per_page must be a positive integer, got {items_per_page!r}")

    total_products = len(products)
    total_pages = total_pages_for(total_products, items_per_page)
    current_page = clamp_page(page, total_pages)

    start = (current_page - 1) * items_per_page
    items = list(products[start : start + items_per_page])

    metadata = PaginationMetadata(
        current_page=current_page,
        total_pages=total_pages,
        total_products=total_products,
        items_per_page=items_per_page,
        has_next_page=current_page < total_pages,
        has_previous_page=current_page > 1,
    )
    return Page(items=items, metadata=metadata)


def page_window(current_page: int, total_pages: int, max_visible: int = 5) -> list[Optional[int]]:
    """Page numbers to offer for direct navigation.

    Up to ``max_visible`` pages around ``current_page`` are listed. The first
    and last pages are always included; ``None`` marks a gap between them and
    the visible run. Nothing is listed when there is at most one page.
    """

    if total_pages <= 1:
        return []

    start = max(1, current_page - max_visible // 2)
    end = min(total_pages, start + max_visible - 1)
    if end - start < max_visible - 1:
        start = max(1, end - max_visible + 1)

    pages: list[Optional[int]] = []
    if start > 1:
        pages.append(1)
        if start > 2:
            pages.append(None)

    pages.extend(range(start, end + 1))

    if end < total_pages:
        if end < total_pages - 1:
            pages.append(None)
        pages.append(total_pages)

    return pages


def display_range(metadata: PaginationMetadata, shown: int) -> tuple[int, int, int]:
    """Return the ``(first, last, total)`` positions of the shown products."""

    first = (metadata.current_page - 1) * metadata.items_per_page + 1 if shown > 0 else 0
    last = min(metadata.current_page * metadata.items_per_page, metadata.total_products)
    return first, last, metadata.total_products
