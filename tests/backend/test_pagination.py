from __future__ import annotations

import pytest

from product_catalog.models import PaginationMetadata
from product_catalog.services.pagination import display_range, page_window, paginate


def test_pages_cover_sequence_exactly_once(catalog) -> None:
    first = paginate(catalog, 1, 12)

    collected = []
    for page_number in range(1, first.metadata.total_pages + 1):
        collected.extend(paginate(catalog, page_number, 12).items)

    assert collected == catalog


def test_last_page_holds_remainder(catalog) -> None:
    page = paginate(catalog, 13, 12)

    assert page.metadata.total_pages == 13
    assert len(page.items) == 6
    assert page.metadata.has_next_page is False
    assert page.metadata.has_previous_page is True


@pytest.mark.parametrize("requested", [0, -3])
def test_low_page_is_clamped_to_first(catalog, requested) -> None:
    page = paginate(catalog, requested, 10)

    assert page.metadata.current_page == 1
    assert page.items == catalog[:10]


def test_high_page_is_clamped_to_last(catalog) -> None:
    page = paginate(catalog, 9999, 10)

    assert page.metadata.current_page == page.metadata.total_pages == 15


def test_empty_sequence_yields_page_one_of_zero() -> None:
    page = paginate([], 9999, 10)

    assert page.items == []
    assert page.metadata == PaginationMetadata(
        current_page=1,
        total_pages=0,
        total_products=0,
        items_per_page=10,
        has_next_page=False,
        has_previous_page=False,
    )


@pytest.mark.parametrize("items_per_page", [0, -1, True])
def test_non_positive_page_size_is_rejected(catalog, items_per_page) -> None:
    with pytest.raises(ValueError):
        paginate(catalog, 1, items_per_page)


def test_page_window_near_start() -> None:
    assert page_window(1, 13) == [1, 2, 3, 4, 5, None, 13]


def test_page_window_in_middle() -> None:
    assert page_window(7, 13) == [1, None, 5, 6, 7, 8, 9, None, 13]


def test_page_window_near_end() -> None:
    assert page_window(13, 13) == [1, None, 9, 10, 11, 12, 13]


def test_page_window_hidden_for_single_page() -> None:
    assert page_window(1, 1) == []
    assert page_window(1, 0) == []


def test_display_range() -> None:
    metadata = PaginationMetadata(13, 13, 150, 12, False, True)

    assert display_range(metadata, 6) == (145, 150, 150)
    assert display_range(PaginationMetadata.empty(12), 0) == (0, 0, 0)
