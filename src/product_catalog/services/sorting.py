"""Ordering of product collections by a supported sort key."""
from __future__ import annotations

import locale
from collections.abc import Callable
from enum import Enum
from typing import Any, Iterable

from ..models import Product, to_number


class SortKey(str, Enum):
    PRICE = "price"
    NAME = "name"
    RATING = "rating"
    DISCOUNT = "discount"

    @classmethod
    def parse(cls, value: Any) -> SortKey:
        """Resolve ``value`` to a sort key, falling back to ``PRICE``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.PRICE


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Any) -> SortDirection:
        """Anything other than ``asc`` sorts descending."""

        if isinstance(value, cls):
            return value
        return cls.ASC if str(value or "").strip().lower() == cls.ASC.value else cls.DESC


def _name_key(product: Product) -> str:
    return locale.strxfrm(str(product.name or "").casefold())


SORT_KEYS: dict[SortKey, Callable[[Product], Any]] = {
    SortKey.PRICE: lambda product: to_number(product.price),
    SortKey.NAME: _name_key,
    SortKey.RATING: lambda product: to_number(product.rating),
    SortKey.DISCOUNT: lambda product: to_number(product.discount),
}


def sort_products(
    products: Iterable[Product],
    key: SortKey | str = SortKey.PRICE,
    direction: SortDirection | str = SortDirection.DESC,
) -> list[Product]:
    """Return a new list of ``products`` ordered by ``key``.

    The sort is stable in both directions: products with equal keys keep
    their relative order from the input.
    """

    sort_key = SortKey.parse(key)
    descending = SortDirection.parse(direction) is SortDirection.DESC
    return sorted(products, key=SORT_KEYS[sort_key], reverse=descending)
