"""Predicate evaluation over a product collection."""
from __future__ import annotations

from typing import Iterable

from ..models import FilterCriteria, Product, to_number


def matches(product: Product, criteria: FilterCriteria) -> bool:
    """Return ``True`` when ``product`` satisfies every criterion."""

    search = criteria.normalized_search
    if search and search not in str(product.name or "").lower():
        return False

    price = to_number(product.price)
    if price < criteria.effective_min_price() or price > criteria.effective_max_price():
        return False

    if criteria.only_available and not product.availability:
        return False

    return True


def filter_products(products: Iterable[Product], criteria: FilterCriteria | None = None) -> list[Product]:
    """Return the products matching ``criteria`` in their original order."""

    criteria = criteria or FilterCriteria()
    return [product for product in products if matches(product, criteria)]
