"""Composes filtering, sorting and pagination into one query cycle."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from ..models import FilterCriteria, Product, QueryOptions, QueryResult
from ..storage.repository import ProductSource
from .filtering import filter_products
from .pagination import paginate
from .sorting import SortDirection, SortKey, sort_products

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Failed to fetch products"


@dataclass(slots=True)
class ProductService:
    """High-level service answering product listing queries."""

    source: ProductSource

    def all_products(self) -> list[Product]:
        """Return the unprocessed collection, raising when it is unavailable."""

        return self.source.fetch_products()

    def process(self, options: QueryOptions | None = None) -> QueryResult:
        """Fetch, filter, sort and paginate the catalog for ``options``.

        Never raises: any failure is reported through a failure envelope with
        no items and zeroed pagination.
        """

        options = options or QueryOptions()
        criteria = options.filters or FilterCriteria()
        sort_key = SortKey.parse(options.sort_by)
        direction = SortDirection.parse(options.sort_order)

        try:
            products = self.source.fetch_products()
            filtered = filter_products(products, criteria)
            ordered = sort_products(filtered, sort_key, direction)
            page = paginate(ordered, options.page, options.items_per_page)
        except Exception as exc:
            logger.exception("Error processing products")
            return QueryResult.failure(str(exc) or DEFAULT_ERROR_MESSAGE, options.items_per_page)

        logger.debug(
            "Processed %s of %s products (page %s/%s, sort %s %s)",
            page.metadata.total_products,
            len(products),
            page.metadata.current_page,
            page.metadata.total_pages,
            sort_key.value,
            direction.value,
        )
        return QueryResult(
            success=True,
            items=page.items,
            pagination=page.metadata,
            filters_applied=criteria.is_constrained,
            criteria=criteria,
        )
