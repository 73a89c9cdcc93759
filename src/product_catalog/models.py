"""Domain models used throughout the product catalog application."""
from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

TRUTHY_VALUES = {"1", "true", "yes", "on"}


def to_number(value: Any) -> float:
    """Coerce ``value`` to a float, treating anything unparsable as ``0``."""

    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def parse_bound(value: Any, default: float) -> float:
    """Return ``value`` as a price bound or ``default`` when it is not numeric."""

    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def parse_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY_VALUES


@dataclass(frozen=True, slots=True)
class Product:
    """A single catalog item. Instances are never mutated once created."""

    id: int
    name: str
    price: float
    original_price: float
    discount: int = 0
    category: str = ""
    brand: str = ""
    rating: float = 0.0
    reviews: int = 0
    availability: bool = True
    in_stock: int = 0
    description: str = ""
    image: Optional[str] = None
    tags: tuple[str, ...] = ()

    @property
    def has_discount(self) -> bool:
        return to_number(self.discount) > 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Product:
        """Build a product from an API payload.

        Both the camelCase keys served by the JSON route and snake_case keys
        are accepted. Numeric fields that cannot be parsed become ``0``. A
        missing or invalid ``id`` raises ``ValueError``.
        """

        raw_id = data.get("id", data.get("_id"))
        product_id = parse_int(raw_id, 0)
        if product_id <= 0:
            raise ValueError(f"Invalid product id: {raw_id!r}")

        price = to_number(data.get("price"))
        original = data.get("originalPrice", data.get("original_price"))
        original_price = to_number(original) if original is not None else price
        tags = data.get("tags") or ()
        if isinstance(tags, str):
            tags = (tags,)
        elif not isinstance(tags, (list, tuple)):
            tags = ()

        return cls(
            id=product_id,
            name=str(data.get("name") or ""),
            price=price,
            original_price=max(original_price, price),
            discount=parse_int(data.get("discount"), 0),
            category=str(data.get("category") or ""),
            brand=str(data.get("brand") or ""),
            rating=to_number(data.get("rating")),
            reviews=parse_int(data.get("reviews"), 0),
            availability=parse_flag(data.get("availability", True)),
            in_stock=parse_int(data.get("inStock", data.get("in_stock")), 0),
            description=str(data.get("description") or ""),
            image=data.get("image") or None,
            tags=tuple(str(tag) for tag in tags),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "originalPrice": self.original_price,
            "discount": self.discount,
            "category": self.category,
            "brand": self.brand,
            "rating": self.rating,
            "reviews": self.reviews,
            "availability": self.availability,
            "inStock": self.in_stock,
            "description": self.description,
            "image": self.image,
            "tags": list(self.tags),
        }


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """Constraints narrowing the product collection for one query.

    Price bounds are kept as supplied so that empty or non-numeric input can
    be echoed back to the user; :meth:`effective_min_price` and
    :meth:`effective_max_price` give the values used for filtering.
    """

    search_term: str = ""
    min_price: Any = None
    max_price: Any = None
    only_available: bool = False

    @property
    def normalized_search(self) -> str:
        return str(self.search_term or "").strip().lower()

    def effective_min_price(self) -> float:
        return parse_bound(self.min_price, 0.0)

    def effective_max_price(self) -> float:
        return parse_bound(self.max_price, math.inf)

    @property
    def is_constrained(self) -> bool:
        """``True`` when at least one criterion narrows the collection."""

        return bool(
            self.normalized_search
            or self.effective_min_price() > 0
            or self.effective_max_price() < math.inf
            or self.only_available
        )

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> FilterCriteria:
        return cls(
            search_term=str(params.get("searchTerm") or ""),
            min_price=params.get("minPrice"),
            max_price=params.get("maxPrice"),
            only_available=parse_flag(params.get("onlyAvailable")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "searchTerm": self.search_term,
            "minPrice": self.min_price,
            "maxPrice": self.max_price,
            "onlyAvailable": self.only_available,
        }


@dataclass(frozen=True, slots=True)
class PaginationMetadata:
    """Paging information derived for every query."""

    current_page: int
    total_pages: int
    total_products: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def empty(cls, items_per_page: int) -> PaginationMetadata:
        return cls(
            current_page=1,
            total_pages=0,
            total_products=0,
            items_per_page=items_per_page,
            has_next_page=False,
            has_previous_page=False,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalProducts": self.total_products,
            "itemsPerPage": self.items_per_page,
            "hasNextPage": self.has_next_page,
            "hasPreviousPage": self.has_previous_page,
        }


@dataclass(frozen=True, slots=True)
class Page:
    """One window of an ordered product collection."""

    items: list[Product]
    metadata: PaginationMetadata


@dataclass(frozen=True, slots=True)
class QueryOptions:
    """Parameters for a single filter, sort and paginate cycle."""

    page: int = 1
    items_per_page: int = 9
    sort_by: str = "price"
    sort_order: str = "desc"
    filters: FilterCriteria = field(default_factory=FilterCriteria)

    @classmethod
    def from_params(cls, params: Mapping[str, Any], defaults: QueryOptions | None = None) -> QueryOptions:
        """Build options from loosely typed request parameters.

        Missing or malformed values fall back to ``defaults``. ``limit`` and
        ``itemsPerPage`` are both accepted for the page size.
        """

        defaults = defaults or cls()
        items_per_page = parse_int(params.get("limit", params.get("itemsPerPage")), defaults.items_per_page)
        if items_per_page < 1:
            items_per_page = defaults.items_per_page
        return cls(
            page=parse_int(params.get("page"), defaults.page),
            items_per_page=items_per_page,
            sort_by=str(params.get("sortBy") or defaults.sort_by),
            sort_order=str(params.get("sortOrder") or defaults.sort_order),
            filters=FilterCriteria.from_params(params),
        )


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Envelope returned by the query orchestrator."""

    success: bool
    items: list[Product]
    pagination: PaginationMetadata
    error: Optional[str] = None
    filters_applied: bool = False
    criteria: Optional[FilterCriteria] = None

    @classmethod
    def failure(cls, message: str, items_per_page: int) -> QueryResult:
        return cls(
            success=False,
            items=[],
            pagination=PaginationMetadata.empty(items_per_page),
            error=message,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": self.success,
            "products": [product.to_dict() for product in self.items],
            "pagination": self.pagination.to_dict(),
        }
        if self.success:
            payload["filters"] = {
                "applied": self.filters_applied,
                "criteria": self.criteria.to_dict() if self.criteria else {},
            }
        else:
            payload["error"] = self.error
        return payload
