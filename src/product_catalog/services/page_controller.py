"""State holder for the product listing page.

The controller owns the page, sort and filter state, turns it into query
options and applies query results. Every issued query gets a sequence
number; only the result of the most recently issued query is applied, so a
slow response can never overwrite fresher state.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping

from ..models import FilterCriteria, PaginationMetadata, Product, QueryOptions, QueryResult, parse_int
from .product_service import DEFAULT_ERROR_MESSAGE, ProductService
from .sorting import SortDirection, SortKey

logger = logging.getLogger(__name__)

DEFAULT_FILTERS = FilterCriteria(search_term="", min_price=0, max_price=1000, only_available=False)


class ViewStatus(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    POPULATED = "populated"


@dataclass(frozen=True, slots=True)
class PageState:
    """Everything the listing page needs to ask for one page of products."""

    page: int = 1
    items_per_page: int = 12
    sort_by: SortKey = SortKey.PRICE
    sort_order: SortDirection = SortDirection.DESC
    filters: FilterCriteria = field(default_factory=lambda: DEFAULT_FILTERS)

    @classmethod
    def from_params(cls, params: Mapping[str, Any], defaults: PageState | None = None) -> PageState:
        defaults = defaults or cls()
        filters = FilterCriteria.from_params(params) if _has_filter_params(params) else defaults.filters
        return cls(
            page=parse_int(params.get("page"), defaults.page),
            items_per_page=defaults.items_per_page,
            sort_by=SortKey.parse(params.get("sortBy") or defaults.sort_by),
            sort_order=SortDirection.parse(params.get("sortOrder") or defaults.sort_order),
            filters=filters,
        )

    def to_params(self) -> dict[str, Any]:
        """Query-string parameters reproducing this state."""

        params: dict[str, Any] = {
            "page": self.page,
            "sortBy": self.sort_by.value,
            "sortOrder": self.sort_order.value,
            "searchTerm": self.filters.search_term,
            "minPrice": "" if self.filters.min_price is None else self.filters.min_price,
            "maxPrice": "" if self.filters.max_price is None else self.filters.max_price,
        }
        if self.filters.only_available:
            params["onlyAvailable"] = "true"
        return params


def _has_filter_params(params: Mapping[str, Any]) -> bool:
    return any(key in params for key in ("searchTerm", "minPrice", "maxPrice", "onlyAvailable"))


def derive_query(state: PageState) -> QueryOptions:
    return QueryOptions(
        page=state.page,
        items_per_page=state.items_per_page,
        sort_by=state.sort_by.value,
        sort_order=state.sort_order.value,
        filters=state.filters,
    )


def next_sort_order(state: PageState, key: SortKey) -> SortDirection:
    """Clicking the active ascending key flips it; anything else sorts ascending."""

    if state.sort_by is key and state.sort_order is SortDirection.ASC:
        return SortDirection.DESC
    return SortDirection.ASC


class ProductPageController:
    """Drives product queries for one listing page session."""

    def __init__(self, service: ProductService, state: PageState | None = None) -> None:
        self._service = service
        self._state = state or PageState()
        self._lock = threading.Lock()
        self._latest_request = 0

        self.loading = False
        self.error: str | None = None
        self.items: list[Product] = []
        self.pagination = PaginationMetadata.empty(self._state.items_per_page)

    @property
    def state(self) -> PageState:
        return self._state

    @property
    def view_status(self) -> ViewStatus:
        if self.loading:
            return ViewStatus.LOADING
        if self.error:
            return ViewStatus.ERROR
        if not self.items:
            return ViewStatus.EMPTY
        return ViewStatus.POPULATED

    def set_filters(self, filters: FilterCriteria) -> None:
        with self._lock:
            self._state = replace(self._state, filters=filters, page=1)

    def reset_filters(self) -> None:
        self.set_filters(DEFAULT_FILTERS)

    def set_sort(self, key: SortKey | str, order: SortDirection | str) -> None:
        with self._lock:
            self._state = replace(
                self._state,
                sort_by=SortKey.parse(key),
                sort_order=SortDirection.parse(order),
                page=1,
            )

    def toggle_sort(self, key: SortKey | str) -> None:
        sort_key = SortKey.parse(key)
        with self._lock:
            self._state = replace(
                self._state,
                sort_by=sort_key,
                sort_order=next_sort_order(self._state, sort_key),
                page=1,
            )

    def set_page(self, page: int) -> None:
        with self._lock:
            self._state = replace(self._state, page=page)

    def issue(self) -> tuple[int, QueryOptions]:
        """Start a new query and return its request id and options."""

        with self._lock:
            self._latest_request += 1
            self.loading = True
            return self._latest_request, derive_query(self._state)

    def resolve(self, request_id: int, result: QueryResult) -> bool:
        """Apply ``result`` if ``request_id`` is still the latest request.

        Returns ``False`` when the result is stale and was discarded.
        """

        with self._lock:
            if request_id != self._latest_request:
                logger.debug("Discarding stale result for request %s (latest %s)", request_id, self._latest_request)
                return False

            self.loading = False
            self.items = list(result.items)
            self.pagination = result.pagination
            if result.success:
                self.error = None
                self._state = replace(self._state, page=result.pagination.current_page)
            else:
                self.error = result.error or DEFAULT_ERROR_MESSAGE
            return True

    def refresh(self) -> QueryResult:
        """Run the current query synchronously and apply its result."""

        request_id, options = self.issue()
        result = self._service.process(options)
        self.resolve(request_id, result)
        return result

    def refresh_in(self, executor: Executor) -> Future[bool]:
        """Run the current query on ``executor``.

        The returned future resolves to ``True`` when the result was applied
        and ``False`` when a newer query superseded it.
        """

        request_id, options = self.issue()
        return executor.submit(lambda: self.resolve(request_id, self._service.process(options)))
