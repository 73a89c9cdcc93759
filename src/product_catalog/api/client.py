"""Client for reading products from a remote catalog API."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import requests

from ..exceptions import DataUnavailableError
from ..models import Product

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CatalogClient:
    """Fetches the full product collection from a catalog service.

    The service is expected to expose the same ``/api/products`` route this
    application serves: a JSON list of product objects.
    """

    api_base_url: str
    products_path: str = "/api/products"
    timeout_seconds: int = 10

    def build_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    @property
    def products_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/{self.products_path.lstrip('/')}"

    def fetch_products(self) -> list[Product]:
        """Fetch every product from the catalog service.

        Network errors, non-JSON bodies and payloads without a product list
        raise ``DataUnavailableError``. Individual records that cannot be
        parsed are skipped so one bad document does not hide the catalog.
        """

        try:
            response = requests.get(
                self.products_url,
                headers=self.build_headers(),
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise DataUnavailableError(f"Catalog service unavailable: {exc}") from exc
        except ValueError as exc:
            raise DataUnavailableError("Catalog service returned malformed JSON") from exc

        products: list[Product] = []
        for record in self._extract_records(payload):
            try:
                products.append(Product.from_dict(record))
            except ValueError:
                logger.warning("Skipping malformed product record: %r", record.get("id"))
        return products

    def _extract_records(self, payload: Any) -> list[Mapping[str, Any]]:
        """Normalise the product containers a catalog service may return.

        Accepts a bare list or ``{"products": [...]}``. An ``{"error": ...}``
        body, or anything else, is reported as unavailable data.
        """

        if isinstance(payload, Mapping):
            if "error" in payload:
                raise DataUnavailableError(str(payload["error"]))
            payload = payload.get("products")

        if not isinstance(payload, list):
            raise DataUnavailableError("Catalog service returned an unexpected payload")

        return [record for record in payload if isinstance(record, Mapping)]
