from __future__ import annotations

from typing import Any, Callable

import pytest

from product_catalog.models import Product
from product_catalog.storage.repository import generate_products


@pytest.fixture
def make_product() -> Callable[..., Product]:
    def _make(product_id: int, name: str = "Product", price: Any = 10.0, **overrides: Any) -> Product:
        fields: dict[str, Any] = {
            "id": product_id,
            "name": name,
            "price": price,
            "original_price": overrides.pop("original_price", price),
        }
        fields.update(overrides)
        return Product(**fields)

    return _make


@pytest.fixture
def catalog() -> list[Product]:
    return generate_products(150, seed=42)
