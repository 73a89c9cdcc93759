from __future__ import annotations

import pytest

from product_catalog.exceptions import DataUnavailableError
from product_catalog.models import QueryOptions
from product_catalog.services.product_service import ProductService
from product_catalog.storage.repository import CsvProductRepository, MockProductRepository, generate_products


def test_generate_products_is_deterministic() -> None:
    assert generate_products(20, seed=7) == generate_products(20, seed=7)
    assert generate_products(20, seed=7) != generate_products(20, seed=8)


def test_generated_products_respect_record_invariants() -> None:
    products = generate_products()

    assert len(products) == 150
    assert len({product.id for product in products}) == 150
    for product in products:
        assert product.name
        assert product.price >= 0
        assert product.original_price >= product.price
        assert 0 <= product.discount <= 99
        assert 0.0 <= product.rating <= 5.0
        assert product.reviews >= 0
        if not product.availability:
            assert product.in_stock == 0


def test_mock_repository_returns_copies(catalog) -> None:
    repository = MockProductRepository(catalog)

    first = repository.fetch_products()
    first.clear()

    assert len(repository.fetch_products()) == 150
    assert len(repository) == 150


def test_csv_repository_round_trip(tmp_path, catalog) -> None:
    repository = CsvProductRepository(tmp_path / "catalog" / "products.csv")

    repository.write(catalog[:10])
    loaded = repository.fetch_products()

    assert loaded == catalog[:10]


def test_csv_repository_skips_malformed_rows(tmp_path) -> None:
    path = tmp_path / "products.csv"
    path.write_text(
        "id,name,price,availability\n"
        "1,Desk Lamp,12.50,true\n"
        "oops,Broken,1,true\n"
        "3,Coffee Mug,abc,false\n",
        encoding="utf-8",
    )

    products = CsvProductRepository(path).fetch_products()

    assert [product.id for product in products] == [1, 3]
    assert products[1].price == 0
    assert products[1].availability is False


def test_csv_repository_missing_file_raises(tmp_path) -> None:
    with pytest.raises(DataUnavailableError):
        CsvProductRepository(tmp_path / "missing.csv").fetch_products()


def test_csv_non_finite_discount_does_not_abort_query(tmp_path) -> None:
    path = tmp_path / "products.csv"
    path.write_text(
        "id,name,price,originalPrice,discount,availability,tags\n"
        "1,Umbrella Deluxe Gym Bag,115.49,115.49,inf,true,gift\n"
        "2,Acme Pro Notebook,9.99,9.99,1e999,false,\n",
        encoding="utf-8",
    )

    result = ProductService(source=CsvProductRepository(path)).process(QueryOptions())

    assert result.success is True
    assert [product.id for product in result.items] == [1, 2]
    assert all(product.discount == 0 for product in result.items)
