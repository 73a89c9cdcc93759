"""Product data sources: a generated in-memory catalog and CSV files."""
from __future__ import annotations

import csv
import logging
import random
import time
from pathlib import Path
from typing import Iterable, Protocol

from ..exceptions import DataUnavailableError
from ..models import Product

logger = logging.getLogger(__name__)

CATEGORY_ITEMS: dict[str, list[str]] = {
    "Electronics": [
        "Wireless Headphones",
        "Smart Watch",
        "Portable Charger",
        "Bluetooth Speaker",
        "Mechanical Keyboard",
        "USB-C Hub",
    ],
    "Clothing": [
        "Cotton T-Shirt",
        "Denim Jeans",
        "Hoodie",
        "Running Shoes",
        "Winter Jacket",
        "Baseball Cap",
    ],
    "Home & Kitchen": [
        "Desk Lamp",
        "Coffee Mug",
        "Knife Set",
        "Throw Pillow",
        "Bath Towel Set",
        "Plant Pot",
    ],
    "Sports": [
        "Yoga Mat",
        "Water Bottle",
        "Gym Bag",
        "Dumbbell Set",
        "Tennis Racket",
        "Cycling Helmet",
    ],
    "Books": [
        "Cookbook",
        "Travel Guide",
        "Notebook",
        "Mystery Novel",
        "Science Atlas",
        "Poetry Collection",
    ],
}

BRANDS = ["Acme", "Northwind", "Globex", "Initech", "Umbrella", "Stark", "Wayne", "Hooli"]
ADJECTIVES = ["Classic", "Premium", "Essential", "Deluxe", "Compact", "Pro", "Eco", "Ultra"]
TAGS = ["new", "bestseller", "limited", "eco-friendly", "gift", "sale", "trending"]

CSV_FIELDS = [
    "id",
    "name",
    "price",
    "originalPrice",
    "discount",
    "category",
    "brand",
    "rating",
    "reviews",
    "availability",
    "inStock",
    "description",
    "image",
    "tags",
]


class ProductSource(Protocol):
    """Anything able to produce the full product collection."""

    def fetch_products(self) -> list[Product]:
        """Return every product or raise ``DataUnavailableError``."""


def generate_products(count: int = 150, seed: int = 42) -> list[Product]:
    """Generate ``count`` deterministic demo products."""

    rng = random.Random(seed)
    categories = list(CATEGORY_ITEMS)
    products: list[Product] = []
    for product_id in range(1, count + 1):
        category = rng.choice(categories)
        item = rng.choice(CATEGORY_ITEMS[category])
        brand = rng.choice(BRANDS)
        name = f"{brand} {rng.choice(ADJECTIVES)} {item}"

        price = round(rng.uniform(5, 500), 2)
        discount = rng.choice([0, 0, 0, rng.randint(5, 60)])
        original_price = round(price / (1 - discount / 100), 2) if discount else price
        availability = rng.random() < 0.8

        products.append(
            Product(
                id=product_id,
                name=name,
                price=price,
                original_price=max(original_price, price),
                discount=discount,
                category=category,
                brand=brand,
                rating=round(rng.uniform(1.0, 5.0), 1),
                reviews=rng.randint(0, 2500),
                availability=availability,
                in_stock=rng.randint(1, 100) if availability else 0,
                description=f"{name} from {brand}, part of our {category.lower()} range.",
                image=f"https://picsum.photos/seed/product-{product_id}/400/300",
                tags=tuple(sorted(rng.sample(TAGS, k=rng.randint(1, 3)))),
            )
        )
    return products


class MockProductRepository:
    """Serves a fixed, generated product collection."""

    def __init__(self, products: Iterable[Product] | None = None, delay_seconds: float = 0.0) -> None:
        self._products = tuple(products) if products is not None else tuple(generate_products())
        self._delay_seconds = delay_seconds

    def fetch_products(self) -> list[Product]:
        if self._delay_seconds > 0:
            time.sleep(self._delay_seconds)
        return list(self._products)

    def __len__(self) -> int:
        return len(self._products)


class CsvProductRepository:
    """Reads and writes a product catalog stored as a CSV file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def fetch_products(self) -> list[Product]:
        """Load every product from the CSV file.

        Rows that cannot be turned into a product are skipped with a warning.
        A missing or unreadable file raises ``DataUnavailableError``.
        """

        try:
            with self._path.open("r", encoding="utf-8", newline="") as handle:
                rows = list(csv.DictReader(handle))
        except OSError as exc:
            raise DataUnavailableError(f"Could not read catalog file {self._path}") from exc

        products: list[Product] = []
        for row in rows:
            try:
                products.append(Product.from_dict(self._decode_row(row)))
            except ValueError:
                logger.warning("Skipping malformed catalog row: %s", row.get("id"))
        return products

    def write(self, products: Iterable[Product]) -> Path:
        """Replace the CSV file with ``products``."""

        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=CSV_FIELDS)
            writer.writeheader()
            for product in products:
                row = product.to_dict()
                row["tags"] = "|".join(product.tags)
                row["image"] = product.image or ""
                writer.writerow(row)
        return self._path

    @staticmethod
    def _decode_row(row: dict[str, str]) -> dict[str, object]:
        decoded: dict[str, object] = dict(row)
        decoded["availability"] = str(row.get("availability", "")).strip().lower() in {"true", "1", "yes"}
        tags = row.get("tags") or ""
        decoded["tags"] = [tag for tag in tags.split("|") if tag]
        return decoded
