"""Configuration settings for the product catalog application."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

ENV_PREFIX = "CATALOG_"


@dataclass(slots=True)
class CatalogConfig:
    """Settings for the product data and the listing page."""

    product_count: int = 150
    """Number of generated demo products."""

    seed: int = 42
    """Random seed used when generating demo products."""

    items_per_page: int = 12
    default_sort_by: str = "price"
    default_sort_order: Literal["asc", "desc"] = "desc"

    simulated_delay_seconds: float = 0.0
    """Artificial latency added to every fetch of the generated catalog."""

    csv_path: Optional[Path] = None
    """When set, products are read from this CSV file instead of being generated."""


@dataclass(slots=True)
class ApiConfig:
    """Settings for reading products from a remote catalog service."""

    base_url: Optional[str] = None
    timeout_seconds: int = 10


@dataclass(slots=True)
class AuthConfig:
    """Demo credentials accepted by the login gate."""

    username: str = "Admin"
    password: str = "123456"


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration for the application."""

    environment: Literal["development", "production"] = "development"
    secret_key: str = "development-secret-key"
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> AppConfig:
        """Build a configuration, overriding defaults from ``CATALOG_*`` variables."""

        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            return value if value else None

        config = cls()
        if (environment := get("ENVIRONMENT")) in ("development", "production"):
            config.environment = environment  # type: ignore[assignment]
        config.secret_key = get("SECRET_KEY") or config.secret_key

        catalog = config.catalog
        if (count := get("PRODUCT_COUNT")) is not None:
            catalog.product_count = int(count)
        if (per_page := get("ITEMS_PER_PAGE")) is not None:
            catalog.items_per_page = int(per_page)
        if (delay := get("SIMULATED_DELAY")) is not None:
            catalog.simulated_delay_seconds = float(delay)
        if (csv_path := get("CSV_PATH")) is not None:
            catalog.csv_path = Path(csv_path)

        config.api.base_url = get("API_BASE_URL")
        config.auth.username = get("ADMIN_USERNAME") or config.auth.username
        config.auth.password = get("ADMIN_PASSWORD") or config.auth.password
        return config


DEFAULT_CONFIG = AppConfig()
