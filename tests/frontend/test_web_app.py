from __future__ import annotations

import pytest

from product_catalog.config import AppConfig
from product_catalog.exceptions import DataUnavailableError
from product_catalog.services.auth_service import AuthService, StaticCredentialVerifier
from product_catalog.services.product_service import ProductService
from product_catalog.storage.repository import MockProductRepository
from product_catalog.web.app import bootstrap_app, create_app, star_states


class UnavailableSource:
    def fetch_products(self):  # pragma: no cover - raising helper
        raise DataUnavailableError("connection refused")


def _build_app(source):
    product_service = ProductService(source=source)
    auth_service = AuthService(verifier=StaticCredentialVerifier(username="Admin", password="123456"))
    app = create_app(product_service, auth_service, AppConfig())
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def web_app(catalog):
    return _build_app(MockProductRepository(catalog))


@pytest.fixture
def logged_in_client(web_app):
    client = web_app.test_client()
    client.post("/login", data={"username": "Admin", "password": "123456"})
    return client


def test_root_redirects_to_login_when_signed_out(web_app) -> None:
    response = web_app.test_client().get("/")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/login")


def test_protected_pages_require_login(web_app) -> None:
    response = web_app.test_client().get("/dashboard/products")

    assert response.status_code == 302
    assert "/login" in response.headers["Location"]


def test_login_with_wrong_password_is_rejected(web_app) -> None:
    response = web_app.test_client().post("/login", data={"username": "Admin", "password": "nope"})

    assert response.status_code == 401
    assert b"Invalid username or password" in response.data


def test_login_redirects_to_requested_page(web_app) -> None:
    response = web_app.test_client().post(
        "/login",
        data={"username": "Admin", "password": "123456", "next": "/dashboard/products"},
    )

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/dashboard/products")


def test_login_ignores_external_next_url(web_app) -> None:
    response = web_app.test_client().post(
        "/login",
        data={"username": "Admin", "password": "123456", "next": "//evil.example.com"},
    )

    assert response.headers["Location"].endswith("/dashboard")


def test_logout_clears_session(logged_in_client) -> None:
    logged_in_client.post("/logout")

    response = logged_in_client.get("/dashboard")

    assert response.status_code == 302


def test_dashboard_shows_summary(logged_in_client) -> None:
    response = logged_in_client.get("/dashboard")

    assert response.status_code == 200
    assert b"Welcome back, Admin" in response.data
    assert b"150" in response.data


def test_products_page_renders_first_page(logged_in_client) -> None:
    response = logged_in_client.get("/dashboard/products")

    assert response.status_code == 200
    assert b"Showing 1 to 12 of <strong>150</strong> products" in response.data
    assert b"Page 1 of 13" in response.data


def test_products_page_clamps_page_number(logged_in_client) -> None:
    response = logged_in_client.get("/dashboard/products?page=99")

    assert b"Showing 145 to 150 of <strong>150</strong> products" in response.data


def test_products_page_empty_state(logged_in_client) -> None:
    response = logged_in_client.get("/dashboard/products?searchTerm=zzz-no-match&minPrice=&maxPrice=")

    assert response.status_code == 200
    assert b"No Products Found" in response.data


def test_products_page_error_offers_retry() -> None:
    app = _build_app(UnavailableSource())
    client = app.test_client()
    client.post("/login", data={"username": "Admin", "password": "123456"})

    response = client.get("/dashboard/products")

    assert response.status_code == 200
    assert b"connection refused" in response.data
    assert b"Retry" in response.data


def test_api_products_returns_full_collection(web_app) -> None:
    response = web_app.test_client().get("/api/products")

    assert response.status_code == 200
    payload = response.get_json()
    assert len(payload) == 150
    assert {"id", "name", "price", "originalPrice", "inStock"} <= set(payload[0])


def test_api_products_reports_unavailable_source() -> None:
    response = _build_app(UnavailableSource()).test_client().get("/api/products")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to fetch products"}


def test_api_query_returns_envelope(web_app) -> None:
    response = web_app.test_client().get(
        "/api/products/query?minPrice=50&maxPrice=200&onlyAvailable=true&sortBy=price&sortOrder=asc&limit=9"
    )

    payload = response.get_json()
    assert payload["success"] is True
    assert len(payload["products"]) <= 9
    prices = [product["price"] for product in payload["products"]]
    assert prices == sorted(prices)
    assert all(50 <= price <= 200 for price in prices)
    assert payload["filters"]["applied"] is True


def test_api_query_failure_envelope() -> None:
    payload = _build_app(UnavailableSource()).test_client().get("/api/products/query").get_json()

    assert payload["success"] is False
    assert payload["products"] == []
    assert payload["pagination"]["totalPages"] == 0
    assert payload["error"] == "connection refused"


def test_bootstrap_app_uses_generated_catalog() -> None:
    config = AppConfig()
    config.catalog.product_count = 30

    _, product_service, _ = bootstrap_app(config)

    assert len(product_service.all_products()) == 30


def test_star_states() -> None:
    assert star_states(3.5) == ["full", "full", "full", "half", "empty"]
    assert star_states("bad") == ["empty"] * 5
