"""Flask web application serving the catalog user interface."""
from __future__ import annotations

import logging
import math
from datetime import datetime
from functools import wraps
from typing import Any, Callable

from flask import Flask, flash, jsonify, redirect, render_template, request, session, url_for

from ..api.client import CatalogClient
from ..config import DEFAULT_CONFIG, AppConfig
from ..exceptions import DataUnavailableError
from ..models import QueryOptions
from ..services.auth_service import AuthService, StaticCredentialVerifier
from ..services.page_controller import PageState, ProductPageController, next_sort_order
from ..services.pagination import display_range, page_window
from ..services.product_service import DEFAULT_ERROR_MESSAGE, ProductService
from ..services.sorting import SortDirection, SortKey
from ..storage.repository import CsvProductRepository, MockProductRepository, ProductSource, generate_products

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "auth_user"


def star_states(rating: Any, max_stars: int = 5) -> list[str]:
    """Return ``full``/``half``/``empty`` markers for a star rating."""

    try:
        value = float(rating)
    except (TypeError, ValueError):
        value = 0.0
    full = math.floor(value)
    has_half = value % 1 != 0
    states: list[str] = []
    for index in range(max_stars):
        if index < full:
            states.append("full")
        elif index == full and has_half:
            states.append("half")
        else:
            states.append("empty")
    return states


def create_app(
    product_service: ProductService,
    auth_service: AuthService,
    config: AppConfig = DEFAULT_CONFIG,
) -> Flask:
    app = Flask(__name__)
    app.secret_key = config.secret_key

    app.config["product_service"] = product_service
    app.config["auth_service"] = auth_service

    catalog = config.catalog
    default_state = PageState(
        items_per_page=catalog.items_per_page,
        sort_by=SortKey.parse(catalog.default_sort_by),
        sort_order=SortDirection.parse(catalog.default_sort_order),
    )
    default_options = QueryOptions(
        items_per_page=catalog.items_per_page,
        sort_by=catalog.default_sort_by,
        sort_order=catalog.default_sort_order,
    )

    def login_required(view: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view)
        def wrapped(*args: Any, **kwargs: Any) -> Any:
            if not session.get(SESSION_USER_KEY):
                return redirect(url_for("login", next=request.path))
            return view(*args, **kwargs)

        return wrapped

    @app.context_processor
    def inject_globals() -> dict[str, Any]:
        return {
            "current_year": datetime.now().year,
            "current_user": session.get(SESSION_USER_KEY),
        }

    app.add_template_filter(star_states, "stars")

    @app.route("/")
    def index():
        if session.get(SESSION_USER_KEY):
            return redirect(url_for("dashboard"))
        return redirect(url_for("login"))

    @app.route("/login", methods=["GET", "POST"])
    def login():
        if request.method == "GET":
            if session.get(SESSION_USER_KEY):
                return redirect(url_for("dashboard"))
            return render_template("login.html", next_url=request.args.get("next", ""))

        user = auth_service.login(request.form.get("username"), request.form.get("password"))
        if user is None:
            flash("Invalid username or password", "error")
            return render_template("login.html", next_url=request.form.get("next", "")), 401

        session[SESSION_USER_KEY] = user.username
        next_url = request.form.get("next") or ""
        if not next_url.startswith("/") or next_url.startswith("//"):
            next_url = url_for("dashboard")
        return redirect(next_url)

    @app.route("/logout", methods=["POST"])
    def logout():
        session.pop(SESSION_USER_KEY, None)
        flash("You have been signed out", "success")
        return redirect(url_for("login"))

    @app.route("/dashboard")
    @login_required
    def dashboard() -> str:
        summary = {"total_products": 0, "available": 0, "categories": 0, "discounted": 0}
        try:
            products = product_service.all_products()
        except DataUnavailableError as exc:
            logger.warning("Dashboard summary unavailable: %s", exc)
            flash(DEFAULT_ERROR_MESSAGE, "error")
        else:
            summary = {
                "total_products": len(products),
                "available": sum(1 for product in products if product.availability),
                "categories": len({product.category for product in products}),
                "discounted": sum(1 for product in products if product.has_discount),
            }
        return render_template("dashboard.html", summary=summary)

    @app.route("/dashboard/products")
    @login_required
    def products() -> str:
        state = PageState.from_params(request.args, default_state)
        controller = ProductPageController(product_service, state)
        controller.refresh()

        def page_url(**overrides: Any) -> str:
            params = controller.state.to_params()
            params.update(overrides)
            return url_for("products", **params)

        def sort_url(key: SortKey) -> str:
            return page_url(sortBy=key.value, sortOrder=next_sort_order(controller.state, key).value, page=1)

        first, last, total = display_range(controller.pagination, len(controller.items))
        return render_template(
            "products.html",
            controller=controller,
            state=controller.state,
            sort_keys=list(SortKey),
            page_url=page_url,
            sort_url=sort_url,
            showing={"first": first, "last": last, "total": total},
            page_numbers=page_window(controller.pagination.current_page, controller.pagination.total_pages),
        )

    @app.route("/api/products")
    def api_products():
        try:
            products = product_service.all_products()
        except DataUnavailableError:
            logger.exception("Error fetching products")
            return jsonify({"error": DEFAULT_ERROR_MESSAGE}), 500
        return jsonify([product.to_dict() for product in products])

    @app.route("/api/products/query")
    def api_products_query():
        options = QueryOptions.from_params(request.args, default_options)
        result = product_service.process(options)
        return jsonify(result.to_dict())

    return app


def build_product_source(config: AppConfig) -> ProductSource:
    """Select the product source described by ``config``."""

    if config.api.base_url:
        return CatalogClient(api_base_url=config.api.base_url, timeout_seconds=config.api.timeout_seconds)
    if config.catalog.csv_path is not None:
        return CsvProductRepository(config.catalog.csv_path)
    return MockProductRepository(
        generate_products(config.catalog.product_count, config.catalog.seed),
        delay_seconds=config.catalog.simulated_delay_seconds,
    )


def bootstrap_app(config: AppConfig = DEFAULT_CONFIG) -> tuple[Flask, ProductService, AuthService]:
    """Factory used by the entrypoint for running the web UI."""

    product_service = ProductService(source=build_product_source(config))
    auth_service = AuthService(
        verifier=StaticCredentialVerifier(username=config.auth.username, password=config.auth.password)
    )
    app = create_app(product_service, auth_service, config)
    return app, product_service, auth_service
