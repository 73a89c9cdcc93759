"""Application bootstrapper for the product catalog demo."""
from __future__ import annotations

import logging

from .config import AppConfig
from .web.app import bootstrap_app

logger = logging.getLogger(__name__)


def run() -> None:
    """Entrypoint used by the CLI to launch the web UI."""

    logging.basicConfig(level=logging.INFO)
    config = AppConfig.from_env()
    app, product_service, _ = bootstrap_app(config)
    logger.info("Serving catalog from %s", type(product_service.source).__name__)
    app.run(debug=config.environment == "development")


if __name__ == "__main__":  # pragma: no cover - manual execution only
    run()
