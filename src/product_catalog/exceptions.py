"""Exceptions raised by the product catalog data sources."""
from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog errors."""


class DataUnavailableError(CatalogError):
    """The product collection could not be obtained from its source."""
