# app/domain/errors.py
from __future__ import annotations
from typing import Any, Optional


class CatalogueError(Exception):
    """Base class for every catalogue fetch problem."""


class CatalogueFetchError(CatalogueError):
    """
    Whole-pipeline failure: nothing usable came back from upstream.
    The cache gate turns these into an empty catalogue.
    """


class ConfigurationError(CatalogueFetchError):
    """Required setting (e.g. PRINTFUL_API_KEY) is missing."""


class ListingFetchError(CatalogueFetchError):
    """The upstream listing call failed (network, status or body)."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DetailFetchError(CatalogueError):
    """A single product's detail call failed. Recovered locally, never propagated."""

    def __init__(self, product_id: Any, message: str, *, status_code: Optional[int] = None):
        super().__init__(f"product {product_id}: {message}")
        self.product_id = product_id
        self.status_code = status_code
