"""Catalog readers — the core's only view of the product catalog.

The pipeline depends on the :class:`CatalogReader` interface and performs
exactly one ``list_products()`` call per submission.  A failed read is
reported as :class:`CatalogUnavailableError`, which the pipeline recovers
from by recommending nothing.

Implementations:

  - StaticCatalogReader: fixed in-memory product list (tests, simulation)
  - HttpCatalogReader: GET on the storefront's product listing endpoint
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable

import httpx
from pydantic import ValidationError

from nail_diagnosis.constants import (
    CATALOG_BASE_URL,
    CATALOG_PRODUCTS_PATH,
    CATALOG_TIMEOUT_SECONDS,
)
from nail_diagnosis.models.catalog import CatalogProduct

logger = logging.getLogger(__name__)


class CatalogUnavailableError(Exception):
    """The product listing could not be fetched or parsed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CatalogReader(ABC):
    """Interface for the read-only "list products" query.

    Implementations return the full catalog in one call, in the
    storefront's listing order.  No pagination is used.
    """

    @abstractmethod
    async def list_products(self) -> list[CatalogProduct]:
        """Return every product in the catalog.

        Raises
        ------
        CatalogUnavailableError
            On any transport, status, or parsing failure.
        """
        ...


class StaticCatalogReader(CatalogReader):
    """Serves a fixed product list."""

    def __init__(self, products: Iterable[CatalogProduct | dict[str, Any]] = ()) -> None:
        self._products = [
            p if isinstance(p, CatalogProduct) else CatalogProduct.model_validate(p)
            for p in products
        ]

    async def list_products(self) -> list[CatalogProduct]:
        return list(self._products)


class HttpCatalogReader(CatalogReader):
    """Fetches the catalog from the storefront's ``/api/products`` endpoint.

    The endpoint returns a bare JSON array when called without pagination
    parameters.  The paginated ``{"products": [...], "pagination": {...}}``
    envelope is accepted as well.  A fresh ``httpx.AsyncClient`` is opened
    per call; there is no retry.  Rows that fail validation are skipped with
    a warning so one malformed product does not hide the rest.

    Args:
        base_url: storefront origin, e.g. ``https://shop.example.com``
        path: listing path relative to ``base_url``
        timeout: request timeout in seconds
        transport: optional httpx transport override (used in tests)
    """

    def __init__(
        self,
        base_url: str = CATALOG_BASE_URL,
        path: str = CATALOG_PRODUCTS_PATH,
        timeout: float = CATALOG_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._path = path
        self._timeout = timeout
        self._transport = transport

    async def list_products(self) -> list[CatalogProduct]:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                resp = await client.get(self._path)
        except httpx.HTTPError as exc:
            raise CatalogUnavailableError(f"Catalog request failed: {exc!r}") from exc

        if not resp.is_success:
            raise CatalogUnavailableError(
                f"Catalog returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise CatalogUnavailableError("Catalog response is not valid JSON") from exc

        if isinstance(payload, dict) and "products" in payload:
            payload = payload["products"]
        if not isinstance(payload, list):
            raise CatalogUnavailableError(
                f"Catalog response has unexpected shape: {type(payload).__name__}"
            )

        products: list[CatalogProduct] = []
        skipped = 0
        for raw in payload:
            try:
                products.append(CatalogProduct.model_validate(raw))
            except ValidationError as exc:
                skipped += 1
                logger.debug("Skipping catalog row: %s", exc)
        if skipped:
            logger.warning(
                "Skipped %d of %d catalog products that failed validation",
                skipped, len(payload),
            )

        logger.debug("Fetched %d products from %s%s", len(products), self._base_url, self._path)
        return products
