"""Catalog reader tests.

HttpCatalogReader is exercised against ``httpx.MockTransport`` so no
network is needed.  Transport, status and shape failures surface as
CatalogUnavailableError; malformed product rows are skipped.
"""

from decimal import Decimal

import httpx
import pytest

from helpers.catalog import make_product, product_json
from nail_diagnosis.catalog import (
    CatalogUnavailableError,
    HttpCatalogReader,
    StaticCatalogReader,
)
from nail_diagnosis.models.catalog import CatalogProduct


def _reader(handler):
    return HttpCatalogReader(
        base_url="https://shop.test/",
        path="/api/products",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


def _json_handler(payload, status_code=200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)
    return handler


# =====================================================================
# CatalogProduct parsing
# =====================================================================


class TestCatalogProduct:
    def test_storefront_json_parses(self):
        p = CatalogProduct.model_validate(product_json("p1", "Cuticle Oil", category="Care"))
        assert p.price == Decimal("24.50")
        assert p.category.name == "Care"
        assert p.images == ["/images/p1.webp"]

    def test_null_images_become_empty_list(self):
        raw = product_json("p1", "Cuticle Oil")
        raw["images"] = None
        assert CatalogProduct.model_validate(raw).images == []

    def test_missing_optional_fields(self):
        p = CatalogProduct.model_validate({"id": "p1", "name": "Oil", "price": "5"})
        assert p.description is None
        assert p.category is None
        assert p.featured is False


# =====================================================================
# HttpCatalogReader
# =====================================================================


class TestHttpCatalogReader:
    @pytest.mark.asyncio
    async def test_bare_array(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json=[
                product_json("p1", "Cuticle Oil"),
                product_json("p2", "Top Coat", featured=True),
            ])

        products = await _reader(handler).list_products()
        assert [p.id for p in products] == ["p1", "p2"]
        assert products[1].featured is True
        assert seen == ["https://shop.test/api/products"]

    @pytest.mark.asyncio
    async def test_paginated_envelope(self):
        payload = {
            "products": [product_json("p1", "Cuticle Oil")],
            "pagination": {"page": 1, "limit": 20, "total": 1, "totalPages": 1},
        }
        products = await _reader(_json_handler(payload)).list_products()
        assert [p.id for p in products] == ["p1"]

    @pytest.mark.asyncio
    async def test_empty_array(self):
        assert await _reader(_json_handler([])).list_products() == []

    @pytest.mark.asyncio
    async def test_server_error(self):
        with pytest.raises(CatalogUnavailableError) as exc_info:
            await _reader(_json_handler({"error": "Failed to fetch products"}, 500)).list_products()
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, content=b"<html>oops</html>")

        with pytest.raises(CatalogUnavailableError, match="not valid JSON"):
            await _reader(handler).list_products()

    @pytest.mark.asyncio
    async def test_unexpected_shape(self):
        with pytest.raises(CatalogUnavailableError, match="unexpected shape"):
            await _reader(_json_handler({"items": []})).list_products()

    @pytest.mark.asyncio
    async def test_malformed_rows_are_skipped(self, caplog):
        bad_price = product_json("p2", "Base Coat")
        bad_price["price"] = "not-a-price"
        payload = [
            product_json("p1", "Cuticle Oil"),
            {"id": "p3", "price": None, "category": {"name": None}},
            bad_price,
            "not-a-product",
        ]
        products = await _reader(_json_handler(payload)).list_products()
        assert [p.id for p in products] == ["p1"]
        assert "Skipped 3 of 4" in caplog.text

    @pytest.mark.asyncio
    async def test_null_category_name_is_kept(self):
        raw = product_json("p1", "Cuticle Oil", category="Care")
        raw["category"]["name"] = None
        products = await _reader(_json_handler([raw])).list_products()
        assert products[0].category.name is None

    @pytest.mark.asyncio
    async def test_all_rows_malformed_gives_empty_catalog(self):
        payload = [{"id": "p1"}, {"name": "No id", "price": "1.00"}]
        assert await _reader(_json_handler(payload)).list_products() == []

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(CatalogUnavailableError, match="request failed"):
            await _reader(handler).list_products()

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(CatalogUnavailableError):
            await _reader(handler).list_products()


# =====================================================================
# StaticCatalogReader
# =====================================================================


class TestStaticCatalogReader:
    @pytest.mark.asyncio
    async def test_accepts_models_and_dicts(self):
        reader = StaticCatalogReader([
            make_product("a", "Oil"),
            product_json("b", "Base Coat"),
        ])
        products = await reader.list_products()
        assert [p.id for p in products] == ["a", "b"]
        assert all(isinstance(p, CatalogProduct) for p in products)

    @pytest.mark.asyncio
    async def test_returns_a_copy(self):
        reader = StaticCatalogReader([make_product("a", "Oil")])
        first = await reader.list_products()
        first.clear()
        assert len(await reader.list_products()) == 1
