"""DiagnosisPipeline tests with an in-memory or mocked catalog.

Test scenarios:
  - Synchronous stages: score / classify / diagnose
  - Full submission against a StaticCatalogReader
  - Catalog unavailable → diagnosis still returned, no products
  - Malformed catalog rows are skipped, the rest still matched
  - Other catalog exceptions propagate
  - One catalog read per submission
  - Wire format: camelCase aliases on model_dump(by_alias=True)
  - Construction guard: unloaded store is rejected
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from helpers.catalog import make_product, product_json
from nail_diagnosis.catalog import (
    CatalogReader,
    CatalogUnavailableError,
    HttpCatalogReader,
    StaticCatalogReader,
)
from nail_diagnosis.matcher import ProductMatcher
from nail_diagnosis.pipeline import DiagnosisPipeline
from nail_diagnosis.ruleset import RulesetStore

CATALOG = [
    make_product("glitter", "Glitter Top Coat"),
    make_product("oil", "Cuticle Oil", category="Nail Care"),
    make_product("cream", "Hand Cream", description="Deeply moisturizing"),
    make_product("strong", "Nail Strengthener", featured=True),
    make_product("file", "Crystal File", featured=True),
]


@pytest.fixture
def pipeline(store):
    return DiagnosisPipeline(store, StaticCatalogReader(CATALOG))


def _mock_reader(**kwargs) -> CatalogReader:
    reader = AsyncMock(spec=CatalogReader)
    reader.list_products = AsyncMock(**kwargs)
    return reader


# =====================================================================
# Synchronous stages
# =====================================================================


class TestSyncStages:
    def test_diagnose_example_scenario(self, pipeline, answers_for):
        """brittle + often peeling + peeling polish off: damage 6 is severe."""
        scores, diag = pipeline.diagnose(
            answers_for(condition_1="brittle", condition_2="often", habits_4="peel"),
        )
        assert (scores.brittleness, scores.damage) == (3, 6)
        assert diag.condition == "Severely Damaged Nails", "damage >= 6 should be severe"

    def test_mildest_is_healthy(self, pipeline, mildest):
        scores, diag = pipeline.diagnose(mildest)
        assert scores.total == 0
        assert diag.condition == "Generally Healthy Nails"

    def test_classify_uses_store_rules(self, pipeline):
        scores = pipeline.score({"habits-5": "rarely"})
        assert pipeline.classify(scores).condition == "Dry Nails and Cuticles"


# =====================================================================
# Full submission
# =====================================================================


class TestSubmit:
    @pytest.mark.asyncio
    async def test_submit_returns_diagnosis_products_and_scores(self, pipeline, mildest):
        result = await pipeline.submit(mildest)
        assert result.diagnosis.condition == "Generally Healthy Nails"
        ids = [p.id for p in result.recommended_products]
        assert ids == ["oil", "cream", "strong"], "keyword matches in catalog order"
        assert result.scores.total == 0

    @pytest.mark.asyncio
    async def test_recommend_falls_back_to_featured(self, store):
        catalog = [make_product("g", "Glitter"), make_product("f", "Top Shine", featured=True)]
        pipeline = DiagnosisPipeline(store, StaticCatalogReader(catalog))
        products = await pipeline.recommend(["growth"])
        assert [p.id for p in products] == ["f"]

    @pytest.mark.asyncio
    async def test_custom_matcher_limit(self, store, mildest):
        pipeline = DiagnosisPipeline(
            store, StaticCatalogReader(CATALOG), matcher=ProductMatcher(limit=1),
        )
        result = await pipeline.submit(mildest)
        assert [p.id for p in result.recommended_products] == ["oil"]

    @pytest.mark.asyncio
    async def test_catalog_read_once_per_submission(self, store, mildest):
        reader = _mock_reader(return_value=list(CATALOG))
        pipeline = DiagnosisPipeline(store, reader)
        await pipeline.submit(mildest)
        reader.list_products.assert_awaited_once()


class TestCatalogFailure:
    @pytest.mark.asyncio
    async def test_unavailable_catalog_yields_no_products(self, store, answers_for, caplog):
        reader = _mock_reader(side_effect=CatalogUnavailableError("HTTP 500", status_code=500))
        pipeline = DiagnosisPipeline(store, reader)

        result = await pipeline.submit(answers_for(condition_4="dry"))
        assert result.diagnosis.condition == "Dry Nails and Cuticles", "diagnosis survives"
        assert result.recommended_products == []
        assert "Catalog unavailable" in caplog.text

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self, store, mildest):
        pipeline = DiagnosisPipeline(store, _mock_reader(side_effect=RuntimeError("boom")))
        with pytest.raises(RuntimeError):
            await pipeline.submit(mildest)

    @pytest.mark.asyncio
    async def test_malformed_catalog_row_does_not_hide_good_products(self, store, mildest):
        payload = [
            product_json("a", "Cuticle Oil"),
            {"id": "b", "price": None, "category": {"name": None}},
        ]
        reader = HttpCatalogReader(
            base_url="https://shop.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=payload)),
        )
        result = await DiagnosisPipeline(store, reader).submit(mildest)
        assert [p.id for p in result.recommended_products] == ["a"]

    @pytest.mark.asyncio
    async def test_empty_catalog(self, store, mildest):
        pipeline = DiagnosisPipeline(store, StaticCatalogReader([]))
        result = await pipeline.submit(mildest)
        assert result.recommended_products == []


# =====================================================================
# Wire format
# =====================================================================


@pytest.mark.asyncio
async def test_result_serialises_with_camel_case(pipeline, answers_for):
    result = await pipeline.submit(answers_for(appearance_2="very-slow"))
    data = result.model_dump(by_alias=True, mode="json")

    assert set(data) == {"diagnosis", "recommendedProducts", "scores"}
    assert data["diagnosis"]["condition"] == "Slow Nail Growth"
    assert data["diagnosis"]["productCategories"] == ["growth", "treatment"]
    assert data["scores"]["growthDeficiency"] == 2
    assert data["scores"]["total"] == 0
    assert data["recommendedProducts"][0]["price"] == "10.00"


def test_unloaded_store_is_rejected():
    with pytest.raises(ValueError, match="not loaded"):
        DiagnosisPipeline(RulesetStore(), StaticCatalogReader())
