"""DiagnosisPipeline — orchestrates one questionnaire submission.

Data flows strictly forward::

    answers ──► ScoringEngine ──► Classifier ──► ProductMatcher ──► result
                                                     ▲
                                   CatalogReader ────┘ (one async read)

Scoring and classification are synchronous and pure.  The catalog read is
the only suspension point; if it fails the submission still succeeds with
an empty product list.

The pipeline holds no per-submission state, so a single instance can serve
concurrent submissions.

Usage::

    store = RulesetStore()
    store.load()
    pipeline = DiagnosisPipeline(store, HttpCatalogReader("https://shop.example.com"))

    result = await pipeline.submit(answers)
    result.diagnosis.condition        # "Dry and Brittle Nails"
    result.recommended_products       # up to 6 CatalogProduct
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from nail_diagnosis.catalog import CatalogReader, CatalogUnavailableError
from nail_diagnosis.classifier import Classifier
from nail_diagnosis.matcher import ProductMatcher
from nail_diagnosis.models.answers import AnswerValue
from nail_diagnosis.models.catalog import CatalogProduct
from nail_diagnosis.models.diagnosis import Diagnosis, DimensionScores
from nail_diagnosis.models.result import RecommendationResult
from nail_diagnosis.ruleset import RulesetStore
from nail_diagnosis.scoring import ScoringEngine

logger = logging.getLogger(__name__)


class DiagnosisPipeline:
    """Score, classify, and recommend products for a completed answer set.

    Args:
        store: a loaded :class:`RulesetStore` (triggers and rule table)
        catalog: the :class:`CatalogReader` used for the product listing
        matcher: optional :class:`ProductMatcher` override
    """

    def __init__(
        self,
        store: RulesetStore,
        catalog: CatalogReader,
        matcher: ProductMatcher | None = None,
    ) -> None:
        if store.default_diagnosis is None:
            raise ValueError("RulesetStore is not loaded; call store.load() first")
        self._store = store
        self._catalog = catalog
        self._scoring = ScoringEngine(store.triggers)
        self._classifier = Classifier(store.rules, store.default_diagnosis)
        self._matcher = matcher or ProductMatcher()

    # ==================================================================
    # Synchronous stages
    # ==================================================================

    def score(self, answers: Mapping[str, AnswerValue]) -> DimensionScores:
        return self._scoring.score(answers)

    def classify(self, scores: DimensionScores) -> Diagnosis:
        return self._classifier.classify(scores)

    def diagnose(self, answers: Mapping[str, AnswerValue]) -> tuple[DimensionScores, Diagnosis]:
        """Score and classify *answers* without touching the catalog."""
        scores = self.score(answers)
        return scores, self.classify(scores)

    # ==================================================================
    # Full submission
    # ==================================================================

    async def submit(self, answers: Mapping[str, AnswerValue]) -> RecommendationResult:
        """Run the full flow for one completed answer set.

        Never raises for catalog problems: an unavailable catalog yields a
        result with no recommended products.
        """
        scores, diagnosis = self.diagnose(answers)
        logger.info(
            "Diagnosis: %s (%s) total=%d", diagnosis.condition, diagnosis.severity, scores.total,
        )

        products = await self.recommend(diagnosis.topic_tags)
        return RecommendationResult(
            diagnosis=diagnosis,
            recommended_products=products,
            scores=scores,
        )

    async def recommend(self, tags: Iterable[str]) -> list[CatalogProduct]:
        """Fetch the catalog once and match *tags* against it."""
        catalog = await self._fetch_catalog()
        return self._matcher.match(tags, catalog)

    async def _fetch_catalog(self) -> list[CatalogProduct]:
        """Return the catalog, or an empty list if it is unavailable."""
        try:
            return await self._catalog.list_products()
        except CatalogUnavailableError as exc:
            logger.warning("Catalog unavailable, recommending no products: %s", exc)
            return []
