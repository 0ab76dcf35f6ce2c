"""nail_diagnosis — questionnaire-driven nail diagnosis and product recommendation.

Public API:
    RulesetStore         — loads the YAML question bank, scoring and rule tables
    ScoringEngine        — answer set -> four dimension scores
    Classifier           — dimension scores -> one Diagnosis (first rule wins)
    ProductMatcher       — topic tags + catalog -> up to 6 products
    DiagnosisPipeline    — runs the full flow for one submission
    QuestionnaireSession — wizard state with stale-submission protection

Catalog access:
    CatalogReader        — ABC for the "list products" query
    HttpCatalogReader    — storefront ``/api/products`` over httpx
    StaticCatalogReader  — in-memory catalog
    CatalogUnavailableError — raised by readers, recovered by the pipeline
"""

from nail_diagnosis.catalog import (
    CatalogReader,
    CatalogUnavailableError,
    HttpCatalogReader,
    StaticCatalogReader,
)
from nail_diagnosis.classifier import Classifier
from nail_diagnosis.matcher import ProductMatcher, contains_keyword
from nail_diagnosis.models import (
    AnswerSet,
    CatalogCategory,
    CatalogProduct,
    Diagnosis,
    DimensionScores,
    Question,
    RecommendationResult,
)
from nail_diagnosis.pipeline import DiagnosisPipeline
from nail_diagnosis.ruleset import RulesetStore
from nail_diagnosis.scoring import ScoringEngine
from nail_diagnosis.session import QuestionnaireSession

__all__ = [
    # Store & stages
    "RulesetStore",
    "ScoringEngine",
    "Classifier",
    "ProductMatcher",
    "contains_keyword",
    "DiagnosisPipeline",
    "QuestionnaireSession",
    # Catalog
    "CatalogReader",
    "CatalogUnavailableError",
    "HttpCatalogReader",
    "StaticCatalogReader",
    # Models
    "AnswerSet",
    "CatalogCategory",
    "CatalogProduct",
    "Diagnosis",
    "DimensionScores",
    "Question",
    "RecommendationResult",
]
