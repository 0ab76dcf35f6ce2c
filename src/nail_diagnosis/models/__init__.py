"""Public model re-exports for nail_diagnosis.

Consumers should import from ``nail_diagnosis.models`` rather than
reaching into sub-modules directly.
"""

# --- Answers ---
from nail_diagnosis.models.answers import AnswerSet, AnswerValue, is_answered

# --- Catalog ---
from nail_diagnosis.models.catalog import CatalogCategory, CatalogProduct

# --- Scoring / classification ---
from nail_diagnosis.models.diagnosis import (
    ClassificationRule,
    Condition,
    Diagnosis,
    Dimension,
    DimensionScores,
    Metric,
    ScoringTrigger,
    Severity,
)

# --- Questions ---
from nail_diagnosis.models.question import CATEGORY_CAPTIONS, Option, Question

# --- Result ---
from nail_diagnosis.models.result import RecommendationResult

__all__ = [
    # Answers
    "AnswerSet",
    "AnswerValue",
    "is_answered",
    # Catalog
    "CatalogCategory",
    "CatalogProduct",
    # Scoring / classification
    "ClassificationRule",
    "Condition",
    "Diagnosis",
    "Dimension",
    "DimensionScores",
    "Metric",
    "ScoringTrigger",
    "Severity",
    # Questions
    "CATEGORY_CAPTIONS",
    "Option",
    "Question",
    # Result
    "RecommendationResult",
]
