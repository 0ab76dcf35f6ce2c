"""Recommendation result — the contract between the pipeline and API callers.

Serialised with camelCase aliases so the presentation layer receives
``{"diagnosis": ..., "recommendedProducts": [...], "scores": ...}``.
"""

from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from nail_diagnosis.models.catalog import CatalogProduct
from nail_diagnosis.models.diagnosis import Diagnosis, DimensionScores


class RecommendationResult(BaseModel):
    """Diagnosis plus at most six recommended products, in catalog order.

    An empty ``recommended_products`` list is a valid outcome (catalog
    unavailable or nothing matched and nothing featured); the UI then
    offers a generic "browse all products" action.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True,
    )

    diagnosis: Diagnosis
    recommended_products: List[CatalogProduct]
    scores: DimensionScores
