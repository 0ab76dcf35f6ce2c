"""Scoring and classification models.

  - ScoringTrigger: one ``(qid, value) -> dimension += weight`` row
  - DimensionScores: the four accumulators produced by the scoring engine
  - Condition / ClassificationRule: one ordered row of the rule table
  - Diagnosis: the classifier's output, consumed by the product matcher

API-facing models serialise with camelCase aliases (``growthDeficiency``,
``productCategories``) to match the storefront's JSON, while Python code and
the YAML rulesets use the snake_case field names.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

Severity = Literal["mild", "moderate", "severe"]
Dimension = Literal["brittleness", "dryness", "damage", "growth_deficiency"]

# "total" is derived: brittleness + dryness + damage (growth is excluded).
Metric = Literal["brittleness", "dryness", "damage", "growth_deficiency", "total"]


class ScoringTrigger(BaseModel):
    """Adds ``weight`` to ``dimension`` when answer ``qid`` equals ``value``."""

    model_config = ConfigDict(frozen=True)

    qid: str
    value: str
    dimension: Dimension
    weight: int = Field(ge=1, le=3)


class DimensionScores(BaseModel):
    """Non-negative per-dimension scores for one completed answer set."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True,
    )

    brittleness: int = Field(default=0, ge=0)
    dryness: int = Field(default=0, ge=0)
    damage: int = Field(default=0, ge=0)
    growth_deficiency: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return self.brittleness + self.dryness + self.damage


class Diagnosis(BaseModel):
    """Condition label, severity tier, static advice, and topic tags."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True,
    )

    condition: str
    severity: Severity
    description: str
    recommendations: List[str]
    # Exposed as "productCategories" on the wire, like the storefront.
    topic_tags: List[str] = Field(alias="productCategories")


class Condition(BaseModel):
    """A single numeric comparison against one metric.

    Operators: ge, gt, le, lt, eq.
    """

    model_config = ConfigDict(frozen=True)

    metric: Metric
    op: Literal["ge", "gt", "le", "lt", "eq"]
    value: int


class ClassificationRule(BaseModel):
    """If ANY condition in ``when_any`` holds, the rule yields ``then``."""

    model_config = ConfigDict(frozen=True)

    when_any: List[Condition] = Field(min_length=1)
    then: Diagnosis
