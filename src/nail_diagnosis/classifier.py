"""Classifier — maps dimension scores to exactly one Diagnosis.

Rules come from ``classification.yaml`` and are evaluated in order; the
first rule whose conditions match wins and later rules are never looked
at.  Within a rule the conditions are OR-ed.  If nothing matches, the
catch-all default diagnosis is returned, so classification is total.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from pydantic.alias_generators import to_camel

from nail_diagnosis.models.diagnosis import (
    ClassificationRule,
    Condition,
    Diagnosis,
    DimensionScores,
)

logger = logging.getLogger(__name__)


def _metrics(scores: DimensionScores | Mapping[str, Any]) -> dict[str, int]:
    """Flatten *scores* into ``{metric: value}`` including the derived total.

    Plain mappings may use snake_case or camelCase keys; absent fields
    count as 0.
    """
    if isinstance(scores, DimensionScores):
        values = {
            "brittleness": scores.brittleness,
            "dryness": scores.dryness,
            "damage": scores.damage,
            "growth_deficiency": scores.growth_deficiency,
        }
    else:
        values = {}
        for name in ("brittleness", "dryness", "damage", "growth_deficiency"):
            raw = scores.get(name, scores.get(to_camel(name)))
            values[name] = raw or 0

    values["total"] = values["brittleness"] + values["dryness"] + values["damage"]
    return values


class Classifier:
    """Evaluates an ordered rule table against dimension scores.

    Args:
        rules: ordered classification rules, usually ``RulesetStore.rules``
        default: the diagnosis returned when no rule matches
    """

    def __init__(self, rules: Iterable[ClassificationRule], default: Diagnosis) -> None:
        self._rules = tuple(rules)
        self._default = default

    def classify(self, scores: DimensionScores | Mapping[str, Any]) -> Diagnosis:
        """Return the diagnosis of the first matching rule, else the default."""
        metrics = _metrics(scores)
        for index, rule in enumerate(self._rules, 1):
            if any(self._eval_condition(cond, metrics) for cond in rule.when_any):
                logger.debug("Rule %d matched %s -> %s", index, metrics, rule.then.condition)
                return rule.then
        logger.debug("No rule matched %s -> default", metrics)
        return self._default

    @staticmethod
    def _eval_condition(cond: Condition, metrics: Mapping[str, int]) -> bool:
        """Apply one numeric comparison to the named metric.

        ``op`` is already restricted to ge / gt / le / lt / eq by ``Condition``.
        """
        actual = metrics.get(cond.metric, 0)
        if cond.op == "ge":
            return actual >= cond.value
        if cond.op == "gt":
            return actual > cond.value
        if cond.op == "le":
            return actual <= cond.value
        if cond.op == "lt":
            return actual < cond.value
        return actual == cond.value
