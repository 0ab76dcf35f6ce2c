"""ScoringEngine — reduces a completed answer set to four dimension scores.

Every call starts from zero and walks the trigger table once, so scoring is
idempotent and independent of the order answers were given in.  Answers
that match no trigger (unscored questions, unknown ids or values, list
answers) simply contribute nothing.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from nail_diagnosis.constants import DIMENSIONS
from nail_diagnosis.models.answers import AnswerValue
from nail_diagnosis.models.diagnosis import DimensionScores, ScoringTrigger

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Applies a fixed trigger table to answer sets.

    Args:
        triggers: the ``(qid, value, dimension, weight)`` rows, usually
            ``RulesetStore.triggers``
    """

    def __init__(self, triggers: Iterable[ScoringTrigger]) -> None:
        self._triggers = tuple(triggers)

    def score(self, answers: Mapping[str, AnswerValue]) -> DimensionScores:
        """Return the dimension scores for *answers*.

        A trigger fires only when the stored answer is exactly equal to the
        trigger value.
        """
        totals = dict.fromkeys(DIMENSIONS, 0)
        for trig in self._triggers:
            if answers.get(trig.qid) == trig.value:
                totals[trig.dimension] += trig.weight

        scores = DimensionScores(**totals)
        logger.debug("Scored %d answers: %s", len(answers), scores)
        return scores
