"""QuestionnaireSession — explicit state for one user's pass through the wizard.

Owned by the presentation layer.  It tracks the current question and the
accumulated answers, and hands the answer set to the pipeline only once
it is complete.

Restarting while a submission is in flight is safe: every submission takes
a new token, and a result is applied only if its token is still the
latest when the catalog read resolves.

    session = QuestionnaireSession(store)
    session.start()
    session.answer("brittle")
    session.next()
    ...
    result = await session.submit(pipeline)
"""

from __future__ import annotations

import logging

from nail_diagnosis.models.answers import AnswerSet, AnswerValue, is_answered
from nail_diagnosis.models.question import Question
from nail_diagnosis.models.result import RecommendationResult
from nail_diagnosis.pipeline import DiagnosisPipeline
from nail_diagnosis.ruleset import RulesetStore

logger = logging.getLogger(__name__)


class QuestionnaireSession:
    """Wizard navigation state plus the latest recommendation result."""

    def __init__(self, store: RulesetStore) -> None:
        if not store.questions:
            raise ValueError("RulesetStore has no questions; call store.load() first")
        self._questions: list[Question] = list(store.questions)
        self.has_started = False
        self.current_index = 0
        self.answers: AnswerSet = {}
        self.result: RecommendationResult | None = None
        self.submission_token = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def start(self) -> None:
        self.has_started = True

    @property
    def current_question(self) -> Question:
        return self._questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index == len(self._questions) - 1

    @property
    def progress(self) -> float:
        """Fraction of the wizard reached, counting the current question."""
        return (self.current_index + 1) / len(self._questions)

    @property
    def can_advance(self) -> bool:
        """True once the current question has an answer."""
        return is_answered(self.answers.get(self.current_question.qid))

    @property
    def is_complete(self) -> bool:
        return all(is_answered(self.answers.get(q.qid)) for q in self._questions)

    def answer(self, value: str) -> AnswerValue:
        """Record *value* for the current question and return the stored answer.

        ``single`` questions replace the previous answer; ``multiple``
        questions toggle *value* in the selection.

        Raises:
            ValueError: if *value* is not an option of the current question.
        """
        q = self.current_question
        if not q.has_option(value):
            raise ValueError(f"'{value}' is not an option of question '{q.qid}'")

        if q.question_type == "single":
            self.answers[q.qid] = value
        else:
            selected = list(self.answers.get(q.qid) or [])
            if value in selected:
                selected.remove(value)
            else:
                selected.append(value)
            self.answers[q.qid] = selected
        return self.answers[q.qid]

    def next(self) -> Question:
        """Advance to the next question.

        Raises:
            ValueError: if the current question is unanswered or is the last one.
        """
        if not self.can_advance:
            raise ValueError(f"Question '{self.current_question.qid}' is not answered")
        if self.is_last_question:
            raise ValueError("Already at the last question; submit instead")
        self.current_index += 1
        return self.current_question

    def back(self) -> Question:
        """Go back one question (stays put on the first question)."""
        if self.current_index > 0:
            self.current_index -= 1
        return self.current_question

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit(self, pipeline: DiagnosisPipeline) -> RecommendationResult | None:
        """Run the pipeline on the completed answers.

        Returns the result, or ``None`` if the session was restarted (or
        resubmitted) while the catalog read was in flight, in which case
        the stale result is discarded.

        Raises:
            ValueError: if any question is still unanswered.
        """
        if not self.is_complete:
            raise ValueError("Cannot submit an incomplete questionnaire")

        self.submission_token += 1
        token = self.submission_token
        answers = dict(self.answers)

        result = await pipeline.submit(answers)

        if token != self.submission_token:
            logger.debug(
                "Discarding stale submission %d (latest is %d)", token, self.submission_token,
            )
            return None
        self.result = result
        return result

    def restart(self) -> None:
        """Discard answers and result and return to the welcome screen."""
        self.has_started = False
        self.current_index = 0
        self.answers = {}
        self.result = None
        # Invalidate any submission still waiting on the catalog
        self.submission_token += 1
