"""RulesetStore — loads the diagnosis rulesets from ``rules/v1/`` into typed models.

This is the single source of truth for rule data at runtime.  The store is
loaded once at startup and provides the question bank, the scoring trigger
table, and the ordered classification rule table.

Usage::

    store = RulesetStore()          # defaults to the packaged rules/v1/
    store.load()                    # parse all YAML files

    q = store.get_question("condition-1")
    problems = store.validate_answers(answers)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from nail_diagnosis.constants import DEFAULT_RULESET_VERSION
from nail_diagnosis.models.answers import AnswerValue, is_answered
from nail_diagnosis.models.diagnosis import ClassificationRule, Diagnosis, ScoringTrigger
from nail_diagnosis.models.question import Question

logger = logging.getLogger(__name__)


def default_ruleset_dir() -> Path:
    """Return the ruleset directory bundled with the package."""
    return Path(__file__).parent / "rules" / DEFAULT_RULESET_VERSION


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class RulesetStore:
    """Loads the YAML rulesets and provides typed lookup.

    Attributes populated after :meth:`load`:

        questions        — list[Question] in wizard order
        triggers         — list[ScoringTrigger] in table order
        rules            — list[ClassificationRule] in evaluation order
        default_diagnosis — Diagnosis used when no rule matches
    """

    def __init__(self, ruleset_dir: str | Path | None = None) -> None:
        if ruleset_dir is None:
            ruleset_dir = default_ruleset_dir()
        self._base = Path(ruleset_dir)

        # Populated by load()
        self.questions: list[Question] = []
        self.triggers: list[ScoringTrigger] = []
        self.rules: list[ClassificationRule] = []
        self.default_diagnosis: Diagnosis | None = None

        self._by_qid: dict[str, Question] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse all YAML files under the ruleset directory into typed models.

        Call this once at startup.  Raises ``FileNotFoundError`` if expected
        YAML files are missing and ``ValueError`` if the files disagree with
        each other (e.g. a trigger referencing an undeclared option).
        """
        self._load_questions()
        self._load_triggers()
        self._load_classification()
        logger.info(
            "RulesetStore loaded: %d questions, %d scoring triggers, %d rules",
            len(self.questions),
            len(self.triggers),
            len(self.rules),
        )

    def _load_questions(self) -> None:
        """Load questions.yaml, preserving YAML order."""
        questions: list[Question] = []
        by_qid: dict[str, Question] = {}
        for raw in load_yaml(self._base / "questions.yaml"):
            q = Question(**raw)
            if q.qid in by_qid:
                raise ValueError(f"Duplicate question id '{q.qid}' in questions.yaml")
            questions.append(q)
            by_qid[q.qid] = q
        self.questions = questions
        self._by_qid = by_qid

    def _load_triggers(self) -> None:
        """Load scoring.yaml and check every row against the question bank."""
        triggers: list[ScoringTrigger] = []
        for raw in load_yaml(self._base / "scoring.yaml"):
            trig = ScoringTrigger(**raw)
            q = self._by_qid.get(trig.qid)
            if q is None:
                raise ValueError(f"Scoring trigger references unknown question '{trig.qid}'")
            if not q.has_option(trig.value):
                raise ValueError(
                    f"Scoring trigger value '{trig.value}' is not an option of '{trig.qid}'"
                )
            triggers.append(trig)
        self.triggers = triggers

    def _load_classification(self) -> None:
        """Load classification.yaml: ordered rules plus the catch-all default."""
        raw = load_yaml(self._base / "classification.yaml")
        self.rules = [ClassificationRule(**r) for r in raw.get("rules", [])]
        default = raw.get("default")
        if default is None:
            raise ValueError("classification.yaml must define a 'default' diagnosis")
        self.default_diagnosis = Diagnosis(**default)

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def get_question(self, qid: str) -> Question:
        """Look up a question by id.

        Raises:
            KeyError: if the qid is not in the question bank.
        """
        return self._by_qid[qid]

    @property
    def scored_qids(self) -> list[str]:
        """Question ids that feed at least one scoring trigger, in bank order."""
        used = {t.qid for t in self.triggers}
        return [q.qid for q in self.questions if q.qid in used]

    def is_complete(self, answers: Mapping[str, AnswerValue]) -> bool:
        """True if every question in the bank has a non-empty answer."""
        return all(is_answered(answers.get(q.qid)) for q in self.questions)

    def validate_answers(self, answers: Mapping[str, AnswerValue]) -> list[str]:
        """Return a list of problems with *answers*; empty means well-formed.

        Checks for missing questions, unknown question ids, values that are
        not declared options, and list/str shape mismatches.  Never raises.
        """
        problems: list[str] = []

        for qid in answers:
            if qid not in self._by_qid:
                problems.append(f"unknown question id '{qid}'")

        for q in self.questions:
            value = answers.get(q.qid)
            if not is_answered(value):
                problems.append(f"'{q.qid}' is not answered")
                continue

            if q.question_type == "single":
                if not isinstance(value, str):
                    problems.append(f"'{q.qid}' expects a single value")
                    continue
                selected = [value]
            else:
                if not isinstance(value, list):
                    problems.append(f"'{q.qid}' expects a list of values")
                    continue
                selected = value

            for v in selected:
                if not q.has_option(v):
                    problems.append(f"'{v}' is not an option of '{q.qid}'")

        return problems
