"""Question bank models for the nail diagnosis questionnaire.

Each question maps to one wizard screen:

  - single: pick exactly one option (the answer is the option value)
  - multiple: pick one or more options (the answer is a list of values)

``category`` groups questions for display only ("About your nail
condition", ...).  Scoring never looks at it.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, model_validator


# Caption shown under the question prompt, keyed by category.
CATEGORY_CAPTIONS: dict[str, str] = {
    "condition": "About your nail condition",
    "habits": "About your nail care habits",
    "appearance": "About your nail appearance",
}


class Option(BaseModel):
    """A selectable answer with a machine value and a display label."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str


class Question(BaseModel):
    """One questionnaire entry, loaded from ``questions.yaml``."""

    model_config = ConfigDict(frozen=True)

    qid: str
    question: str
    question_type: Literal["single", "multiple"] = "single"
    options: List[Option]
    category: Literal["condition", "habits", "appearance"]

    @model_validator(mode="after")
    def _chk(self):
        if not self.options:
            raise ValueError(f"question {self.qid} has no options")
        values = [o.value for o in self.options]
        if len(set(values)) != len(values):
            raise ValueError(f"question {self.qid} has duplicate option values")
        return self

    @property
    def category_caption(self) -> str:
        return CATEGORY_CAPTIONS[self.category]

    def has_option(self, value: str) -> bool:
        return any(o.value == value for o in self.options)
