"""Answer set type — the wizard's accumulated responses.

Keys are question ids; values are the selected option value for ``single``
questions or the list of selected values for ``multiple`` questions.
"""

from typing import Union

AnswerValue = Union[str, list[str]]
AnswerSet = dict[str, AnswerValue]


def is_answered(value: AnswerValue | None) -> bool:
    """True if *value* counts as an answer (non-empty string or non-empty list)."""
    if value is None:
        return False
    if isinstance(value, list):
        return len(value) > 0
    return value != ""
