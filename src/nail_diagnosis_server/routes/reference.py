"""Reference data endpoints — the question bank.

Read-only; the presentation layer renders the wizard from these.  No
authentication since the questionnaire is public.
"""

from fastapi import APIRouter, Depends

from nail_diagnosis.models.question import Question
from nail_diagnosis.ruleset import RulesetStore

from nail_diagnosis_server.dependencies import get_store

router = APIRouter(tags=["reference"])


def _question_dict(q: Question) -> dict:
    return {
        "qid": q.qid,
        "question": q.question,
        "question_type": q.question_type,
        "category": q.category,
        "category_caption": q.category_caption,
        "options": [{"value": o.value, "label": o.label} for o in q.options],
    }


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("/questions")
def list_questions(
    store: RulesetStore = Depends(get_store),
) -> list[dict]:
    """Return the full question bank in wizard order."""
    return [_question_dict(q) for q in store.questions]


@router.get("/questions/{qid}")
def get_question(
    qid: str,
    store: RulesetStore = Depends(get_store),
) -> dict:
    """Return a single question.  Unknown ids give 404."""
    return _question_dict(store.get_question(qid))
