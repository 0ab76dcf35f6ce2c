"""Diagnosis submission endpoint.

Takes a completed answer set and returns the diagnosis plus recommended
products.  Nothing is persisted; "restart" is purely client-side.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from nail_diagnosis.models.answers import AnswerValue
from nail_diagnosis.models.result import RecommendationResult
from nail_diagnosis.pipeline import DiagnosisPipeline
from nail_diagnosis.ruleset import RulesetStore

from nail_diagnosis_server.dependencies import get_pipeline, get_store

router = APIRouter(tags=["diagnosis"])


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class SubmitDiagnosisRequest(BaseModel):
    """Body for POST /diagnosis."""
    answers: dict[str, AnswerValue]


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/diagnosis")
async def submit_diagnosis(
    body: SubmitDiagnosisRequest,
    store: RulesetStore = Depends(get_store),
    pipeline: DiagnosisPipeline = Depends(get_pipeline),
) -> RecommendationResult:
    """Score, classify, and recommend products for a completed questionnaire.

    Returns 422 with the list of problems if the answer set is incomplete
    or contains values that are not declared options.  A catalog outage is
    not an error: the result simply has no recommended products.
    """
    problems = store.validate_answers(body.answers)
    if problems:
        raise HTTPException(status_code=422, detail=problems)
    return await pipeline.submit(body.answers)
