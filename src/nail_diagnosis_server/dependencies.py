"""FastAPI dependency injection — provides the pipeline and ruleset store.

Both are built once in the lifespan handler and stashed on ``app.state``.
"""

from fastapi import Request

from nail_diagnosis.pipeline import DiagnosisPipeline
from nail_diagnosis.ruleset import RulesetStore


def get_pipeline(request: Request) -> DiagnosisPipeline:
    """Return the pipeline singleton from ``app.state``."""
    return request.app.state.pipeline


def get_store(request: Request) -> RulesetStore:
    """Return the RulesetStore singleton from ``app.state``."""
    return request.app.state.store
