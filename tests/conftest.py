import pytest

from helpers.answers import answers_with, mildest_answers
from nail_diagnosis.ruleset import RulesetStore


@pytest.fixture(scope="session")
def store():
    """Load the packaged RulesetStore once for the entire test session."""
    s = RulesetStore()
    s.load()
    return s


@pytest.fixture
def mildest(store):
    """A complete answer set with the first (mildest) option everywhere."""
    return mildest_answers(store)


@pytest.fixture
def answers_for(store):
    """Factory: complete answer set, mildest except for the given overrides."""
    def _build(**overrides):
        return answers_with(store, overrides)
    return _build
