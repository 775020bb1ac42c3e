"""
Pytest configuration and fixtures.

Shared candidate data and factories. The scripted completion provider
lives in tests/mocks/llm_mocks.py.
"""

import pytest

from core.query.models import RoleRequirement
from etl.candidates.models import NormalizedCandidate
from tests.fixtures.candidate_fixtures import SAMPLE_RECORDS


@pytest.fixture
def sample_records():
    return [dict(record) for record in SAMPLE_RECORDS]


@pytest.fixture
def make_candidate():
    """Factory for NormalizedCandidate with sensible defaults."""
    def _make(candidate_id="c1", skills=None, years=3.0, **kwargs):
        return NormalizedCandidate(
            id=candidate_id,
            name=kwargs.pop('name', f"Candidate {candidate_id}"),
            email=kwargs.pop('email', f"{candidate_id}@example.com"),
            skills=list(skills or []),
            years_of_experience=years,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_role():
    """Factory for RoleRequirement."""
    def _make(title="Backend Engineer", **kwargs):
        return RoleRequirement(title=title, **kwargs)
    return _make
