"""
Shared pytest fixtures for the Expert Matcher test suite.

Provides:
  - ``fixed_now``: a fixed UTC reference time for recency windows.
  - Sample domain object factories (candidate, request) for use in
    multiple test modules.
  - ``sample_pool``: a small mixed candidate pool.
  - ``clean_env``: strips ``EXPERT_MATCHER_*`` variables for config tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from expert_matcher.models.candidate import AvailabilityStatus, Candidate
from expert_matcher.models.request import MatchRequest

FIXED_NOW = datetime(2026, 10, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def sample_candidate() -> Candidate:
    """A strong, available Seoul-based frontend candidate."""
    return Candidate(
        candidate_id="exp-001",
        name="Kim Frontend",
        location="Seoul",
        skills=["React", "Node.js"],
        tags=["remote"],
        years_experience=5,
        hourly_rate=20000,
        availability_status=AvailabilityStatus.AVAILABLE,
        rating_average=4.6,
        total_reviews=25,
        completion_rate=97,
        response_time_hours=5,
        profile_completeness=90,
        created_at=FIXED_NOW - timedelta(days=10),
    )


@pytest.fixture
def sample_request() -> MatchRequest:
    """A Seoul frontend project with a 1,000,000 KRW ceiling."""
    return MatchRequest(
        request_id="req-001",
        request_type="project",
        keywords=["react", "vue"],
        location="Seoul",
        budget_min=None,
        budget_max=1_000_000,
        title="Marketing site rebuild",
        organization_name="Acme Korea",
    )


@pytest.fixture
def sample_pool(sample_candidate) -> list[Candidate]:
    """Four candidates spanning strong / average / weak profiles."""
    return [
        sample_candidate,
        Candidate(
            candidate_id="exp-002",
            location="Busan",
            skills=["python", "django", "aws"],
            years_experience=8,
            hourly_rate=35000,
            availability_status="busy",
            rating_average=4.1,
            total_reviews=8,
            completion_rate=90,
            response_time_hours=20,
            profile_completeness=75,
            created_at=FIXED_NOW - timedelta(days=90),
        ),
        Candidate(
            candidate_id="exp-003",
            location="서울 강남구",
            skills=["vue", "javascript", "css"],
            years_experience=2,
            hourly_rate=None,
            availability_status="available",
            rating_average=4.8,
            total_reviews=3,
            completion_rate=100,
            response_time_hours=2,
            profile_completeness=65,
            created_at=FIXED_NOW - timedelta(days=3),
        ),
        Candidate(
            candidate_id="exp-004",
            location="Daegu",
            skills=["accounting"],
            years_experience=1,
            hourly_rate=90000,
            availability_status="unavailable",
            rating_average=3.0,
            total_reviews=12,
            completion_rate=60,
            response_time_hours=72,
            profile_completeness=40,
            is_available=False,
        ),
    ]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove EXPERT_MATCHER_* overrides so config tests see only their TOML."""
    for var in (
        "EXPERT_MATCHER_LOG_LEVEL",
        "EXPERT_MATCHER_OUTPUT_DIR",
        "EXPERT_MATCHER_MAX_WORKERS",
        "EXPERT_MATCHER_DEBUG",
    ):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
