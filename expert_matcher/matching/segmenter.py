"""
Recommendation segmenter: four independently filtered, independently sorted
views over one candidate pool.

View definitions
----------------
trending         created within the last 30 days, rating >= 4.0;
                 most reviews first.
fast_responders  response time <= 12h, rating >= 4.0;
                 fastest first.
budget_friendly  rating >= 4.0; if an average budget is known, hourly rate
                 <= average_budget / 40h (candidates without a rate drop out);
                 cheapest first, unknown rates last.
top_rated        rating >= 4.5; if keywords are known, at least one skill
                 must equal one of them (case-insensitive);
                 highest rating first, then most reviews.

Every view breaks remaining ties by ``candidate_id`` ascending.  Every view
rejects a negative ``limit`` with ``ValueError``.  None of
them call the six-component aggregator — they are pure filter/sort passes.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from expert_matcher.matching.preferences import OrganizationPreferences
from expert_matcher.models.candidate import Candidate, normalize_terms
from expert_matcher.utils.time_utils import is_within_days, utcnow

logger = logging.getLogger(__name__)

DEFAULT_VIEW_LIMIT = 10

TRENDING_WINDOW_DAYS = 30
MIN_RECOMMENDED_RATING = 4.0
TOP_RATED_MIN_RATING = 4.5
FAST_RESPONSE_HOURS = 12.0
BUDGET_HOURS_ASSUMPTION = 40


class RecommendationSet(BaseModel):
    """The four recommendation views for one organization."""

    model_config = ConfigDict(frozen=True)

    trending: tuple[Candidate, ...] = ()
    fast_responders: tuple[Candidate, ...] = ()
    budget_friendly: tuple[Candidate, ...] = ()
    top_rated: tuple[Candidate, ...] = ()


def trending(
    pool: Iterable[Candidate],
    now: Optional[datetime] = None,
    limit: int = DEFAULT_VIEW_LIMIT,
) -> list[Candidate]:
    """New, well-rated profiles ordered by review count."""
    _check_limit(limit)
    ref = now or utcnow()
    picked = [
        c for c in pool
        if is_within_days(c.created_at, TRENDING_WINDOW_DAYS, now=ref)
        and c.rating_average >= MIN_RECOMMENDED_RATING
    ]
    picked.sort(key=lambda c: (-c.total_reviews, c.candidate_id))
    return picked[:limit]


def fast_responders(
    pool: Iterable[Candidate],
    limit: int = DEFAULT_VIEW_LIMIT,
) -> list[Candidate]:
    """Well-rated candidates answering within 12 hours, fastest first."""
    _check_limit(limit)
    picked = [
        c for c in pool
        if c.response_time_hours <= FAST_RESPONSE_HOURS
        and c.rating_average >= MIN_RECOMMENDED_RATING
    ]
    picked.sort(key=lambda c: (c.response_time_hours, c.candidate_id))
    return picked[:limit]


def budget_friendly(
    pool: Iterable[Candidate],
    average_budget: Optional[float] = None,
    limit: int = DEFAULT_VIEW_LIMIT,
) -> list[Candidate]:
    """Well-rated candidates ordered by hourly rate, optionally capped.

    Args:
        pool:           Candidate pool.
        average_budget: Organization's historical average budget; when set,
                        rates above ``average_budget / 40`` are excluded.
        limit:          Maximum results.

    Raises:
        ValueError: If ``limit`` is negative.
    """
    _check_limit(limit)
    ceiling = average_budget / BUDGET_HOURS_ASSUMPTION if average_budget else None

    picked: list[Candidate] = []
    for c in pool:
        if c.rating_average < MIN_RECOMMENDED_RATING:
            continue
        if ceiling is not None and (not c.hourly_rate or c.hourly_rate > ceiling):
            continue
        picked.append(c)

    picked.sort(
        key=lambda c: (c.hourly_rate if c.hourly_rate else math.inf, c.candidate_id)
    )
    return picked[:limit]


def top_rated(
    pool: Iterable[Candidate],
    keywords: Optional[Iterable[str]] = None,
    limit: int = DEFAULT_VIEW_LIMIT,
) -> list[Candidate]:
    """Highest-rated candidates, optionally restricted to overlapping skills."""
    _check_limit(limit)
    wanted = normalize_terms(keywords)
    picked = [
        c for c in pool
        if c.rating_average >= TOP_RATED_MIN_RATING
        and (not wanted or not wanted.isdisjoint(c.skills))
    ]
    picked.sort(key=lambda c: (-c.rating_average, -c.total_reviews, c.candidate_id))
    return picked[:limit]


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}.")

def segment_recommendations(
    pool: Iterable[Candidate],
    preferences: Optional[OrganizationPreferences] = None,
    limit: int = DEFAULT_VIEW_LIMIT,
    now: Optional[datetime] = None,
) -> RecommendationSet:
    """Build all four views over one pool.

    Args:
        pool:        Candidate pool (already fetched and pre-filtered).
        preferences: Organization preferences; ``None`` means no
                     personalization.
        limit:       Maximum candidates per view (default 10).
        now:         Reference time for the trending window.

    Returns:
        RecommendationSet with each view in its own order.

    Raises:
        ValueError: If ``limit`` is negative.
    """
    _check_limit(limit)

    candidates = list(pool)
    prefs = preferences or OrganizationPreferences()

    result = RecommendationSet(
        trending=tuple(trending(candidates, now=now, limit=limit)),
        fast_responders=tuple(fast_responders(candidates, limit=limit)),
        budget_friendly=tuple(
            budget_friendly(candidates, average_budget=prefs.average_budget, limit=limit)
        ),
        top_rated=tuple(top_rated(candidates, keywords=prefs.common_keywords, limit=limit)),
    )
    logger.debug(
        "Segmented pool of %d: trending=%d fast=%d budget=%d top=%d",
        len(candidates), len(result.trending), len(result.fast_responders),
        len(result.budget_friendly), len(result.top_rated),
    )
    return result
