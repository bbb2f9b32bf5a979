"""
Candidate pool pre-filter — the repository-side narrowing step.

The ranking engine expects a bounded, already-filtered batch.  In production
the persistence layer applies these filters in its query; this module
reproduces them for callers that hold an in-memory pool (the CLI, tests):

  1. ``is_available`` is True
  2. ``profile_completeness`` >= threshold (50 for matching, 60 for
     recommendations)
  3. if the request has a positive ``budget_max``: hourly rate <=
     ceil(budget_max / 40) * 1.5  (candidates with a negotiable rate stay)
  4. order by rating descending (candidate_id ascending on ties)
  5. keep the first ``pool_size`` (default 100)

``rank_candidates`` never calls this itself.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from expert_matcher.models.candidate import Candidate
from expert_matcher.models.request import MatchRequest

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 100
MATCH_MIN_PROFILE_COMPLETENESS = 50.0
RECOMMEND_MIN_PROFILE_COMPLETENESS = 60.0
RATE_CAP_HOURS = 40
RATE_CAP_BUFFER = 1.5


def max_hourly_rate(budget_max: Optional[float]) -> Optional[float]:
    """Return the hourly-rate cap implied by a budget ceiling, or ``None``."""
    if not budget_max or budget_max <= 0:
        return None
    return math.ceil(budget_max / RATE_CAP_HOURS) * RATE_CAP_BUFFER


def prefilter_pool(
    candidates: Iterable[Candidate],
    request: Optional[MatchRequest] = None,
    min_profile_completeness: float = MATCH_MIN_PROFILE_COMPLETENESS,
    pool_size: int = DEFAULT_POOL_SIZE,
) -> list[Candidate]:
    """Narrow a raw candidate pool the way the repository query does.

    Args:
        candidates:               Raw candidate pool.
        request:                  If given, its ``budget_max`` caps hourly rate.
        min_profile_completeness: Minimum completeness percentage.
        pool_size:                Maximum candidates returned.

    Returns:
        Filtered candidates, highest rated first.
    """
    rate_cap = max_hourly_rate(request.budget_max) if request is not None else None

    kept: list[Candidate] = []
    dropped = 0
    for c in candidates:
        if not c.is_available or c.profile_completeness < min_profile_completeness:
            dropped += 1
            continue
        if rate_cap is not None and c.hourly_rate and c.hourly_rate > rate_cap:
            dropped += 1
            continue
        kept.append(c)

    kept.sort(key=lambda c: (-c.rating_average, c.candidate_id))
    if dropped:
        logger.debug("Pre-filter dropped %d candidate(s)", dropped)
    return kept[:pool_size]
