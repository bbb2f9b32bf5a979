"""
Candidate ranker: scores a pre-fetched candidate batch for one request,
drops non-matches, orders the rest and truncates to a limit.

Usage flow
----------
1. rank_candidates(request, candidates, limit=20)
   -> list[MatchScore]  (best first)

2. rank_candidates_with_profiles(request, candidates, limit=20)
   -> list[RankedMatch]  (same order, each paired with its Candidate)

Ordering
--------
Candidates with ``total_score == 0`` are non-matches and excluded.  The rest
are sorted by:

    1. total_score          descending
    2. total_reviews        descending
    3. response_time_hours  ascending
    4. candidate_id         ascending

so the same batch always yields the same list, whatever its input order or
the number of scoring workers.

The ranker does NOT re-apply the repository's pool filters (availability,
profile completeness, pool size); see ``matching.prefilter`` for those.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable

from expert_matcher.matching.aggregator import MatchAggregator
from expert_matcher.models.candidate import Candidate
from expert_matcher.models.match import MatchScore
from expert_matcher.models.request import MatchRequest

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class RankedMatch:
    """A MatchScore coupled with the candidate it was computed for.

    Attributes:
        candidate: The scored candidate profile.
        match:     Its MatchScore against the request.
    """

    candidate: Candidate
    match:     MatchScore

    @property
    def sort_key(self) -> tuple[int, int, float, str]:
        return (
            -self.match.total_score,
            -self.candidate.total_reviews,
            self.candidate.response_time_hours,
            self.candidate.candidate_id,
        )


def rank_candidates_with_profiles(
    request:     MatchRequest,
    candidates:  Iterable[Candidate],
    limit:       int = DEFAULT_LIMIT,
    aggregator:  MatchAggregator | None = None,
    max_workers: int | None = None,
) -> list[RankedMatch]:
    """Score, filter, sort and truncate a candidate batch.

    Args:
        request:     The request every candidate is scored against.
        candidates:  Already-fetched, already-filtered candidate batch.
        limit:       Maximum number of results (default 20).
        aggregator:  Scoring aggregator; a default-weight one if omitted.
        max_workers: If > 1, score candidates on a thread pool of this size.

    Returns:
        RankedMatch list, best first, at most ``limit`` long.

    Raises:
        ValueError: If ``limit`` is negative.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}.")

    batch = list(candidates)
    if not batch or limit == 0:
        return []

    agg = aggregator or MatchAggregator()

    if max_workers is not None and max_workers > 1 and len(batch) > 1:
        with ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="match-worker"
        ) as executor:
            scores = list(executor.map(lambda c: agg.score(c, request), batch))
    else:
        scores = [agg.score(c, request) for c in batch]

    ranked = [
        RankedMatch(candidate=cand, match=score)
        for cand, score in zip(batch, scores)
        if score.total_score > 0
    ]
    ranked.sort(key=lambda r: r.sort_key)

    logger.debug(
        "Ranked request %s: %d candidates, %d matches, returning %d",
        request.request_id, len(batch), len(ranked), min(limit, len(ranked)),
    )
    return ranked[:limit]


def rank_candidates(
    request:     MatchRequest,
    candidates:  Iterable[Candidate],
    limit:       int = DEFAULT_LIMIT,
    aggregator:  MatchAggregator | None = None,
    max_workers: int | None = None,
) -> list[MatchScore]:
    """Return the top ``limit`` MatchScores for ``request`` (best first).

    An empty batch returns an empty list.  See
    :func:`rank_candidates_with_profiles` for arguments and ordering.
    """
    return [
        r.match
        for r in rank_candidates_with_profiles(
            request, candidates, limit=limit,
            aggregator=aggregator, max_workers=max_workers,
        )
    ]
