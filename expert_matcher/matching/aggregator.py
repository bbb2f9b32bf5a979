"""
Match aggregator: combines the six component scores into one MatchScore.

Score formula (weighted sum, integer 0–100)
-------------------------------------------
    total = round(
          skills       * 0.30
        + location     * 0.15
        + budget       * 0.20
        + experience   * 0.15
        + availability * 0.10
        + reputation   * 0.10
    )

The weights are a frozen ``MatchWeights`` model validated once at
construction to sum to 1.0; they are never re-checked per call.  Since each
component is already clamped to [0, 100] the total can only overshoot 100
through rounding, and is capped there.

Reasons and concerns are concatenated in component declaration order
(skills, location, budget, experience, availability, reputation).
"""

from __future__ import annotations

import logging
import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

from expert_matcher.matching.scorers import (
    ComponentScore,
    clamp_score,
    round_half_up,
    score_availability,
    score_budget,
    score_experience,
    score_location,
    score_reputation,
    score_skills,
)
from expert_matcher.matching.tables import DEFAULT_TABLES, MatchingTables
from expert_matcher.models.candidate import Candidate
from expert_matcher.models.match import MatchScore
from expert_matcher.models.request import MatchRequest
from expert_matcher.taxonomy.skill_taxonomy import ComponentName

logger = logging.getLogger(__name__)

_WEIGHT_SUM_TOLERANCE = 1e-9


class MatchWeights(BaseModel):
    """Per-component weights.  Must be non-negative and sum to exactly 1.0."""

    model_config = ConfigDict(frozen=True)

    skills:       float = Field(default=0.30, ge=0.0)
    location:     float = Field(default=0.15, ge=0.0)
    budget:       float = Field(default=0.20, ge=0.0)
    experience:   float = Field(default=0.15, ge=0.0)
    availability: float = Field(default=0.10, ge=0.0)
    reputation:   float = Field(default=0.10, ge=0.0)

    @model_validator(mode="after")
    def validate_sum(self) -> "MatchWeights":
        total = sum(self.as_dict().values())
        if not math.isclose(total, 1.0, rel_tol=0.0, abs_tol=_WEIGHT_SUM_TOLERANCE):
            raise ValueError(f"Match weights must sum to 1.0, got {total:.6f}.")
        return self

    def as_dict(self) -> dict[ComponentName, float]:
        return {name: getattr(self, name.value) for name in ComponentName}


class MatchAggregator:
    """Scores one candidate against one request using injected weights/tables.

    Instances hold only immutable configuration, so one aggregator can be
    shared across threads and calls.

    Args:
        weights: Component weights (default: the standard 30/15/20/15/10/10).
        tables:  Lookup tables handed to the table-driven scorers.
    """

    def __init__(
        self,
        weights: MatchWeights | None = None,
        tables: MatchingTables | None = None,
    ) -> None:
        self.weights = weights or MatchWeights()
        self.tables = tables or DEFAULT_TABLES
        self._weight_map = self.weights.as_dict()

    def components(
        self, candidate: Candidate, request: MatchRequest
    ) -> dict[ComponentName, ComponentScore]:
        """Run all six scorers, keyed in declaration order."""
        return {
            ComponentName.SKILLS:       score_skills(candidate, request, self.tables),
            ComponentName.LOCATION:     score_location(candidate, request, self.tables),
            ComponentName.BUDGET:       score_budget(candidate, request),
            ComponentName.EXPERIENCE:   score_experience(candidate, request, self.tables),
            ComponentName.AVAILABILITY: score_availability(candidate),
            ComponentName.REPUTATION:   score_reputation(candidate),
        }

    def score(self, candidate: Candidate, request: MatchRequest) -> MatchScore:
        """Compute the weighted MatchScore for one (candidate, request) pair."""
        parts = self.components(candidate, request)

        weighted = sum(self._weight_map[name] * part.score for name, part in parts.items())
        # Settle float noise (72.49999999 -> 72.5) before half-up rounding.
        total = min(100, clamp_score(round_half_up(round(weighted, 6))))

        reasons: list[str] = []
        concerns: list[str] = []
        for part in parts.values():
            reasons.extend(part.reasons)
            concerns.extend(part.concerns)

        logger.debug(
            "Scored candidate %s for request %s: %d",
            candidate.candidate_id, request.request_id, total,
            extra={"candidate_id": candidate.candidate_id, "request_id": request.request_id},
        )

        return MatchScore(
            candidate_id=candidate.candidate_id,
            total_score=total,
            breakdown={name: part.score for name, part in parts.items()},
            reasons=tuple(reasons),
            concerns=tuple(concerns),
        )


def calculate_match_score(
    candidate: Candidate,
    request: MatchRequest,
    aggregator: MatchAggregator | None = None,
) -> MatchScore:
    """Convenience wrapper: score with ``aggregator`` or the default one."""
    return (aggregator or _DEFAULT_AGGREGATOR).score(candidate, request)


_DEFAULT_AGGREGATOR = MatchAggregator()
