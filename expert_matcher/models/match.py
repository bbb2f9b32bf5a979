"""
Match output model.

``MatchScore`` is the scored, explained result of comparing one candidate
with one request.  It is frozen all the way down: the per-component
``breakdown`` is itself a frozen ``ComponentBreakdown`` rather than a dict,
so downstream consumers (notification dispatch, UI) can share and hash
results.  They read ``reasons`` / ``concerns`` verbatim and use
``total_score`` for threshold decisions such as "notify only if > 0".
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from expert_matcher.taxonomy.skill_taxonomy import ComponentName


class ComponentBreakdown(BaseModel):
    """One integer score in [0, 100] per component scorer.

    Built from a mapping keyed by ``ComponentName`` (or its string value);
    all six components are required.  Index it with a component name::

        breakdown[ComponentName.SKILLS]  # -> int
    """

    model_config = ConfigDict(frozen=True)

    skills:       int = Field(ge=0, le=100)
    location:     int = Field(ge=0, le=100)
    budget:       int = Field(ge=0, le=100)
    experience:   int = Field(ge=0, le=100)
    availability: int = Field(ge=0, le=100)
    reputation:   int = Field(ge=0, le=100)

    @model_validator(mode="before")
    @classmethod
    def coerce_component_keys(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {ComponentName(key).value: score for key, score in data.items()}
        return data

    def __getitem__(self, name: ComponentName | str) -> int:
        return getattr(self, ComponentName(name).value)

    def as_dict(self) -> dict[ComponentName, int]:
        """Return a fresh ``ComponentName`` → score dict in declaration order."""
        return {name: self[name] for name in ComponentName}


class MatchScore(BaseModel):
    """Weighted compatibility score for one (candidate, request) pair.

    Attributes:
        candidate_id: Identifier of the scored candidate.
        total_score: Weighted total, integer 0–100.
        breakdown: Per-component scores, one entry per scorer.
        reasons: Human-readable positives, in scorer declaration order.
        concerns: Human-readable negatives, in scorer declaration order.
    """

    model_config = ConfigDict(frozen=True)

    candidate_id: str
    total_score: int
    breakdown: ComponentBreakdown
    reasons: tuple[str, ...] = ()
    concerns: tuple[str, ...] = ()

    @field_validator("total_score")
    @classmethod
    def validate_total_range(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"total_score must be in [0, 100], got {v}.")
        return v
