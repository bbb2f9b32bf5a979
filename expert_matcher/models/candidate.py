"""
Candidate (service-provider profile) model.

``Candidate`` is the engine's view of one expert profile as supplied by the
repository collaborator.  Only the fields the scorers and segmenter read are
modelled; everything else on the stored profile is out of scope.

Missing optional data never raises — each scorer has an explicit fallback.
Structurally invalid data (negative experience, rating above 5, etc.) is
rejected here, at the boundary, so scoring code can trust its inputs.

``availability_status`` accepts any string: unrecognized values coerce to
``AvailabilityStatus.UNKNOWN`` instead of failing validation.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AvailabilityStatus(StrEnum):
    """Self-reported availability of a candidate."""

    AVAILABLE = "available"
    BUSY = "busy"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


def normalize_terms(values: Any) -> frozenset[str]:
    """Lower-case, strip and de-duplicate a collection of skill/keyword strings.

    Blank entries are dropped: an empty string would otherwise be a substring
    of every term and match everything.
    """
    if values is None:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(
        str(v).strip().lower() for v in values if v is not None and str(v).strip()
    )


class Candidate(BaseModel):
    """A service-provider profile being scored against a request.

    Attributes:
        candidate_id: Repository identifier of the profile.
        name: Display name, passed through for reporting only.
        location: Free-text city/region, e.g. ``"Seoul"`` or ``"서울 강남구"``.
        skills: Declared skills (lower-cased on construction).
        tags: Profile hashtags (lower-cased); also used for remote detection.
        years_experience: Total professional experience in years.
        hourly_rate: Hourly rate in KRW; ``None`` or ``0`` means negotiable.
        availability_status: Self-reported availability.
        rating_average: Mean review rating, 0.0–5.0.
        total_reviews: Number of reviews received.
        completion_rate: Percentage of engagements completed, 0–100.
        response_time_hours: Average first-response time in hours.
        profile_completeness: Profile completeness percentage, 0–100.
        created_at: When the profile was created (UTC), or ``None`` if unknown.
        is_available: Repository-level availability flag used by the
            pool pre-filter; the scorers use ``availability_status``.
    """

    model_config = ConfigDict(frozen=True)

    candidate_id: str
    name: Optional[str] = None
    location: str = ""
    skills: frozenset[str] = frozenset()
    tags: frozenset[str] = frozenset()
    years_experience: int = Field(default=0, ge=0)
    hourly_rate: Optional[float] = Field(default=None, ge=0.0)
    availability_status: AvailabilityStatus = AvailabilityStatus.UNKNOWN
    rating_average: float = Field(default=0.0, ge=0.0, le=5.0)
    total_reviews: int = Field(default=0, ge=0)
    completion_rate: float = Field(default=0.0, ge=0.0, le=100.0)
    response_time_hours: float = Field(default=24.0, ge=0.0)
    profile_completeness: float = Field(default=0.0, ge=0.0, le=100.0)
    created_at: Optional[datetime] = None
    is_available: bool = True

    @field_validator("skills", "tags", mode="before")
    @classmethod
    def normalize_skill_terms(cls, v: Any) -> frozenset[str]:
        return normalize_terms(v)

    @field_validator("location", mode="before")
    @classmethod
    def default_blank_location(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("availability_status", mode="before")
    @classmethod
    def coerce_unknown_availability(cls, v: Any) -> AvailabilityStatus:
        if isinstance(v, AvailabilityStatus):
            return v
        try:
            return AvailabilityStatus(str(v).strip().lower())
        except ValueError:
            return AvailabilityStatus.UNKNOWN

    @property
    def skill_terms(self) -> frozenset[str]:
        """Skills and tags combined — the set the skill scorer matches against."""
        return self.skills | self.tags
