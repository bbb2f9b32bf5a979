"""
Request (demand posting) model.

A ``MatchRequest`` is what an organization posts: what kind of engagement it
is, which skills it needs, where, and for how much.  Keywords are the primary
matching signal; everything else is optional.

Budget bounds follow the marketplace convention that ``0`` means "not set",
so ``budget_min=0, budget_max=0`` is the same as no budget at all.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from expert_matcher.models.candidate import normalize_terms


class MatchRequest(BaseModel):
    """A demand posting that candidates are scored against.

    Attributes:
        request_id: Repository identifier of the posting.
        request_type: Engagement type, e.g. ``"project"``, ``"consulting"``,
            ``"mentoring"``.  Selects the experience threshold.
        category: Free-text category; a strategy marker here also raises the
            experience threshold.
        keywords: Required skills / topics (lower-cased on construction).
        location: Required location, or ``None`` for no constraint.
        budget_min: Lower budget bound (KRW), or ``None``.
        budget_max: Upper budget bound (KRW), or ``None``.
        title: Posting title (pass-through for notification consumers).
        description: Posting body (pass-through).
        organization_name: Posting organization (pass-through).
    """

    model_config = ConfigDict(frozen=True)

    request_id: str
    request_type: str = "project"
    category: Optional[str] = None
    keywords: frozenset[str] = frozenset()
    location: Optional[str] = None
    budget_min: Optional[float] = Field(default=None, ge=0.0)
    budget_max: Optional[float] = Field(default=None, ge=0.0)
    title: Optional[str] = None
    description: Optional[str] = None
    organization_name: Optional[str] = None

    @field_validator("keywords", mode="before")
    @classmethod
    def normalize_keywords(cls, v: Any) -> frozenset[str]:
        return normalize_terms(v)

    @field_validator("location", mode="before")
    @classmethod
    def blank_location_is_none(cls, v: Any) -> Optional[str]:
        if v is None or not str(v).strip():
            return None
        return str(v)

    @model_validator(mode="after")
    def validate_budget_bounds(self) -> "MatchRequest":
        if self.budget_min and self.budget_max and self.budget_min > self.budget_max:
            raise ValueError(
                f"budget_min ({self.budget_min}) must be <= "
                f"budget_max ({self.budget_max})."
            )
        return self

    @property
    def has_budget(self) -> bool:
        """``True`` if at least one budget bound is set to a positive value."""
        return bool(self.budget_min) or bool(self.budget_max)
