"""
Immutable lookup tables injected into the scorers.

``MatchingTables`` bundles every static table a scorer reads:

  skill_relations   keyword → related terms (partial-credit skill matching)
  metro_clusters    region  → city names treated as "nearby"
  remote_tags       tag synonyms that mark a candidate as remote-capable
  experience        ``ExperiencePolicy`` — request type → required years

The scorers never read module globals; they receive a ``MatchingTables``
instance (``DEFAULT_TABLES`` unless the caller passes another).  Tests and
config overrides build their own instance with ``with_overrides()``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from expert_matcher.taxonomy.region_taxonomy import METRO_CLUSTERS, REMOTE_TAGS
from expert_matcher.taxonomy.skill_taxonomy import SKILL_RELATIONS


class ExperiencePolicy(BaseModel):
    """Required-years policy keyed on request type and category.

    Evaluated in order (first match wins):
        1. type in ``consulting_types`` OR category contains a
           ``strategy_markers`` entry  → ``senior_years``
        2. type in ``mentoring_types``  → ``mentor_years``
        3. anything else                → ``default_years``
    """

    model_config = ConfigDict(frozen=True)

    consulting_types: frozenset[str] = frozenset({"consulting"})
    strategy_markers: tuple[str, ...] = ("전략", "strategy")
    mentoring_types: frozenset[str] = frozenset({"mentoring"})
    senior_years: int = Field(default=7, gt=0)
    mentor_years: int = Field(default=5, gt=0)
    default_years: int = Field(default=3, gt=0)

    def required_years(self, request_type: str, category: Optional[str]) -> int:
        """Return the experience threshold in years for a request."""
        rtype = (request_type or "").strip().lower()
        cat = (category or "").lower()
        if rtype in self.consulting_types or any(m in cat for m in self.strategy_markers):
            return self.senior_years
        if rtype in self.mentoring_types:
            return self.mentor_years
        return self.default_years


class MatchingTables(BaseModel):
    """All static configuration tables read by the component scorers."""

    model_config = ConfigDict(frozen=True)

    skill_relations: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(SKILL_RELATIONS)
    )
    metro_clusters: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(METRO_CLUSTERS)
    )
    remote_tags: frozenset[str] = REMOTE_TAGS
    experience: ExperiencePolicy = ExperiencePolicy()

    @field_validator("skill_relations", "metro_clusters")
    @classmethod
    def lowercase_table(cls, v: dict[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
        return {
            key.strip().lower(): tuple(t.strip().lower() for t in terms if t.strip())
            for key, terms in v.items()
        }

    @field_validator("remote_tags")
    @classmethod
    def lowercase_tags(cls, v: frozenset[str]) -> frozenset[str]:
        return frozenset(t.strip().lower() for t in v if t.strip())

    def related_terms(self, keyword: str) -> tuple[str, ...]:
        """Return the adjacency-table entries for ``keyword`` (may be empty)."""
        return self.skill_relations.get(keyword, ())

    def same_metro_cluster(self, location_a: str, location_b: str) -> bool:
        """Return ``True`` if both (lower-cased) locations fall in one cluster."""
        for cities in self.metro_clusters.values():
            in_a = any(city in location_a for city in cities)
            in_b = any(city in location_b for city in cities)
            if in_a and in_b:
                return True
        return False

    def is_remote_capable(self, tags: frozenset[str]) -> bool:
        return not self.remote_tags.isdisjoint(tags)

    def with_overrides(
        self,
        skill_relations: Optional[dict[str, list[str]]] = None,
        metro_clusters: Optional[dict[str, list[str]]] = None,
        remote_tags: Optional[list[str]] = None,
        replace: bool = False,
    ) -> "MatchingTables":
        """Return a new instance with entries added (or replaced) per table.

        Args:
            skill_relations: Keyword → related terms to merge in.
            metro_clusters:  Cluster → city names to merge in.
            remote_tags:     Additional remote-capable tag synonyms.
            replace:         If ``True`` each given table replaces the
                             current one instead of being merged into it.

        Returns:
            A new ``MatchingTables``; ``self`` is unchanged.
        """
        relations = {} if replace and skill_relations is not None else dict(self.skill_relations)
        for key, terms in (skill_relations or {}).items():
            relations[key] = tuple(terms)

        clusters = {} if replace and metro_clusters is not None else dict(self.metro_clusters)
        for key, cities in (metro_clusters or {}).items():
            clusters[key] = tuple(cities)

        tags = frozenset() if replace and remote_tags is not None else self.remote_tags
        tags = tags | frozenset(remote_tags or ())

        return MatchingTables(
            skill_relations=relations,
            metro_clusters=clusters,
            remote_tags=tags,
            experience=self.experience,
        )


DEFAULT_TABLES = MatchingTables()
