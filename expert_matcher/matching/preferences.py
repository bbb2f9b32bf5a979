"""
Organization preferences derived from an organization's past requests.

The recommendation segmenter personalizes two of its views:

  budget_friendly  caps hourly rate at  average_budget / 40h
  top_rated        restricts to candidates whose skills overlap
                   the organization's common keywords

Both inputs come from the organization's request history, summarized here.
Fetching that history is the repository collaborator's job.
"""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from expert_matcher.models.request import MatchRequest

DEFAULT_HISTORY_SIZE = 10


class OrganizationPreferences(BaseModel):
    """Keyword and budget preferences summarized from past requests.

    Attributes:
        common_keywords: Union of lower-cased keywords across past requests.
        average_budget:  Mean of positive ``budget_max`` values, or ``None``
                         if no past request carried an upper bound.
    """

    model_config = ConfigDict(frozen=True)

    common_keywords: frozenset[str] = frozenset()
    average_budget: Optional[float] = None


def derive_preferences(
    past_requests: Iterable[MatchRequest],
    max_requests: int = DEFAULT_HISTORY_SIZE,
) -> OrganizationPreferences:
    """Summarize up to ``max_requests`` past requests into preferences.

    Args:
        past_requests: The organization's previous requests, most relevant first.
        max_requests:  How many of them to consider (default 10).

    Returns:
        OrganizationPreferences; empty history gives empty preferences.
    """
    keywords: set[str] = set()
    budgets: list[float] = []

    for i, req in enumerate(past_requests):
        if i >= max_requests:
            break
        keywords.update(req.keywords)
        if req.budget_max:
            budgets.append(req.budget_max)

    average = sum(budgets) / len(budgets) if budgets else None
    return OrganizationPreferences(
        common_keywords=frozenset(keywords),
        average_budget=average,
    )
