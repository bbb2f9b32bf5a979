"""
Tests for expert_matcher/reporting/formatters.py.

What we test
------------
format_budget_range():
  - Both bounds -> "₩min - ₩max"; otherwise None.

format_match_table():
  - Header carries title and budget; rows carry rank, id, total, components.
  - Reasons / concerns appear as +/- lines unless show_reasons=False.
  - Empty list -> "(no matching candidates)".

format_recommendations():
  - One titled block per view, "(none)" for an empty view.
"""

from __future__ import annotations

from expert_matcher.matching.segmenter import RecommendationSet
from expert_matcher.models.candidate import Candidate
from expert_matcher.models.match import MatchScore
from expert_matcher.models.request import MatchRequest
from expert_matcher.reporting.formatters import (
    format_budget_range,
    format_match_table,
    format_recommendations,
)
from expert_matcher.taxonomy.skill_taxonomy import ComponentName


def _match(cid: str = "exp-001", total: int = 79) -> MatchScore:
    return MatchScore(
        candidate_id=cid,
        total_score=total,
        breakdown={name: total for name in ComponentName},
        reasons=("Same location (Seoul)",),
        concerns=("May exceed budget",),
    )


def _request(**overrides) -> MatchRequest:
    fields = {
        "request_id": "req-1", "title": "Site rebuild",
        "budget_min": 1_000_000, "budget_max": 3_000_000,
    }
    fields.update(overrides)
    return MatchRequest(**fields)


class TestFormatBudgetRange:
    def test_both_bounds(self):
        assert format_budget_range(_request()) == "₩1,000,000 - ₩3,000,000"

    def test_one_bound_missing(self):
        assert format_budget_range(_request(budget_min=None)) is None
        assert format_budget_range(_request(budget_max=0)) is None


class TestFormatMatchTable:
    def test_rows_and_header(self):
        out = format_match_table([_match("exp-001", 79), _match("exp-002", 60)], _request())
        assert "Matches for: Site rebuild" in out
        assert "Budget: ₩1,000,000 - ₩3,000,000" in out
        assert "SKL" in out and "REP" in out
        assert "exp-001" in out and "exp-002" in out
        assert out.index("exp-001") < out.index("exp-002")
        assert "+ Same location (Seoul)" in out
        assert "- May exceed budget" in out

    def test_hide_reasons(self):
        out = format_match_table([_match()], _request(), show_reasons=False)
        assert "Same location" not in out

    def test_empty(self):
        out = format_match_table([], _request(title=None))
        assert "Matches for: req-1" in out
        assert "(no matching candidates)" in out


class TestFormatRecommendations:
    def test_blocks(self):
        c = Candidate(
            candidate_id="exp-001", name="Kim", rating_average=4.6,
            total_reviews=25, response_time_hours=5, hourly_rate=20000,
        )
        out = format_recommendations(RecommendationSet(trending=(c,)))
        assert "Trending (1)" in out
        assert "Fast responders (0)" in out
        assert "Budget-friendly (0)" in out
        assert "Top rated (0)" in out
        assert out.count("(none)") == 3
        assert "₩20,000/h" in out

    def test_negotiable_rate(self):
        c = Candidate(candidate_id="exp-003", rating_average=4.8)
        out = format_recommendations(RecommendationSet(top_rated=(c,)))
        assert "exp-003" in out
        assert "negotiable" in out
