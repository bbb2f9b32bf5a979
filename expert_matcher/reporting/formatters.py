"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept engine output (MatchScore lists, RecommendationSet)
and return plain multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Budget range
------------
``format_budget_range()`` renders the request's budget the way downstream
notification messages quote it (``"₩1,000,000 - ₩3,000,000"``); it returns
``None`` unless both bounds are set.
"""

from __future__ import annotations

from typing import Optional

from expert_matcher.matching.segmenter import RecommendationSet
from expert_matcher.models.candidate import Candidate
from expert_matcher.models.match import MatchScore
from expert_matcher.models.request import MatchRequest
from expert_matcher.taxonomy.skill_taxonomy import ComponentName

_COMPONENT_ABBREV: dict[ComponentName, str] = {
    ComponentName.SKILLS:       "SKL",
    ComponentName.LOCATION:     "LOC",
    ComponentName.BUDGET:       "BUD",
    ComponentName.EXPERIENCE:   "EXP",
    ComponentName.AVAILABILITY: "AVL",
    ComponentName.REPUTATION:   "REP",
}


def format_budget_range(request: MatchRequest) -> Optional[str]:
    """Return ``"₩min - ₩max"`` when both budget bounds are set, else ``None``."""
    if not (request.budget_min and request.budget_max):
        return None
    return f"₩{request.budget_min:,.0f} - ₩{request.budget_max:,.0f}"


# ── Ranked matches ────────────────────────────────────────────────────────────


def format_match_table(
    matches: list[MatchScore],
    request: MatchRequest,
    show_reasons: bool = True,
) -> str:
    """Format ranked matches as an ASCII table, one row per candidate.

    Args:
        matches:      Ranked MatchScore list (already ordered).
        request:      The request they were scored against (header only).
        show_reasons: Append reason / concern lines under each row.

    Returns:
        Multi-line string.
    """
    title = request.title or request.request_id
    lines = [f"  Matches for: {title}"]
    budget = format_budget_range(request)
    if budget:
        lines.append(f"  Budget: {budget}")
    lines.append("")

    if not matches:
        lines.append("  (no matching candidates)")
        return "\n".join(lines)

    comp_header = " ".join(f"{_COMPONENT_ABBREV[c]:>4}" for c in ComponentName)
    header = f"  {'#':>3}  {'candidate':<20} {'score':>5}  {comp_header}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for rank, m in enumerate(matches, start=1):
        comps = " ".join(f"{m.breakdown[c]:>4}" for c in ComponentName)
        lines.append(f"  {rank:>3}  {m.candidate_id[:20]:<20} {m.total_score:>5}  {comps}")
        if show_reasons:
            for reason in m.reasons:
                lines.append(f"         + {reason}")
            for concern in m.concerns:
                lines.append(f"         - {concern}")

    return "\n".join(lines)


# ── Recommendation views ──────────────────────────────────────────────────────

_VIEW_TITLES: tuple[tuple[str, str], ...] = (
    ("trending",        "Trending"),
    ("fast_responders", "Fast responders"),
    ("budget_friendly", "Budget-friendly"),
    ("top_rated",       "Top rated"),
)


def format_recommendations(rec_set: RecommendationSet) -> str:
    """Format the four recommendation views as consecutive ASCII blocks."""
    blocks: list[str] = []
    for attr, title in _VIEW_TITLES:
        candidates: tuple[Candidate, ...] = getattr(rec_set, attr)
        lines = [f"  {title} ({len(candidates)})"]
        if not candidates:
            lines.append("    (none)")
        for c in candidates:
            lines.append("    " + _candidate_line(c))
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def _candidate_line(c: Candidate) -> str:
    rate = f"₩{c.hourly_rate:,.0f}/h" if c.hourly_rate else "negotiable"
    name = c.name or c.candidate_id
    return (
        f"{name[:24]:<24} rating {c.rating_average:.1f} "
        f"({c.total_reviews} reviews) | resp {c.response_time_hours:g}h | {rate}"
    )
