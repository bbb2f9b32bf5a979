"""
Component scorers: six independent pure functions, each mapping
(candidate, request) → ComponentScore(score 0–100, reasons, concerns).

Scorer summary
--------------
skills (0–100):
    direct  = keywords that are a substring of some candidate skill/tag,
              or contain one.
    related = remaining keywords whose adjacency-table terms appear in a
              candidate skill/tag.
    score   = min(100, round(100 * (direct + 0.5 * related) / n_keywords)).
    No keywords → neutral 50.

location (30 / 70 / 80 / 85 / 100):
    no constraint 85 · exact 100 · same metro cluster 80 ·
    remote-capable tag 70 · otherwise 30.

budget (30 / 60 / 70 / 80 / 100):
    estimated cost = hourly_rate * 60h.
    no rate 70 · no bounds 80 · within [min, max] 100 · below min 60 ·
    ≤ 20% over max 70 · further over 30.

experience (40 / 70 / 90 / 100):
    ratio = years / required (7 consulting/strategy, 5 mentoring, 3 default).
    ≥1.5 → 100 · ≥1.0 → 90 · ≥0.7 → 70 · else 40.

availability (20 / 60 / 70 / 100):
    available 100 · busy 70 · unavailable 20 · unknown 60.

reputation (0–100):
    baseline 50, adjusted by rating, review count, completion rate and
    response time; clamped.

Rounding is half-up (``floor(x + 0.5)``) everywhere, so ``round(62.5)`` is
63 rather than Python's banker's 62.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from expert_matcher.matching.tables import DEFAULT_TABLES, MatchingTables
from expert_matcher.models.candidate import AvailabilityStatus, Candidate
from expert_matcher.models.request import MatchRequest

EMPTY_KEYWORD_SCORE = 50
LOW_MATCH_THRESHOLD = 30.0
MIN_SKILL_PROFILE_SIZE = 3
RELATED_MATCH_WEIGHT = 0.5

FIXED_HOUR_ESTIMATE = 60
OVER_BUDGET_TOLERANCE = 1.2


@dataclass(frozen=True)
class ComponentScore:
    """Result of one component scorer.

    Attributes:
        score:    Integer 0–100.
        reasons:  Positive explanation strings (may be empty).
        concerns: Negative explanation strings (may be empty).
    """

    score:    int
    reasons:  tuple[str, ...] = ()
    concerns: tuple[str, ...] = ()


# ── Skills ────────────────────────────────────────────────────────────────────

def score_skills(
    candidate: Candidate,
    request: MatchRequest,
    tables: MatchingTables = DEFAULT_TABLES,
) -> ComponentScore:
    """Score keyword coverage by the candidate's skills and tags.

    Args:
        candidate: Candidate profile (skills/tags already lower-cased).
        request:   Request whose keywords are matched.
        tables:    Supplies the skill-adjacency table.

    Returns:
        ComponentScore with the matched keyword names in the reasons.
    """
    terms = candidate.skill_terms
    keywords = sorted(request.keywords)
    reasons: list[str] = []
    concerns: list[str] = []

    if not keywords:
        score = EMPTY_KEYWORD_SCORE
    else:
        direct = [kw for kw in keywords if _is_direct_match(kw, terms)]
        related = [
            kw for kw in keywords
            if kw not in direct and _is_related_match(kw, terms, tables)
        ]
        weighted = len(direct) + RELATED_MATCH_WEIGHT * len(related)
        match_pct = min(100.0, weighted / len(keywords) * 100.0)
        score = min(100, round_half_up(match_pct))

        if direct:
            reasons.append(
                f"{len(direct)} core skill match(es) ({', '.join(direct)})"
            )
        if related:
            reasons.append(f"{len(related)} related skill(s)")
        if match_pct < LOW_MATCH_THRESHOLD:
            concerns.append("Low skill match with requested keywords")

    if len(terms) < MIN_SKILL_PROFILE_SIZE:
        concerns.append("Thin skill profile")

    return ComponentScore(clamp_score(score), tuple(reasons), tuple(concerns))


def _is_direct_match(keyword: str, terms: frozenset[str]) -> bool:
    return any(keyword in term or term in keyword for term in terms)


def _is_related_match(
    keyword: str, terms: frozenset[str], tables: MatchingTables
) -> bool:
    return any(
        related in term
        for related in tables.related_terms(keyword)
        for term in terms
    )


# ── Location ──────────────────────────────────────────────────────────────────

def score_location(
    candidate: Candidate,
    request: MatchRequest,
    tables: MatchingTables = DEFAULT_TABLES,
) -> ComponentScore:
    """Score geographic fit; exactly one reason or concern per outcome."""
    if request.location is None:
        return ComponentScore(85, reasons=("No location constraint",))

    cand_loc = candidate.location.strip().lower()
    req_loc = request.location.strip().lower()

    if cand_loc and cand_loc == req_loc:
        return ComponentScore(100, reasons=(f"Same location ({candidate.location})",))

    if cand_loc and tables.same_metro_cluster(cand_loc, req_loc):
        return ComponentScore(80, reasons=(f"Nearby location ({candidate.location})",))

    if tables.is_remote_capable(candidate.tags):
        return ComponentScore(70, reasons=("Available for remote work",))

    shown = candidate.location or "unspecified"
    return ComponentScore(
        30, concerns=(f"Location mismatch ({shown} vs {request.location})",)
    )


# ── Budget ────────────────────────────────────────────────────────────────────

def score_budget(candidate: Candidate, request: MatchRequest) -> ComponentScore:
    """Score whether the candidate's estimated project cost fits the budget.

    Cost is ``hourly_rate * FIXED_HOUR_ESTIMATE`` — a fixed 60-hour project
    assumption, not derived from the request.
    """
    rate = candidate.hourly_rate
    if not rate:
        return ComponentScore(70, reasons=("Rate negotiable",))

    if not request.has_budget:
        return ComponentScore(80, reasons=("No budget constraint",))

    min_budget = request.budget_min or 0.0
    max_budget = request.budget_max or math.inf
    estimated_cost = rate * FIXED_HOUR_ESTIMATE

    if min_budget <= estimated_cost <= max_budget:
        return ComponentScore(
            100, reasons=(f"Within budget (hourly rate ₩{rate:,.0f})",)
        )

    if estimated_cost < min_budget:
        return ComponentScore(
            60, concerns=("Rate may be below budget expectations",)
        )

    if estimated_cost / max_budget <= OVER_BUDGET_TOLERANCE:
        return ComponentScore(70, concerns=("May exceed budget",))

    return ComponentScore(
        30, concerns=(f"Over budget (hourly rate ₩{rate:,.0f})",)
    )


# ── Experience ────────────────────────────────────────────────────────────────

def score_experience(
    candidate: Candidate,
    request: MatchRequest,
    tables: MatchingTables = DEFAULT_TABLES,
) -> ComponentScore:
    """Score years of experience against the request-type threshold."""
    years = candidate.years_experience
    required = tables.experience.required_years(request.request_type, request.category)
    ratio = years / required

    if ratio >= 1.5:
        return ComponentScore(100, reasons=(f"Extensive experience ({years} yrs)",))
    if ratio >= 1.0:
        return ComponentScore(90, reasons=(f"Suitable experience ({years} yrs)",))
    if ratio >= 0.7:
        return ComponentScore(
            70, concerns=(f"Experience may be insufficient ({years} yrs)",)
        )
    return ComponentScore(
        40, concerns=(f"Experience shortfall ({years} yrs, {required} required)",)
    )


# ── Availability ──────────────────────────────────────────────────────────────

_AVAILABILITY_TABLE: dict[AvailabilityStatus, ComponentScore] = {
    AvailabilityStatus.AVAILABLE:   ComponentScore(100, reasons=("Can start immediately",)),
    AvailabilityStatus.BUSY:        ComponentScore(70, reasons=("Can start after scheduling",)),
    AvailabilityStatus.UNAVAILABLE: ComponentScore(20, concerns=("Currently unavailable",)),
    AvailabilityStatus.UNKNOWN:     ComponentScore(60, concerns=("Availability unclear",)),
}


def score_availability(candidate: Candidate) -> ComponentScore:
    return _AVAILABILITY_TABLE.get(
        candidate.availability_status,
        _AVAILABILITY_TABLE[AvailabilityStatus.UNKNOWN],
    )


# ── Reputation ────────────────────────────────────────────────────────────────

def score_reputation(candidate: Candidate) -> ComponentScore:
    """Score track record from rating, review volume, completion and response.

    Adjustments to a baseline of 50:
        rating   ≥4.5 +25 · ≥4.0 +15 · <3.5 with >5 reviews −20
        reviews  ≥20 +15 · ≥5 +10 · <3 concern only
        completion ≥95 +10 · <80 −15
        response ≤12h +10 · >48h −10
    """
    reasons: list[str] = []
    concerns: list[str] = []
    score = 50

    rating = candidate.rating_average
    reviews = candidate.total_reviews

    if rating >= 4.5:
        score += 25
        reasons.append(f"High rating ({rating:.1f})")
    elif rating >= 4.0:
        score += 15
        reasons.append(f"Good rating ({rating:.1f})")
    elif rating < 3.5 and reviews > 5:
        score -= 20
        concerns.append(f"Low rating ({rating:.1f})")

    if reviews >= 20:
        score += 15
        reasons.append(f"Many reviews ({reviews})")
    elif reviews >= 5:
        score += 10
    elif reviews < 3:
        concerns.append("Insufficient reviews")

    completion = candidate.completion_rate
    if completion >= 95:
        score += 10
        reasons.append(f"High completion rate ({completion:g}%)")
    elif completion < 80:
        score -= 15
        concerns.append(f"Low completion rate ({completion:g}%)")

    response = candidate.response_time_hours
    if response <= 12:
        score += 10
        reasons.append("Fast response (within 12h)")
    elif response > 48:
        score -= 10
        concerns.append(f"Slow response ({response:g}h)")

    return ComponentScore(clamp_score(score), tuple(reasons), tuple(concerns))


# ── Helpers ───────────────────────────────────────────────────────────────────

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negatives."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return int(max(0, min(100, value)))
