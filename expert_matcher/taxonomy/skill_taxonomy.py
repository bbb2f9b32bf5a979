"""
Skill taxonomy for partial-credit keyword matching.

``SKILL_RELATIONS`` maps a request keyword to a small set of semantically
adjacent terms.  A candidate who lists none of the requested keywords but
does list one of the adjacent terms earns a *related* match worth half a
direct match (see ``expert_matcher.matching.scorers.score_skills``).

Keys and values are lower-case.  Values are substring-matched against the
candidate's combined skill/tag set, so ``"data"`` also hits
``"data engineering"`` and ``"big data"``.

``ComponentName`` is the canonical set of score breakdown keys shared by the
aggregator, the exporters and the CLI.

This module has NO imports from any other ``expert_matcher`` package.
"""

from enum import StrEnum


class ComponentName(StrEnum):
    """Breakdown key for one of the six component scorers.

    Declaration order is the order reasons and concerns are collected in.
    """

    SKILLS = "skills"
    LOCATION = "location"
    BUDGET = "budget"
    EXPERIENCE = "experience"
    AVAILABILITY = "availability"
    REPUTATION = "reputation"


SKILL_RELATIONS: dict[str, tuple[str, ...]] = {
    # ── Frontend ──────────────────────────────────────────────────────────────
    "react":      ("javascript", "frontend", "web"),
    "vue":        ("javascript", "frontend", "web"),
    "angular":    ("javascript", "typescript", "frontend"),
    # ── Backend ───────────────────────────────────────────────────────────────
    "nodejs":     ("javascript", "backend", "api"),
    "python":     ("django", "flask", "data", "ml"),
    "java":       ("spring", "backend", "enterprise"),
    # ── Design ────────────────────────────────────────────────────────────────
    "ui":         ("ux", "디자인", "figma"),
    "ux":         ("ui", "사용성", "디자인"),
    # ── Marketing ─────────────────────────────────────────────────────────────
    "마케팅":      ("디지털마케팅", "seo", "광고"),
    # ── Data / emerging ───────────────────────────────────────────────────────
    "ai":         ("ml", "machine learning", "data"),
    "blockchain": ("web3", "crypto", "smart contract"),
}
