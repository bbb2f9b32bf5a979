"""
Match report writer: JSON and CSV output for ranked matches.

All functions are pure file output — they consume an in-memory MatchScore
list and write human-readable + machine-readable files for downstream
consumers (notification dispatch, spreadsheets).

Output files
------------
  <output_dir>/
    matches_{request_id}_{date}.json   -- ranked matches + request metadata
    matches_{request_id}_{date}.csv    -- one row per ranked candidate
"""

from __future__ import annotations

import csv
import json
import logging
import re
from datetime import date
from pathlib import Path

from expert_matcher.models.match import MatchScore
from expert_matcher.models.request import MatchRequest
from expert_matcher.reporting.formatters import format_budget_range
from expert_matcher.taxonomy.skill_taxonomy import ComponentName

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1.0.0"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def build_match_payload(
    matches: list[MatchScore],
    request: MatchRequest,
    run_date: date | None = None,
) -> dict:
    """Build the JSON-serializable report dict for ranked matches.

    Request metadata (title, organization, budget range) is included so a
    notification consumer needs nothing else to compose its messages.
    """
    if run_date is None:
        run_date = date.today()

    return {
        "schema_version": SCHEMA_VERSION,
        "generated_at":   run_date.isoformat(),
        "request": {
            "request_id":        request.request_id,
            "title":             request.title,
            "description":       request.description,
            "organization_name": request.organization_name,
            "budget_range":      format_budget_range(request),
        },
        "matches": [
            {
                "rank":         rank,
                "candidate_id": m.candidate_id,
                "total_score":  m.total_score,
                "breakdown":    {c.value: m.breakdown[c] for c in ComponentName},
                "reasons":      list(m.reasons),
                "concerns":     list(m.concerns),
            }
            for rank, m in enumerate(matches, start=1)
        ],
    }


def write_matches_json(
    matches: list[MatchScore],
    request: MatchRequest,
    output_dir: Path,
    run_date: date | None = None,
) -> Path:
    """Write ranked matches to a structured JSON file.

    Args:
        matches:    Ranked MatchScore list.
        request:    The request they were scored against.
        output_dir: Target directory (created if missing).
        run_date:   Date label for the filename. Defaults to today.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"matches_{_safe(request.request_id)}_{run_date}.json"

    payload = build_match_payload(matches, request, run_date=run_date)
    json_path.write_text(
        json.dumps(payload, indent=2, ensure_ascii=False, default=str),
        encoding="utf-8",
    )
    logger.info("Match JSON written: %s (%d matches)", json_path, len(matches))
    return json_path


def write_matches_csv(
    matches: list[MatchScore],
    request: MatchRequest,
    output_dir: Path,
    run_date: date | None = None,
) -> Path:
    """Write ranked matches to a CSV file.

    Columns: rank, candidate_id, total_score, one column per component,
             reasons, concerns (the last two ``"; "``-joined).

    Returns:
        Path to the written CSV file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"matches_{_safe(request.request_id)}_{run_date}.csv"

    fieldnames = (
        ["rank", "candidate_id", "total_score"]
        + [c.value for c in ComponentName]
        + ["reasons", "concerns"]
    )

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for rank, m in enumerate(matches, start=1):
            row: dict = {
                "rank":         rank,
                "candidate_id": m.candidate_id,
                "total_score":  m.total_score,
                "reasons":      "; ".join(m.reasons),
                "concerns":     "; ".join(m.concerns),
            }
            row.update({c.value: m.breakdown[c] for c in ComponentName})
            writer.writerow(row)

    logger.info("Match CSV written: %s", csv_path)
    return csv_path


def _safe(value: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("-", value).strip("-") or "request"
