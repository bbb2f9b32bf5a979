"""
JSON loaders for candidate pools and requests.

These stand in for the repository collaborator when the engine is driven
from the CLI: they read already-exported records and validate them into
``Candidate`` / ``MatchRequest`` models.

Formats
-------
candidates file   JSON array of candidate objects, e.g.::

    [{"candidate_id": "e-1", "location": "Seoul", "skills": ["React"],
      "years_experience": 6, "hourly_rate": 50000,
      "availability_status": "available", "rating_average": 4.7,
      "total_reviews": 24, "completion_rate": 98,
      "response_time_hours": 6, "profile_completeness": 90,
      "created_at": "2026-09-30T00:00:00Z"}]

request file      one JSON object (``load_request``) or an array of them
                  (``load_requests``, e.g. an organization's history).

``id`` is accepted as an alias of ``candidate_id`` / ``request_id``, and
``hashtags`` of ``tags``, matching the field names of the profile store.

All records are validated before any are returned.  If **any** record fails,
a single :class:`ValueError` is raised listing the first 10 failures.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from expert_matcher.models.candidate import Candidate
from expert_matcher.models.request import MatchRequest

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)

_MAX_ERRORS_SHOWN = 10

_CANDIDATE_ALIASES = {"id": "candidate_id", "hashtags": "tags"}
_REQUEST_ALIASES = {"id": "request_id", "type": "request_type"}


def load_candidates(path: Path) -> list[Candidate]:
    """Load and validate a JSON array of candidates.

    Args:
        path: Path to the JSON file (must exist).

    Returns:
        List of validated :class:`Candidate` instances (possibly empty).

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not a JSON array or any record is invalid.
    """
    raw = _read_json(path)
    if not isinstance(raw, list):
        raise ValueError(f"Candidates file must contain a JSON array: {path}")
    candidates = _validate_all(raw, Candidate, _CANDIDATE_ALIASES, path)
    logger.info("Loaded %d candidates from %s", len(candidates), path.name)
    return candidates


def load_request(path: Path) -> MatchRequest:
    """Load and validate a single request object.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not a JSON object or fails validation.
    """
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise ValueError(f"Request file must contain a JSON object: {path}")
    return _validate_all([raw], MatchRequest, _REQUEST_ALIASES, path)[0]


def load_requests(path: Path) -> list[MatchRequest]:
    """Load and validate a JSON array of requests (e.g. past postings).

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not a JSON array or any record is invalid.
    """
    raw = _read_json(path)
    if not isinstance(raw, list):
        raise ValueError(f"Requests file must contain a JSON array: {path}")
    requests = _validate_all(raw, MatchRequest, _REQUEST_ALIASES, path)
    logger.info("Loaded %d requests from %s", len(requests), path.name)
    return requests


# ── Private helpers ────────────────────────────────────────────────────────────

def _read_json(path: Path) -> Any:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path.name}: {exc}") from exc


def _apply_aliases(record: dict[str, Any], aliases: dict[str, str]) -> dict[str, Any]:
    out = dict(record)
    for alias, field in aliases.items():
        if alias in out and field not in out:
            out[field] = out.pop(alias)
    return out


def _validate_all(
    records: list[Any],
    model: type[_M],
    aliases: dict[str, str],
    path: Path,
) -> list[_M]:
    """Validate every record; raise one ValueError summarizing all failures."""
    validated: list[_M] = []
    errors: list[tuple[int, str]] = []

    for i, record in enumerate(records):
        if not isinstance(record, dict):
            errors.append((i, f"expected an object, got {type(record).__name__}"))
            continue
        try:
            validated.append(model(**_apply_aliases(record, aliases)))
        except (ValidationError, ValueError, TypeError) as exc:
            errors.append((i, str(exc)))

    if errors:
        detail = "\n".join(f"  Record #{i}: {msg}" for i, msg in errors[:_MAX_ERRORS_SHOWN])
        suffix = (
            f"\n  … and {len(errors) - _MAX_ERRORS_SHOWN} more"
            if len(errors) > _MAX_ERRORS_SHOWN else ""
        )
        raise ValueError(
            f"{len(errors)} record(s) failed validation in {Path(path).name}:\n"
            f"{detail}{suffix}"
        )

    return validated
