"""
Tests for expert_matcher/ingestion/loader.py.

What we test
------------
load_candidates():
  - Valid array -> list of Candidate; ``id`` / ``hashtags`` aliases applied.
  - Empty array -> [].
  - Missing file -> FileNotFoundError.
  - Non-array JSON and malformed JSON -> ValueError.
  - Invalid records are all collected into one ValueError with record indices.

load_request() / load_requests():
  - Single object and array forms; ``type`` alias for request_type.
  - Inverted budget bounds surface as a validation error.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from expert_matcher.ingestion.loader import load_candidates, load_request, load_requests


def _write(tmp_path: Path, name: str, payload) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


class TestLoadCandidates:
    def test_valid(self, tmp_path):
        path = _write(tmp_path, "experts.json", [
            {"candidate_id": "e-1", "location": "Seoul", "skills": ["React"],
             "years_experience": 6, "hourly_rate": 50000,
             "availability_status": "available", "rating_average": 4.7,
             "total_reviews": 24, "completion_rate": 98,
             "response_time_hours": 6, "profile_completeness": 90,
             "created_at": "2026-09-30T00:00:00Z"},
        ])
        [c] = load_candidates(path)
        assert c.candidate_id == "e-1"
        assert c.skills == frozenset({"react"})
        assert c.created_at is not None

    def test_aliases(self, tmp_path):
        path = _write(tmp_path, "experts.json", [{"id": "e-2", "hashtags": ["원격"]}])
        [c] = load_candidates(path)
        assert c.candidate_id == "e-2"
        assert c.tags == frozenset({"원격"})

    def test_empty_array(self, tmp_path):
        assert load_candidates(_write(tmp_path, "experts.json", [])) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Input file not found"):
            load_candidates(tmp_path / "nope.json")

    def test_not_an_array(self, tmp_path):
        with pytest.raises(ValueError, match="JSON array"):
            load_candidates(_write(tmp_path, "experts.json", {"candidate_id": "x"}))

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "experts.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_candidates(path)

    def test_all_failures_reported(self, tmp_path):
        path = _write(tmp_path, "experts.json", [
            {"candidate_id": "ok"},
            {"candidate_id": "bad-rating", "rating_average": 9},
            "not an object",
            {"location": "Seoul"},
        ])
        with pytest.raises(ValueError) as exc_info:
            load_candidates(path)
        msg = str(exc_info.value)
        assert msg.startswith("3 record(s) failed validation in experts.json")
        assert "Record #1" in msg
        assert "Record #2" in msg
        assert "Record #3" in msg
        assert "Record #0" not in msg

    def test_error_list_truncated(self, tmp_path):
        path = _write(tmp_path, "experts.json", [{"rating_average": 9}] * 12)
        with pytest.raises(ValueError, match="and 2 more"):
            load_candidates(path)


class TestLoadRequests:
    def test_single_request_with_type_alias(self, tmp_path):
        path = _write(tmp_path, "request.json", {
            "id": "req-9", "type": "consulting", "keywords": ["Strategy"],
            "budget_min": 1_000_000, "budget_max": 3_000_000,
        })
        r = load_request(path)
        assert r.request_id == "req-9"
        assert r.request_type == "consulting"
        assert r.keywords == frozenset({"strategy"})

    def test_single_request_rejects_array(self, tmp_path):
        with pytest.raises(ValueError, match="JSON object"):
            load_request(_write(tmp_path, "request.json", []))

    def test_inverted_budget(self, tmp_path):
        path = _write(tmp_path, "request.json", {
            "request_id": "r", "budget_min": 5, "budget_max": 1,
        })
        with pytest.raises(ValueError, match="budget_min"):
            load_request(path)

    def test_history_array(self, tmp_path):
        path = _write(tmp_path, "history.json", [
            {"request_id": "a", "keywords": ["react"]},
            {"request_id": "b", "budget_max": 2_000_000},
        ])
        assert [r.request_id for r in load_requests(path)] == ["a", "b"]
