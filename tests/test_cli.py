"""
Tests for expert_matcher/cli.py (driven through typer's CliRunner).

What we test
------------
validate-config:
  - Valid config prints a summary and exits 0.
  - Bad weights or a missing file exit 1.

rank:
  - Table output lists candidates best first.
  - JSON output is parseable and ordered; --limit truncates.
  - --prefilter drops pool-filtered candidates.
  - --output-dir writes JSON + CSV reports.
  - --save writes reports to the configured output directory, taken from
    the TOML [output] section or EXPERT_MATCHER_OUTPUT_DIR.
  - Unsupported --format and missing input files exit 1.

recommend:
  - Prints all four views; history personalizes them.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from expert_matcher.cli import app

runner = CliRunner()

_CANDIDATES = [
    {"candidate_id": "exp-001", "location": "Seoul", "skills": ["React", "Node.js"],
     "tags": ["remote"], "years_experience": 5, "hourly_rate": 20000,
     "availability_status": "available", "rating_average": 4.6, "total_reviews": 25,
     "completion_rate": 97, "response_time_hours": 5, "profile_completeness": 90,
     "created_at": "2026-09-21T12:00:00Z"},
    {"candidate_id": "exp-002", "location": "Busan", "skills": ["python", "django", "aws"],
     "years_experience": 8, "hourly_rate": 35000, "availability_status": "busy",
     "rating_average": 4.1, "total_reviews": 8, "completion_rate": 90,
     "response_time_hours": 20, "profile_completeness": 75},
    {"id": "exp-003", "location": "서울 강남구", "skills": ["vue", "javascript", "css"],
     "years_experience": 2, "availability_status": "available", "rating_average": 4.8,
     "total_reviews": 3, "completion_rate": 100, "response_time_hours": 2,
     "profile_completeness": 65},
    {"candidate_id": "exp-004", "location": "Daegu", "skills": ["accounting"],
     "years_experience": 1, "hourly_rate": 90000, "availability_status": "unavailable",
     "rating_average": 3.0, "total_reviews": 12, "completion_rate": 60,
     "response_time_hours": 72, "profile_completeness": 40, "is_available": False},
]

_REQUEST = {
    "request_id": "req-001", "type": "project", "keywords": ["react", "vue"],
    "location": "Seoul", "budget_max": 1_000_000, "title": "Marketing site rebuild",
}


@pytest.fixture
def files(tmp_path, clean_env) -> dict[str, Path]:
    """Write a quiet config plus candidate / request / history inputs."""
    config = tmp_path / "config.toml"
    config.write_text(
        "[matching]\ndefault_limit = 20\n\n[logging]\nlevel = \"WARNING\"\n",
        encoding="utf-8",
    )
    candidates = tmp_path / "experts.json"
    candidates.write_text(json.dumps(_CANDIDATES, ensure_ascii=False), encoding="utf-8")
    request = tmp_path / "request.json"
    request.write_text(json.dumps(_REQUEST), encoding="utf-8")
    history = tmp_path / "history.json"
    history.write_text(
        json.dumps([{"request_id": "old-1", "keywords": ["vue"], "budget_max": 1_000_000}]),
        encoding="utf-8",
    )
    return {
        "config": config, "candidates": candidates,
        "request": request, "history": history, "dir": tmp_path,
    }


def _rank_args(files: dict[str, Path], *extra: str) -> list[str]:
    return [
        "rank",
        "--request", str(files["request"]),
        "--candidates", str(files["candidates"]),
        "--config", str(files["config"]),
        *extra,
    ]


class TestValidateConfig:
    def test_ok(self, files):
        result = runner.invoke(app, ["validate-config", "--config", str(files["config"])])
        assert result.exit_code == 0, result.output
        assert "[OK] Config valid." in result.output
        assert "skills=0.30" in result.output

    def test_full_dump(self, files):
        result = runner.invoke(
            app, ["validate-config", "--config", str(files["config"]), "--full"]
        )
        assert result.exit_code == 0
        assert "Full config (JSON):" in result.output

    def test_bad_weights(self, files):
        files["config"].write_text("[weights]\nskills = 0.9\n", encoding="utf-8")
        result = runner.invoke(app, ["validate-config", "--config", str(files["config"])])
        assert result.exit_code == 1

    def test_missing_config(self, files):
        result = runner.invoke(
            app, ["validate-config", "--config", str(files["dir"] / "absent.toml")]
        )
        assert result.exit_code == 1


class TestRank:
    def test_table(self, files):
        result = runner.invoke(app, _rank_args(files))
        assert result.exit_code == 0, result.output
        assert "Matches for: Marketing site rebuild" in result.output
        assert result.output.index("exp-001") < result.output.index("exp-003")

    def test_json(self, files):
        result = runner.invoke(app, _rank_args(files, "--format", "json"))
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        ids = [m["candidate_id"] for m in payload["matches"]]
        assert ids == ["exp-001", "exp-003", "exp-002", "exp-004"]
        assert payload["matches"][0]["total_score"] == 79

    def test_limit(self, files):
        result = runner.invoke(app, _rank_args(files, "--format", "json", "--limit", "2"))
        assert len(json.loads(result.stdout)["matches"]) == 2

    def test_prefilter(self, files):
        result = runner.invoke(app, _rank_args(files, "--format", "json", "--prefilter"))
        ids = [m["candidate_id"] for m in json.loads(result.stdout)["matches"]]
        assert "exp-004" not in ids

    def test_workers(self, files):
        sequential = runner.invoke(app, _rank_args(files, "--format", "json"))
        threaded = runner.invoke(app, _rank_args(files, "--format", "json", "--workers", "3"))
        assert json.loads(threaded.stdout) == json.loads(sequential.stdout)

    def test_output_dir(self, files):
        out = files["dir"] / "reports"
        result = runner.invoke(app, _rank_args(files, "--output-dir", str(out)))
        assert result.exit_code == 0, result.output
        assert len(list(out.glob("matches_req-001_*.json"))) == 1
        assert len(list(out.glob("matches_req-001_*.csv"))) == 1

    def test_save_uses_env_output_dir(self, files, clean_env):
        out = files["dir"] / "env-reports"
        clean_env.setenv("EXPERT_MATCHER_OUTPUT_DIR", str(out))
        result = runner.invoke(app, _rank_args(files, "--save"))
        assert result.exit_code == 0, result.output
        assert len(list(out.glob("matches_req-001_*.json"))) == 1
        assert len(list(out.glob("matches_req-001_*.csv"))) == 1

    def test_save_uses_config_output_dir(self, files):
        out = files["dir"] / "toml-reports"
        files["config"].write_text(
            f"[output]\noutput_dir = \"{out.as_posix()}\"\n\n[logging]\nlevel = \"WARNING\"\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, _rank_args(files, "--save"))
        assert result.exit_code == 0, result.output
        assert len(list(out.glob("matches_req-001_*.json"))) == 1

    def test_output_dir_overrides_config(self, files, clean_env):
        configured = files["dir"] / "configured"
        explicit = files["dir"] / "explicit"
        clean_env.setenv("EXPERT_MATCHER_OUTPUT_DIR", str(configured))
        result = runner.invoke(app, _rank_args(files, "--save", "--output-dir", str(explicit)))
        assert result.exit_code == 0, result.output
        assert len(list(explicit.glob("*.json"))) == 1
        assert not configured.exists()

    def test_no_reports_without_save(self, files, clean_env):
        out = files["dir"] / "unused"
        clean_env.setenv("EXPERT_MATCHER_OUTPUT_DIR", str(out))
        result = runner.invoke(app, _rank_args(files))
        assert result.exit_code == 0, result.output
        assert not out.exists()

    def test_bad_format(self, files):
        result = runner.invoke(app, _rank_args(files, "--format", "xml"))
        assert result.exit_code == 1

    def test_missing_candidates(self, files):
        result = runner.invoke(app, [
            "rank", "--request", str(files["request"]),
            "--candidates", str(files["dir"] / "nope.json"),
            "--config", str(files["config"]),
        ])
        assert result.exit_code == 1


class TestRecommend:
    def test_views(self, files):
        result = runner.invoke(app, [
            "recommend", "--candidates", str(files["candidates"]),
            "--config", str(files["config"]),
        ])
        assert result.exit_code == 0, result.output
        for title in ("Trending", "Fast responders", "Budget-friendly", "Top rated"):
            assert title in result.output

    def test_history(self, files):
        result = runner.invoke(app, [
            "recommend", "--candidates", str(files["candidates"]),
            "--history", str(files["history"]),
            "--config", str(files["config"]),
        ])
        assert result.exit_code == 0, result.output
        assert "Keywords: vue" in result.output
        assert "Average budget: ₩1,000,000" in result.output
