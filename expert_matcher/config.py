"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``EXPERT_MATCHER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The CLI receives an ``AppConfig`` instance and turns it into the engine's
injected objects via ``build_weights()`` / ``build_tables()``.  The engine
modules themselves never read configuration.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from expert_matcher.matching.aggregator import MatchWeights
from expert_matcher.matching.tables import DEFAULT_TABLES, MatchingTables

# ── Sub-config models ─────────────────────────────────────────────────────────


class MatchingConfig(BaseModel):
    """Ranking and recommendation limits."""

    model_config = ConfigDict(frozen=True)

    default_limit: int = Field(default=20, ge=0)
    recommendation_limit: int = Field(default=10, ge=0)
    pool_size: int = Field(default=100, gt=0)
    min_profile_completeness: float = Field(default=50.0, ge=0.0, le=100.0)
    recommendation_min_profile_completeness: float = Field(default=60.0, ge=0.0, le=100.0)
    max_workers: int = Field(default=1, ge=1)


class WeightsConfig(BaseModel):
    """Component weights; validated to sum to 1.0 when built."""

    model_config = ConfigDict(frozen=True)

    skills: float = 0.30
    location: float = 0.15
    budget: float = 0.20
    experience: float = 0.15
    availability: float = 0.10
    reputation: float = 0.10


class TablesConfig(BaseModel):
    """Additions to (or, with ``replace = true``, replacements of) the
    built-in lookup tables."""

    model_config = ConfigDict(frozen=True)

    replace: bool = False
    skill_relations: dict[str, list[str]] = {}
    metro_clusters: dict[str, list[str]] = {}
    remote_tags: list[str] = []


class OutputConfig(BaseModel):
    """Filesystem paths for exported reports."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs/matches"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    # Separate level for expert_matcher.matching; empty means inherit ``level``.
    engine_level: str = ""
    log_file: str = ""
    json_format: bool = False

    @field_validator("level", "engine_level")
    @classmethod
    def validate_level(cls, v: str, info: ValidationInfo) -> str:
        if info.field_name == "engine_level" and not v:
            return v
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth."""

    model_config = ConfigDict(frozen=True)

    matching: MatchingConfig = MatchingConfig()
    weights: WeightsConfig = WeightsConfig()
    tables: TablesConfig = TablesConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False

    def build_weights(self) -> MatchWeights:
        """Return validated ``MatchWeights`` (raises if they do not sum to 1.0)."""
        return MatchWeights(**self.weights.model_dump())

    def build_tables(self) -> MatchingTables:
        """Return the default tables with this config's overrides applied."""
        t = self.tables
        if not (t.skill_relations or t.metro_clusters or t.remote_tags):
            return DEFAULT_TABLES
        return DEFAULT_TABLES.with_overrides(
            skill_relations=t.skill_relations or None,
            metro_clusters=t.metro_clusters or None,
            remote_tags=t.remote_tags or None,
            replace=t.replace,
        )


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply EXPERT_MATCHER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply EXPERT_MATCHER_* env vars to the raw config dict.

    Supported overrides:
      EXPERT_MATCHER_LOG_LEVEL    → raw["logging"]["level"]
      EXPERT_MATCHER_OUTPUT_DIR   → raw["output"]["output_dir"]
      EXPERT_MATCHER_MAX_WORKERS  → raw["matching"]["max_workers"]
      EXPERT_MATCHER_DEBUG        → raw["debug"]
    """
    if log_level := os.environ.get("EXPERT_MATCHER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if output_dir := os.environ.get("EXPERT_MATCHER_OUTPUT_DIR"):
        raw.setdefault("output", {})["output_dir"] = output_dir

    if max_workers := os.environ.get("EXPERT_MATCHER_MAX_WORKERS"):
        raw.setdefault("matching", {})["max_workers"] = int(max_workers)

    if debug := os.environ.get("EXPERT_MATCHER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        matching=MatchingConfig(**raw.get("matching", {})),
        weights=WeightsConfig(**raw.get("weights", {})),
        tables=TablesConfig(**raw.get("tables", {})),
        output=OutputConfig(**raw.get("output", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
