"""
Expert Matcher — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate input files.
  4. Run the engine (rank or recommend).
  5. Report result to stdout (and optionally to files).

Install and run::

    pip install -e .
    expert-matcher --help
    expert-matcher validate-config
    expert-matcher rank --request request.json --candidates experts.json
    expert-matcher recommend --candidates experts.json --history past_requests.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="expert-matcher",
    help="Expert Matcher — explainable candidate scoring and ranking CLI.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from expert_matcher.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from expert_matcher.utils.logging import configure_logging
    configure_logging(config.logging)


def _build_aggregator_or_exit(config):
    """Build the aggregator from config weights/tables, exiting on bad weights."""
    from expert_matcher.matching.aggregator import MatchAggregator

    try:
        return MatchAggregator(weights=config.build_weights(), tables=config.build_tables())
    except ValueError as exc:
        typer.echo(f"[ERROR] Invalid matching configuration: {exc}", err=True)
        raise typer.Exit(code=1)


def _load_or_exit(loader, path: str):
    """Run a loader, turning file/validation errors into a clean exit."""
    try:
        return loader(Path(path))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config or its weights fail validation.
    """
    config = _load_config_or_exit(config_path)
    aggregator = _build_aggregator_or_exit(config)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Default limit:    {config.matching.default_limit}")
    typer.echo(f"  Pool size:        {config.matching.pool_size}")
    typer.echo(f"  Min completeness: {config.matching.min_profile_completeness:g}")
    typer.echo(f"  Scoring workers:  {config.matching.max_workers}")
    typer.echo(f"  Output dir:       {config.output.output_dir}")
    weights = ", ".join(
        f"{name.value}={w:.2f}" for name, w in aggregator.weights.as_dict().items()
    )
    typer.echo(f"  Weights:          {weights}")
    typer.echo(f"  Skill relations:  {len(aggregator.tables.skill_relations)} keywords")
    typer.echo(f"  Metro clusters:   {len(aggregator.tables.metro_clusters)} regions")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("rank")
def rank(
    request_file: str = typer.Option(
        ...,
        "--request",
        "-r",
        help="Path to a JSON file holding one request object.",
    ),
    candidates_file: str = typer.Option(
        ...,
        "--candidates",
        "-c",
        help="Path to a JSON file holding an array of candidate profiles.",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        min=0,
        help="Maximum matches to return. Uses config default if omitted.",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        min=1,
        help="Scoring threads. Uses config default if omitted.",
    ),
    prefilter: bool = typer.Option(
        False,
        "--prefilter",
        help="Apply the repository pool filters (availability, completeness, "
             "rate cap, pool size) before ranking.",
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        help="Output format: table or json.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Write JSON + CSV reports to this directory (implies --save).",
    ),
    save: bool = typer.Option(
        False,
        "--save",
        help="Write JSON + CSV reports to the configured output directory "
             "([output] output_dir, or EXPERT_MATCHER_OUTPUT_DIR).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Score and rank candidates against one request.

    \b
    Candidates scoring 0 are dropped; the rest are ordered by score, then
    review count, then response time, then candidate id.
    """
    from expert_matcher.ingestion.loader import load_candidates, load_request
    from expert_matcher.matching.prefilter import prefilter_pool
    from expert_matcher.matching.ranker import rank_candidates
    from expert_matcher.reporting.export import (
        build_match_payload,
        write_matches_csv,
        write_matches_json,
    )
    from expert_matcher.reporting.formatters import format_match_table

    if output_format not in ("table", "json"):
        typer.echo(f"[ERROR] Unsupported --format '{output_format}'. Use table or json.", err=True)
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    aggregator = _build_aggregator_or_exit(config)

    request = _load_or_exit(load_request, request_file)
    candidates = _load_or_exit(load_candidates, candidates_file)

    if prefilter:
        candidates = prefilter_pool(
            candidates,
            request=request,
            min_profile_completeness=config.matching.min_profile_completeness,
            pool_size=config.matching.pool_size,
        )

    matches = rank_candidates(
        request,
        candidates,
        limit=limit if limit is not None else config.matching.default_limit,
        aggregator=aggregator,
        max_workers=workers or config.matching.max_workers,
    )

    if output_format == "json":
        typer.echo(json.dumps(build_match_payload(matches, request), indent=2, ensure_ascii=False))
    else:
        typer.echo(format_match_table(matches, request))

    if output_dir or save:
        out = Path(output_dir or config.output.output_dir)
        json_path = write_matches_json(matches, request, out)
        csv_path = write_matches_csv(matches, request, out)
        typer.echo(f"  Wrote {json_path}", err=True)
        typer.echo(f"  Wrote {csv_path}", err=True)


@app.command("recommend")
def recommend(
    candidates_file: str = typer.Option(
        ...,
        "--candidates",
        "-c",
        help="Path to a JSON file holding an array of candidate profiles.",
    ),
    history_file: Optional[str] = typer.Option(
        None,
        "--history",
        help="Path to a JSON array of the organization's past requests "
             "(personalizes budget-friendly and top-rated views).",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        min=0,
        help="Maximum candidates per view. Uses config default if omitted.",
    ),
    prefilter: bool = typer.Option(
        False,
        "--prefilter",
        help="Apply the repository pool filters before segmenting.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Build trending / fast-responder / budget-friendly / top-rated views."""
    from expert_matcher.ingestion.loader import load_candidates, load_requests
    from expert_matcher.matching.preferences import derive_preferences
    from expert_matcher.matching.prefilter import prefilter_pool
    from expert_matcher.matching.segmenter import segment_recommendations
    from expert_matcher.reporting.formatters import format_recommendations

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    candidates = _load_or_exit(load_candidates, candidates_file)
    history = _load_or_exit(load_requests, history_file) if history_file else []

    if prefilter:
        candidates = prefilter_pool(
            candidates,
            min_profile_completeness=config.matching.recommendation_min_profile_completeness,
            pool_size=config.matching.pool_size,
        )

    preferences = derive_preferences(history)
    rec_set = segment_recommendations(
        candidates,
        preferences=preferences,
        limit=limit if limit is not None else config.matching.recommendation_limit,
    )

    if preferences.common_keywords:
        typer.echo(f"  Keywords: {', '.join(sorted(preferences.common_keywords))}")
    if preferences.average_budget:
        typer.echo(f"  Average budget: ₩{preferences.average_budget:,.0f}")
    typer.echo(format_recommendations(rec_set))


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
