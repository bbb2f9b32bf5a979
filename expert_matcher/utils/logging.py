"""
Logging setup for the Expert Matcher.

Call ``configure_logging(config)`` once at CLI entry, before any scoring
work.  Library modules only ever call ``logging.getLogger(__name__)``.

Two things are specific to this engine:

  - Every line carries the thread name.  ``rank --workers N`` scores on a
    pool whose threads are named ``match-worker_<i>``, so per-candidate
    DEBUG lines can be told apart from the ``MainThread`` summary lines.
  - ``engine_level`` sets the ``expert_matcher.matching`` logger on its own.
    ``engine_level = "DEBUG"`` logs every component breakdown while loaders
    and exports stay at ``level``.

Handlers carry no level of their own; filtering happens on the loggers.

JSON format (``json_format = true`` in config/default.toml [logging])::

    {"ts": "2026-10-16T09:00:00Z", "level": "DEBUG", "logger": "expert_matcher.matching.aggregator",
     "thread": "match-worker_0", "msg": "..."}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from expert_matcher.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

ENGINE_LOGGER = "expert_matcher.matching"

# Attributes every LogRecord carries; anything else came in via ``extra=``.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Emit one JSON object per log line.

    Fields: ``ts``, ``level``, ``logger``, ``thread``, ``msg``, plus any
    ``extra=`` keys (e.g. ``candidate_id``).
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        for key, val in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = val
        # Korean locations and skills stay readable.
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(config: "LoggingConfig") -> None:
    """Configure the root and engine loggers from a ``LoggingConfig``.

    Sets up:
      - StreamHandler (stderr), so stdout stays clean for ``--format json``.
      - Optional FileHandler if ``config.log_file`` is set.
      - JSON line format if ``config.json_format`` is ``True``.
      - The ``expert_matcher.matching`` level from ``config.engine_level``,
        or back to inheriting the root level when it is empty.

    Args:
        config: Logging configuration section from ``AppConfig``.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)

    formatter: logging.Formatter
    if config.json_format:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = []

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    handlers.append(console)

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    engine = logging.getLogger(ENGINE_LOGGER)
    if config.engine_level:
        engine.setLevel(config.engine_level.upper())
    else:
        engine.setLevel(logging.NOTSET)
