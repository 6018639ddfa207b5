"""
Centralized logging configuration for the matchmaking engine.

The engine modules only ever call ``logging.getLogger(__name__)``; the host
application decides where records go by calling ``configure_logging`` once.

Format: 2026-01-06T14:05:52Z [source] LEVEL message

Environment Variables:
    LOG_LEVEL: Set to "DEBUG", "TRACE", or "INFO" (default)
               - INFO: Run start and success, conflict summaries
               - WARNING: [FEASIBILITY] failures and exhausted attempts
               - DEBUG: Per-attempt progress
               - TRACE: Per-candidate backtracking steps

Usage:
    from matchmaking.logging_config import configure_logging, get_logger

    configure_logging(source="matchmaking")
    logger = get_logger(__name__)
    logger.info("Matchmaking started")
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone

from matchmaking.config.settings import get_settings

# Custom TRACE level for backtracking steps
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def _trace(self: logging.Logger, message: object, *args: object, **kw: object) -> None:
    """Log at TRACE. The search uses this for each tentative `assign writer -> target` step."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kw)  # type: ignore[arg-type]


logging.Logger.trace = _trace  # type: ignore[attr-defined]


class ISO8601Formatter(logging.Formatter):
    """One line per engine record, stamped in UTC.

    ``[FEASIBILITY]`` failures arrive as WARNING and per-attempt ``[SEARCH]``
    outcomes as DEBUG. Backtracking steps come through at TRACE::

        2026-01-06T14:05:52Z [matchmaking] WARNING [FEASIBILITY] Need at least 2 players, got 1
    """

    def __init__(self, source: str = "matchmaking"):
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()

        if record.exc_info:
            exception_text = self.formatException(record.exc_info)
            message = f"{message}\n{exception_text}"

        return f"{timestamp} [{self.source}] {record.levelname} {message}"


def resolve_level(level_name: str | None = None, debug: bool | None = None) -> int:
    """Map a LOG_LEVEL style name to a numeric level.

    Falls back to the LOG_LEVEL env var, then to EngineSettings.log_level.
    """
    if level_name is None:
        level_name = os.getenv("LOG_LEVEL") or get_settings().log_level
    name = level_name.upper()
    if name == "TRACE":
        return TRACE
    if name == "DEBUG" or debug:
        return logging.DEBUG
    if name == "WARNING":
        return logging.WARNING
    return logging.INFO


def configure_logging(
    source: str = "matchmaking",
    level: int | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """Configure the root logger with the unified format.

    Args:
        source: Source identifier shown in brackets
        level: Logging level (defaults to INFO, or DEBUG/TRACE from LOG_LEVEL env var)
        debug: Enable debug mode (overrides level to DEBUG)

    Returns:
        Configured root logger
    """
    if level is None:
        level = resolve_level(debug=debug)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ISO8601Formatter(source=source))
    root_logger.addHandler(handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(name)
