"""
Search Logger - in-memory trace of a single matchmaking run.

Tracks feasibility warnings, attempt outcomes and progress so the caller can
surface them next to the result. Nothing is written to disk.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class SearchLogger:
    """Collects what happened during validation and search."""

    def __init__(self, debug_mode: bool = False) -> None:
        self.debug_mode = debug_mode
        self.feasibility_warnings: list[str] = []
        self.attempts: list[dict[str, Any]] = []
        self.search_progress: list[str] = []

    def log_feasibility_warning(self, warning: str) -> None:
        """Log a violated necessary condition."""
        self.feasibility_warnings.append(warning)
        logger.warning(f"[FEASIBILITY] {warning}")

    def log_attempt(self, attempt: int, succeeded: bool, steps: int, exhausted_budget: bool = False) -> None:
        """Record the outcome of one randomized attempt."""
        self.attempts.append(
            {
                "attempt": attempt,
                "succeeded": succeeded,
                "steps": steps,
                "exhausted_budget": exhausted_budget,
            }
        )
        if self.debug_mode or logger.isEnabledFor(logging.DEBUG):
            outcome = "succeeded" if succeeded else ("hit step budget" if exhausted_budget else "exhausted candidates")
            logger.debug(f"[SEARCH] attempt {attempt} {outcome} after {steps} steps")

    def log_progress(self, message: str) -> None:
        """Log search progress."""
        self.search_progress.append(message)
        if self.debug_mode:
            logger.debug(f"[SEARCH] {message}")

    @property
    def total_steps(self) -> int:
        return sum(a["steps"] for a in self.attempts)

    def get_summary(self) -> dict[str, Any]:
        """Get summary of all logged information."""
        return {
            "feasibility_warnings": self.feasibility_warnings,
            "attempts": len(self.attempts),
            "total_steps": self.total_steps,
            "budget_exhausted_attempts": sum(1 for a in self.attempts if a["exhausted_budget"]),
            "search_progress": self.search_progress,
        }
