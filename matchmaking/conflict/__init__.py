"""Conflict analysis for rosters that cannot be matched."""

from .conflict_analyzer import (
    NO_CONFLICT_SUMMARY,
    ConflictAnalyzer,
    ConflictReport,
    Suggestion,
    SuggestionAction,
    analyze_conflicts,
)

__all__ = [
    "NO_CONFLICT_SUMMARY",
    "ConflictAnalyzer",
    "ConflictReport",
    "Suggestion",
    "SuggestionAction",
    "analyze_conflicts",
]
