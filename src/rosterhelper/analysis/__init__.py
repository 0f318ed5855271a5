"""Conflict analysis for roster weeks."""

from rosterhelper.analysis.conflict_analyzer import ConflictAnalyzer, FlagReport

__all__ = [
    "ConflictAnalyzer",
    "FlagReport",
]
