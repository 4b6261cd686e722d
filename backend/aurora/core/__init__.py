"""
Schedule analysis engine: overlap detection, suggestion scoring and the
local validation fallback.
"""
from aurora.core.overlap import (
    TimedEvent,
    OverlapPair,
    overlaps,
    find_overlaps,
    find_overlap_groups,
)
from aurora.core.scoring import SuggestionCandidate, score_suggestions
from aurora.core.fallback import FALLBACK_MARKER, fallback_validation

__all__ = [
    "TimedEvent",
    "OverlapPair",
    "overlaps",
    "find_overlaps",
    "find_overlap_groups",
    "SuggestionCandidate",
    "score_suggestions",
    "FALLBACK_MARKER",
    "fallback_validation",
]
