"""Reconciliation of extracted free-text names against the taxonomy.

Flow for one extraction:
1) the transcription step produces an ``ExtractionPayload`` (out of scope)
2) ``reconcile`` pairs each name with a ``MatchResult`` or ``None``
3) the caller reviews ``unmatched_positions`` / ``unmatched_techniques`` and
   may create custom catalog entries, which rebuilds the index
"""

from __future__ import annotations

from .contracts import (
    MatchedExtraction,
    MatchedPositionNote,
    MatchedSession,
    MatchedSparringRound,
    MatchedSubmission,
    MatchedTechnique,
    PositionMatch,
    TechniqueMatch,
)
from .engine import reconcile
from .normalize import parse_gi_or_nogi
from .payload import (
    ExtractedPositionNote,
    ExtractedSession,
    ExtractedSparringRound,
    ExtractedTechnique,
    ExtractionPayload,
)

__all__ = [
    "ExtractedPositionNote",
    "ExtractedSession",
    "ExtractedSparringRound",
    "ExtractedTechnique",
    "ExtractionPayload",
    "MatchedExtraction",
    "MatchedPositionNote",
    "MatchedSession",
    "MatchedSparringRound",
    "MatchedSubmission",
    "MatchedTechnique",
    "PositionMatch",
    "TechniqueMatch",
    "parse_gi_or_nogi",
    "reconcile",
]
