"""Reconciliation output: the payload with every name paired to a match.

This module intentionally holds only the output records; the engine that
fills them lives in ``engine``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from rollbook.domain.matching import MatchResult
    from rollbook.domain.model import GiNoGi, Position, Technique


type PositionMatch = MatchResult[Position] | None
type TechniqueMatch = MatchResult[Technique] | None


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchedTechnique:
    id: UUID
    position_name: str
    position_match: PositionMatch
    technique_name: str
    technique_match: TechniqueMatch
    notes: str
    key_details: tuple[str, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchedPositionNote:
    id: UUID
    position_name: str
    position_match: PositionMatch
    notes: str
    key_details: tuple[str, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchedSubmission:
    name: str
    technique_match: TechniqueMatch


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchedSparringRound:
    id: UUID
    partner_name: str
    partner_belt: str
    submissions_for: tuple[MatchedSubmission, ...]
    submissions_against: tuple[MatchedSubmission, ...]
    dominant_positions: tuple[str, ...]
    stuck_positions: tuple[str, ...]
    notes: str


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchedSession:
    date: str
    gi_or_nogi: GiNoGi | None
    session_type: str
    techniques: tuple[MatchedTechnique, ...]
    position_notes: tuple[MatchedPositionNote, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchedExtraction:
    session: MatchedSession
    sparring_rounds: tuple[MatchedSparringRound, ...]

    def unmatched_positions(self) -> tuple[str, ...]:
        """Raw position names without a catalog match, first-seen order."""

        names = [
            item.position_name
            for item in (*self.session.techniques, *self.session.position_notes)
            if item.position_match is None
        ]
        return _dedupe_names(names)

    def unmatched_techniques(self) -> tuple[str, ...]:
        """Raw technique and submission names without a catalog match."""

        names = [
            item.technique_name
            for item in self.session.techniques
            if item.technique_match is None
        ]
        for round_ in self.sparring_rounds:
            names.extend(
                submission.name
                for submission in (*round_.submissions_for, *round_.submissions_against)
                if submission.technique_match is None
            )
        return _dedupe_names(names)


def _dedupe_names(names: list[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    unique: list[str] = []
    for name in names:
        stripped = name.strip()
        key = stripped.casefold()
        if not stripped or key in seen:
            continue
        seen.add(key)
        unique.append(stripped)
    return tuple(unique)
