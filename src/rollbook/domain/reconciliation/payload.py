"""Structured extraction payload handed over by the transcription step.

Every leaf is untrusted free text. Absent values are represented as empty
strings or empty tuples, never ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, kw_only=True)
class ExtractedTechnique:
    position_name: str = ""
    technique_name: str = ""
    notes: str = ""
    key_details: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ExtractedPositionNote:
    position_name: str = ""
    notes: str = ""
    key_details: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ExtractedSparringRound:
    partner_name: str = ""
    partner_belt: str = ""
    submissions_for: tuple[str, ...] = ()
    submissions_against: tuple[str, ...] = ()
    dominant_positions: tuple[str, ...] = ()
    stuck_positions: tuple[str, ...] = ()
    notes: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class ExtractedSession:
    date: str = ""
    gi_or_nogi: str = ""
    session_type: str = ""
    techniques: tuple[ExtractedTechnique, ...] = ()
    position_notes: tuple[ExtractedPositionNote, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ExtractionPayload:
    session: ExtractedSession = field(default_factory=ExtractedSession)
    sparring_rounds: tuple[ExtractedSparringRound, ...] = ()
