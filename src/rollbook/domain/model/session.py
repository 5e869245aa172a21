"""Logged training sessions (current record schema)."""

from __future__ import annotations

from dataclasses import dataclass

from rollbook.domain.model.enums import BeltLevel, GiNoGi, SessionType  # noqa: TC001


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionTechnique:
    id: str
    session_id: str
    technique_id: str
    position_id: str | None = None
    notes: str = ""
    key_details: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionPositionNote:
    id: str
    session_id: str
    position_id: str
    notes: str = ""
    key_details: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class RoundSubmission:
    id: str
    technique_id: str
    position_id: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SparringRound:
    id: str
    partner_name: str | None = None
    partner_belt: BeltLevel | None = None
    submissions_for: tuple[RoundSubmission, ...] = ()
    submissions_against: tuple[RoundSubmission, ...] = ()
    submissions_for_count: int = 0
    submissions_against_count: int = 0
    dominant_positions: tuple[str, ...] = ()
    stuck_positions: tuple[str, ...] = ()
    notes: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class LegacySparring:
    """Aggregate counters kept from records that predate per-round logging."""

    rounds: int = 0
    subs_achieved: int = 0
    subs_received: int = 0
    notes: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class Session:
    id: str
    user_id: str
    date: str
    session_type: SessionType
    gi_or_nogi: GiNoGi
    created_at: str
    updated_at: str
    duration_minutes: int | None = None
    energy_level: int | None = None
    techniques: tuple[SessionTechnique, ...] = ()
    position_notes: tuple[SessionPositionNote, ...] = ()
    sparring_rounds: tuple[SparringRound, ...] = ()
    legacy_sparring: LegacySparring | None = None
    notes: str = ""
    insights: tuple[str, ...] = ()
    goals_for_next: tuple[str, ...] = ()
