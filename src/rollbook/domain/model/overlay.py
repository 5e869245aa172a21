"""User overlay: custom catalog entries plus per-user bookkeeping records."""

from __future__ import annotations

from dataclasses import dataclass

from rollbook.domain.model.taxonomy import Position, Technique  # noqa: TC001


@dataclass(frozen=True, slots=True, kw_only=True)
class UserTag:
    id: str
    tag: str
    usage_count: int
    created_at: str
    last_used_at: str


@dataclass(frozen=True, slots=True, kw_only=True)
class TechniqueProgress:
    id: str
    technique_id: str
    first_seen_at: str
    last_drilled_at: str
    times_drilled: int


@dataclass(frozen=True, slots=True, kw_only=True)
class PartnerName:
    id: str
    name: str
    round_count: int
    last_used_at: str


@dataclass(frozen=True, slots=True, kw_only=True)
class UserTechniqueNote:
    id: str
    technique_id: str
    notes: str
    created_at: str
    updated_at: str


@dataclass(frozen=True, slots=True, kw_only=True)
class UserPositionNote:
    id: str
    position_id: str
    notes: str
    created_at: str
    updated_at: str


@dataclass(frozen=True, slots=True, kw_only=True)
class OverlayState:
    """One immutable snapshot of the user overlay.

    Writers never mutate a snapshot in place; they derive a new one with
    ``dataclasses.replace`` and hand it back to the store.
    """

    positions: tuple[Position, ...] = ()
    techniques: tuple[Technique, ...] = ()
    tags: tuple[UserTag, ...] = ()
    progress: tuple[TechniqueProgress, ...] = ()
    partners: tuple[PartnerName, ...] = ()
    technique_notes: tuple[UserTechniqueNote, ...] = ()
    position_notes: tuple[UserPositionNote, ...] = ()


EMPTY_OVERLAY = OverlayState()
