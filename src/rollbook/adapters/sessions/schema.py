"""Pydantic model of the current (version 2) persisted session record."""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from rollbook.domain.model import BeltLevel, GiNoGi, SessionType  # noqa: TC001

CURRENT_SCHEMA_VERSION: Final[int] = 2


class SessionBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SessionTechniqueRecord(SessionBaseModel):
    id: str
    session_id: str = Field(alias="sessionId")
    technique_id: str = Field(alias="techniqueId")
    position_id: str | None = Field(default=None, alias="positionId")
    notes: str = ""
    key_details: list[str] = Field(default_factory=list, alias="keyDetails")


class SessionPositionNoteRecord(SessionBaseModel):
    id: str
    session_id: str = Field(alias="sessionId")
    position_id: str = Field(alias="positionId")
    notes: str = ""
    key_details: list[str] = Field(default_factory=list, alias="keyDetails")


class RoundSubmissionRecord(SessionBaseModel):
    id: str
    technique_id: str = Field(alias="techniqueId")
    position_id: str | None = Field(default=None, alias="positionId")


class SparringRoundRecord(SessionBaseModel):
    id: str
    partner_name: str | None = Field(default=None, alias="partnerName")
    partner_belt: BeltLevel | None = Field(default=None, alias="partnerBelt")
    submissions_for: list[RoundSubmissionRecord] = Field(
        default_factory=list["RoundSubmissionRecord"], alias="submissionsFor"
    )
    submissions_against: list[RoundSubmissionRecord] = Field(
        default_factory=list["RoundSubmissionRecord"], alias="submissionsAgainst"
    )
    submissions_for_count: int = Field(default=0, alias="submissionsForCount")
    submissions_against_count: int = Field(default=0, alias="submissionsAgainstCount")
    dominant_positions: list[str] = Field(default_factory=list, alias="dominantPositions")
    stuck_positions: list[str] = Field(default_factory=list, alias="stuckPositions")
    notes: str = ""


class LegacySparringRecord(SessionBaseModel):
    rounds: int = 0
    subs_achieved: int = Field(default=0, alias="subsAchieved")
    subs_received: int = Field(default=0, alias="subsReceived")
    notes: str = ""


class SessionRecord(SessionBaseModel):
    schema_version: int = Field(default=CURRENT_SCHEMA_VERSION, alias="schemaVersion")
    id: str
    user_id: str = Field(alias="userId")
    date: str
    session_type: SessionType = Field(alias="sessionType")
    gi_or_nogi: GiNoGi = Field(alias="giOrNogi")
    duration_minutes: int | None = Field(default=None, alias="durationMinutes")
    energy_level: int | None = Field(default=None, alias="energyLevel")
    techniques: list[SessionTechniqueRecord] = Field(
        default_factory=list["SessionTechniqueRecord"]
    )
    position_notes: list[SessionPositionNoteRecord] = Field(
        default_factory=list["SessionPositionNoteRecord"], alias="positionNotes"
    )
    sparring_rounds: list[SparringRoundRecord] = Field(
        default_factory=list["SparringRoundRecord"], alias="sparringRounds"
    )
    legacy_sparring: LegacySparringRecord | None = Field(default=None, alias="legacySparring")
    notes: str = ""
    insights: list[str] = Field(default_factory=list)
    goals_for_next: list[str] = Field(default_factory=list, alias="goalsForNext")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
