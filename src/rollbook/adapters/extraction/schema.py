"""Pydantic models for extraction payloads and matched-extraction output."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _none_to_empty_str(value: object) -> object:
    if value is None:
        return ""
    return value


def _coerce_str_list(value: object) -> object:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, Sequence):
        return [item for item in value if isinstance(item, str)]
    return value


class ExtractionBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ExtractedTechniquePayload(ExtractionBaseModel):
    position_name: str = Field(default="", alias="positionName")
    technique_name: str = Field(default="", alias="techniqueName")
    notes: str = ""
    key_details: list[str] = Field(default_factory=list, alias="keyDetails")

    _blank_strings = field_validator(
        "position_name", "technique_name", "notes", mode="before"
    )(_none_to_empty_str)
    _string_lists = field_validator("key_details", mode="before")(_coerce_str_list)


class ExtractedPositionNotePayload(ExtractionBaseModel):
    position_name: str = Field(default="", alias="positionName")
    notes: str = ""
    key_details: list[str] = Field(default_factory=list, alias="keyDetails")

    _blank_strings = field_validator("position_name", "notes", mode="before")(_none_to_empty_str)
    _string_lists = field_validator("key_details", mode="before")(_coerce_str_list)


class ExtractedSparringRoundPayload(ExtractionBaseModel):
    partner_name: str = Field(default="", alias="partnerName")
    partner_belt: str = Field(default="", alias="partnerBelt")
    submissions_for: list[str] = Field(default_factory=list, alias="submissionsFor")
    submissions_against: list[str] = Field(default_factory=list, alias="submissionsAgainst")
    dominant_positions: list[str] = Field(default_factory=list, alias="dominantPositions")
    stuck_positions: list[str] = Field(default_factory=list, alias="stuckPositions")
    notes: str = ""

    _blank_strings = field_validator(
        "partner_name", "partner_belt", "notes", mode="before"
    )(_none_to_empty_str)
    _string_lists = field_validator(
        "submissions_for",
        "submissions_against",
        "dominant_positions",
        "stuck_positions",
        mode="before",
    )(_coerce_str_list)


class ExtractedSessionPayload(ExtractionBaseModel):
    date: str = ""
    gi_or_nogi: str = Field(default="", alias="giOrNogi")
    session_type: str = Field(default="", alias="sessionType")
    techniques: list[ExtractedTechniquePayload] = Field(
        default_factory=list["ExtractedTechniquePayload"]
    )
    position_notes: list[ExtractedPositionNotePayload] = Field(
        default_factory=list["ExtractedPositionNotePayload"], alias="positionNotes"
    )

    _blank_strings = field_validator(
        "date", "gi_or_nogi", "session_type", mode="before"
    )(_none_to_empty_str)

    @field_validator("techniques", "position_notes", mode="before")
    @classmethod
    def _none_to_empty_list(cls, value: object) -> object:
        return [] if value is None else value


class ExtractionPayloadModel(ExtractionBaseModel):
    session: ExtractedSessionPayload = Field(default_factory=ExtractedSessionPayload)
    sparring_rounds: list[ExtractedSparringRoundPayload] = Field(
        default_factory=list["ExtractedSparringRoundPayload"], alias="sparringRounds"
    )

    @field_validator("session", mode="before")
    @classmethod
    def _none_to_empty_session(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("sparring_rounds", mode="before")
    @classmethod
    def _none_to_empty_list(cls, value: object) -> object:
        return [] if value is None else value


# -- output -----------------------------------------------------------------


class MatchRecord(ExtractionBaseModel):
    entity_id: str = Field(alias="entityId")
    entity_name: str = Field(alias="entityName")
    score: float


class MatchedTechniqueRecord(ExtractionBaseModel):
    id: str
    position_name: str = Field(alias="positionName")
    position_match: MatchRecord | None = Field(alias="positionMatch")
    technique_name: str = Field(alias="techniqueName")
    technique_match: MatchRecord | None = Field(alias="techniqueMatch")
    notes: str
    key_details: list[str] = Field(alias="keyDetails")


class MatchedPositionNoteRecord(ExtractionBaseModel):
    id: str
    position_name: str = Field(alias="positionName")
    position_match: MatchRecord | None = Field(alias="positionMatch")
    notes: str
    key_details: list[str] = Field(alias="keyDetails")


class MatchedSubmissionRecord(ExtractionBaseModel):
    name: str
    technique_match: MatchRecord | None = Field(alias="techniqueMatch")


class MatchedSparringRoundRecord(ExtractionBaseModel):
    id: str
    partner_name: str = Field(alias="partnerName")
    partner_belt: str = Field(alias="partnerBelt")
    submissions_for: list[MatchedSubmissionRecord] = Field(alias="submissionsFor")
    submissions_against: list[MatchedSubmissionRecord] = Field(alias="submissionsAgainst")
    dominant_positions: list[str] = Field(alias="dominantPositions")
    stuck_positions: list[str] = Field(alias="stuckPositions")
    notes: str


class MatchedSessionRecord(ExtractionBaseModel):
    date: str
    gi_or_nogi: str | None = Field(alias="giOrNogi")
    session_type: str = Field(alias="sessionType")
    techniques: list[MatchedTechniqueRecord]
    position_notes: list[MatchedPositionNoteRecord] = Field(alias="positionNotes")


class MatchedExtractionRecord(ExtractionBaseModel):
    session: MatchedSessionRecord
    sparring_rounds: list[MatchedSparringRoundRecord] = Field(alias="sparringRounds")
