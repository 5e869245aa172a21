"""Pydantic models for the persisted JSON documents (camelCase on the wire)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from rollbook.domain.model import (  # noqa: TC001
    Perspective,
    SubmissionType,
    TechniqueCategory,
)


class DocumentBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PositionRecord(DocumentBaseModel):
    id: str
    name: str
    slug: str
    parent_id: str | None = Field(default=None, alias="parentId")
    path: list[str] = Field(default_factory=list)
    perspective: Perspective = Perspective.NEUTRAL
    gi_applicable: bool = Field(default=True, alias="giApplicable")
    nogi_applicable: bool = Field(default=True, alias="nogiApplicable")
    is_custom: bool = Field(default=False, alias="isCustom")


class TechniqueRecord(DocumentBaseModel):
    id: str
    name: str
    category: TechniqueCategory
    position_from_id: str = Field(alias="positionFromId")
    position_to_id: str | None = Field(default=None, alias="positionToId")
    submission_type: SubmissionType | None = Field(default=None, alias="submissionType")
    gi_applicable: bool = Field(default=True, alias="giApplicable")
    nogi_applicable: bool = Field(default=True, alias="nogiApplicable")
    aliases: list[str] = Field(default_factory=list)
    key_details: list[str] = Field(default_factory=list, alias="keyDetails")
    is_custom: bool = Field(default=False, alias="isCustom")


class UserTagRecord(DocumentBaseModel):
    id: str
    tag: str
    usage_count: int = Field(alias="usageCount")
    created_at: str = Field(alias="createdAt")
    last_used_at: str = Field(alias="lastUsedAt")


class TechniqueProgressRecord(DocumentBaseModel):
    id: str
    technique_id: str = Field(alias="techniqueId")
    first_seen_at: str = Field(alias="firstSeenAt")
    last_drilled_at: str = Field(alias="lastDrilledAt")
    times_drilled: int = Field(alias="timesDrilled")


class PartnerNameRecord(DocumentBaseModel):
    id: str
    name: str
    round_count: int = Field(alias="roundCount")
    last_used_at: str = Field(alias="lastUsedAt")


class TechniqueNoteRecord(DocumentBaseModel):
    id: str
    technique_id: str = Field(alias="techniqueId")
    notes: str
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class PositionNoteRecord(DocumentBaseModel):
    id: str
    position_id: str = Field(alias="positionId")
    notes: str
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class OverlayDocument(DocumentBaseModel):
    positions: list[PositionRecord] = Field(default_factory=list["PositionRecord"])
    techniques: list[TechniqueRecord] = Field(default_factory=list["TechniqueRecord"])
    tags: list[UserTagRecord] = Field(default_factory=list["UserTagRecord"])
    progress: list[TechniqueProgressRecord] = Field(
        default_factory=list["TechniqueProgressRecord"]
    )
    partners: list[PartnerNameRecord] = Field(default_factory=list["PartnerNameRecord"])
    technique_notes: list[TechniqueNoteRecord] = Field(
        default_factory=list["TechniqueNoteRecord"], alias="techniqueNotes"
    )
    position_notes: list[PositionNoteRecord] = Field(
        default_factory=list["PositionNoteRecord"], alias="positionNotes"
    )


class PositionsDocument(DocumentBaseModel):
    positions: list[PositionRecord]


class TechniquesDocument(DocumentBaseModel):
    techniques: list[TechniqueRecord]
