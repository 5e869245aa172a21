"""Translate between persisted document records and domain entities."""

from __future__ import annotations

from rollbook.domain.model import (
    OverlayState,
    PartnerName,
    Position,
    Technique,
    TechniqueProgress,
    UserPositionNote,
    UserTag,
    UserTechniqueNote,
)

from .schema import (
    OverlayDocument,
    PartnerNameRecord,
    PositionNoteRecord,
    PositionRecord,
    TechniqueNoteRecord,
    TechniqueProgressRecord,
    TechniqueRecord,
    UserTagRecord,
)


def translate_position(record: PositionRecord) -> Position:
    return Position(
        id=record.id,
        name=record.name,
        slug=record.slug,
        parent_id=record.parent_id,
        path=tuple(record.path) or (record.slug,),
        perspective=record.perspective,
        gi_applicable=record.gi_applicable,
        nogi_applicable=record.nogi_applicable,
        is_custom=record.is_custom,
    )


def translate_technique(record: TechniqueRecord) -> Technique:
    return Technique(
        id=record.id,
        name=record.name,
        category=record.category,
        position_from_id=record.position_from_id,
        position_to_id=record.position_to_id,
        submission_type=record.submission_type,
        gi_applicable=record.gi_applicable,
        nogi_applicable=record.nogi_applicable,
        aliases=tuple(record.aliases),
        key_details=tuple(record.key_details),
        is_custom=record.is_custom,
    )


def translate_overlay(document: OverlayDocument) -> OverlayState:
    return OverlayState(
        positions=tuple(translate_position(record) for record in document.positions),
        techniques=tuple(translate_technique(record) for record in document.techniques),
        tags=tuple(
            UserTag(
                id=record.id,
                tag=record.tag,
                usage_count=record.usage_count,
                created_at=record.created_at,
                last_used_at=record.last_used_at,
            )
            for record in document.tags
        ),
        progress=tuple(
            TechniqueProgress(
                id=record.id,
                technique_id=record.technique_id,
                first_seen_at=record.first_seen_at,
                last_drilled_at=record.last_drilled_at,
                times_drilled=record.times_drilled,
            )
            for record in document.progress
        ),
        partners=tuple(
            PartnerName(
                id=record.id,
                name=record.name,
                round_count=record.round_count,
                last_used_at=record.last_used_at,
            )
            for record in document.partners
        ),
        technique_notes=tuple(
            UserTechniqueNote(
                id=record.id,
                technique_id=record.technique_id,
                notes=record.notes,
                created_at=record.created_at,
                updated_at=record.updated_at,
            )
            for record in document.technique_notes
        ),
        position_notes=tuple(
            UserPositionNote(
                id=record.id,
                position_id=record.position_id,
                notes=record.notes,
                created_at=record.created_at,
                updated_at=record.updated_at,
            )
            for record in document.position_notes
        ),
    )


def position_record(position: Position) -> PositionRecord:
    return PositionRecord(
        id=position.id,
        name=position.name,
        slug=position.slug,
        parent_id=position.parent_id,
        path=list(position.path),
        perspective=position.perspective,
        gi_applicable=position.gi_applicable,
        nogi_applicable=position.nogi_applicable,
        is_custom=position.is_custom,
    )


def technique_record(technique: Technique) -> TechniqueRecord:
    return TechniqueRecord(
        id=technique.id,
        name=technique.name,
        category=technique.category,
        position_from_id=technique.position_from_id,
        position_to_id=technique.position_to_id,
        submission_type=technique.submission_type,
        gi_applicable=technique.gi_applicable,
        nogi_applicable=technique.nogi_applicable,
        aliases=list(technique.aliases),
        key_details=list(technique.key_details),
        is_custom=technique.is_custom,
    )


def overlay_document(state: OverlayState) -> OverlayDocument:
    return OverlayDocument(
        positions=[position_record(position) for position in state.positions],
        techniques=[technique_record(technique) for technique in state.techniques],
        tags=[
            UserTagRecord(
                id=tag.id,
                tag=tag.tag,
                usage_count=tag.usage_count,
                created_at=tag.created_at,
                last_used_at=tag.last_used_at,
            )
            for tag in state.tags
        ],
        progress=[
            TechniqueProgressRecord(
                id=item.id,
                technique_id=item.technique_id,
                first_seen_at=item.first_seen_at,
                last_drilled_at=item.last_drilled_at,
                times_drilled=item.times_drilled,
            )
            for item in state.progress
        ],
        partners=[
            PartnerNameRecord(
                id=partner.id,
                name=partner.name,
                round_count=partner.round_count,
                last_used_at=partner.last_used_at,
            )
            for partner in state.partners
        ],
        technique_notes=[
            TechniqueNoteRecord(
                id=note.id,
                technique_id=note.technique_id,
                notes=note.notes,
                created_at=note.created_at,
                updated_at=note.updated_at,
            )
            for note in state.technique_notes
        ],
        position_notes=[
            PositionNoteRecord(
                id=note.id,
                position_id=note.position_id,
                notes=note.notes,
                created_at=note.created_at,
                updated_at=note.updated_at,
            )
            for note in state.position_notes
        ],
    )
