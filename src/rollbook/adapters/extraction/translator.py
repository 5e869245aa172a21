"""Translate extraction payloads into the domain and matched results back out."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rollbook.domain.reconciliation import (
    ExtractedPositionNote,
    ExtractedSession,
    ExtractedSparringRound,
    ExtractedTechnique,
    ExtractionPayload,
)

from .schema import (
    ExtractionPayloadModel,
    MatchedExtractionRecord,
    MatchedPositionNoteRecord,
    MatchedSessionRecord,
    MatchedSparringRoundRecord,
    MatchedSubmissionRecord,
    MatchedTechniqueRecord,
    MatchRecord,
)

if TYPE_CHECKING:
    from rollbook.domain.matching import MatchResult
    from rollbook.domain.model import Position, Technique
    from rollbook.domain.reconciliation import MatchedExtraction, MatchedSubmission


def parse_extraction_payload(raw: object) -> ExtractionPayload:
    """Validate an untyped payload (e.g. decoded JSON) and translate it.

    Raises :class:`pydantic.ValidationError` when the payload is not an
    object of the expected shape.
    """

    return translate_payload(ExtractionPayloadModel.model_validate(raw))


def translate_payload(model: ExtractionPayloadModel) -> ExtractionPayload:
    session = model.session
    return ExtractionPayload(
        session=ExtractedSession(
            date=session.date,
            gi_or_nogi=session.gi_or_nogi,
            session_type=session.session_type,
            techniques=tuple(
                ExtractedTechnique(
                    position_name=item.position_name,
                    technique_name=item.technique_name,
                    notes=item.notes,
                    key_details=tuple(item.key_details),
                )
                for item in session.techniques
            ),
            position_notes=tuple(
                ExtractedPositionNote(
                    position_name=item.position_name,
                    notes=item.notes,
                    key_details=tuple(item.key_details),
                )
                for item in session.position_notes
            ),
        ),
        sparring_rounds=tuple(
            ExtractedSparringRound(
                partner_name=round_.partner_name,
                partner_belt=round_.partner_belt,
                submissions_for=tuple(round_.submissions_for),
                submissions_against=tuple(round_.submissions_against),
                dominant_positions=tuple(round_.dominant_positions),
                stuck_positions=tuple(round_.stuck_positions),
                notes=round_.notes,
            )
            for round_ in model.sparring_rounds
        ),
    )


def matched_extraction_record(result: MatchedExtraction) -> MatchedExtractionRecord:
    session = result.session
    return MatchedExtractionRecord(
        session=MatchedSessionRecord(
            date=session.date,
            gi_or_nogi=str(session.gi_or_nogi) if session.gi_or_nogi else None,
            session_type=session.session_type,
            techniques=[
                MatchedTechniqueRecord(
                    id=str(item.id),
                    position_name=item.position_name,
                    position_match=_match_record(item.position_match),
                    technique_name=item.technique_name,
                    technique_match=_match_record(item.technique_match),
                    notes=item.notes,
                    key_details=list(item.key_details),
                )
                for item in session.techniques
            ],
            position_notes=[
                MatchedPositionNoteRecord(
                    id=str(item.id),
                    position_name=item.position_name,
                    position_match=_match_record(item.position_match),
                    notes=item.notes,
                    key_details=list(item.key_details),
                )
                for item in session.position_notes
            ],
        ),
        sparring_rounds=[
            MatchedSparringRoundRecord(
                id=str(round_.id),
                partner_name=round_.partner_name,
                partner_belt=round_.partner_belt,
                submissions_for=[_submission_record(item) for item in round_.submissions_for],
                submissions_against=[
                    _submission_record(item) for item in round_.submissions_against
                ],
                dominant_positions=list(round_.dominant_positions),
                stuck_positions=list(round_.stuck_positions),
                notes=round_.notes,
            )
            for round_ in result.sparring_rounds
        ],
    )


def matched_extraction_document(result: MatchedExtraction) -> dict[str, object]:
    """JSON-ready dict with camelCase keys."""

    return matched_extraction_record(result).model_dump(mode="json", by_alias=True)


def _match_record(
    match: MatchResult[Position] | MatchResult[Technique] | None,
) -> MatchRecord | None:
    if match is None:
        return None
    return MatchRecord(
        entity_id=match.entity.id,
        entity_name=match.entity.name,
        score=round(match.score, 4),
    )


def _submission_record(item: MatchedSubmission) -> MatchedSubmissionRecord:
    return MatchedSubmissionRecord(
        name=item.name,
        technique_match=_match_record(item.technique_match),
    )
