"""Versioned migration of persisted session records.

Records carry an explicit ``schemaVersion``; records written before the
field existed are version 1. Each upgrader lifts a raw document exactly one
version; after the last step the document is validated against the current
schema and translated into a domain :class:`Session`.

Version history:
- 1: sparring logged as session-wide counters (``sparringRounds`` as an
  integer, ``subsAchieved``, ``subsReceived``, ``sparringNotes``); technique
  rows may lack a technique and carry only a position.
- 2: per-round sparring (``sparringRounds`` as a list) with the old counters
  kept under ``legacySparring``; position-only rows live in
  ``positionNotes``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Final, cast

from pydantic import ValidationError

from rollbook.domain.model import (
    LegacySparring,
    RoundSubmission,
    Session,
    SessionPositionNote,
    SessionTechnique,
    SparringRound,
)

from .schema import CURRENT_SCHEMA_VERSION, SessionRecord

type RawRecord = dict[str, object]
type Upgrader = Callable[[RawRecord], RawRecord]

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MigrationFailure:
    reason: str
    version: int | None = None
    record_id: str | None = None


class _UpgradeError(ValueError):
    pass


def _as_int(value: object, *, field: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        raise _UpgradeError(f"{field} must be a number")
    try:
        return int(value)
    except (ValueError, OverflowError) as exc:
        raise _UpgradeError(f"{field} must be a number") from exc


def _as_list(value: object, *, field: str) -> list[object]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise _UpgradeError(f"{field} must be a list")
    return cast(list[object], value)


def _upgrade_v1(record: RawRecord) -> RawRecord:
    upgraded = dict(record)

    techniques: list[object] = []
    position_notes: list[object] = _as_list(record.get("positionNotes"), field="positionNotes")
    for row in _as_list(record.get("techniques"), field="techniques"):
        if not isinstance(row, Mapping):
            raise _UpgradeError("techniques entries must be objects")
        item = cast(Mapping[str, object], row)
        key_details = item.get("keyDetails", item.get("keyDetailsLearned")) or []
        if item.get("techniqueId"):
            techniques.append(
                {
                    "id": item.get("id"),
                    "sessionId": item.get("sessionId", record.get("id")),
                    "techniqueId": item.get("techniqueId"),
                    "positionId": item.get("positionId"),
                    "notes": item.get("notes") or "",
                    "keyDetails": key_details,
                }
            )
        elif item.get("positionId"):
            position_notes.append(
                {
                    "id": item.get("id"),
                    "sessionId": item.get("sessionId", record.get("id")),
                    "positionId": item.get("positionId"),
                    "notes": item.get("notes") or "",
                    "keyDetails": key_details,
                }
            )
    upgraded["techniques"] = techniques
    upgraded["positionNotes"] = position_notes

    rounds = record.get("sparringRounds")
    if isinstance(rounds, list):
        upgraded["sparringRounds"] = rounds
    else:
        legacy = {
            "rounds": _as_int(rounds, field="sparringRounds"),
            "subsAchieved": _as_int(record.get("subsAchieved"), field="subsAchieved"),
            "subsReceived": _as_int(record.get("subsReceived"), field="subsReceived"),
            "notes": record.get("sparringNotes") or "",
        }
        upgraded["sparringRounds"] = []
        if any(legacy[key] for key in ("rounds", "subsAchieved", "subsReceived", "notes")):
            upgraded["legacySparring"] = legacy

    for key in ("subsAchieved", "subsReceived", "sparringNotes"):
        upgraded.pop(key, None)
    upgraded["schemaVersion"] = 2
    return upgraded


UPGRADERS: Final[dict[int, Upgrader]] = {
    1: _upgrade_v1,
}


def migrate_session_record(raw: object) -> Session | MigrationFailure:
    """Lift ``raw`` to the current schema; never raises."""

    if not isinstance(raw, Mapping):
        return MigrationFailure(reason="record is not an object")
    record: RawRecord = dict(cast(Mapping[str, object], raw))
    record_id = record.get("id") if isinstance(record.get("id"), str) else None

    version_value = record.get("schemaVersion", 1)
    if isinstance(version_value, bool) or not isinstance(version_value, int):
        return MigrationFailure(reason="schemaVersion must be an integer", record_id=record_id)
    version = version_value
    if version < 1 or version > CURRENT_SCHEMA_VERSION:
        return MigrationFailure(
            reason=f"unsupported schema version {version}",
            version=version,
            record_id=record_id,
        )

    while version < CURRENT_SCHEMA_VERSION:
        try:
            record = UPGRADERS[version](record)
        except _UpgradeError as exc:
            return MigrationFailure(reason=str(exc), version=version, record_id=record_id)
        version += 1

    try:
        validated = SessionRecord.model_validate(record)
    except ValidationError as exc:
        return MigrationFailure(
            reason=f"invalid version {version} record: {exc.error_count()} error(s)",
            version=version,
            record_id=record_id,
        )
    return translate_session(validated)


def migrate_session_records(
    raws: Iterable[object],
) -> tuple[list[Session], list[MigrationFailure]]:
    sessions: list[Session] = []
    failures: list[MigrationFailure] = []
    for raw in raws:
        result = migrate_session_record(raw)
        if isinstance(result, MigrationFailure):
            log.warning(
                "Skipping session record %s: %s", result.record_id or "<unknown>", result.reason
            )
            failures.append(result)
        else:
            sessions.append(result)
    return sessions, failures


def sort_sessions(sessions: Iterable[Session]) -> list[Session]:
    """Newest date first; same-day sessions newest ``created_at`` first."""

    return sorted(sessions, key=lambda session: (session.date, session.created_at), reverse=True)


def translate_session(record: SessionRecord) -> Session:
    return Session(
        id=record.id,
        user_id=record.user_id,
        date=record.date,
        session_type=record.session_type,
        gi_or_nogi=record.gi_or_nogi,
        created_at=record.created_at,
        updated_at=record.updated_at,
        duration_minutes=record.duration_minutes,
        energy_level=record.energy_level,
        techniques=tuple(
            SessionTechnique(
                id=item.id,
                session_id=item.session_id,
                technique_id=item.technique_id,
                position_id=item.position_id,
                notes=item.notes,
                key_details=tuple(item.key_details),
            )
            for item in record.techniques
        ),
        position_notes=tuple(
            SessionPositionNote(
                id=item.id,
                session_id=item.session_id,
                position_id=item.position_id,
                notes=item.notes,
                key_details=tuple(item.key_details),
            )
            for item in record.position_notes
        ),
        sparring_rounds=tuple(
            SparringRound(
                id=item.id,
                partner_name=item.partner_name,
                partner_belt=item.partner_belt,
                submissions_for=tuple(
                    RoundSubmission(
                        id=sub.id, technique_id=sub.technique_id, position_id=sub.position_id
                    )
                    for sub in item.submissions_for
                ),
                submissions_against=tuple(
                    RoundSubmission(
                        id=sub.id, technique_id=sub.technique_id, position_id=sub.position_id
                    )
                    for sub in item.submissions_against
                ),
                submissions_for_count=item.submissions_for_count,
                submissions_against_count=item.submissions_against_count,
                dominant_positions=tuple(item.dominant_positions),
                stuck_positions=tuple(item.stuck_positions),
                notes=item.notes,
            )
            for item in record.sparring_rounds
        ),
        legacy_sparring=(
            LegacySparring(
                rounds=record.legacy_sparring.rounds,
                subs_achieved=record.legacy_sparring.subs_achieved,
                subs_received=record.legacy_sparring.subs_received,
                notes=record.legacy_sparring.notes,
            )
            if record.legacy_sparring
            else None
        ),
        notes=record.notes,
        insights=tuple(record.insights),
        goals_for_next=tuple(record.goals_for_next),
    )


def session_document(session: Session) -> dict[str, object]:
    """Current-version JSON document for ``session`` (camelCase keys)."""

    record = SessionRecord.model_validate(
        {
            "schemaVersion": CURRENT_SCHEMA_VERSION,
            "id": session.id,
            "userId": session.user_id,
            "date": session.date,
            "sessionType": session.session_type,
            "giOrNogi": session.gi_or_nogi,
            "durationMinutes": session.duration_minutes,
            "energyLevel": session.energy_level,
            "techniques": [
                {
                    "id": item.id,
                    "sessionId": item.session_id,
                    "techniqueId": item.technique_id,
                    "positionId": item.position_id,
                    "notes": item.notes,
                    "keyDetails": list(item.key_details),
                }
                for item in session.techniques
            ],
            "positionNotes": [
                {
                    "id": item.id,
                    "sessionId": item.session_id,
                    "positionId": item.position_id,
                    "notes": item.notes,
                    "keyDetails": list(item.key_details),
                }
                for item in session.position_notes
            ],
            "sparringRounds": [
                {
                    "id": item.id,
                    "partnerName": item.partner_name,
                    "partnerBelt": item.partner_belt,
                    "submissionsFor": [_submission_dict(sub) for sub in item.submissions_for],
                    "submissionsAgainst": [
                        _submission_dict(sub) for sub in item.submissions_against
                    ],
                    "submissionsForCount": item.submissions_for_count,
                    "submissionsAgainstCount": item.submissions_against_count,
                    "dominantPositions": list(item.dominant_positions),
                    "stuckPositions": list(item.stuck_positions),
                    "notes": item.notes,
                }
                for item in session.sparring_rounds
            ],
            "legacySparring": (
                {
                    "rounds": session.legacy_sparring.rounds,
                    "subsAchieved": session.legacy_sparring.subs_achieved,
                    "subsReceived": session.legacy_sparring.subs_received,
                    "notes": session.legacy_sparring.notes,
                }
                if session.legacy_sparring
                else None
            ),
            "notes": session.notes,
            "insights": list(session.insights),
            "goalsForNext": list(session.goals_for_next),
            "createdAt": session.created_at,
            "updatedAt": session.updated_at,
        }
    )
    return record.model_dump(mode="json", by_alias=True)


def _submission_dict(submission: RoundSubmission) -> dict[str, object]:
    return {
        "id": submission.id,
        "techniqueId": submission.technique_id,
        "positionId": submission.position_id,
    }
