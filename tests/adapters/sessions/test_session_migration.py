from __future__ import annotations

import pytest

from rollbook.adapters.sessions import (
    CURRENT_SCHEMA_VERSION,
    MigrationFailure,
    migrate_session_record,
    migrate_session_records,
    session_document,
    sort_sessions,
)
from rollbook.domain.model import BeltLevel, GiNoGi, LegacySparring, Session, SessionType


def _v1_record(**overrides: object) -> dict[str, object]:
    record: dict[str, object] = {
        "id": "s-1",
        "userId": "u-1",
        "date": "2024-03-01",
        "sessionType": "regular-class",
        "giOrNogi": "gi",
        "durationMinutes": 90,
        "energyLevel": 4,
        "techniques": [
            {
                "id": "t-1",
                "sessionId": "s-1",
                "techniqueId": "closed-guard-armbar",
                "positionId": "closed-guard",
                "keyDetailsLearned": ["pinch knees"],
                "notes": "hips up",
            },
            {
                "id": "t-2",
                "sessionId": "s-1",
                "techniqueId": None,
                "positionId": "mount",
                "notes": "stay heavy",
            },
            {"id": "t-3", "sessionId": "s-1", "techniqueId": None, "positionId": None},
        ],
        "sparringRounds": 5,
        "subsAchieved": 2,
        "subsReceived": 1,
        "sparringNotes": "tired",
        "notes": "",
        "insights": ["frame first"],
        "goalsForNext": [],
        "createdAt": "2024-03-01T20:00:00Z",
        "updatedAt": "2024-03-01T20:00:00Z",
    }
    record.update(overrides)
    return record


def _v2_record(**overrides: object) -> dict[str, object]:
    record: dict[str, object] = {
        "schemaVersion": 2,
        "id": "s-2",
        "userId": "u-1",
        "date": "2024-04-01",
        "sessionType": "open-mat",
        "giOrNogi": "nogi",
        "sparringRounds": [
            {
                "id": "r-1",
                "partnerName": "Alex",
                "partnerBelt": "blue",
                "submissionsFor": [
                    {"id": "sub-1", "techniqueId": "triangle-choke", "positionId": "closed-guard"}
                ],
                "submissionsForCount": 1,
            }
        ],
        "createdAt": "2024-04-01T19:00:00Z",
        "updatedAt": "2024-04-01T21:00:00Z",
    }
    record.update(overrides)
    return record


def test_unversioned_record_is_upgraded_from_version_one() -> None:
    session = migrate_session_record(_v1_record())

    assert isinstance(session, Session)
    assert session.sparring_rounds == ()
    assert session.legacy_sparring == LegacySparring(
        rounds=5, subs_achieved=2, subs_received=1, notes="tired"
    )
    assert [item.technique_id for item in session.techniques] == ["closed-guard-armbar"]
    assert session.techniques[0].key_details == ("pinch knees",)
    assert [note.position_id for note in session.position_notes] == ["mount"]
    assert session.position_notes[0].notes == "stay heavy"
    assert session.insights == ("frame first",)


def test_version_one_without_sparring_has_no_legacy_counters() -> None:
    session = migrate_session_record(
        _v1_record(sparringRounds=0, subsAchieved=None, subsReceived=None, sparringNotes=None)
    )

    assert isinstance(session, Session)
    assert session.legacy_sparring is None


def test_current_record_translates_directly() -> None:
    session = migrate_session_record(_v2_record())

    assert isinstance(session, Session)
    assert session.session_type is SessionType.OPEN_MAT
    assert session.gi_or_nogi is GiNoGi.NOGI
    round_ = session.sparring_rounds[0]
    assert round_.partner_belt is BeltLevel.BLUE
    assert round_.submissions_for[0].technique_id == "triangle-choke"
    assert round_.submissions_for_count == 1
    assert session.legacy_sparring is None


@pytest.mark.parametrize(
    ("raw", "reason"),
    [
        ("not a record", "record is not an object"),
        (_v2_record(schemaVersion=99), "unsupported schema version 99"),
        (_v2_record(schemaVersion="2"), "schemaVersion must be an integer"),
        (_v1_record(sparringRounds="many"), "sparringRounds must be a number"),
        (_v1_record(sparringRounds=float("inf")), "sparringRounds must be a number"),
        (_v1_record(subsAchieved=float("-inf")), "subsAchieved must be a number"),
        (_v1_record(techniques="armbar"), "techniques must be a list"),
    ],
)
def test_unmigratable_records_report_failures(raw: object, reason: str) -> None:
    result = migrate_session_record(raw)

    assert isinstance(result, MigrationFailure)
    assert result.reason == reason


def test_invalid_current_record_reports_validation_failure() -> None:
    result = migrate_session_record(_v2_record(giOrNogi="kimono"))

    assert isinstance(result, MigrationFailure)
    assert result.version == CURRENT_SCHEMA_VERSION
    assert result.record_id == "s-2"
    assert result.reason.startswith("invalid version 2 record")


def test_migrate_records_splits_sessions_and_failures() -> None:
    sessions, failures = migrate_session_records([_v1_record(), 42, _v2_record()])

    assert [session.id for session in sessions] == ["s-1", "s-2"]
    assert len(failures) == 1


def test_sort_sessions_newest_first() -> None:
    sessions, _ = migrate_session_records(
        [
            _v2_record(id="a", date="2024-04-01", createdAt="2024-04-01T08:00:00Z"),
            _v2_record(id="b", date="2024-04-02", createdAt="2024-04-02T08:00:00Z"),
            _v2_record(id="c", date="2024-04-01", createdAt="2024-04-01T18:00:00Z"),
        ]
    )

    assert [session.id for session in sort_sessions(sessions)] == ["b", "c", "a"]


def test_session_document_is_current_version() -> None:
    session = migrate_session_record(_v1_record())
    assert isinstance(session, Session)

    document = session_document(session)

    assert document["schemaVersion"] == CURRENT_SCHEMA_VERSION
    assert document["sparringRounds"] == []
    assert document["legacySparring"] == {
        "rounds": 5,
        "subsAchieved": 2,
        "subsReceived": 1,
        "notes": "tired",
    }
    assert migrate_session_record(document) == session
