"""Persisted session records and their versioned migration."""

from __future__ import annotations

from .migration import (
    UPGRADERS,
    MigrationFailure,
    migrate_session_record,
    migrate_session_records,
    session_document,
    sort_sessions,
    translate_session,
)
from .schema import CURRENT_SCHEMA_VERSION, SessionRecord

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "UPGRADERS",
    "MigrationFailure",
    "SessionRecord",
    "migrate_session_record",
    "migrate_session_records",
    "session_document",
    "sort_sessions",
    "translate_session",
]
