"""Application orchestration entry points."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

from rollbook.adapters.extraction import matched_extraction_document, parse_extraction_payload
from rollbook.adapters.overlay_store import JsonFileOverlayStore
from rollbook.adapters.sessions import (
    MigrationFailure,
    migrate_session_record,
    migrate_session_records,
    session_document,
    sort_sessions,
)
from rollbook.adapters.system_catalog import load_system_catalog
from rollbook.config import get_matching_config, get_storage_config
from rollbook.domain.catalog import Catalog
from rollbook.domain.overlay import (
    record_partner_names,
    record_tag_usage,
    record_technique_progress,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from rollbook.config import MatchingConfig, StorageConfig
    from rollbook.domain.model import OverlayState, Session
    from rollbook.domain.ports import CatalogStore
    from rollbook.domain.reconciliation import MatchedExtraction


log = getLogger(__name__)


def open_catalog(
    *,
    storage: StorageConfig | None = None,
    matching: MatchingConfig | None = None,
    store: CatalogStore | None = None,
) -> Catalog:
    """Build a catalog from the configured system catalog and overlay file."""

    effective_storage = storage or get_storage_config()
    effective_matching = matching or get_matching_config()
    system = load_system_catalog(effective_storage.system_catalog_dir)
    effective_store = store or JsonFileOverlayStore(effective_storage.overlay_path())
    log.debug(
        "Opening catalog: data_dir=%s, system_positions=%s, system_techniques=%s",
        effective_storage.resolve_data_dir(),
        len(system.positions),
        len(system.techniques),
    )
    return Catalog(system, effective_store, matching=effective_matching)


def reconcile_payload_file(path: Path, catalog: Catalog) -> MatchedExtraction:
    """Read an extraction payload JSON file and reconcile it against ``catalog``."""

    raw = json.loads(path.read_text(encoding="utf-8"))
    payload = parse_extraction_payload(raw)
    result = catalog.reconcile(payload)
    log.debug(
        "Reconciled %s: techniques=%s, position_notes=%s, rounds=%s, "
        "unmatched_positions=%s, unmatched_techniques=%s",
        path,
        len(result.session.techniques),
        len(result.session.position_notes),
        len(result.sparring_rounds),
        len(result.unmatched_positions()),
        len(result.unmatched_techniques()),
    )
    return result


def write_matched_extraction(result: MatchedExtraction, path: Path) -> None:
    document = matched_extraction_document(result)
    path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")


def record_training_activity(
    store: CatalogStore,
    *,
    timestamp: str,
    tags: Iterable[str] = (),
    technique_ids: Iterable[str] = (),
    partner_names: Iterable[str] = (),
) -> OverlayState:
    """Apply tag, technique progress and partner bookkeeping in one overlay write."""

    tag_list = list(tags)
    technique_list = list(technique_ids)
    partner_list = list(partner_names)

    def apply(state: OverlayState) -> OverlayState:
        state = record_tag_usage(state, tag_list, timestamp=timestamp)
        state = record_technique_progress(state, technique_list, timestamp=timestamp)
        return record_partner_names(state, partner_list, timestamp=timestamp)

    return store.write(apply)


def _read_session_document(path: Path) -> tuple[list[object], dict[str, object] | None]:
    """Session records plus the wrapping object, when the file has one."""

    raw = json.loads(path.read_text(encoding="utf-8"))
    wrapper: dict[str, object] | None = None
    if isinstance(raw, dict) and "sessions" in raw:
        wrapper = raw
        raw = raw["sessions"]
    if not isinstance(raw, list):
        raise ValueError(f"Expected a list of session records in {path}")
    return raw, wrapper


def load_sessions(path: Path) -> tuple[list[Session], list[MigrationFailure]]:
    """Read a sessions file, migrating every record to the current schema."""

    records, _ = _read_session_document(path)
    sessions, failures = migrate_session_records(records)
    log.info(
        "Loaded sessions from %s: migrated=%s, failed=%s", path, len(sessions), len(failures)
    )
    return sort_sessions(sessions), failures


def migrate_sessions_file(
    path: Path, *, output: Path | None = None
) -> tuple[list[Session], list[MigrationFailure]]:
    """Rewrite ``path`` (or write ``output``) with every record at the current version.

    Records that fail to migrate are written back unchanged after the
    migrated ones and reported to the caller. A ``{"sessions": [...]}``
    wrapper keeps its other keys.
    """

    records, wrapper = _read_session_document(path)
    sessions: list[Session] = []
    failures: list[MigrationFailure] = []
    untouched: list[object] = []
    for record in records:
        result = migrate_session_record(record)
        if isinstance(result, MigrationFailure):
            failures.append(result)
            untouched.append(record)
        else:
            sessions.append(result)
    ordered = sort_sessions(sessions)
    migrated = [session_document(session) for session in ordered] + untouched
    document: object = {**wrapper, "sessions": migrated} if wrapper is not None else migrated
    target = output or path
    target.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    log.info(
        "Migrated sessions file %s -> %s: migrated=%s, failed=%s",
        path,
        target,
        len(sessions),
        len(failures),
    )
    return ordered, failures
