from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from rollbook.adapters.overlay_store import InMemoryOverlayStore, JsonFileOverlayStore
from rollbook.domain.catalog import create_position
from rollbook.domain.model import EMPTY_OVERLAY, OverlayState
from rollbook.domain.overlay import record_tag_usage, update_technique_note
from rollbook.domain.ports import CatalogStore
from tests.helpers.catalog import make_position

if TYPE_CHECKING:
    from pathlib import Path

    import pytest

    from rollbook.domain.taxonomy import TaxonomyIndex


def test_stores_satisfy_catalog_store_protocol(tmp_path: Path) -> None:
    assert isinstance(InMemoryOverlayStore(), CatalogStore)
    assert isinstance(JsonFileOverlayStore(tmp_path / "overlay.json"), CatalogStore)


def test_write_replaces_snapshot_and_notifies() -> None:
    store = InMemoryOverlayStore()
    seen: list[OverlayState] = []
    unsubscribe = store.subscribe(seen.append)

    custom = make_position("custom:lasso-1", "Lasso Guard")
    result = store.write(lambda state: replace(state, positions=(*state.positions, custom)))

    assert store.read() is result
    assert result.positions == (custom,)
    assert seen == [result]

    unsubscribe()
    unsubscribe()
    store.write(lambda state: state)
    assert len(seen) == 1


def test_listener_sees_persisted_state(tmp_path: Path) -> None:
    path = tmp_path / "overlay.json"
    store = JsonFileOverlayStore(path)
    on_disk: list[str] = []
    store.subscribe(lambda _state: on_disk.append(path.read_text(encoding="utf-8")))

    store.write(lambda state: record_tag_usage(state, ["grip"], timestamp="2024-01-01"))

    assert json.loads(on_disk[0])["tags"][0]["tag"] == "grip"


def test_missing_file_is_empty_overlay(tmp_path: Path) -> None:
    store = JsonFileOverlayStore(tmp_path / "absent.json")

    assert store.read() == EMPTY_OVERLAY
    assert not (tmp_path / "absent.json").exists()


def test_json_store_round_trips_overlay(tmp_path: Path, small_index: TaxonomyIndex) -> None:
    path = tmp_path / "nested" / "overlay.json"
    store = JsonFileOverlayStore(path)

    position = create_position(store, small_index, "Octopus Guard", parent_id="guard")
    store.write(lambda state: update_technique_note(state, "armbar", "hips up", now="2024-01-01"))

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["positions"][0]["parentId"] == "guard"
    assert document["positions"][0]["isCustom"] is True
    assert document["techniqueNotes"][0]["techniqueId"] == "armbar"

    reloaded = JsonFileOverlayStore(path).read()
    assert reloaded.positions == (position,)
    assert reloaded.technique_notes == store.read().technique_notes


def test_malformed_document_resets_to_empty(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "overlay.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        state = JsonFileOverlayStore(path).read()

    assert state == EMPTY_OVERLAY
    assert "Discarding unreadable overlay document" in caplog.text


def test_undecodable_document_resets_to_empty(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "overlay.json"
    path.write_bytes(b'{"positions": [\xff]}')

    with caplog.at_level(logging.WARNING):
        state = JsonFileOverlayStore(path).read()

    assert state == EMPTY_OVERLAY
    assert "Discarding unreadable overlay document" in caplog.text


def test_invalid_records_reset_to_empty(tmp_path: Path) -> None:
    path = tmp_path / "overlay.json"
    path.write_text(json.dumps({"positions": [{"name": "no id"}]}), encoding="utf-8")

    store = JsonFileOverlayStore(path)

    assert store.read() == EMPTY_OVERLAY
    store.write(lambda state: record_tag_usage(state, ["base"], timestamp="t"))
    assert json.loads(path.read_text(encoding="utf-8"))["positions"] == []
