"""Overlay stores: an in-memory repository and a JSON file backed one."""

from __future__ import annotations

import json
import logging
import os
import threading
from typing import TYPE_CHECKING

from pydantic import ValidationError

from rollbook.adapters.documents import OverlayDocument, overlay_document, translate_overlay
from rollbook.domain.model import EMPTY_OVERLAY, OverlayState

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from rollbook.domain.ports import OverlayListener, OverlayUpdater


log = logging.getLogger(__name__)


class InMemoryOverlayStore:
    """Owns the current overlay snapshot and notifies subscribers on change."""

    def __init__(self, initial: OverlayState | None = None) -> None:
        self._snapshot: OverlayState | None = initial
        self._listeners: list[OverlayListener] = []
        self._lock = threading.Lock()

    def read(self) -> OverlayState:
        with self._lock:
            return self._ensure_snapshot()

    def write(self, updater: OverlayUpdater) -> OverlayState:
        with self._lock:
            current = self._ensure_snapshot()
            next_state = updater(current)
            self._snapshot = next_state
            self._persist(next_state)
        self._notify(next_state)
        return next_state

    def subscribe(self, listener: OverlayListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _ensure_snapshot(self) -> OverlayState:
        if self._snapshot is None:
            self._snapshot = self._load()
        return self._snapshot

    def _load(self) -> OverlayState:
        return EMPTY_OVERLAY

    def _persist(self, state: OverlayState) -> None:
        return None

    def _notify(self, state: OverlayState) -> None:
        for listener in tuple(self._listeners):
            listener(state)


class JsonFileOverlayStore(InMemoryOverlayStore):
    """Overlay persisted as a single JSON document.

    A missing file is an empty overlay. A malformed document is treated as
    absent: a warning is logged and the overlay starts empty, so the next
    write replaces the broken file.
    """

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = path

    def _load(self) -> OverlayState:
        if not self.path.exists():
            return EMPTY_OVERLAY
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            document = OverlayDocument.model_validate(raw)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            log.warning("Discarding unreadable overlay document %s: %s", self.path, exc)
            return EMPTY_OVERLAY
        state = translate_overlay(document)
        log.debug(
            "Loaded overlay from %s: positions=%s, techniques=%s",
            self.path,
            len(state.positions),
            len(state.techniques),
        )
        return state

    def _persist(self, state: OverlayState) -> None:
        document = overlay_document(state).model_dump(mode="json", by_alias=True)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self.path)
