"""Merged catalog view that keeps its index in step with the overlay store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rollbook.domain.matching import build_matchers
from rollbook.domain.reconciliation import reconcile
from rollbook.domain.taxonomy import build_taxonomy_index

from .mutations import create_position, create_technique

if TYPE_CHECKING:
    from rollbook.config import MatchingConfig
    from rollbook.domain.matching import TaxonomyMatchers
    from rollbook.domain.model import (
        OverlayState,
        Perspective,
        Position,
        Technique,
        TechniqueCategory,
    )
    from rollbook.domain.ports import CatalogStore, SystemCatalog
    from rollbook.domain.reconciliation import ExtractionPayload, MatchedExtraction
    from rollbook.domain.taxonomy import TaxonomyIndex


log = logging.getLogger(__name__)


class Catalog:
    """System catalog ++ user overlay, with a lazily rebuilt index.

    The catalog subscribes to its store; every overlay change drops the
    cached index and matchers so the next access rebuilds them from the new
    snapshot.
    """

    def __init__(
        self,
        system: SystemCatalog,
        store: CatalogStore,
        *,
        matching: MatchingConfig | None = None,
    ) -> None:
        self.system = system
        self.store = store
        self._matching = matching
        self._index: TaxonomyIndex | None = None
        self._matchers: TaxonomyMatchers | None = None
        self._unsubscribe = store.subscribe(self._on_overlay_changed)

    def close(self) -> None:
        self._unsubscribe()

    def __enter__(self) -> Catalog:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    @property
    def positions(self) -> tuple[Position, ...]:
        return (*self.system.positions, *self.store.read().positions)

    @property
    def techniques(self) -> tuple[Technique, ...]:
        return (*self.system.techniques, *self.store.read().techniques)

    @property
    def index(self) -> TaxonomyIndex:
        if self._index is None:
            self._index = build_taxonomy_index(self.positions, self.techniques)
        return self._index

    @property
    def matchers(self) -> TaxonomyMatchers:
        if self._matchers is None:
            self._matchers = build_matchers(self.index, self._matching)
        return self._matchers

    def reconcile(self, payload: ExtractionPayload) -> MatchedExtraction:
        return reconcile(payload, self.index, matchers=self.matchers)

    def create_position(
        self,
        name: str,
        *,
        parent_id: str | None = None,
        perspective: Perspective | None = None,
    ) -> Position | None:
        return create_position(
            self.store, self.index, name, parent_id=parent_id, perspective=perspective
        )

    def create_technique(
        self,
        name: str,
        category: TechniqueCategory,
        position_from_id: str,
        *,
        position_to_id: str | None = None,
    ) -> Technique | None:
        return create_technique(
            self.store,
            self.index,
            name,
            category,
            position_from_id,
            position_to_id=position_to_id,
        )

    def _on_overlay_changed(self, state: OverlayState) -> None:
        log.debug(
            "Overlay changed (positions=%s, techniques=%s); invalidating index",
            len(state.positions),
            len(state.techniques),
        )
        self._index = None
        self._matchers = None
