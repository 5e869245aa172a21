from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from rollbook.domain.catalog import Catalog
from rollbook.domain.model import Perspective, TechniqueCategory
from rollbook.domain.reconciliation import (
    ExtractedSession,
    ExtractedTechnique,
    ExtractionPayload,
)
from tests.helpers.catalog import make_position

if TYPE_CHECKING:
    from rollbook.adapters.overlay_store import InMemoryOverlayStore
    from rollbook.domain.ports import SystemCatalog


def test_catalog_merges_system_and_overlay(
    small_system: SystemCatalog, overlay_store: InMemoryOverlayStore
) -> None:
    custom = make_position("custom:lasso-1", "Lasso Guard")
    overlay_store.write(lambda state: replace(state, positions=(custom,)))

    with Catalog(small_system, overlay_store) as catalog:
        assert catalog.positions[-1] == custom
        assert len(catalog.positions) == len(small_system.positions) + 1
        assert catalog.index.position("custom:lasso-1") == custom


def test_created_position_is_visible_after_rebuild(
    small_system: SystemCatalog, overlay_store: InMemoryOverlayStore
) -> None:
    with Catalog(small_system, overlay_store) as catalog:
        before = catalog.index
        position = catalog.create_position("Octopus Guard", parent_id="guard")

        assert position is not None
        assert catalog.index is not before
        assert position in catalog.index.children("guard")
        assert position.perspective is Perspective.BOTTOM
        match = catalog.matchers.match_position("octopus guard")
        assert match is not None
        assert match.entity.id == position.id


def test_created_technique_becomes_matchable(
    small_system: SystemCatalog, overlay_store: InMemoryOverlayStore
) -> None:
    with Catalog(small_system, overlay_store) as catalog:
        technique = catalog.create_technique(
            "Gogoplata", TechniqueCategory.SUBMISSION, "closed-guard"
        )

        assert technique is not None
        payload = ExtractionPayload(
            session=ExtractedSession(
                techniques=(
                    ExtractedTechnique(position_name="closed guard", technique_name="gogoplata"),
                )
            )
        )
        result = catalog.reconcile(payload)
        match = result.session.techniques[0].technique_match
        assert match is not None
        assert match.entity.id == technique.id
        assert result.unmatched_techniques() == ()


def test_close_stops_invalidation(
    small_system: SystemCatalog, overlay_store: InMemoryOverlayStore
) -> None:
    catalog = Catalog(small_system, overlay_store)
    index = catalog.index
    catalog.close()

    overlay_store.write(lambda state: state)

    assert catalog.index is index


def test_catalog_rejects_invalid_mutations(
    small_system: SystemCatalog, overlay_store: InMemoryOverlayStore
) -> None:
    with Catalog(small_system, overlay_store) as catalog:
        assert catalog.create_position("", parent_id="guard") is None
        assert catalog.create_technique("Sweep", TechniqueCategory.SWEEP, "missing") is None
        assert overlay_store.read().positions == ()
        assert overlay_store.read().techniques == ()
