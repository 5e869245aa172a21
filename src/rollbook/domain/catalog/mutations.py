"""Create custom catalog entries in the user overlay.

Both operations reject invalid input with ``None`` instead of raising so the
caller (usually a review step after reconciliation) decides how to surface
it. The system catalog is never touched; new records are appended to the
overlay through :meth:`CatalogStore.write`.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from rollbook.domain.model import Perspective, Position, Technique

from .slug import custom_id, entry_slug

if TYPE_CHECKING:
    from rollbook.domain.model import OverlayState, TechniqueCategory
    from rollbook.domain.ports import CatalogStore
    from rollbook.domain.taxonomy import TaxonomyIndex


log = logging.getLogger(__name__)


def create_position(
    store: CatalogStore,
    index: TaxonomyIndex,
    name: str,
    *,
    parent_id: str | None = None,
    perspective: Perspective | None = None,
) -> Position | None:
    trimmed = name.strip()
    if not trimmed:
        return None

    parent: Position | None = None
    if parent_id is not None:
        parent = index.position(parent_id)
        if parent is None:
            log.warning("Cannot create position %r: unknown parent %s", trimmed, parent_id)
            return None

    slug = entry_slug(trimmed)
    position = Position(
        id=custom_id(slug),
        name=trimmed,
        slug=slug,
        parent_id=parent.id if parent else None,
        path=(*parent.path, slug) if parent else (slug,),
        perspective=perspective or (parent.perspective if parent else Perspective.NEUTRAL),
        is_custom=True,
    )

    def append(state: OverlayState) -> OverlayState:
        return replace(state, positions=(*state.positions, position))

    store.write(append)
    log.info("Created custom position %s (%s)", position.id, position.name)
    return position


def create_technique(
    store: CatalogStore,
    index: TaxonomyIndex,
    name: str,
    category: TechniqueCategory,
    position_from_id: str,
    *,
    position_to_id: str | None = None,
) -> Technique | None:
    trimmed = name.strip()
    if not trimmed:
        return None

    from_position = index.position(position_from_id)
    if from_position is None:
        log.warning(
            "Cannot create technique %r: unknown position %s", trimmed, position_from_id
        )
        return None

    slug = entry_slug(trimmed)
    technique = Technique(
        id=custom_id(slug),
        name=trimmed,
        category=category,
        position_from_id=from_position.id,
        position_to_id=position_to_id,
        is_custom=True,
    )

    def append(state: OverlayState) -> OverlayState:
        return replace(state, techniques=(*state.techniques, technique))

    store.write(append)
    log.info(
        "Created custom technique %s (%s) under %s", technique.id, technique.name, from_position.id
    )
    return technique
