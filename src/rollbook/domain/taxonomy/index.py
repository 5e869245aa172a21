"""In-memory hierarchical index over one catalog snapshot.

The index is built once per merged catalog (system records followed by
overlay records) and never mutated afterwards. Whenever the overlay changes
the caller builds a fresh index; catalogs are small enough that a full
rebuild is the simplest correct strategy.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from rollbook.domain.model import Perspective

from .errors import TaxonomyCorruptionError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from rollbook.domain.model import Position, Technique


PATH_SEPARATOR: Final[str] = " / "
log = logging.getLogger(__name__)


def _name_key(entity: Position | Technique) -> tuple[str, str]:
    return (entity.name.casefold(), entity.name)


@dataclass(frozen=True, slots=True)
class TaxonomyIndex:
    """Tree adjacency, ordering and technique attachment lookups."""

    positions: tuple[Position, ...]
    techniques: tuple[Technique, ...]
    _positions_by_id: dict[str, Position] = field(repr=False)
    _techniques_by_id: dict[str, Technique] = field(repr=False)
    _children_by_parent: dict[str | None, tuple[Position, ...]] = field(repr=False)
    _techniques_by_position: dict[str, tuple[Technique, ...]] = field(repr=False)
    _pre_order: tuple[Position, ...] = field(repr=False)

    # -- lookups -----------------------------------------------------------

    def position(self, position_id: str) -> Position | None:
        return self._positions_by_id.get(position_id)

    def technique(self, technique_id: str) -> Technique | None:
        return self._techniques_by_id.get(technique_id)

    def __contains__(self, position_id: object) -> bool:
        return position_id in self._positions_by_id

    # -- tree structure ----------------------------------------------------

    def children(self, parent_id: str | None) -> tuple[Position, ...]:
        """Direct children of ``parent_id`` sorted by name; ``None`` yields the roots."""
        return self._children_by_parent.get(parent_id, ())

    @property
    def roots(self) -> tuple[Position, ...]:
        return self.children(None)

    def roots_by_perspective(self) -> dict[Perspective, tuple[Position, ...]]:
        buckets: dict[Perspective, list[Position]] = {item: [] for item in Perspective}
        for root in self.roots:
            buckets[root.perspective].append(root)
        return {perspective: tuple(items) for perspective, items in buckets.items()}

    def has_children(self, position_id: str) -> bool:
        return bool(self._children_by_parent.get(position_id))

    def breadcrumb(self, position_id: str) -> tuple[Position, ...]:
        """Positions from the root down to ``position_id`` inclusive.

        A dangling ``parent_id`` ends the walk early and yields the partial
        chain. A chain longer than the catalog itself can only be a cycle and
        raises :class:`TaxonomyCorruptionError`.
        """

        chain: list[Position] = []
        current = self._positions_by_id.get(position_id)
        limit = len(self._positions_by_id)
        while current is not None:
            if len(chain) >= limit:
                raise TaxonomyCorruptionError(position_id, limit=limit)
            chain.append(current)
            if current.parent_id is None:
                break
            current = self._positions_by_id.get(current.parent_id)
        chain.reverse()
        return tuple(chain)

    def full_path(self, position_id: str, *, separator: str = PATH_SEPARATOR) -> str:
        return separator.join(position.name for position in self.breadcrumb(position_id))

    def ancestors_self_first(self, position_id: str) -> tuple[str, ...]:
        return tuple(position.id for position in reversed(self.breadcrumb(position_id)))

    def pre_order(self) -> tuple[Position, ...]:
        """All positions reachable from a root, parents before children."""
        return self._pre_order

    def depth(self, position_id: str) -> int:
        return max(len(self.breadcrumb(position_id)) - 1, 0)

    # -- techniques --------------------------------------------------------

    def techniques_owned_by(self, position_id: str) -> tuple[Technique, ...]:
        return self._techniques_by_position.get(position_id, ())

    def techniques_visible_from(self, position_id: str) -> tuple[Technique, ...]:
        """Owned techniques of ``position_id`` first, then those of each ancestor."""

        seen: set[str] = set()
        visible: list[Technique] = []
        for ancestor_id in self.ancestors_self_first(position_id):
            for technique in self.techniques_owned_by(ancestor_id):
                if technique.id in seen:
                    continue
                seen.add(technique.id)
                visible.append(technique)
        return tuple(visible)


def build_taxonomy_index(
    positions: Iterable[Position],
    techniques: Iterable[Technique],
) -> TaxonomyIndex:
    """Index a merged catalog snapshot.

    Duplicate ids keep the first record seen, so system entries always win
    over overlay entries that happen to collide.
    """

    position_list = _first_by_id(positions)
    technique_list = _first_by_id(techniques)
    positions_by_id = {position.id: position for position in position_list}
    techniques_by_id = {technique.id: technique for technique in technique_list}

    siblings: defaultdict[str | None, list[Position]] = defaultdict(list)
    for position in position_list:
        siblings[position.parent_id].append(position)
    children_by_parent = {
        parent_id: tuple(sorted(items, key=_name_key)) for parent_id, items in siblings.items()
    }

    buckets: defaultdict[str, list[Technique]] = defaultdict(list)
    dangling = 0
    for technique in technique_list:
        if technique.position_from_id not in positions_by_id:
            dangling += 1
            continue
        buckets[technique.position_from_id].append(technique)
    techniques_by_position = {
        position_id: tuple(sorted(items, key=_name_key)) for position_id, items in buckets.items()
    }

    pre_order = _walk_pre_order(children_by_parent)
    log.debug(
        "Built taxonomy index: positions=%s, techniques=%s, roots=%s, dangling_techniques=%s",
        len(position_list),
        len(technique_list),
        len(children_by_parent.get(None, ())),
        dangling,
    )
    return TaxonomyIndex(
        positions=tuple(position_list),
        techniques=tuple(technique_list),
        _positions_by_id=positions_by_id,
        _techniques_by_id=techniques_by_id,
        _children_by_parent=children_by_parent,
        _techniques_by_position=techniques_by_position,
        _pre_order=pre_order,
    )


def _first_by_id[T: (Position, Technique)](items: Iterable[T]) -> list[T]:
    seen: set[str] = set()
    unique: list[T] = []
    for item in items:
        if item.id in seen:
            log.warning("Ignoring duplicate catalog id %s", item.id)
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


def _walk_pre_order(
    children_by_parent: dict[str | None, tuple[Position, ...]],
) -> tuple[Position, ...]:
    ordered: list[Position] = []
    visited: set[str] = set()
    stack: list[Position] = list(reversed(children_by_parent.get(None, ())))
    while stack:
        position = stack.pop()
        if position.id in visited:
            continue
        visited.add(position.id)
        ordered.append(position)
        children: Sequence[Position] = children_by_parent.get(position.id, ())
        stack.extend(reversed(children))
    return tuple(ordered)
