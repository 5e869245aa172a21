"""Catalog entities: positions form a forest, techniques hang off positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from rollbook.domain.model.enums import Perspective, SubmissionType, TechniqueCategory

CUSTOM_ID_PREFIX: Final[str] = "custom:"


@dataclass(frozen=True, slots=True, kw_only=True)
class Position:
    id: str
    name: str
    slug: str
    parent_id: str | None = None
    path: tuple[str, ...] = ()
    perspective: Perspective = Perspective.NEUTRAL
    gi_applicable: bool = True
    nogi_applicable: bool = True
    is_custom: bool = False

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def depth(self) -> int:
        """Depth as recorded in ``path`` (roots are 0)."""
        return max(len(self.path) - 1, 0)


@dataclass(frozen=True, slots=True, kw_only=True)
class Technique:
    id: str
    name: str
    category: TechniqueCategory
    position_from_id: str
    position_to_id: str | None = None
    submission_type: SubmissionType | None = None
    gi_applicable: bool = True
    nogi_applicable: bool = True
    aliases: tuple[str, ...] = ()
    key_details: tuple[str, ...] = ()
    is_custom: bool = False


type CatalogEntity = Position | Technique
