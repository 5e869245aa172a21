"""Ports for reading the fixed catalog and reading/writing the user overlay."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rollbook.domain.model import OverlayState, Position, Technique


type OverlayUpdater = Callable[[OverlayState], OverlayState]
type OverlayListener = Callable[[OverlayState], None]


@dataclass(frozen=True, slots=True)
class SystemCatalog:
    """The immutable catalog shipped with the application."""

    positions: tuple[Position, ...]
    techniques: tuple[Technique, ...]


@runtime_checkable
class CatalogStore(Protocol):
    """Single-owner store of the overlay snapshot.

    ``write`` derives the next snapshot from the current one, replaces it,
    persists it and then notifies subscribers. There is exactly one logical
    writer; concurrent external writers must be serialised by the caller.
    """

    def read(self) -> OverlayState: ...

    def write(self, updater: OverlayUpdater) -> OverlayState: ...

    def subscribe(self, listener: OverlayListener) -> Callable[[], None]: ...
