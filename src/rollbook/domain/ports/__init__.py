"""Ports implemented by adapters."""

from __future__ import annotations

from .catalog import CatalogStore, OverlayListener, OverlayUpdater, SystemCatalog

__all__ = [
    "CatalogStore",
    "OverlayListener",
    "OverlayUpdater",
    "SystemCatalog",
]
