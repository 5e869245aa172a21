"""JSON document schemas for the catalog and the user overlay."""

from __future__ import annotations

from .schema import OverlayDocument, PositionsDocument, TechniquesDocument
from .translator import overlay_document, translate_overlay, translate_position, translate_technique

__all__ = [
    "OverlayDocument",
    "PositionsDocument",
    "TechniquesDocument",
    "overlay_document",
    "translate_overlay",
    "translate_position",
    "translate_technique",
]
