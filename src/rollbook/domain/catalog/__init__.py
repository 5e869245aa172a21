"""Catalog mutation and the merged catalog service."""

from __future__ import annotations

from .mutations import create_position, create_technique
from .service import Catalog
from .slug import custom_id, entry_slug, slugify

__all__ = [
    "Catalog",
    "create_position",
    "create_technique",
    "custom_id",
    "entry_slug",
    "slugify",
]
