"""Hierarchical taxonomy index."""

from __future__ import annotations

from .errors import TaxonomyCorruptionError, TaxonomyError
from .index import PATH_SEPARATOR, TaxonomyIndex, build_taxonomy_index

__all__ = [
    "PATH_SEPARATOR",
    "TaxonomyCorruptionError",
    "TaxonomyError",
    "TaxonomyIndex",
    "build_taxonomy_index",
]
