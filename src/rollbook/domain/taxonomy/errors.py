"""Taxonomy error definitions."""

from __future__ import annotations


class TaxonomyError(RuntimeError):
    """Base class for taxonomy failures."""


class TaxonomyCorruptionError(TaxonomyError):
    """Raised when the parent chain of a position does not terminate at a root."""

    def __init__(self, position_id: str, *, limit: int) -> None:
        super().__init__(
            f"Parent chain of position {position_id!r} exceeds {limit} hops; "
            "the catalog contains a cycle"
        )
        self.position_id = position_id
        self.limit = limit
