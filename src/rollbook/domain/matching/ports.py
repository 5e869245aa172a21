"""Search capability consumed by the entity matchers.

Any ranked approximate search satisfies the contract: a trigram index, an
edit-distance scorer or a token matcher. Distances live on ``[0, 1]`` where
0 means identical; matchers turn them into ``1 - distance`` confidence
scores.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class Candidate[T]:
    item: T
    distance: float

    @property
    def score(self) -> float:
        return 1.0 - self.distance


class Matcher[T](Protocol):
    """Rank catalog items for a free-text query, best (lowest distance) first."""

    def search(self, query: str) -> tuple[Candidate[T], ...]: ...
