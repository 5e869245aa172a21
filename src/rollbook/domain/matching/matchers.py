"""Position and technique matchers over a taxonomy index."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rapidfuzz import fuzz

from rollbook.config import DEFAULT_POSITION_MATCH_THRESHOLD, DEFAULT_TECHNIQUE_MATCH_THRESHOLD

from .fuzzy import SearchField, WeightedFieldMatcher

if TYPE_CHECKING:
    from rollbook.config import MatchingConfig
    from rollbook.domain.model import Position, Technique
    from rollbook.domain.taxonomy import TaxonomyIndex

    from .ports import Candidate, Matcher


log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MatchResult[T]:
    """Best catalog entity for a query with its confidence in ``(0, 1]``."""

    entity: T
    score: float


def _accept[T](candidate: Candidate[T], threshold: float) -> bool:
    return candidate.distance <= threshold


class PositionMatcher:
    def __init__(
        self,
        search: Matcher[Position],
        *,
        threshold: float = DEFAULT_POSITION_MATCH_THRESHOLD,
    ) -> None:
        self._search = search
        self.threshold = threshold

    @classmethod
    def from_index(
        cls,
        index: TaxonomyIndex,
        *,
        threshold: float = DEFAULT_POSITION_MATCH_THRESHOLD,
    ) -> PositionMatcher:
        labels = {
            position.id: f"{position.name} {index.full_path(position.id)}".lower()
            for position in index.positions
        }
        fields: list[SearchField[Position]] = [
            SearchField(name="name", values=lambda p: (p.name,), weight=1.0),
            SearchField(name="slug", values=lambda p: (p.slug,), weight=0.5),
            SearchField(
                name="search_label",
                values=lambda p: (labels[p.id],),
                weight=0.7,
                scorer=fuzz.token_sort_ratio,
            ),
        ]
        return cls(WeightedFieldMatcher(index.positions, fields), threshold=threshold)

    def __call__(self, query: str) -> MatchResult[Position] | None:
        return self.match(query)

    def match(self, query: str) -> MatchResult[Position] | None:
        if not query.strip():
            return None
        candidates = self._search.search(query)
        if not candidates or not _accept(candidates[0], self.threshold):
            log.debug("No position within threshold for %r", query)
            return None
        best = candidates[0]
        return MatchResult(entity=best.item, score=best.score)


class TechniqueMatcher:
    def __init__(
        self,
        search: Matcher[Technique],
        *,
        threshold: float = DEFAULT_TECHNIQUE_MATCH_THRESHOLD,
    ) -> None:
        self._search = search
        self.threshold = threshold

    @classmethod
    def from_index(
        cls,
        index: TaxonomyIndex,
        *,
        threshold: float = DEFAULT_TECHNIQUE_MATCH_THRESHOLD,
    ) -> TechniqueMatcher:
        labels = {
            technique.id: " ".join(
                (technique.name, *technique.aliases, index.full_path(technique.position_from_id))
            ).lower()
            for technique in index.techniques
        }
        fields: list[SearchField[Technique]] = [
            SearchField(name="name", values=lambda t: (t.name,), weight=1.0),
            SearchField(name="aliases", values=lambda t: t.aliases, weight=0.8),
            SearchField(
                name="search_label",
                values=lambda t: (labels[t.id],),
                weight=0.6,
                scorer=fuzz.token_sort_ratio,
            ),
        ]
        return cls(WeightedFieldMatcher(index.techniques, fields), threshold=threshold)

    def __call__(
        self,
        query: str,
        context_position_id: str | None = None,
    ) -> MatchResult[Technique] | None:
        return self.match(query, context_position_id)

    def match(
        self,
        query: str,
        context_position_id: str | None = None,
    ) -> MatchResult[Technique] | None:
        """Best technique for ``query``.

        With a context position, the best in-threshold technique owned by
        that position wins over a globally better candidate elsewhere in the
        tree. Without one (or when none qualifies) the global best is used.
        """

        if not query.strip():
            return None
        candidates = self._search.search(query)
        if not candidates:
            log.debug("No technique candidates for %r", query)
            return None

        if context_position_id:
            for candidate in candidates:
                if not _accept(candidate, self.threshold):
                    break
                if candidate.item.position_from_id == context_position_id:
                    return MatchResult(entity=candidate.item, score=candidate.score)

        best = candidates[0]
        if not _accept(best, self.threshold):
            log.debug("No technique within threshold for %r", query)
            return None
        return MatchResult(entity=best.item, score=best.score)


@dataclass(frozen=True, slots=True)
class TaxonomyMatchers:
    """Both matchers for one index snapshot; rebuilt together with the index."""

    positions: PositionMatcher
    techniques: TechniqueMatcher

    def match_position(self, query: str) -> MatchResult[Position] | None:
        return self.positions.match(query)

    def match_technique(
        self,
        query: str,
        context_position_id: str | None = None,
    ) -> MatchResult[Technique] | None:
        return self.techniques.match(query, context_position_id)


def build_matchers(
    index: TaxonomyIndex,
    config: MatchingConfig | None = None,
) -> TaxonomyMatchers:
    position_threshold = (
        config.position_threshold if config else DEFAULT_POSITION_MATCH_THRESHOLD
    )
    technique_threshold = (
        config.technique_threshold if config else DEFAULT_TECHNIQUE_MATCH_THRESHOLD
    )
    return TaxonomyMatchers(
        positions=PositionMatcher.from_index(index, threshold=position_threshold),
        techniques=TechniqueMatcher.from_index(index, threshold=technique_threshold),
    )
