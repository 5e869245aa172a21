"""Weighted multi-field fuzzy search backed by rapidfuzz."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from rapidfuzz import fuzz, utils

from .ports import Candidate

type Scorer = Callable[..., float]


@dataclass(frozen=True, slots=True, kw_only=True)
class SearchField[T]:
    """One searchable facet of an item.

    ``values`` may return several strings (aliases); the best scoring one
    counts. ``weight`` caps the similarity this field can contribute.
    """

    name: str
    values: Callable[[T], Sequence[str]]
    weight: float = 1.0
    scorer: Scorer = fuzz.ratio


@dataclass(slots=True)
class _PreparedField:
    weight: float
    scorer: Scorer
    # processed choice strings per item, parallel to the item tuple
    choices: list[tuple[str, ...]] = field(default_factory=list["tuple[str, ...]"])


class WeightedFieldMatcher[T]:
    """Score every item on every field and keep the best weighted similarity.

    For an item the distance is ``min(1 - weight * similarity)`` over its
    fields, so an exact hit on a weight 1.0 field yields distance 0 while a
    field of weight 0.7 can never do better than 0.3.
    """

    def __init__(self, items: Sequence[T], fields: Sequence[SearchField[T]]) -> None:
        if not fields:
            raise ValueError("WeightedFieldMatcher needs at least one search field")
        self._items = tuple(items)
        self._fields: list[_PreparedField] = []
        for search_field in fields:
            prepared = _PreparedField(weight=search_field.weight, scorer=search_field.scorer)
            for item in self._items:
                processed = (utils.default_process(value) for value in search_field.values(item))
                prepared.choices.append(tuple(value for value in processed if value))
            self._fields.append(prepared)

    def __len__(self) -> int:
        return len(self._items)

    def search(self, query: str) -> tuple[Candidate[T], ...]:
        processed_query = utils.default_process(query)
        if not processed_query:
            return ()

        ranked: list[tuple[float, int]] = []
        for position, _item in enumerate(self._items):
            distance = 1.0
            for prepared in self._fields:
                choices = prepared.choices[position]
                if not choices:
                    continue
                similarity = max(prepared.scorer(processed_query, choice) for choice in choices)
                distance = min(distance, 1.0 - prepared.weight * similarity / 100.0)
            if distance < 1.0:
                ranked.append((distance, position))

        ranked.sort()
        return tuple(Candidate(item=self._items[pos], distance=dist) for dist, pos in ranked)
