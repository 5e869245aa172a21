"""Fuzzy entity matching against the taxonomy."""

from __future__ import annotations

from .fuzzy import SearchField, WeightedFieldMatcher
from .matchers import (
    MatchResult,
    PositionMatcher,
    TaxonomyMatchers,
    TechniqueMatcher,
    build_matchers,
)
from .ports import Candidate, Matcher

__all__ = [
    "Candidate",
    "MatchResult",
    "Matcher",
    "PositionMatcher",
    "SearchField",
    "TaxonomyMatchers",
    "TechniqueMatcher",
    "WeightedFieldMatcher",
    "build_matchers",
]
