"""Fuzzy matching thresholds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_float_env
from .errors import ConfigurationError

DEFAULT_POSITION_MATCH_THRESHOLD: Final[float] = 0.5
DEFAULT_TECHNIQUE_MATCH_THRESHOLD: Final[float] = 0.5


@dataclass(frozen=True, slots=True)
class MatchingConfig:
    """Maximum accepted distance (0 = identical, 1 = unrelated) per entity kind."""

    position_threshold: float = DEFAULT_POSITION_MATCH_THRESHOLD
    technique_threshold: float = DEFAULT_TECHNIQUE_MATCH_THRESHOLD

    def __post_init__(self) -> None:
        for name in ("position_threshold", "technique_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1], got {value}")


def get_matching_config() -> MatchingConfig:
    return MatchingConfig(
        position_threshold=optional_float_env(
            "ROLLBOOK_POSITION_MATCH_THRESHOLD",
            default=DEFAULT_POSITION_MATCH_THRESHOLD,
        ),
        technique_threshold=optional_float_env(
            "ROLLBOOK_TECHNIQUE_MATCH_THRESHOLD",
            default=DEFAULT_TECHNIQUE_MATCH_THRESHOLD,
        ),
    )
