"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_float_env
from .errors import ConfigurationError
from .logging import configure_logging
from .matching import (
    DEFAULT_POSITION_MATCH_THRESHOLD,
    DEFAULT_TECHNIQUE_MATCH_THRESHOLD,
    MatchingConfig,
    get_matching_config,
)
from .storage import StorageConfig, get_storage_config

__all__ = [
    "DEFAULT_POSITION_MATCH_THRESHOLD",
    "DEFAULT_TECHNIQUE_MATCH_THRESHOLD",
    "ConfigurationError",
    "MatchingConfig",
    "StorageConfig",
    "configure_logging",
    "get_matching_config",
    "get_storage_config",
    "optional_float_env",
]
