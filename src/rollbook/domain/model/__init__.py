"""Public domain model surface."""

from __future__ import annotations

from rollbook.domain.model.enums import (
    BeltLevel,
    GiNoGi,
    Perspective,
    SessionType,
    SubmissionType,
    TechniqueCategory,
)
from rollbook.domain.model.overlay import (
    EMPTY_OVERLAY,
    OverlayState,
    PartnerName,
    TechniqueProgress,
    UserPositionNote,
    UserTag,
    UserTechniqueNote,
)
from rollbook.domain.model.session import (
    LegacySparring,
    RoundSubmission,
    Session,
    SessionPositionNote,
    SessionTechnique,
    SparringRound,
)
from rollbook.domain.model.taxonomy import CUSTOM_ID_PREFIX, CatalogEntity, Position, Technique

__all__ = [  # noqa: RUF022
    # enums
    "BeltLevel",
    "GiNoGi",
    "Perspective",
    "SessionType",
    "SubmissionType",
    "TechniqueCategory",
    # catalog
    "CUSTOM_ID_PREFIX",
    "CatalogEntity",
    "Position",
    "Technique",
    # overlay
    "EMPTY_OVERLAY",
    "OverlayState",
    "PartnerName",
    "TechniqueProgress",
    "UserPositionNote",
    "UserTag",
    "UserTechniqueNote",
    # sessions
    "LegacySparring",
    "RoundSubmission",
    "Session",
    "SessionPositionNote",
    "SessionTechnique",
    "SparringRound",
]
