"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Perspective(StrEnum):
    TOP = "top"
    BOTTOM = "bottom"
    NEUTRAL = "neutral"


class TechniqueCategory(StrEnum):
    SUBMISSION = "submission"
    SWEEP = "sweep"
    PASS = "pass"
    ESCAPE = "escape"
    TAKEDOWN = "takedown"
    TRANSITION = "transition"
    GUARD_RETENTION = "guard-retention"
    CONTROL = "control"


class SubmissionType(StrEnum):
    CHOKE = "choke"
    ARMLOCK = "armlock"
    SHOULDER_LOCK = "shoulder-lock"
    WRISTLOCK = "wristlock"
    LEGLOCK = "leglock"
    SPINE_LOCK = "spine-lock"
    COMPRESSION = "compression"


class GiNoGi(StrEnum):
    GI = "gi"
    NOGI = "nogi"
    BOTH = "both"


class SessionType(StrEnum):
    REGULAR_CLASS = "regular-class"
    OPEN_MAT = "open-mat"
    PRIVATE = "private"
    COMPETITION = "competition"
    SEMINAR = "seminar"
    DRILLING_ONLY = "drilling-only"


class BeltLevel(StrEnum):
    WHITE = "white"
    BLUE = "blue"
    PURPLE = "purple"
    BROWN = "brown"
    BLACK = "black"
    UNKNOWN = "unknown"
