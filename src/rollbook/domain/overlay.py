"""Pure updaters for the per-user bookkeeping kept in the overlay.

Each function takes the current :class:`OverlayState` and returns the next
one; pass them to ``CatalogStore.write`` via a small lambda. Timestamps are
ISO-8601 strings supplied by the caller.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import TYPE_CHECKING, Final
from uuid import uuid4

from rollbook.domain.model import (
    PartnerName,
    TechniqueProgress,
    UserPositionNote,
    UserTag,
    UserTechniqueNote,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rollbook.domain.model import OverlayState


COMMON_TAGS: Final[tuple[str, ...]] = (
    "grip",
    "posture",
    "base",
    "timing",
    "hip angle",
    "underhook",
    "overhook",
    "frames",
    "weight distribution",
    "head position",
    "knee position",
    "elbow position",
    "pressure",
    "off-balance",
    "control",
    "setup",
)

_WHITESPACE = re.compile(r"\s+")


def _new_id() -> str:
    return str(uuid4())


def normalize_tag(value: str) -> str:
    return _WHITESPACE.sub(" ", value.strip().lower())


def record_tag_usage(state: OverlayState, tags: Iterable[str], *, timestamp: str) -> OverlayState:
    updated = list(state.tags)
    positions = {item.tag: pos for pos, item in enumerate(updated)}
    changed = False
    for raw_tag in tags:
        tag = normalize_tag(raw_tag)
        if not tag:
            continue
        changed = True
        existing = positions.get(tag)
        if existing is not None:
            current = updated[existing]
            updated[existing] = replace(
                current, usage_count=current.usage_count + 1, last_used_at=timestamp
            )
            continue
        positions[tag] = len(updated)
        updated.append(
            UserTag(
                id=_new_id(),
                tag=tag,
                usage_count=1,
                created_at=timestamp,
                last_used_at=timestamp,
            )
        )
    return replace(state, tags=tuple(updated)) if changed else state


def record_technique_progress(
    state: OverlayState,
    technique_ids: Iterable[str],
    *,
    timestamp: str,
) -> OverlayState:
    updated = list(state.progress)
    positions = {item.technique_id: pos for pos, item in enumerate(updated)}
    changed = False
    for technique_id in technique_ids:
        changed = True
        existing = positions.get(technique_id)
        if existing is not None:
            current = updated[existing]
            updated[existing] = replace(
                current, times_drilled=current.times_drilled + 1, last_drilled_at=timestamp
            )
            continue
        positions[technique_id] = len(updated)
        updated.append(
            TechniqueProgress(
                id=_new_id(),
                technique_id=technique_id,
                first_seen_at=timestamp,
                last_drilled_at=timestamp,
                times_drilled=1,
            )
        )
    return replace(state, progress=tuple(updated)) if changed else state


def record_partner_names(
    state: OverlayState,
    names: Iterable[str],
    *,
    timestamp: str,
) -> OverlayState:
    updated = list(state.partners)
    positions = {item.name.lower(): pos for pos, item in enumerate(updated)}
    changed = False
    for raw_name in names:
        name = raw_name.strip()
        if not name:
            continue
        changed = True
        key = name.lower()
        existing = positions.get(key)
        if existing is not None:
            current = updated[existing]
            updated[existing] = replace(
                current, round_count=current.round_count + 1, last_used_at=timestamp
            )
            continue
        positions[key] = len(updated)
        updated.append(
            PartnerName(id=_new_id(), name=name, round_count=1, last_used_at=timestamp)
        )
    return replace(state, partners=tuple(updated)) if changed else state


def update_technique_note(
    state: OverlayState,
    technique_id: str,
    notes: str,
    *,
    now: str,
) -> OverlayState:
    """Upsert the note for ``technique_id``; blank notes delete it."""

    trimmed = notes.strip()
    existing = next(
        (note for note in state.technique_notes if note.technique_id == technique_id), None
    )
    remaining = tuple(note for note in state.technique_notes if note.technique_id != technique_id)
    if not trimmed:
        return replace(state, technique_notes=remaining)
    note = UserTechniqueNote(
        id=existing.id if existing else _new_id(),
        technique_id=technique_id,
        notes=trimmed,
        created_at=existing.created_at if existing else now,
        updated_at=now,
    )
    return replace(state, technique_notes=(*remaining, note))


def update_position_note(
    state: OverlayState,
    position_id: str,
    notes: str,
    *,
    now: str,
) -> OverlayState:
    """Upsert the note for ``position_id``; blank notes delete it."""

    trimmed = notes.strip()
    existing = next(
        (note for note in state.position_notes if note.position_id == position_id), None
    )
    remaining = tuple(note for note in state.position_notes if note.position_id != position_id)
    if not trimmed:
        return replace(state, position_notes=remaining)
    note = UserPositionNote(
        id=existing.id if existing else _new_id(),
        position_id=position_id,
        notes=trimmed,
        created_at=existing.created_at if existing else now,
        updated_at=now,
    )
    return replace(state, position_notes=(*remaining, note))


def tag_suggestions(state: OverlayState) -> tuple[str, ...]:
    # stable sorts: secondary key first
    ordered = sorted(state.tags, key=lambda item: item.last_used_at, reverse=True)
    ordered.sort(key=lambda item: item.usage_count, reverse=True)
    return tuple(item.tag for item in ordered)


def partner_suggestions(state: OverlayState) -> tuple[str, ...]:
    ordered = sorted(state.partners, key=lambda item: item.last_used_at, reverse=True)
    ordered.sort(key=lambda item: item.round_count, reverse=True)
    return tuple(item.name for item in ordered)
