"""Literal normalisation of free-text session fields."""

from __future__ import annotations

from rollbook.domain.model import GiNoGi

_GI_SPELLINGS: dict[str, GiNoGi] = {
    "gi": GiNoGi.GI,
    "nogi": GiNoGi.NOGI,
    "no-gi": GiNoGi.NOGI,
    "no gi": GiNoGi.NOGI,
    "both": GiNoGi.BOTH,
}


def parse_gi_or_nogi(value: str | None) -> GiNoGi | None:
    """Map a recognised spelling to :class:`GiNoGi`; anything else is ``None``."""

    if value is None:
        return None
    return _GI_SPELLINGS.get(value.strip().lower())
