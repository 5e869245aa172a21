"""Identity derivation for custom catalog entries."""

from __future__ import annotations

import re
import unicodedata
from uuid import uuid4

from rollbook.domain.model import CUSTOM_ID_PREFIX

_NON_WORD = re.compile(r"[\W_]+")
_SUFFIX_LENGTH = 8


def _random_suffix() -> str:
    return uuid4().hex[:_SUFFIX_LENGTH]


def slugify(value: str) -> str:
    """``"Octopus Guard"`` -> ``"octopus-guard"``; non-Latin letters are kept."""

    text = unicodedata.normalize("NFKD", value)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return _NON_WORD.sub("-", text.casefold()).strip("-")


def entry_slug(name: str) -> str:
    """Slug for a new entry; punctuation-only names get a random slug."""

    return slugify(name) or _random_suffix()


def custom_id(slug: str) -> str:
    """Namespaced id with a random suffix; no global uniqueness check is needed."""

    return f"{CUSTOM_ID_PREFIX}{slug}-{_random_suffix()}"
