"""Load the fixed system catalog shipped with the package."""

from __future__ import annotations

import json
import logging
from importlib import resources
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from rollbook.adapters.documents import (
    PositionsDocument,
    TechniquesDocument,
    translate_position,
    translate_technique,
)
from rollbook.domain.ports import SystemCatalog

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable
    from pathlib import Path


POSITIONS_FILENAME: Final[str] = "positions.json"
TECHNIQUES_FILENAME: Final[str] = "techniques.json"
log = logging.getLogger(__name__)


class SystemCatalogError(RuntimeError):
    """Raised when the bundled (or configured) system catalog cannot be read."""


def load_system_catalog(directory: Path | None = None) -> SystemCatalog:
    """Read ``positions.json`` and ``techniques.json`` from ``directory``.

    Without a directory the catalog bundled in ``rollbook/data`` is used.
    """

    base: Traversable | Path = directory or resources.files("rollbook") / "data"
    positions_raw = _read_json(base / POSITIONS_FILENAME)
    techniques_raw = _read_json(base / TECHNIQUES_FILENAME)
    try:
        positions = PositionsDocument.model_validate(positions_raw)
        techniques = TechniquesDocument.model_validate(techniques_raw)
    except ValidationError as exc:
        raise SystemCatalogError(f"Invalid system catalog in {base}: {exc}") from exc

    catalog = SystemCatalog(
        positions=tuple(translate_position(record) for record in positions.positions),
        techniques=tuple(translate_technique(record) for record in techniques.techniques),
    )
    log.debug(
        "Loaded system catalog from %s: positions=%s, techniques=%s",
        base,
        len(catalog.positions),
        len(catalog.techniques),
    )
    return catalog


def _read_json(path: Traversable | Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemCatalogError(f"Cannot read system catalog file {path}: {exc}") from exc
