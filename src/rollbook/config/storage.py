"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "rollbook"
DEFAULT_OVERLAY_FILENAME: Final[str] = "user_taxonomy.json"
DEFAULT_SESSIONS_FILENAME: Final[str] = "sessions.json"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    overlay_filename: str = DEFAULT_OVERLAY_FILENAME
    sessions_filename: str = DEFAULT_SESSIONS_FILENAME
    system_catalog_dir: Path | None = None

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def overlay_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.overlay_filename

    def sessions_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.sessions_filename


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("ROLLBOOK_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    catalog_dir = os.getenv("ROLLBOOK_SYSTEM_CATALOG_DIR")
    return StorageConfig(
        data_dir=data_dir,
        system_catalog_dir=Path(catalog_dir).expanduser() if catalog_dir else None,
    )
