from __future__ import annotations

import os
from pathlib import Path  # noqa: TC003

import pytest

from rollbook.config import (
    DEFAULT_POSITION_MATCH_THRESHOLD,
    ConfigurationError,
    MatchingConfig,
    StorageConfig,
    get_matching_config,
    get_storage_config,
    optional_float_env,
)


def test_optional_float_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ROLLBOOK_TEST_FLOAT", raising=False)
    assert optional_float_env("ROLLBOOK_TEST_FLOAT", default=0.25) == 0.25

    monkeypatch.setenv("ROLLBOOK_TEST_FLOAT", "0.4")
    assert optional_float_env("ROLLBOOK_TEST_FLOAT", default=0.25) == 0.4

    monkeypatch.setenv("ROLLBOOK_TEST_FLOAT", "loose")
    with pytest.raises(ConfigurationError, match="must be a number"):
        optional_float_env("ROLLBOOK_TEST_FLOAT", default=0.25)


def test_matching_config_reads_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ROLLBOOK_POSITION_MATCH_THRESHOLD", raising=False)
    monkeypatch.setenv("ROLLBOOK_TECHNIQUE_MATCH_THRESHOLD", "0.3")

    config = get_matching_config()

    assert config.position_threshold == DEFAULT_POSITION_MATCH_THRESHOLD
    assert config.technique_threshold == 0.3


@pytest.mark.parametrize("value", [-0.1, 1.5])
def test_matching_config_rejects_out_of_range(value: float) -> None:
    with pytest.raises(ConfigurationError, match="within"):
        MatchingConfig(position_threshold=value)


def test_storage_config_prefers_explicit_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("ROLLBOOK_DATA_DIR", str(custom))
    monkeypatch.setenv("ROLLBOOK_SYSTEM_CATALOG_DIR", str(tmp_path / "catalog"))

    config = get_storage_config()

    assert config.resolve_data_dir() == custom.resolve()
    assert config.system_catalog_dir == tmp_path / "catalog"


def test_storage_config_defaults_to_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    if os.name == "nt":
        pytest.skip("XDG lookup only applies to POSIX")
    monkeypatch.delenv("ROLLBOOK_DATA_DIR", raising=False)
    monkeypatch.delenv("ROLLBOOK_SYSTEM_CATALOG_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))

    config = get_storage_config()

    assert config.resolve_data_dir() == (tmp_path / "xdg" / "rollbook").resolve()
    assert config.system_catalog_dir is None


def test_storage_paths_create_data_dir(tmp_path: Path) -> None:
    config = StorageConfig(data_dir=tmp_path / "data-dir")

    overlay = config.overlay_path()
    sessions = config.sessions_path()

    assert overlay == (tmp_path / "data-dir" / "user_taxonomy.json").resolve()
    assert sessions.name == "sessions.json"
    assert overlay.parent.exists()
    assert not config.overlay_path(ensure=False).exists()
