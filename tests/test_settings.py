"""Tests for the settings persistence layer."""

from __future__ import annotations

from pathlib import Path

import pytest

from prismtheme.services.preferences import PREFERENCE_STORAGE_KEY
from prismtheme.services.settings import Settings, SettingsStore


def test_load_returns_defaults_when_file_missing(tmp_path: Path) -> None:
    settings = SettingsStore(tmp_path / "settings.json").load()

    assert settings == Settings()
    assert settings.storage_key == PREFERENCE_STORAGE_KEY
    assert settings.color_scheme == "unknown"


def test_save_and_load_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    original = Settings(
        storage_path=str(tmp_path / "prefs.json"),
        storage_key="custom-key",
        color_scheme="dark",
        debug_logging=True,
    )

    SettingsStore(path).save(original)
    reloaded = SettingsStore(path).load()

    assert reloaded == original


def test_invalid_json_falls_back_to_defaults(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{broken", encoding="utf-8")

    with caplog.at_level("WARNING"):
        settings = SettingsStore(path).load()

    assert settings == Settings()
    assert "not valid JSON" in caplog.text


def test_unknown_keys_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text('{"color_scheme": "light", "legacy": 1}', encoding="utf-8")

    assert SettingsStore(path).load().color_scheme == "light"


def test_env_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    SettingsStore(path).save(Settings(color_scheme="light", storage_key="disk"))
    monkeypatch.setenv("PRISMTHEME_COLOR_SCHEME", "DARK")
    monkeypatch.setenv("PRISMTHEME_STORAGE_KEY", "env-key")
    monkeypatch.setenv("PRISMTHEME_DEBUG_LOGGING", "yes")

    overridden = SettingsStore(path).load(overrides={"storage_key": "cli-key"})

    assert overridden.color_scheme == "dark"
    assert overridden.storage_key == "env-key"
    assert overridden.debug_logging is True


def test_explicit_overrides_apply(tmp_path: Path) -> None:
    settings = SettingsStore(tmp_path / "settings.json").load(
        overrides={"storage_path": "/tmp/elsewhere.json", "unknown": 1, "log_dir": None}
    )

    assert settings.storage_path == "/tmp/elsewhere.json"
    assert settings.log_dir is None


def test_unsupported_color_scheme_becomes_unknown(tmp_path: Path) -> None:
    settings = SettingsStore(tmp_path / "settings.json").load(overrides={"color_scheme": "sepia"})

    assert settings.color_scheme == "unknown"
