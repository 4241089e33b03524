"""Tests for config loading and focus settings."""

import pytest

from focusflow.config.loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_FILE,
    ConfigLoader,
    resolve_config_path,
)
from focusflow.core import settings as settings_module
from focusflow.core.settings import FocusSettings, get_settings, init_settings

CUSTOM_CONFIG = """
[logging]
level = "WARNING"

[focus]
default_session_minutes = 45
tick_seconds = 0.5

[[focus.session_types]]
id = "sprint"
name = "Sprint"
duration = 10
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(CUSTOM_CONFIG, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def restore_settings():
    previous = settings_module._settings
    yield
    settings_module._settings = previous


def test_explicit_path_wins(monkeypatch, config_file):
    monkeypatch.setenv(CONFIG_ENV_VAR, "/elsewhere/config.toml")
    assert resolve_config_path(config_file) == config_file


def test_environment_variable_is_used(monkeypatch, config_file):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
    assert resolve_config_path() == config_file


def test_packaged_config_is_the_fallback(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert resolve_config_path() == DEFAULT_CONFIG_FILE
    assert DEFAULT_CONFIG_FILE.exists()


def test_dotted_key_access(config_file):
    loader = ConfigLoader(config_file)

    assert loader.get("focus.default_session_minutes") == 45
    assert loader.get("logging.level") == "WARNING"
    assert loader.get("focus.missing", "fallback") == "fallback"
    assert loader.get("logging.level.deeper") is None
    assert loader.get_section("nowhere") == {}


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader(tmp_path / "absent.toml").load()


def test_settings_from_config(config_file):
    settings = FocusSettings.from_config(ConfigLoader(config_file))

    assert settings.default_session_minutes == 45
    assert settings.tick_seconds == 0.5
    assert settings.weekly_window_days == 7
    assert [t.id for t in settings.session_types] == ["sprint"]
    assert settings.default_session_type.duration == 10


def test_packaged_session_presets():
    settings = FocusSettings.from_config(ConfigLoader(DEFAULT_CONFIG_FILE))

    assert settings.get_session_type_by_id("pomodoro").duration == 25
    assert settings.get_session_type_by_id("deep-work").duration == 50
    assert settings.get_session_type_by_duration(15).id == "quick-win"
    assert settings.get_session_type_by_id("marathon") is None


def test_invalid_settings_are_rejected(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("[focus]\ndefault_session_minutes = 0\n", encoding="utf-8")

    with pytest.raises(ValueError):
        FocusSettings.from_config(ConfigLoader(path))


def test_init_settings_replaces_active_settings(config_file):
    init_settings(ConfigLoader(config_file))
    assert get_settings().default_session_minutes == 45
