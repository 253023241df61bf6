"""Tests for persisted application settings."""

import json

import pytest

from mindpad.session import MindMapSession
from mindpad.settings import AppSettings, get_settings_path, load_settings, save_settings


class TestAppSettings:

    def test_defaults(self):
        settings = AppSettings()
        assert settings.history_limit == 1000
        assert settings.default_filename == "mindmap.json"
        assert settings.last_file is None

    def test_json_round_trip(self):
        settings = AppSettings(history_limit=50, show_grid=False, last_file="/tmp/a.json")
        assert AppSettings.from_json(settings.to_json()) == settings

    def test_unknown_fields_ignored(self):
        settings = AppSettings.from_json('{"history_limit": 7, "theme": "dark"}')
        assert settings.history_limit == 7

    def test_bad_json_gives_defaults(self):
        assert AppSettings.from_json("{not json") == AppSettings()
        assert AppSettings.from_json("[1, 2]") == AppSettings()
        assert AppSettings.from_json(None) == AppSettings()

    @pytest.mark.parametrize("key,value", [
        ("history_limit", "500"),
        ("history_limit", 12.5),
        ("history_limit", True),
        ("history_limit", 0),
        ("show_grid", "yes"),
        ("log_level", 10),
        ("zoom_smoothness", "fast"),
        ("pan_smoothness", 2),
        ("last_file", ["a.json"]),
    ])
    def test_mistyped_value_falls_back_to_default(self, key, value, caplog):
        settings = AppSettings.from_json(json.dumps({key: value, "default_root_label": "Kept"}))
        assert getattr(settings, key) == getattr(AppSettings(), key)
        assert settings.default_root_label == "Kept"
        assert key in caplog.text

    def test_int_accepted_for_float_setting(self):
        settings = AppSettings.from_json('{"zoom_smoothness": 1}')
        assert settings.zoom_smoothness == 1.0
        assert isinstance(settings.zoom_smoothness, float)


class TestLoadSave:

    def test_missing_file_gives_defaults(self):
        assert load_settings() == AppSettings()

    def test_save_then_load(self):
        save_settings(AppSettings(default_root_label="Ideas"))
        assert get_settings_path().exists()
        assert load_settings().default_root_label == "Ideas"

    def test_env_log_level_wins(self, monkeypatch):
        save_settings(AppSettings(log_level="ERROR"))
        monkeypatch.setenv("MINDPAD_LOG_LEVEL", "debug")
        assert load_settings().log_level == "DEBUG"

    def test_hand_edited_history_limit_does_not_break_editing(self):
        get_settings_path().write_text('{"history_limit": "500"}', encoding="utf-8")
        session = MindMapSession(load_settings(), 800, 600)

        assert session.add_child("A") is not None
        assert session.history.max_undo == 1000
