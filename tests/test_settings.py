from __future__ import annotations

import tempfile
from pathlib import Path

import pygame

from laserfall.settings import RoundRules, SettingsManager
from laserfall.utils import load_json, save_json


def _patch_paths(monkeypatch, tmp: str) -> Path:
    from laserfall import settings, utils

    settings_file = Path(tmp) / "settings.json"
    monkeypatch.setattr(utils, "DATA_DIR", Path(tmp))
    monkeypatch.setattr(settings, "SETTINGS_FILE", settings_file)
    return settings_file


def test_defaults_written_on_first_run(monkeypatch) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        settings_file = _patch_paths(monkeypatch, tmp)
        mgr = SettingsManager()
        assert settings_file.exists()
        assert mgr.settings.rules == RoundRules()
        assert mgr.settings.controls.fire == pygame.K_SPACE


def test_settings_load_save_round_trip(monkeypatch) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        _patch_paths(monkeypatch, tmp)
        mgr = SettingsManager()
        mgr.settings.rules.enemy_count = 40
        mgr.settings.display.show_fps = True
        mgr.save()

        loaded = SettingsManager()
        assert loaded.settings.rules.enemy_count == 40
        assert loaded.settings.display.show_fps is True
        assert loaded.settings.rules.player_start == (300.0, 700.0)


def test_invalid_rules_fall_back(monkeypatch) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        settings_file = _patch_paths(monkeypatch, tmp)
        save_json(settings_file, {"rules": {"starting_lives": 0}, "master_volume": "loud"})
        loaded = SettingsManager()
        assert loaded.settings.rules.starting_lives == 3
        assert loaded.settings.master_volume == 0.8


def test_json_helpers() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        p = Path(tmp) / "x.json"
        save_json(p, {"ok": True})
        assert load_json(p, {}) == {"ok": True}
        p.write_text("{broken", encoding="utf-8")
        assert load_json(p, {"fallback": 1}) == {"fallback": 1}


def test_malformed_sections_fall_back(monkeypatch) -> None:
    payloads = [
        {"controls": {"fire": "space"}},
        {"display": []},
        {"rules": []},
        {"controls": "arrows"},
        {"rules": {"player_start": [300]}},
        {"rules": {"enemy_spawn_bounds": [50, 550, 50]}},
        {"rules": {"player_start": ["left", "bottom"]}},
    ]
    for payload in payloads:
        with tempfile.TemporaryDirectory() as tmp:
            settings_file = _patch_paths(monkeypatch, tmp)
            save_json(settings_file, payload)
            loaded = SettingsManager().settings
            assert loaded.rules == RoundRules()
            assert loaded.controls.fire == pygame.K_SPACE
            assert loaded.display.fullscreen is False
