"""Settings persistence and runtime configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any
import logging
import pygame

from .utils import SETTINGS_FILE, Bounds, Position, ensure_data_dirs, load_json, save_json

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RoundRules:
    """Gameplay constants for a single round."""

    starting_lives: int = 3
    points_per_enemy: int = 10
    enemy_count: int = 100
    projectile_capacity: int = 30
    player_speed: float = 200.0
    projectile_speed: float = 600.0
    player_start: Position = (300.0, 700.0)
    enemy_speed_min: float = 40.0
    enemy_speed_max: float = 120.0
    enemy_spawn_bounds: Bounds = (50.0, 550.0, 50.0, 300.0)
    enemy_explosion: int = 20
    player_explosion: int = 40


@dataclass(slots=True)
class DisplaySettings:
    """Display-related options."""

    fullscreen: bool = False
    show_fps: bool = False


@dataclass(slots=True)
class ControlScheme:
    """Keyboard bindings for the ship."""

    left: int
    right: int
    fire: int


@dataclass(slots=True)
class GameSettings:
    """Persistent settings for the game."""

    master_volume: float = 0.8
    sfx_volume: float = 0.8
    log_level: str = "INFO"
    display: DisplaySettings = field(default_factory=DisplaySettings)
    rules: RoundRules = field(default_factory=RoundRules)
    controls: ControlScheme = field(
        default_factory=lambda: ControlScheme(
            left=pygame.K_LEFT,
            right=pygame.K_RIGHT,
            fire=pygame.K_SPACE,
        )
    )


class SettingsManager:
    """Load and save game settings."""

    def __init__(self) -> None:
        ensure_data_dirs()
        if not SETTINGS_FILE.exists():
            self.settings = GameSettings()
            self.save()
        else:
            self.settings = self.load()

    def load(self) -> GameSettings:
        """Load game settings from disk with safe defaults."""
        raw = load_json(SETTINGS_FILE, {})
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed settings file %s", SETTINGS_FILE)
            raw = {}
        settings = GameSettings()

        try:
            settings.master_volume = float(raw.get("master_volume", settings.master_volume))
            settings.sfx_volume = float(raw.get("sfx_volume", settings.sfx_volume))
        except (TypeError, ValueError):
            logger.warning("Invalid volume in settings, using defaults")
            settings.master_volume, settings.sfx_volume = 0.8, 0.8
        settings.log_level = str(raw.get("log_level", settings.log_level))

        display = self._section(raw, "display")
        settings.display.fullscreen = bool(display.get("fullscreen", settings.display.fullscreen))
        settings.display.show_fps = bool(display.get("show_fps", settings.display.show_fps))

        settings.rules = self._load_rules(self._section(raw, "rules"), settings.rules)
        settings.controls = self._load_controls(self._section(raw, "controls"), settings.controls)
        return settings

    @staticmethod
    def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
        payload = raw.get(key, {})
        if not isinstance(payload, dict):
            logger.warning("Ignoring malformed %r section in settings", key)
            return {}
        return payload

    @staticmethod
    def _load_rules(payload: dict[str, Any], defaults: RoundRules) -> RoundRules:
        try:
            rules = RoundRules(
                starting_lives=int(payload.get("starting_lives", defaults.starting_lives)),
                points_per_enemy=int(payload.get("points_per_enemy", defaults.points_per_enemy)),
                enemy_count=int(payload.get("enemy_count", defaults.enemy_count)),
                projectile_capacity=int(payload.get("projectile_capacity", defaults.projectile_capacity)),
                player_speed=float(payload.get("player_speed", defaults.player_speed)),
                projectile_speed=float(payload.get("projectile_speed", defaults.projectile_speed)),
                player_start=tuple(float(v) for v in payload.get("player_start", defaults.player_start)),
                enemy_speed_min=float(payload.get("enemy_speed_min", defaults.enemy_speed_min)),
                enemy_speed_max=float(payload.get("enemy_speed_max", defaults.enemy_speed_max)),
                enemy_spawn_bounds=tuple(float(v) for v in payload.get("enemy_spawn_bounds", defaults.enemy_spawn_bounds)),
                enemy_explosion=int(payload.get("enemy_explosion", defaults.enemy_explosion)),
                player_explosion=int(payload.get("player_explosion", defaults.player_explosion)),
            )
        except (TypeError, ValueError):
            logger.warning("Invalid round rules in settings, using defaults")
            return defaults
        if len(rules.player_start) != 2 or len(rules.enemy_spawn_bounds) != 4:
            logger.warning("Malformed positions in round rules, using defaults")
            return defaults
        if rules.starting_lives < 1 or rules.enemy_count < 1 or rules.projectile_capacity < 1:
            logger.warning("Round rules out of range, using defaults")
            return defaults
        return rules

    @staticmethod
    def _load_controls(payload: dict[str, int], defaults: ControlScheme) -> ControlScheme:
        try:
            return ControlScheme(
                left=int(payload.get("left", defaults.left)),
                right=int(payload.get("right", defaults.right)),
                fire=int(payload.get("fire", defaults.fire)),
            )
        except (TypeError, ValueError):
            logger.warning("Invalid key bindings in settings, using defaults")
            return defaults

    def save(self) -> None:
        """Persist settings to disk."""
        save_json(SETTINGS_FILE, asdict(self.settings))
