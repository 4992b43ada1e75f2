"""Shared constants and utility helpers for Laserfall."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Tuple
import json
import logging
import os
import random

SCREEN_WIDTH = 600
SCREEN_HEIGHT = 800
FPS = 60

BG_COLOR = "#000000"
LOST_BG_COLOR = "#0000ff"
TEXT_COLOR = (255, 255, 255)
WIN_COLOR = (0, 255, 0)
PLAYER_COLOR = (90, 200, 255)
ENEMY_COLOR = (255, 85, 85)
LASER_COLOR = (255, 233, 68)

Position = Tuple[float, float]
Velocity = Tuple[float, float]
Bounds = Tuple[float, float, float, float]

DATA_DIR = Path(".laserfall")
SETTINGS_FILE = DATA_DIR / "settings.json"

LOG_LEVEL_ENV = "LASERFALL_LOG_LEVEL"


def ensure_data_dirs() -> None:
    """Create the data directory for config files."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value into a closed interval."""
    return max(minimum, min(maximum, value))


def in_field(position: Position) -> bool:
    """Check if a point is inside the playfield."""
    x, y = position
    return 0 <= x <= SCREEN_WIDTH and 0 <= y <= SCREEN_HEIGHT


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (json.JSONDecodeError, OSError):
        return default


def save_json(path: Path, payload: Any) -> None:
    """Save JSON data with deterministic formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)


def random_point(bounds: Bounds, rng: random.Random | None = None) -> Position:
    """Return a random integer point within (min_x, max_x, min_y, max_y)."""
    rng = rng or random
    min_x, max_x, min_y, max_y = bounds
    return (float(rng.randint(int(min_x), int(max_x))), float(rng.randint(int(min_y), int(max_y))))


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging; the environment variable wins over the argument."""
    name = os.environ.get(LOG_LEVEL_ENV, level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
