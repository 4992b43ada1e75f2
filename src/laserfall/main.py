"""Executable entrypoint for Laserfall."""

from __future__ import annotations

from pathlib import Path

from .game import LaserfallGame
from .settings import SettingsManager
from .utils import configure_logging


def main() -> None:
    """Launch the game."""
    settings = SettingsManager().settings
    configure_logging(settings.log_level)
    root = Path(__file__).resolve().parents[2]
    LaserfallGame(root=root, settings=settings).run()


if __name__ == "__main__":
    main()
