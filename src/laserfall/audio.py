"""Audio loading and playback wrappers."""

from __future__ import annotations

from pathlib import Path
import logging
import pygame

logger = logging.getLogger(__name__)

SOUND_FILES = {
    "playerLaser": "laser_player.ogg",
    "playerDestroyed": "player_destroyed.ogg",
    "enemyDestroyed": "enemy_destroyed.ogg",
}


class AudioManager:
    """Loads and plays sfx with graceful fallback when assets are absent."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.sound_enabled = False
        self.sounds: dict[str, pygame.mixer.Sound] = {}
        try:
            pygame.mixer.init()
            self.sound_enabled = True
        except pygame.error as exc:
            logger.info("Audio disabled: %s", exc)
            self.sound_enabled = False

    def load_assets(self) -> None:
        """Load available sound effects from the assets folder."""
        if not self.sound_enabled:
            return
        for key, filename in SOUND_FILES.items():
            path = self.root / "assets" / "sounds" / filename
            if not path.exists():
                logger.debug("Missing sound asset %s", path)
                continue
            try:
                self.sounds[key] = pygame.mixer.Sound(str(path))
            except pygame.error as exc:
                logger.warning("Could not load %s: %s", path, exc)

    def set_volumes(self, master: float, sfx: float) -> None:
        """Apply current volume settings."""
        for sound in self.sounds.values():
            sound.set_volume(master * sfx)

    def play(self, key: str) -> None:
        """Play a named sound effect."""
        if not self.sound_enabled:
            return
        sound = self.sounds.get(key)
        if sound:
            sound.play()
