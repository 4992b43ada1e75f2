"""Particle bursts for explosions."""

from __future__ import annotations

import math
import random
import pygame

from .utils import FPS, Position

EXPLOSION_COLORS = (
    (255, 60, 60),
    (255, 233, 68),
    (98, 246, 128),
    (80, 140, 255),
    (190, 90, 255),
)
PARTICLE_SPEED = 100.0
PARTICLE_LIFE = FPS


class Particle(pygame.sprite.Sprite):
    """Lightweight particle sprite with fade-out lifetime."""

    def __init__(
        self,
        position: Position,
        color: tuple[int, int, int],
        velocity: tuple[float, float],
        life: int,
        size: int,
    ) -> None:
        super().__init__()
        self.position = [float(position[0]), float(position[1])]
        self.velocity = [velocity[0], velocity[1]]
        self.life = life
        self.max_life = life
        self.color = color
        self.size = size
        self.image = pygame.Surface((size * 2, size * 2), pygame.SRCALPHA)
        self.rect = self.image.get_rect(center=(int(position[0]), int(position[1])))

    def update(self) -> None:
        """Advance particle simulation one frame."""
        self.position[0] += self.velocity[0]
        self.position[1] += self.velocity[1]
        self.life -= 1

        alpha = max(0, int(255 * (self.life / max(1, self.max_life))))
        self.image.fill((0, 0, 0, 0))
        pygame.draw.circle(self.image, (*self.color, alpha), (self.size, self.size), self.size)
        self.rect.center = (int(self.position[0]), int(self.position[1]))

        if self.life <= 0:
            self.kill()


class ParticleSystem:
    """Owns the particle group and the burst emitter."""

    def __init__(self) -> None:
        self.particles = pygame.sprite.Group()

    def explode(self, count: int, position: Position) -> None:
        """Emit ``count`` particles radiating from position at a fixed speed."""
        step = PARTICLE_SPEED / FPS
        for _ in range(count):
            angle = random.uniform(0.0, math.tau)
            self.particles.add(
                Particle(
                    position=position,
                    color=random.choice(EXPLOSION_COLORS),
                    velocity=(math.cos(angle) * step, math.sin(angle) * step),
                    life=PARTICLE_LIFE,
                    size=random.randint(2, 4),
                )
            )

    def update(self) -> None:
        """Update all particles."""
        self.particles.update()

    def draw(self, surface: pygame.Surface) -> None:
        """Draw particles on top of the scene."""
        self.particles.draw(surface)
