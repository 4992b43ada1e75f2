"""pygame host: window, physics, rendering and audio around the round controller."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import logging
import random
import pygame

from .audio import AudioManager
from .commands import (
    Command,
    EmitParticles,
    EnemyLeftField,
    HideOverlays,
    HostEvent,
    PlayAgainClicked,
    PlayerEnemyOverlap,
    PlaySound,
    ProjectileEnemyOverlap,
    ProjectileLeftField,
    SetActive,
    SetBackgroundColor,
    SetHudVisible,
    SetLivesText,
    SetPosition,
    SetScoreText,
    SetVelocity,
    ShowGameOverScreen,
    ShowPlayAgainControl,
    ShowWinScreen,
)
from .controller import RoundController
from .controls import InputSnapshot
from .particles import ParticleSystem
from .player import Entity, EntityKind, Player
from .settings import GameSettings, SettingsManager
from .utils import (
    BG_COLOR,
    ENEMY_COLOR,
    FPS,
    LASER_COLOR,
    PLAYER_COLOR,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TEXT_COLOR,
    WIN_COLOR,
    Velocity,
    clamp,
    ensure_data_dirs,
    in_field,
)

logger = logging.getLogger(__name__)

BODY_SIZES = {
    EntityKind.PLAYER: (40, 30),
    EntityKind.PROJECTILE: (4, 16),
    EntityKind.ENEMY: (32, 24),
}
BODY_COLORS = {
    EntityKind.PLAYER: PLAYER_COLOR,
    EntityKind.PROJECTILE: LASER_COLOR,
    EntityKind.ENEMY: ENEMY_COLOR,
}


@dataclass(slots=True)
class TextLayer:
    """A line of UI text with a visibility toggle."""

    text: str
    position: tuple[int, int]
    large: bool = False
    color: tuple[int, int, int] = TEXT_COLOR
    visible: bool = True


class LaserfallGame:
    """Runs the frame loop and carries out the controller's commands."""

    def __init__(self, root: Path, settings: GameSettings | None = None, rng: random.Random | None = None) -> None:
        pygame.init()
        pygame.font.init()
        ensure_data_dirs()

        self.root = root
        self.settings = settings or SettingsManager().settings

        flags = pygame.FULLSCREEN if self.settings.display.fullscreen else 0
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), flags)
        pygame.display.set_caption("Laserfall")
        self.clock = pygame.time.Clock()

        self.title_font = pygame.font.SysFont("consolas", 64, bold=True)
        self.body_font = pygame.font.SysFont("consolas", 32)

        self.controller = RoundController(self.settings.rules, rng)
        self.velocities: dict[tuple[EntityKind, int], Velocity] = {}
        self.pending_events: list[HostEvent] = []
        self.background = pygame.Color(BG_COLOR)

        self.texts: dict[str, TextLayer] = {
            "score": TextLayer("Score: 0", (16, 16)),
            "lives": TextLayer("Lives: 3", (16, 48)),
            "game_over": TextLayer("Game Over", (120, 400), large=True, visible=False),
            "you_won": TextLayer("You Won", (160, 340), large=True, color=WIN_COLOR, visible=False),
            "score_message": TextLayer("", (120, 350), visible=False),
            "play_again": TextLayer("Play Again", (200, 500), color=WIN_COLOR, visible=False),
        }
        self.play_again_rect = pygame.Rect(200, 500, 0, 0)

        self.particles = ParticleSystem()
        self.audio = AudioManager(self.root)
        self.audio.load_assets()
        self.audio.set_volumes(self.settings.master_volume, self.settings.sfx_volume)

        self.apply(self.controller.restart())

    def run(self) -> None:
        """Main event/update/render loop."""
        running = True
        while running:
            dt_ms = self.clock.tick(FPS)
            running = self._handle_events()
            if not running:
                break
            self.step(dt_ms / 1000.0, self._poll_input())
            self._render()

        pygame.quit()

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.click(event.pos)
        return True

    def click(self, pos: tuple[int, int]) -> None:
        """Queue a play-again request when the visible button is clicked."""
        if self.texts["play_again"].visible and self.play_again_rect.collidepoint(pos):
            self.pending_events.append(PlayAgainClicked())

    def _poll_input(self) -> InputSnapshot:
        keys = pygame.key.get_pressed()
        controls = self.settings.controls
        return InputSnapshot(left=keys[controls.left], right=keys[controls.right], fire=keys[controls.fire])

    def step(self, dt: float, snapshot: InputSnapshot) -> None:
        """Advance one frame: input, physics, overlap reports, effects."""
        self.apply(self.controller.tick(snapshot))
        self._integrate(dt)

        events = self.pending_events + self._detect_events()
        self.pending_events = []
        self.apply(self.controller.handle_all(events))
        self.particles.update()

    def _bodies(self) -> list[Entity | Player]:
        return [self.controller.player, *self.controller.projectiles, *self.controller.enemies]

    def _entity(self, kind: EntityKind, slot: int) -> Entity | Player:
        if kind == EntityKind.PLAYER:
            return self.controller.player
        if kind == EntityKind.PROJECTILE:
            return self.controller.projectiles[slot]
        return self.controller.enemies[slot]

    def _integrate(self, dt: float) -> None:
        for body in self._bodies():
            if not body.active:
                continue
            vx, vy = self.velocities.get((body.kind, body.slot), (0.0, 0.0))
            x, y = body.position
            x, y = x + vx * dt, y + vy * dt
            if body.kind == EntityKind.PLAYER:
                half_w, half_h = BODY_SIZES[EntityKind.PLAYER][0] / 2, BODY_SIZES[EntityKind.PLAYER][1] / 2
                x = clamp(x, half_w, SCREEN_WIDTH - half_w)
                y = clamp(y, half_h, SCREEN_HEIGHT - half_h)
            body.position = (x, y)

    @staticmethod
    def _rect(body: Entity | Player) -> pygame.Rect:
        rect = pygame.Rect((0, 0), BODY_SIZES[body.kind])
        rect.center = (int(body.position[0]), int(body.position[1]))
        return rect

    def _detect_events(self) -> list[HostEvent]:
        events: list[HostEvent] = []
        player = self.controller.player
        lasers = list(self.controller.projectiles.iter_active())
        enemies = [(enemy, self._rect(enemy)) for enemy in self.controller.enemies.iter_active()]

        for laser in lasers:
            laser_rect = self._rect(laser)
            for enemy, enemy_rect in enemies:
                if laser_rect.colliderect(enemy_rect):
                    events.append(ProjectileEnemyOverlap(laser.slot, enemy.slot))

        if player.active:
            player_rect = self._rect(player)
            for enemy, enemy_rect in enemies:
                if player_rect.colliderect(enemy_rect):
                    events.append(PlayerEnemyOverlap(enemy.slot))

        for laser in lasers:
            if not in_field(laser.position):
                events.append(ProjectileLeftField(laser.slot))
        for enemy, _ in enemies:
            if not in_field(enemy.position):
                events.append(EnemyLeftField(enemy.slot))
        return events

    def apply(self, commands: list[Command]) -> None:
        """Carry out controller commands in order."""
        for command in commands:
            self._apply(command)

    def _apply(self, command: Command) -> None:
        if isinstance(command, SetVelocity):
            self.velocities[(command.kind, command.slot)] = command.velocity
        elif isinstance(command, SetPosition):
            self._entity(command.kind, command.slot).position = command.position
        elif isinstance(command, SetActive):
            body = self._entity(command.kind, command.slot)
            if command.active:
                body.activate()
            else:
                body.deactivate()
                self.velocities.pop((command.kind, command.slot), None)
        elif isinstance(command, PlaySound):
            self.audio.play(command.name)
        elif isinstance(command, EmitParticles):
            self.particles.explode(command.count, command.position)
        elif isinstance(command, SetScoreText):
            self.texts["score"].text = f"Score: {command.score}"
        elif isinstance(command, SetLivesText):
            self.texts["lives"].text = f"Lives: {command.lives}"
        elif isinstance(command, SetHudVisible):
            self.texts["score"].visible = command.visible
            self.texts["lives"].visible = command.visible
        elif isinstance(command, ShowWinScreen):
            self.texts["you_won"].visible = True
        elif isinstance(command, ShowGameOverScreen):
            self.texts["game_over"].visible = True
            self.texts["score_message"].text = f"Your score was: {command.final_score}"
            self.texts["score_message"].visible = True
        elif isinstance(command, ShowPlayAgainControl):
            self.texts["play_again"].visible = True
            self.play_again_rect = self._text_rect(self.texts["play_again"])
        elif isinstance(command, HideOverlays):
            for key in ("game_over", "you_won", "score_message", "play_again"):
                self.texts[key].visible = False
        elif isinstance(command, SetBackgroundColor):
            self.background = pygame.Color(command.color)
        else:
            logger.warning("Ignoring unknown command %r", command)

    def _text_rect(self, layer: TextLayer) -> pygame.Rect:
        font = self.title_font if layer.large else self.body_font
        width, height = font.size(layer.text)
        return pygame.Rect(layer.position, (width, height))

    def _render(self) -> None:
        self.screen.fill(self.background)
        for body in self._bodies():
            if body.visible:
                pygame.draw.rect(self.screen, BODY_COLORS[body.kind], self._rect(body), border_radius=3)
        self.particles.draw(self.screen)

        for layer in self.texts.values():
            if not layer.visible:
                continue
            font = self.title_font if layer.large else self.body_font
            self.screen.blit(font.render(layer.text, True, layer.color), layer.position)

        if self.settings.display.show_fps:
            fps = self.body_font.render(f"{self.clock.get_fps():.0f} fps", True, TEXT_COLOR)
            self.screen.blit(fps, (SCREEN_WIDTH - fps.get_width() - 16, 16))
        pygame.display.flip()
