"""Per-tick orchestration between the host and the round rules."""

from __future__ import annotations

from typing import Iterable
import logging
import random

from .collisions import CollisionOutcome, CollisionResolver
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
from .controls import InputSnapshot, InputTranslator
from .player import EntityKind, Player
from .pool import EntityPool, PoolExhausted
from .settings import RoundRules
from .state import RoundState, RoundStateMachine
from .utils import BG_COLOR, LOST_BG_COLOR, SCREEN_HEIGHT, SCREEN_WIDTH, Position, Velocity, random_point

logger = logging.getLogger(__name__)

FIRE_SOUND = "playerLaser"


class RoundController:
    """Feeds host events through the rules and returns host commands.

    The controller never touches pygame. Each call returns the list of
    commands the host must carry out, in order.
    """

    def __init__(self, rules: RoundRules | None = None, rng: random.Random | None = None) -> None:
        self.rules = rules or RoundRules()
        self.rng = rng or random.Random()

        self.player = Player(start_pos=self.rules.player_start, speed=self.rules.player_speed)
        self.projectiles = EntityPool(EntityKind.PROJECTILE, self.rules.projectile_capacity)
        self.enemies = EntityPool(EntityKind.ENEMY, self.rules.enemy_count)
        self.machine = RoundStateMachine(self.rules.starting_lives)
        self.translator = InputTranslator()
        self.resolver = CollisionResolver(self.projectiles, self.enemies, self.machine, self.rules)

    @property
    def state(self) -> RoundState:
        return self.machine.state

    def tick(self, snapshot: InputSnapshot) -> list[Command]:
        """Apply one frame of input."""
        intent = self.translator.translate(snapshot)
        commands: list[Command] = [
            SetVelocity(EntityKind.PLAYER, self.player.slot, (intent.move_direction * self.player.speed, 0.0))
        ]
        if intent.fire_requested and self.state.lives > 0:
            commands.extend(self._fire())
        return commands

    def handle(self, event: HostEvent) -> list[Command]:
        """Process one host event."""
        if isinstance(event, ProjectileEnemyOverlap):
            return self._on_projectile_enemy(event)
        if isinstance(event, PlayerEnemyOverlap):
            return self._on_player_enemy(event)
        if isinstance(event, ProjectileLeftField):
            return self._on_projectile_left(event)
        if isinstance(event, EnemyLeftField):
            return self._on_enemy_left(event)
        if isinstance(event, PlayAgainClicked):
            return self.restart()
        raise TypeError(f"unsupported host event: {event!r}")

    def handle_all(self, events: Iterable[HostEvent]) -> list[Command]:
        """Process events in the order the host reported them."""
        commands: list[Command] = []
        for event in events:
            commands.extend(self.handle(event))
        return commands

    def restart(self) -> list[Command]:
        """Reset the round, the pools and the UI to their starting layout."""
        state = self.machine.restart()
        commands: list[Command] = [SetActive(EntityKind.PROJECTILE, p.slot, False) for p in self.projectiles]
        self.projectiles.reset()

        self.player.activate()
        commands.append(SetActive(EntityKind.PLAYER, self.player.slot, True))

        for enemy in self.enemies.spawn_all(self.rules.enemy_count, self._enemy_placement):
            commands.append(SetPosition(EntityKind.ENEMY, enemy.slot, enemy.position))
            commands.append(SetActive(EntityKind.ENEMY, enemy.slot, True))
            commands.append(SetVelocity(EntityKind.ENEMY, enemy.slot, self._wander_velocity(enemy.position)))

        commands.extend(
            [
                SetScoreText(state.score),
                SetLivesText(state.lives),
                HideOverlays(),
                SetHudVisible(True),
                SetBackgroundColor(BG_COLOR),
            ]
        )
        return commands

    def _fire(self) -> list[Command]:
        commands: list[Command] = []
        try:
            laser = self.projectiles.acquire()
        except PoolExhausted as exc:
            logger.debug("Shot dropped: %s", exc)
        else:
            laser.position = self.player.position
            commands.extend(
                [
                    SetPosition(EntityKind.PROJECTILE, laser.slot, laser.position),
                    SetActive(EntityKind.PROJECTILE, laser.slot, True),
                    SetVelocity(EntityKind.PROJECTILE, laser.slot, (0.0, -self.rules.projectile_speed)),
                ]
            )
        # The shot sound plays even when no laser was free.
        commands.append(PlaySound(FIRE_SOUND))
        return commands

    def _on_projectile_enemy(self, event: ProjectileEnemyOverlap) -> list[Command]:
        projectile = self.projectiles[event.projectile]
        enemy = self.enemies[event.enemy]
        outcome = self.resolver.on_projectile_enemy_hit(projectile, enemy)
        if outcome.is_empty:
            return []

        commands = self._side_effects(outcome)
        commands.append(SetActive(EntityKind.PROJECTILE, projectile.slot, False))
        commands.append(SetActive(EntityKind.ENEMY, enemy.slot, False))
        self.machine.apply_score_delta(outcome.score_delta)
        commands.append(SetScoreText(self.state.score))

        if self.machine.check_win_condition(self.enemies.count_active()):
            commands.extend([ShowWinScreen(), ShowPlayAgainControl(), SetHudVisible(False)])
        return commands

    def _on_player_enemy(self, event: PlayerEnemyOverlap) -> list[Command]:
        outcome = self.resolver.on_player_enemy_hit(self.player, self.enemies[event.enemy])
        if outcome.is_empty:
            return []

        commands = self._side_effects(outcome)
        self.machine.apply_lives_delta(outcome.lives_delta)
        commands.append(SetLivesText(self.state.lives))

        if self.machine.check_loss_condition():
            commands.extend(self._game_over())
        elif outcome.reposition_player_to is not None:
            self.player.position = outcome.reposition_player_to
            commands.append(SetPosition(EntityKind.PLAYER, self.player.slot, self.player.position))
        return commands

    def _game_over(self) -> list[Command]:
        commands: list[Command] = [
            ShowGameOverScreen(self.state.score),
            ShowPlayAgainControl(),
        ]
        self.player.deactivate()
        commands.append(SetActive(EntityKind.PLAYER, self.player.slot, False))
        commands.extend(SetActive(EntityKind.ENEMY, enemy.slot, False) for enemy in self.enemies.deactivate_all())
        commands.append(SetHudVisible(False))
        commands.append(SetBackgroundColor(LOST_BG_COLOR))
        return commands

    def _on_projectile_left(self, event: ProjectileLeftField) -> list[Command]:
        projectile = self.projectiles[event.projectile]
        if not self.projectiles.deactivate(projectile):
            return []
        return [SetActive(EntityKind.PROJECTILE, projectile.slot, False)]

    def _on_enemy_left(self, event: EnemyLeftField) -> list[Command]:
        enemy = self.enemies[event.enemy]
        if not enemy.active:
            return []
        return [SetVelocity(EntityKind.ENEMY, enemy.slot, self._wander_velocity(enemy.position))]

    @staticmethod
    def _side_effects(outcome: CollisionOutcome) -> list[Command]:
        commands: list[Command] = []
        if outcome.sound:
            commands.append(PlaySound(outcome.sound))
        if outcome.explosion_at is not None:
            commands.append(EmitParticles(outcome.explosion_at, outcome.explosion_intensity))
        return commands

    def _enemy_placement(self, slot: int) -> Position:
        return random_point(self.rules.enemy_spawn_bounds, self.rng)

    def _wander_velocity(self, position: Position) -> Velocity:
        """Random heading; components point back inside when the enemy is outside."""
        x, y = position
        vx = self.rng.uniform(self.rules.enemy_speed_min, self.rules.enemy_speed_max)
        vy = self.rng.uniform(self.rules.enemy_speed_min, self.rules.enemy_speed_max)
        if x >= SCREEN_WIDTH or (0 < x and self.rng.random() < 0.5):
            vx = -vx
        if y >= SCREEN_HEIGHT or (0 < y and self.rng.random() < 0.5):
            vy = -vy
        return (vx, vy)
