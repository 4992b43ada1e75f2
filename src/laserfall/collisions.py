"""Decide what projectile and ship collisions mean for the round."""

from __future__ import annotations

from dataclasses import dataclass

from .player import Entity, Player
from .pool import EntityPool
from .settings import RoundRules
from .state import RoundStateMachine
from .utils import Position

ENEMY_DESTROYED_SOUND = "enemyDestroyed"
PLAYER_DESTROYED_SOUND = "playerDestroyed"


@dataclass(frozen=True, slots=True)
class CollisionOutcome:
    """State deltas and side effects requested by a collision."""

    score_delta: int = 0
    lives_delta: int = 0
    explosion_at: Position | None = None
    explosion_intensity: int = 0
    sound: str | None = None
    reposition_player_to: Position | None = None

    @property
    def is_empty(self) -> bool:
        return self == NO_OUTCOME


NO_OUTCOME = CollisionOutcome()


class CollisionResolver:
    """Turns host overlap reports into outcomes.

    Only entity activity is changed here; score and lives are left for the
    caller to apply to the state machine.
    """

    def __init__(
        self,
        projectiles: EntityPool,
        enemies: EntityPool,
        machine: RoundStateMachine,
        rules: RoundRules | None = None,
    ) -> None:
        self.projectiles = projectiles
        self.enemies = enemies
        self.machine = machine
        self.rules = rules or RoundRules()

    def on_projectile_enemy_hit(self, projectile: Entity, enemy: Entity) -> CollisionOutcome:
        if not self.machine.state.is_playing or not (projectile.active and enemy.active):
            return NO_OUTCOME
        self.projectiles.deactivate(projectile)
        self.enemies.deactivate(enemy)
        return CollisionOutcome(
            score_delta=self.rules.points_per_enemy,
            explosion_at=enemy.position,
            explosion_intensity=self.rules.enemy_explosion,
            sound=ENEMY_DESTROYED_SOUND,
        )

    def on_player_enemy_hit(self, player: Player, enemy: Entity) -> CollisionOutcome:
        # The enemy stays in play and may hit the ship again.
        state = self.machine.state
        if not state.is_playing or not (player.active and enemy.active):
            return NO_OUTCOME
        survives = state.lives - 1 > 0
        return CollisionOutcome(
            lives_delta=-1,
            explosion_at=player.position,
            explosion_intensity=self.rules.player_explosion,
            sound=PLAYER_DESTROYED_SOUND,
            reposition_player_to=self.rules.player_start if survives else None,
        )
