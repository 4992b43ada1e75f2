"""Round phase, score and lives bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
import logging

logger = logging.getLogger(__name__)


class RoundPhase(Enum):
    """Finite states of a round."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True, slots=True)
class RoundState:
    """Immutable snapshot of the round."""

    score: int = 0
    lives: int = 3
    phase: RoundPhase = RoundPhase.PLAYING

    @property
    def is_playing(self) -> bool:
        return self.phase == RoundPhase.PLAYING


class RoundStateMachine:
    """Sole owner of the round state.

    Playing moves to Won when the last enemy falls with lives left, or to
    Lost when lives reach zero. Both are terminal until ``restart``. Every
    mutator is a no-op returning False outside of Playing.
    """

    def __init__(self, starting_lives: int = 3) -> None:
        self.starting_lives = starting_lives
        self._state = RoundState(lives=starting_lives)

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def phase(self) -> RoundPhase:
        return self._state.phase

    def apply_score_delta(self, delta: int) -> bool:
        """Add points; score never decreases."""
        if not self._state.is_playing or delta < 0:
            return False
        self._state = replace(self._state, score=self._state.score + delta)
        return True

    def apply_lives_delta(self, delta: int) -> bool:
        """Adjust lives, clamped at zero."""
        if not self._state.is_playing:
            return False
        self._state = replace(self._state, lives=max(0, self._state.lives + delta))
        return True

    def check_win_condition(self, active_enemy_count: int) -> bool:
        if not self._state.is_playing or active_enemy_count != 0 or self._state.lives <= 0:
            return False
        self._state = replace(self._state, phase=RoundPhase.WON)
        logger.info("Round won with score %d", self._state.score)
        return True

    def check_loss_condition(self) -> bool:
        if not self._state.is_playing or self._state.lives > 0:
            return False
        self._state = replace(self._state, phase=RoundPhase.LOST)
        logger.info("Round lost with score %d", self._state.score)
        return True

    def restart(self) -> RoundState:
        self._state = RoundState(lives=self.starting_lives)
        logger.info("Round restarted")
        return self._state
