"""Typed events the host reports and commands the controller returns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .player import EntityKind
from .utils import Position, Velocity


# --- Host -> controller ----------------------------------------------------
@dataclass(frozen=True, slots=True)
class ProjectileEnemyOverlap:
    projectile: int
    enemy: int


@dataclass(frozen=True, slots=True)
class PlayerEnemyOverlap:
    enemy: int


@dataclass(frozen=True, slots=True)
class ProjectileLeftField:
    projectile: int


@dataclass(frozen=True, slots=True)
class EnemyLeftField:
    enemy: int


@dataclass(frozen=True, slots=True)
class PlayAgainClicked:
    pass


HostEvent = Union[ProjectileEnemyOverlap, PlayerEnemyOverlap, ProjectileLeftField, EnemyLeftField, PlayAgainClicked]


# --- Controller -> host ----------------------------------------------------
@dataclass(frozen=True, slots=True)
class SetVelocity:
    kind: EntityKind
    slot: int
    velocity: Velocity


@dataclass(frozen=True, slots=True)
class SetPosition:
    kind: EntityKind
    slot: int
    position: Position


@dataclass(frozen=True, slots=True)
class SetActive:
    """Enable or disable an entity's body; visibility follows."""

    kind: EntityKind
    slot: int
    active: bool


@dataclass(frozen=True, slots=True)
class PlaySound:
    name: str


@dataclass(frozen=True, slots=True)
class EmitParticles:
    position: Position
    count: int


@dataclass(frozen=True, slots=True)
class SetScoreText:
    score: int


@dataclass(frozen=True, slots=True)
class SetLivesText:
    lives: int


@dataclass(frozen=True, slots=True)
class SetHudVisible:
    visible: bool


@dataclass(frozen=True, slots=True)
class ShowWinScreen:
    pass


@dataclass(frozen=True, slots=True)
class ShowGameOverScreen:
    final_score: int


@dataclass(frozen=True, slots=True)
class ShowPlayAgainControl:
    pass


@dataclass(frozen=True, slots=True)
class HideOverlays:
    """Hide win, game-over, score message and play-again layers."""


@dataclass(frozen=True, slots=True)
class SetBackgroundColor:
    color: str


Command = Union[
    SetVelocity,
    SetPosition,
    SetActive,
    PlaySound,
    EmitParticles,
    SetScoreText,
    SetLivesText,
    SetHudVisible,
    ShowWinScreen,
    ShowGameOverScreen,
    ShowPlayAgainControl,
    HideOverlays,
    SetBackgroundColor,
]
