"""Ship, projectile and enemy entities plus the capabilities the core relies on."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Protocol, runtime_checkable

from .utils import Position


class EntityKind(str, Enum):
    """Groups the host tracks for drawing and overlap detection."""

    PLAYER = "player"
    PROJECTILE = "projectile"
    ENEMY = "enemy"


@runtime_checkable
class Positionable(Protocol):
    """Anything with a host-owned position."""

    position: Position


@runtime_checkable
class Activatable(Protocol):
    """Anything that can be switched in and out of play."""

    active: bool
    visible: bool

    def activate(self) -> None: ...

    def deactivate(self) -> None: ...


@runtime_checkable
class OverlapSource(Protocol):
    """A group the host can test for overlaps."""

    kind: EntityKind

    def iter_active(self) -> Iterator["Entity"]: ...


@dataclass(slots=True, eq=False)
class Entity:
    """A pooled projectile or enemy.

    The host physics writes ``position``; the core only reads it. An inactive
    entity is always invisible and never takes part in collisions.
    """

    kind: EntityKind
    slot: int
    position: Position = (0.0, 0.0)
    active: bool = False
    visible: bool = False

    def activate(self) -> None:
        self.active = True
        self.visible = True

    def deactivate(self) -> None:
        self.active = False
        self.visible = False


@dataclass(slots=True, eq=False)
class Player:
    """The ship. One instance per controller, reset rather than recreated."""

    start_pos: Position
    speed: float = 200.0
    position: Position = (0.0, 0.0)
    active: bool = True
    visible: bool = True
    kind: EntityKind = EntityKind.PLAYER
    slot: int = 0

    def __post_init__(self) -> None:
        self.position = self.start_pos

    def activate(self) -> None:
        self.active = True
        self.visible = True

    def deactivate(self) -> None:
        self.active = False
        self.visible = False
