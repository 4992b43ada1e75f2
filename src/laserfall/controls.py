"""Translate raw key states into ship intent."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class InputSnapshot:
    """Pressed state of the logical keys for one tick."""

    left: bool = False
    right: bool = False
    fire: bool = False


@dataclass(frozen=True, slots=True)
class Intent:
    """What the player wants to do this tick."""

    move_direction: int = 0
    fire_requested: bool = False


def translate_input(current: InputSnapshot, previous_fire: bool) -> Intent:
    """Map a snapshot to an intent. Fire only counts on the rising edge."""
    if current.right:
        direction = 1
    elif current.left:
        direction = -1
    else:
        direction = 0
    return Intent(move_direction=direction, fire_requested=current.fire and not previous_fire)


class InputTranslator:
    """Remembers last tick's fire key so holding fire does not auto-repeat."""

    def __init__(self) -> None:
        self.previous_fire = False

    def translate(self, snapshot: InputSnapshot) -> Intent:
        intent = translate_input(snapshot, self.previous_fire)
        self.previous_fire = snapshot.fire
        return intent

    def reset(self) -> None:
        self.previous_fire = False
