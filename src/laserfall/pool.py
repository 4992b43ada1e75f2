"""Fixed-capacity pools of reusable entities."""

from __future__ import annotations

from typing import Callable, Iterator
import logging

from .player import Entity, EntityKind
from .utils import Position

logger = logging.getLogger(__name__)

Placement = Callable[[int], Position]


class PoolExhausted(LookupError):
    """Raised by ``EntityPool.acquire`` when every slot is in use."""


class EntityPool:
    """Recycles a fixed set of entities; slots are never deallocated."""

    def __init__(self, kind: EntityKind, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("pool capacity must be positive")
        self.kind = kind
        self.entities: tuple[Entity, ...] = tuple(Entity(kind=kind, slot=i) for i in range(capacity))

    def __getitem__(self, slot: int) -> Entity:
        return self.entities[slot]

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.entities)

    @property
    def capacity(self) -> int:
        return len(self.entities)

    def spawn_all(self, count: int, placement: Placement) -> list[Entity]:
        """Activate the first ``count`` slots at ``placement(slot)`` and clear the rest."""
        count = max(0, min(count, self.capacity))
        spawned: list[Entity] = []
        for entity in self.entities:
            if entity.slot < count:
                entity.position = placement(entity.slot)
                entity.activate()
                spawned.append(entity)
            else:
                entity.deactivate()
        logger.debug("Spawned %d/%d %s entities", count, self.capacity, self.kind.value)
        return spawned

    def acquire(self) -> Entity:
        """Activate and return the first free slot."""
        for entity in self.entities:
            if not entity.active:
                entity.activate()
                return entity
        raise PoolExhausted(f"no free {self.kind.value} slot (capacity {self.capacity})")

    def deactivate(self, entity: Entity) -> bool:
        """Take an entity out of play. Returns False if it was already inactive."""
        if not entity.active and not entity.visible:
            return False
        entity.deactivate()
        return True

    def deactivate_all(self) -> list[Entity]:
        """Deactivate every active slot, returning the ones that changed."""
        return [entity for entity in self.entities if self.deactivate(entity)]

    def reset(self) -> None:
        """Return every slot to the free state."""
        for entity in self.entities:
            entity.deactivate()

    def count_active(self) -> int:
        return sum(1 for entity in self.entities if entity.active)

    def iter_active(self) -> Iterator[Entity]:
        return (entity for entity in self.entities if entity.active)
