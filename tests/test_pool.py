from __future__ import annotations

import pytest

from laserfall.player import Activatable, EntityKind, Player, Positionable
from laserfall.pool import EntityPool, PoolExhausted


def test_new_pool_is_all_inactive() -> None:
    pool = EntityPool(EntityKind.PROJECTILE, 5)
    assert pool.count_active() == 0
    assert all(not e.visible for e in pool)


def test_acquire_until_exhausted() -> None:
    pool = EntityPool(EntityKind.PROJECTILE, 2)
    first = pool.acquire()
    second = pool.acquire()
    assert (first.slot, second.slot) == (0, 1)
    assert first.active and first.visible
    with pytest.raises(PoolExhausted):
        pool.acquire()


def test_deactivate_frees_slot_and_is_idempotent() -> None:
    pool = EntityPool(EntityKind.PROJECTILE, 2)
    pool.acquire()
    laser = pool.acquire()
    assert pool.deactivate(laser) is True
    assert pool.deactivate(laser) is False
    assert not laser.visible
    assert pool.acquire() is laser


def test_spawn_all_places_and_activates() -> None:
    pool = EntityPool(EntityKind.ENEMY, 4)
    spawned = pool.spawn_all(3, lambda slot: (slot * 10.0, 5.0))
    assert [e.slot for e in spawned] == [0, 1, 2]
    assert pool[2].position == (20.0, 5.0)
    assert pool.count_active() == 3
    assert not pool[3].active


def test_spawn_all_reuses_entities() -> None:
    pool = EntityPool(EntityKind.ENEMY, 3)
    before = list(pool)
    pool.spawn_all(3, lambda slot: (0.0, 0.0))
    pool.deactivate_all()
    pool.spawn_all(3, lambda slot: (1.0, 1.0))
    assert list(pool) == before
    assert pool.count_active() == 3


def test_reset_clears_every_slot() -> None:
    pool = EntityPool(EntityKind.PROJECTILE, 3)
    pool.acquire()
    pool.acquire()
    pool.reset()
    assert pool.count_active() == 0


def test_entities_satisfy_capabilities() -> None:
    pool = EntityPool(EntityKind.ENEMY, 1)
    player = Player(start_pos=(300.0, 700.0))
    for thing in (pool[0], player):
        assert isinstance(thing, Positionable)
        assert isinstance(thing, Activatable)


def test_pool_rejects_empty_capacity() -> None:
    with pytest.raises(ValueError):
        EntityPool(EntityKind.ENEMY, 0)


def test_pool_is_an_overlap_source() -> None:
    from laserfall.player import OverlapSource

    pool = EntityPool(EntityKind.ENEMY, 2)
    pool.spawn_all(1, lambda slot: (0.0, 0.0))
    assert isinstance(pool, OverlapSource)
    assert [e.slot for e in pool.iter_active()] == [0]
