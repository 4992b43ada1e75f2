from __future__ import annotations

import random
from pathlib import Path

import pytest

from laserfall import utils
from laserfall.controls import InputSnapshot
from laserfall.game import LaserfallGame
from laserfall.settings import GameSettings, RoundRules
from laserfall.state import RoundPhase


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch) -> Path:
    data_dir = tmp_path / ".laserfall"
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(utils, "DATA_DIR", data_dir)
    return data_dir


def _game(**rules) -> LaserfallGame:
    settings = GameSettings(rules=RoundRules(**rules))
    return LaserfallGame(root=Path.cwd(), settings=settings, rng=random.Random(3))


def test_game_keeps_data_dir_out_of_working_tree(isolated_data_dir, tmp_path) -> None:
    _game(enemy_count=1)
    assert isolated_data_dir.is_dir()
    assert [p.name for p in tmp_path.iterdir()] == [".laserfall"]


def test_integration_laser_destroys_enemy() -> None:
    game = _game(enemy_count=2)
    ctrl = game.controller
    target = ctrl.enemies[0]
    ctrl.enemies[1].position = (40.0, 60.0)
    game.velocities.clear()

    game.step(0.0, InputSnapshot(fire=True))
    laser = ctrl.projectiles[0]
    assert laser.active

    target.position = laser.position
    game.step(0.0, InputSnapshot())
    assert not target.active
    assert not laser.active
    assert ctrl.state.score == 10
    assert game.texts["score"].text == "Score: 10"


def test_integration_round_transition_to_game_over() -> None:
    game = _game(enemy_count=1)
    ctrl = game.controller
    enemy = ctrl.enemies[0]
    game.velocities.clear()

    for _ in range(3):
        enemy.position = ctrl.player.position
        game.step(0.0, InputSnapshot())

    assert ctrl.state.phase == RoundPhase.LOST
    assert game.texts["game_over"].visible
    assert game.texts["score_message"].text == "Your score was: 0"
    assert not game.texts["score"].visible

    game.click(game.play_again_rect.center)
    game.step(0.0, InputSnapshot())
    assert ctrl.state.phase == RoundPhase.PLAYING
    assert not game.texts["game_over"].visible
    assert game.texts["lives"].text == "Lives: 3"


def test_laser_leaves_top_of_field() -> None:
    game = _game(enemy_count=1)
    ctrl = game.controller
    ctrl.enemies[0].position = (40.0, 60.0)
    game.velocities.clear()
    game.step(0.0, InputSnapshot(fire=True))
    game.step(2.0, InputSnapshot())
    assert ctrl.projectiles.count_active() == 0
