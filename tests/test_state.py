from __future__ import annotations

from laserfall.state import RoundPhase, RoundStateMachine


def test_initial_state() -> None:
    machine = RoundStateMachine()
    assert machine.state.score == 0
    assert machine.state.lives == 3
    assert machine.phase == RoundPhase.PLAYING


def test_score_only_grows() -> None:
    machine = RoundStateMachine()
    assert machine.apply_score_delta(10)
    assert not machine.apply_score_delta(-5)
    assert machine.state.score == 10


def test_lives_clamp_at_zero() -> None:
    machine = RoundStateMachine()
    machine.apply_lives_delta(-5)
    assert machine.state.lives == 0


def test_win_requires_no_enemies_and_lives() -> None:
    machine = RoundStateMachine()
    assert not machine.check_win_condition(1)
    assert machine.check_win_condition(0)
    assert machine.phase == RoundPhase.WON


def test_loss_when_lives_run_out() -> None:
    machine = RoundStateMachine()
    assert not machine.check_loss_condition()
    machine.apply_lives_delta(-3)
    assert machine.check_loss_condition()
    assert machine.phase == RoundPhase.LOST
    assert not machine.check_win_condition(0)


def test_terminal_phases_ignore_mutations() -> None:
    machine = RoundStateMachine()
    machine.apply_score_delta(30)
    machine.check_win_condition(0)
    assert not machine.apply_score_delta(10)
    assert not machine.apply_lives_delta(-1)
    assert not machine.check_loss_condition()
    assert machine.state.score == 30
    assert machine.state.lives == 3
    assert machine.phase == RoundPhase.WON


def test_restart_from_any_phase() -> None:
    machine = RoundStateMachine()
    machine.apply_score_delta(50)
    machine.apply_lives_delta(-3)
    machine.check_loss_condition()
    state = machine.restart()
    assert (state.score, state.lives, state.phase) == (0, 3, RoundPhase.PLAYING)
