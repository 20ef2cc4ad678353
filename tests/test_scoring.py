"""Tests for scoring and difficulty progression."""

import pytest

from dinorun.config.settings import GameConfig
from dinorun.engine.entities import RunState
from dinorun.engine.scoring import ScoreKeeper


@pytest.fixture
def keeper():
    return ScoreKeeper(GameConfig())


@pytest.fixture
def state(keeper):
    state = RunState()
    keeper.reset(state, 1.0)
    return state


def test_reset(keeper):
    state = RunState(score=40, coin_count=3, frame_count=900, speed_level=4, death_frame=7)
    keeper.reset(state, 0.5)

    assert (state.score, state.coin_count, state.frame_count, state.death_frame) == (0, 0, 0, 0)
    assert state.speed_level == 0
    assert state.game_speed == 3.0


def test_passes_and_coins(keeper, state):
    for _ in range(7):
        keeper.record_pass(state, 1.0)
    for _ in range(4):
        keeper.record_coin(state)

    assert state.score == 7 + 5 * 4
    assert state.coin_count == 4
    assert state.game_speed == 6.0


def test_speed_up_on_threshold(keeper, state):
    raised = [keeper.record_pass(state, 1.0) for _ in range(10)]

    assert raised == [False] * 9 + [True]
    assert state.speed_level == 1
    assert state.game_speed == 6.5


@pytest.mark.parametrize("scale", [1.0, 0.5])
def test_speed_after_k_crossings(keeper, state, scale):
    keeper.reset(state, scale)
    for _ in range(30):
        keeper.record_pass(state, scale)

    assert state.speed_level == 3
    assert state.game_speed == pytest.approx(6.0 * scale + 3 * 0.5 * scale)


def test_coins_never_raise_speed(keeper, state):
    for _ in range(9):
        keeper.record_pass(state, 1.0)
    keeper.record_coin(state)

    assert state.score == 14
    assert state.game_speed == 6.0


def test_crossing_checked_after_each_pass(keeper, state):
    # A coin bonus that lands on a multiple does not count; the next pass only
    # counts if it lands on one itself.
    for _ in range(2):
        keeper.record_coin(state)
    assert state.score == 10
    assert state.speed_level == 0
    assert not keeper.record_pass(state, 1.0)
    assert state.game_speed == 6.0


def test_rescale(keeper, state):
    for _ in range(20):
        keeper.record_pass(state, 1.0)
    keeper.rescale(state, 0.5)
    assert state.game_speed == 3.5
