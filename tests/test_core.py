"""Tests for the core building blocks: events, phases, clock and random sources."""

import pytest

from dinorun.core.clock import FrameClock
from dinorun.core.events import Event, EventBus, GameEventType
from dinorun.core.random_source import (
    RandomSource,
    ScriptedRandom,
    SeededRandom,
    pick_index,
    uniform,
)
from dinorun.core.state import GamePhase, PhaseMachine


class TestEventBus:

    def test_subscribe_and_emit(self):
        bus = EventBus()
        received = []
        bus.subscribe(GameEventType.DEATH, received.append)

        bus.emit(Event(GameEventType.DEATH, data={"score": 3}))
        bus.emit(Event(GameEventType.GAME_OVER))

        assert [e.data for e in received] == [{"score": 3}]

    def test_subscribe_all(self):
        bus = EventBus()
        received = []
        unsubscribe = bus.subscribe_all(received.append)

        bus.emit(Event(GameEventType.DEATH))
        bus.emit(Event("custom"))
        unsubscribe()
        bus.emit(Event(GameEventType.DEATH))

        assert [e.type for e in received] == [GameEventType.DEATH, "custom"]

    def test_handler_error_is_contained(self):
        bus = EventBus()
        received = []

        def broken(event):
            raise ValueError("nope")

        bus.subscribe(GameEventType.DEATH, broken)
        bus.subscribe(GameEventType.DEATH, received.append)
        bus.emit(Event(GameEventType.DEATH))

        assert len(received) == 1

    def test_history(self):
        bus = EventBus(history_limit=3)
        for score in range(5):
            bus.emit(Event(GameEventType.OBSTACLE_PASSED, data={"score": score}))
        bus.emit(Event(GameEventType.DEATH))

        assert [e.data.get("score") for e in bus.get_history()] == [3, 4, None]
        assert len(bus.get_history(GameEventType.OBSTACLE_PASSED)) == 2
        assert len(bus.get_history(limit=1)) == 1

        bus.clear_history()
        assert bus.get_history() == []


class TestPhaseMachine:

    def test_valid_cycle(self):
        machine = PhaseMachine()
        for phase in (GamePhase.PLAYING, GamePhase.DYING, GamePhase.OVER, GamePhase.PLAYING):
            assert machine.transition(phase)
        assert machine.phase is GamePhase.PLAYING

    @pytest.mark.parametrize("start,target", [
        (GamePhase.WAITING, GamePhase.DYING),
        (GamePhase.WAITING, GamePhase.OVER),
        (GamePhase.PLAYING, GamePhase.OVER),
        (GamePhase.DYING, GamePhase.PLAYING),
        (GamePhase.OVER, GamePhase.WAITING),
    ])
    def test_invalid_transitions(self, start, target):
        machine = PhaseMachine(start)
        assert not machine.can_transition(target)
        assert not machine.transition(target)
        assert machine.phase is start

    def test_listeners(self):
        machine = PhaseMachine()
        seen = []

        def broken(old, new):
            raise RuntimeError("listener failure")

        machine.add_listener(broken)
        machine.add_listener(lambda old, new: seen.append((old, new)))
        machine.transition(GamePhase.PLAYING)

        assert seen == [(GamePhase.WAITING, GamePhase.PLAYING)]

    def test_remove_listener(self):
        machine = PhaseMachine()
        seen = []
        listener = lambda old, new: seen.append(new)  # noqa: E731
        machine.add_listener(listener)
        machine.remove_listener(listener)

        machine.transition(GamePhase.PLAYING)
        assert seen == []


class TestFrameClock:

    def test_rejects_bad_arguments(self):
        with pytest.raises(ValueError):
            FrameClock(fps=0)
        with pytest.raises(ValueError):
            FrameClock(max_steps=0)

    def test_accumulates_partial_ticks(self):
        clock = FrameClock(fps=60)
        assert clock.advance(16) == 0
        assert clock.advance(1) == 1
        assert clock.pending_ms == pytest.approx(17 - 1000 / 60)

    def test_multiple_ticks(self):
        clock = FrameClock(fps=60)
        assert clock.advance(40) == 2
        assert clock.total_ticks == 2

    def test_caps_catch_up(self):
        clock = FrameClock(fps=60, max_steps=5)
        assert clock.advance(1000) == 5
        assert clock.pending_ms == 0.0

    def test_ignores_non_positive_deltas(self):
        clock = FrameClock()
        assert clock.advance(0) == 0
        assert clock.advance(-10) == 0
        assert clock.pending_ms == 0.0

    def test_reset(self):
        clock = FrameClock()
        clock.advance(40)
        clock.reset()
        assert clock.total_ticks == 0
        assert clock.pending_ms == 0.0


class TestRandomSources:

    def test_protocol(self):
        assert isinstance(SeededRandom(1), RandomSource)
        assert isinstance(ScriptedRandom(), RandomSource)

    def test_seeded_is_reproducible(self):
        first, second = SeededRandom(9), SeededRandom(9)
        values = [first.random() for _ in range(5)]
        assert values == [second.random() for _ in range(5)]

        first.reseed(9)
        assert [first.random() for _ in range(5)] == values

    def test_scripted(self):
        source = ScriptedRandom([0.1, 0.2], fallback=0.5)
        assert source.remaining == 2
        assert [source.random() for _ in range(3)] == [0.1, 0.2, 0.5]
        assert source.remaining == 0

        source.extend([0.3])
        assert source.random() == 0.3

    def test_helpers(self):
        assert uniform(ScriptedRandom([0.5]), 2.0, 4.0) == 3.0
        assert pick_index(ScriptedRandom([0.0]), 3) == 0
        assert pick_index(ScriptedRandom([0.9999]), 3) == 2
        assert pick_index(ScriptedRandom([1.0]), 3) == 2
