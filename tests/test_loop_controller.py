import pytest

from keyaudio.completion_router import CompletionRouter
from keyaudio.loop_controller import LoopController
from keyaudio.registry import AssetRegistry
from tests.fakes import FakeEngine, ManualTimer


@pytest.fixture
def loops(registry: AssetRegistry, router: CompletionRouter, timer: ManualTimer) -> LoopController:
    return LoopController(registry, router, timer)


def test_loop_replays_after_interval(
    registry: AssetRegistry, loops: LoopController, engine: FakeEngine, timer: ManualTimer
) -> None:
    # GIVEN a loop with a 2 second interval
    registry.add("a", "a")
    playable = engine.last_opened("a")
    loops.start_loop("a", 2)

    # THEN the key is played right away
    assert playable.play_count == 1
    assert loops.is_looping("a")

    # WHEN the iteration completes
    playable.finish()

    # THEN the next iteration is scheduled after the interval, but not started yet
    assert [duration for duration, _ in timer.pending] == [2]
    assert playable.play_count == 1

    # WHEN the interval elapses
    timer.fire_all()

    # THEN the key is played again
    assert playable.play_count == 2


def test_stop_loop_lets_current_iteration_finish_and_prevents_next(
    registry: AssetRegistry, loops: LoopController, engine: FakeEngine, timer: ManualTimer
) -> None:
    # GIVEN a running loop
    registry.add("a", "a")
    playable = engine.last_opened("a")
    loops.start_loop("a", 1)

    # WHEN requesting the loop to stop
    loops.stop_loop("a")

    # THEN the current iteration is not interrupted
    assert "stop" not in playable.calls
    assert playable.is_playing()
    assert loops.is_looping("a")

    # WHEN the current iteration completes
    playable.finish()

    # THEN no further iteration is scheduled or played
    assert timer.pending == []
    assert playable.play_count == 1
    assert not loops.is_looping("a")


def test_stop_loop_during_interval_prevents_next_iteration(
    registry: AssetRegistry, loops: LoopController, engine: FakeEngine, timer: ManualTimer
) -> None:
    registry.add("a", "a")
    playable = engine.last_opened("a")
    loops.start_loop("a", 1)
    playable.finish()

    loops.stop_loop("a")
    timer.fire_all()

    assert playable.play_count == 1
    assert not loops.is_looping("a")


def test_stopping_one_loop_does_not_affect_another(
    registry: AssetRegistry, loops: LoopController, engine: FakeEngine, timer: ManualTimer
) -> None:
    # GIVEN two loops running concurrently
    registry.add("a", "a")
    registry.add("b", "b")
    loops.start_loop("a", 0)
    loops.start_loop("b", 0)

    # WHEN stopping only the loop of "a" and both iterations complete
    loops.stop_loop("a")
    engine.last_opened("a").finish()
    engine.last_opened("b").finish()
    timer.fire_all()

    # THEN "b" keeps looping
    assert engine.last_opened("a").play_count == 1
    assert engine.last_opened("b").play_count == 2
    assert loops.is_looping("b")


def test_stop_loop_without_loop_does_not_affect_later_loop(
    registry: AssetRegistry, loops: LoopController, engine: FakeEngine, timer: ManualTimer
) -> None:
    registry.add("a", "a")

    loops.stop_loop("a")
    loops.start_loop("a", 0)
    engine.last_opened("a").finish()
    timer.fire_all()

    assert engine.last_opened("a").play_count == 2


def test_restarting_loop_supersedes_previous_one(
    registry: AssetRegistry, loops: LoopController, engine: FakeEngine, timer: ManualTimer
) -> None:
    # GIVEN a loop with a 5s interval, replaced by one with a 1s interval
    registry.add("a", "a")
    loops.start_loop("a", 5)
    loops.start_loop("a", 1)

    # WHEN the current iteration completes
    engine.last_opened("a").finish()

    # THEN only the new loop schedules its next iteration
    assert [duration for duration, _ in timer.pending] == [1]


def test_discarded_loop_does_not_continue(
    registry: AssetRegistry, loops: LoopController, engine: FakeEngine, timer: ManualTimer
) -> None:
    registry.add("a", "a")
    loops.start_loop("a", 1)
    engine.last_opened("a").finish()

    loops.discard("a")
    timer.fire_all()

    assert engine.last_opened("a").play_count == 1
    assert not loops.is_looping("a")


def test_loop_of_unknown_key_is_noop(loops: LoopController, timer: ManualTimer) -> None:
    loops.start_loop("missing", 1)
    loops.stop_loop("missing")

    assert not loops.is_looping("missing")
    assert timer.pending == []


@pytest.mark.parametrize("interval", [-1, float("nan"), float("inf")])
def test_invalid_interval_is_rejected(registry: AssetRegistry, loops: LoopController, interval: float) -> None:
    registry.add("a", "a")

    with pytest.raises(ValueError, match="interval"):
        loops.start_loop("a", interval)
