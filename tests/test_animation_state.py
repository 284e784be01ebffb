import pytest

from petrosurvive.animation_state import AnimationState


def test_update_timer_returns_accumulated_timer():
    state = AnimationState(4.0)
    first = state.update_timer(1.0)
    second = state.update_timer(1.0)
    assert first == 1.0
    assert second == state.timer
    assert second > first


def test_progress_partial():
    state = AnimationState(4.0)
    state.update_timer(1.0)
    assert state.progress() == pytest.approx(0.25)
    assert not state.is_finished()


def test_progress_clamped_to_one():
    state = AnimationState(2.0)
    state.update_timer(50.0)
    assert state.progress() == 1.0
    assert state.is_finished()


def test_progress_clamped_to_zero_for_negative_timer():
    state = AnimationState(2.0)
    state.update_timer(-3.0)
    assert state.progress() == 0.0
    assert not state.is_finished()


@pytest.mark.parametrize("duration", [0.0, -1.0])
def test_non_positive_duration_is_finished(duration):
    state = AnimationState(duration)
    assert state.progress() == 1.0
    assert state.is_finished()


def test_start_animation_sets_endpoints_and_rewinds():
    state = AnimationState(1.0)
    state.update_timer(0.7)
    state.start_animation("a", "b")
    assert state.start == "a"
    assert state.target == "b"
    assert state.timer == 0
    assert state.animation_started


def test_start_animation_without_endpoints():
    state = AnimationState(1.0)
    state.start_animation()
    assert state.animation_started
    assert state.start is None and state.target is None


def test_reset_stops_animation():
    state = AnimationState(1.0)
    state.start_animation(1, 2)
    state.update_timer(0.5)
    state.reset()
    assert not state.animation_started
    assert state.timer == 0
    assert state.target == 2


def test_integer_counter_uses_integer_division():
    state = AnimationState(3)
    state.update_timer(2)
    assert state.progress() == 0
    state.update_timer(1)
    assert state.progress() == 1
    assert state.is_finished()