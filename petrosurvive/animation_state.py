"""Timed interpolation state for simple tweened animations."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")
Number = Union[int, float]


class AnimationState(Generic[T]):
    """A timer over a fixed duration, optionally tweening from start to target.

    The counter may be an int or a float; with int duration and timer the
    progress uses integer division, as an integral counter would.
    """

    def __init__(self, duration: Number = 0.0) -> None:
        self.duration: Number = duration
        self.timer: Number = 0 if _is_int(duration) else 0.0
        self.start: Optional[T] = None
        self.target: Optional[T] = None
        self.animation_started = False

    def update_timer(self, delta_time: Number) -> Number:
        """Advance the timer and return its new value."""
        self.timer += delta_time
        return self.timer

    def start_animation(self, start: Optional[T] = None, target: Optional[T] = None) -> None:
        """Begin a new animation from ``start`` towards ``target``."""
        self.start = start
        self.target = target
        self.timer = 0
        self.animation_started = True

    def reset(self) -> None:
        """Stop the animation and rewind the timer."""
        self.animation_started = False
        self.timer = 0

    def _one(self) -> Number:
        return 1 if _is_int(self.duration) and _is_int(self.timer) else 1.0

    def _zero(self) -> Number:
        return 0 if _is_int(self.duration) and _is_int(self.timer) else 0.0

    def progress(self) -> Number:
        """Fraction of the duration elapsed, clamped to [0, 1]."""
        if self.duration <= 0:
            return self._one()
        if _is_int(self.duration) and _is_int(self.timer):
            t: Number = int(self.timer / self.duration)
        else:
            t = self.timer / self.duration
        if t > 1:
            return self._one()
        if t < 0:
            return self._zero()
        return t

    def is_finished(self) -> bool:
        """Whether the full duration has elapsed."""
        return self.progress() == 1


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)