"""Plays skeletal animations and cross-fades between them."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from petrosurvive.animation import Animation, NodeData

MAX_BONES = 200


def _identity_palette() -> np.ndarray:
    return np.tile(np.identity(4), (MAX_BONES, 1, 1))


class Animator:
    """Advances an animation clip and produces the bone matrix palette."""

    def __init__(self, animation: Optional[Animation] = None) -> None:
        self._final = _identity_palette()
        self._from = _identity_palette()
        self._to = _identity_palette()
        self._current: Optional[Animation] = animation
        self._previous: Optional[Animation] = None
        self._current_time = 0.0
        self._previous_time = 0.0
        self.delta_time = 0.0
        self._blend_duration = 0.15
        self._blend_time = 0.0
        self._is_blending = False
        self.speed = 1.0

    @property
    def final_bone_matrices(self) -> np.ndarray:
        return self._final

    @property
    def current_animation(self) -> Optional[Animation]:
        return self._current

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def is_blending(self) -> bool:
        return self._is_blending

    def update_animation(self, delta_time: float) -> None:
        """Advance playback by ``delta_time`` seconds, scaled by ``speed``."""
        delta_time *= self.speed
        self.delta_time = delta_time

        if self._current is None:
            return

        if self._is_blending and self._previous is not None:
            self._blend_time += delta_time
            self._previous_time = self._advance_time(self._previous, self._previous_time, delta_time)
            self._current_time = self._advance_time(self._current, self._current_time, delta_time)

            self._calculate_pose(self._previous, self._previous_time, self._from)
            self._calculate_pose(self._current, self._current_time, self._to)

            alpha = 1.0 if self._blend_duration <= 0.0 else self._blend_time / self._blend_duration
            alpha = min(max(alpha, 0.0), 1.0)
            self._final[:] = self._from * (1.0 - alpha) + self._to * alpha

            if alpha >= 1.0:
                self._is_blending = False
                self._previous = None
                self._previous_time = 0.0
            return

        self._current_time = self._advance_time(self._current, self._current_time, delta_time)
        self._calculate_pose(self._current, self._current_time, self._final)

    def play_animation(self, animation: Optional[Animation], blend_duration: float = 0.15) -> None:
        """Switch to ``animation``, cross-fading from the current one."""
        if animation is None:
            return

        if self._current is None:
            self._current = animation
            self._current_time = 0.0
            self._is_blending = False
            self._calculate_pose(self._current, self._current_time, self._final)
            return

        if animation is self._current:
            return

        self._previous = self._current
        self._previous_time = self._current_time
        self._current = animation
        self._current_time = 0.0
        self._blend_duration = blend_duration
        self._blend_time = 0.0
        self._is_blending = True

    @staticmethod
    def _advance_time(animation: Optional[Animation], current_time: float, delta_time: float) -> float:
        if animation is None:
            return current_time
        if animation.duration <= 0.0:
            return 0.0
        current_time += animation.ticks_per_second * delta_time
        return math.fmod(current_time, animation.duration)

    def _calculate_pose(self, animation: Optional[Animation], time: float, out: np.ndarray) -> None:
        out[:] = np.identity(4)
        if animation is None:
            return
        self._calculate_bone_transform(animation.root, np.identity(4), time, out)

    def _calculate_bone_transform(
        self, node: NodeData, parent_transform: np.ndarray, time: float, out: np.ndarray
    ) -> None:
        node_transform = node.transformation
        if node.bone is not None:
            node.bone.update(time)
            node_transform = node.bone.local_transform

        global_transform = parent_transform @ node_transform

        if node.bone_info is not None:
            index = node.bone_info.id
            if 0 <= index < len(out):
                out[index] = global_transform @ node.bone_info.offset

        for child in node.children:
            self._calculate_bone_transform(child, global_transform, time, out)