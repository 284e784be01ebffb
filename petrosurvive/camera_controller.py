"""Smooth follow camera with screen shake."""

from __future__ import annotations

import random
from typing import Optional, Sequence

import numpy as np

from petrosurvive.camera import Camera


class CameraController:
    """Eases a camera towards a target plus offset and applies decaying shake."""

    def __init__(
        self,
        camera: Camera,
        offset: Sequence[float] = (8.0, 8.0, 8.0),
        rng: Optional[random.Random] = None,
    ) -> None:
        self.camera = camera
        self.offset = np.array(offset, dtype=float)
        self.base_position = np.array(camera.position, dtype=float)
        self.target_position = np.zeros(3)
        self.lerp_factor = 5.0
        self._rng = rng if rng is not None else random.Random()
        self._shake_time = 0.0
        self._shake_duration = 0.0
        self._shake_intensity = 0.0

    @property
    def shaking(self) -> bool:
        return self._shake_time > 0.0

    def update(self, delta_time: float) -> None:
        desired = self.target_position + self.offset
        t = delta_time * self.lerp_factor
        self.base_position = self.base_position + (desired - self.base_position) * t

        shake_offset = np.zeros(3)
        if self._shake_time > 0.0:
            self._shake_time -= delta_time
            intensity = (self._shake_time / self._shake_duration) * self._shake_intensity
            shake_offset = np.array([self._rng.uniform(-1.0, 1.0) * intensity for _ in range(3)])
        else:
            self._shake_time = 0.0

        self.camera.position = self.base_position + shake_offset

    def set_target(self, target: Sequence[float], immediate: bool = False) -> None:
        self.target_position = np.array(target, dtype=float)
        if immediate:
            self.base_position = self.target_position + self.offset
            self.camera.position = self.base_position.copy()

    def follow(self, target: Sequence[float]) -> None:
        self.target_position = np.array(target, dtype=float)

    def shake(self, intensity: float, duration: float) -> None:
        self._shake_intensity = intensity
        self._shake_duration = duration
        self._shake_time = duration