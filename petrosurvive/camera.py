"""A fly-through perspective camera driven by Euler angles, plus matrix helpers."""

from __future__ import annotations

import math
from enum import Enum
from typing import Sequence

import numpy as np

YAW = -90.0
PITCH = 0.0
SPEED = 2.5
SENSITIVITY = 0.1
ZOOM = 45.0

_PITCH_LIMIT = 89.0
_ZOOM_MIN = 1.0
_ZOOM_MAX = 45.0
_NEAR = 0.1
_FAR = 100.0


class CameraMovement(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"


def _vec3(values: Sequence[float]) -> np.ndarray:
    return np.array(values, dtype=float).reshape(3)


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def look_at(eye: Sequence[float], center: Sequence[float], up: Sequence[float]) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye_v, center_v, up_v = _vec3(eye), _vec3(center), _vec3(up)
    f = _normalize(center_v - eye_v)
    s = _normalize(np.cross(f, up_v))
    u = np.cross(s, f)
    m = np.identity(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -np.dot(s, eye_v)
    m[1, 3] = -np.dot(u, eye_v)
    m[2, 3] = np.dot(f, eye_v)
    return m


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with clip depth in [-1, 1]."""
    tan_half = math.tan(fovy / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = 1.0 / (aspect * tan_half)
    m[1, 1] = 1.0 / tan_half
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


def ortho(left: float, right: float, bottom: float, top: float, near: float, far: float) -> np.ndarray:
    """Right-handed orthographic projection with clip depth in [-1, 1]."""
    m = np.identity(4)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


class Camera:
    """Perspective camera with yaw/pitch orientation."""

    def __init__(
        self,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        up: Sequence[float] = (0.0, 1.0, 0.0),
        yaw: float = YAW,
        pitch: float = PITCH,
    ) -> None:
        self.position = _vec3(position)
        self.movement_speed = SPEED
        self.mouse_sensitivity = SENSITIVITY
        self.zoom = ZOOM
        self._yaw = float(yaw)
        self._pitch = float(pitch)
        self._world_up = _vec3(up)
        self._front = np.array([0.0, 0.0, -1.0])
        self._right = np.zeros(3)
        self._up = np.zeros(3)
        self.scene_width = 800.0
        self.scene_height = 600.0
        self._update_vectors()

    @property
    def yaw(self) -> float:
        return self._yaw

    @property
    def pitch(self) -> float:
        return self._pitch

    @property
    def front(self) -> np.ndarray:
        return self._front.copy()

    @property
    def right(self) -> np.ndarray:
        return self._right.copy()

    @property
    def up(self) -> np.ndarray:
        return self._up.copy()

    def view_matrix(self) -> np.ndarray:
        return look_at(self.position, self.position + self._front, self._up)

    def projection_matrix(self) -> np.ndarray:
        return perspective(math.radians(self.zoom), self.aspect(), _NEAR, _FAR)

    def aspect(self) -> float:
        return self.scene_width / self.scene_height if self.scene_height > 0 else 1.0

    def process_keyboard(self, direction: CameraMovement, delta_time: float) -> None:
        velocity = self.movement_speed * delta_time
        if direction is CameraMovement.FORWARD:
            self.position = self.position + self._front * velocity
        elif direction is CameraMovement.BACKWARD:
            self.position = self.position - self._front * velocity
        elif direction is CameraMovement.LEFT:
            self.position = self.position - self._right * velocity
        elif direction is CameraMovement.RIGHT:
            self.position = self.position + self._right * velocity

    def process_mouse_movement(self, x_offset: float, y_offset: float, constrain_pitch: bool = True) -> None:
        self._yaw += x_offset * self.mouse_sensitivity
        self._pitch += y_offset * self.mouse_sensitivity
        if constrain_pitch:
            self._pitch = _clamp(self._pitch, -_PITCH_LIMIT, _PITCH_LIMIT)
        self._update_vectors()

    def process_mouse_scroll(self, y_offset: float) -> None:
        self.zoom = _clamp(self.zoom - y_offset, _ZOOM_MIN, _ZOOM_MAX)

    def set_yaw(self, yaw: float, update_vectors: bool = True) -> None:
        self._yaw = float(yaw)
        if update_vectors:
            self._update_vectors()

    def set_pitch(self, pitch: float, update_vectors: bool = True) -> None:
        self._pitch = _clamp(float(pitch), -_PITCH_LIMIT, _PITCH_LIMIT)
        if update_vectors:
            self._update_vectors()

    def update_scene_size(self, width: float, height: float) -> None:
        self.scene_width = width
        self.scene_height = height

    def _update_vectors(self) -> None:
        yaw = math.radians(self._yaw)
        pitch = math.radians(self._pitch)
        front = np.array(
            [
                math.cos(yaw) * math.cos(pitch),
                math.sin(pitch),
                math.sin(yaw) * math.cos(pitch),
            ]
        )
        self._front = _normalize(front)
        self._right = _normalize(np.cross(self._front, self._world_up))
        self._up = _normalize(np.cross(self._right, self._front))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))