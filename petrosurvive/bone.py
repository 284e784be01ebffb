"""Keyframed bone channels: interpolated translation, rotation and scale."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

_QUAT_EPSILON = float(np.finfo(np.float32).eps)


def _identity() -> np.ndarray:
    return np.identity(4)


@dataclass
class BoneInfo:
    """Index of a bone in the final matrix palette and its inverse bind offset."""

    id: int = 0
    offset: np.ndarray = field(default_factory=_identity)


@dataclass
class KeyPosition:
    position: np.ndarray
    time_stamp: float

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=float).reshape(3)
        self.time_stamp = float(self.time_stamp)


@dataclass
class KeyRotation:
    """A rotation key; ``orientation`` is a quaternion stored as (w, x, y, z)."""

    orientation: np.ndarray
    time_stamp: float

    def __post_init__(self) -> None:
        self.orientation = np.asarray(self.orientation, dtype=float).reshape(4)
        self.time_stamp = float(self.time_stamp)


@dataclass
class KeyScale:
    scale: np.ndarray
    time_stamp: float

    def __post_init__(self) -> None:
        self.scale = np.asarray(self.scale, dtype=float).reshape(3)
        self.time_stamp = float(self.time_stamp)


def _normalize_quat(q: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(q)
    if length <= 0.0:
        return np.array([1.0, 0.0, 0.0, 0.0])
    return q / length


def slerp(a: Sequence[float], b: Sequence[float], t: float) -> np.ndarray:
    """Spherical interpolation of (w, x, y, z) quaternions along the shortest arc."""
    qa = np.asarray(a, dtype=float).reshape(4)
    qb = np.asarray(b, dtype=float).reshape(4)
    cos_theta = float(np.dot(qa, qb))
    if cos_theta < 0.0:
        qb = -qb
        cos_theta = -cos_theta
    if cos_theta > 1.0 - _QUAT_EPSILON:
        return qa * (1.0 - t) + qb * t
    angle = math.acos(cos_theta)
    return (math.sin((1.0 - t) * angle) * qa + math.sin(t * angle) * qb) / math.sin(angle)


def quat_to_mat4(q: Sequence[float]) -> np.ndarray:
    """Rotation matrix of a (w, x, y, z) quaternion."""
    w, x, y, z = (float(v) for v in np.asarray(q, dtype=float).reshape(4))
    m = np.identity(4)
    m[0, 0] = 1.0 - 2.0 * (y * y + z * z)
    m[0, 1] = 2.0 * (x * y - w * z)
    m[0, 2] = 2.0 * (x * z + w * y)
    m[1, 0] = 2.0 * (x * y + w * z)
    m[1, 1] = 1.0 - 2.0 * (x * x + z * z)
    m[1, 2] = 2.0 * (y * z - w * x)
    m[2, 0] = 2.0 * (x * z - w * y)
    m[2, 1] = 2.0 * (y * z + w * x)
    m[2, 2] = 1.0 - 2.0 * (x * x + y * y)
    return m


def _mix(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    return a * (1.0 - t) + b * t


class Bone:
    """One animated bone: keyframes for each channel and its current local transform."""

    def __init__(
        self,
        name: str,
        bone_id: int,
        positions: Sequence[KeyPosition],
        rotations: Sequence[KeyRotation],
        scales: Sequence[KeyScale],
    ) -> None:
        self.name = name
        self.bone_id = bone_id
        self.positions = list(positions)
        self.rotations = list(rotations)
        self.scales = list(scales)
        for kind, keys in (("position", self.positions), ("rotation", self.rotations), ("scale", self.scales)):
            if not keys:
                raise ValueError(f"bone {name!r} has no {kind} keys")
        self.local_transform = np.identity(4)
        self._last = {"position": 0, "rotation": 0, "scale": 0}

    def update(self, animation_time: float) -> None:
        """Recompute the local transform for the given animation time."""
        position = self._interpolate_position(animation_time)
        rotation = self._interpolate_rotation(animation_time)
        scale = self._interpolate_scaling(animation_time)

        translation = np.identity(4)
        translation[:3, 3] = position
        scaling = np.diag([scale[0], scale[1], scale[2], 1.0])
        self.local_transform = translation @ quat_to_mat4(rotation) @ scaling

    def position_index(self, animation_time: float) -> int:
        return self._key_index("position", self.positions, animation_time)

    def rotation_index(self, animation_time: float) -> int:
        return self._key_index("rotation", self.rotations, animation_time)

    def scale_index(self, animation_time: float) -> int:
        return self._key_index("scale", self.scales, animation_time)

    def _key_index(self, kind: str, keys: list, animation_time: float) -> int:
        last = self._last[kind]
        if animation_time < keys[last].time_stamp:
            last = 0
            self._last[kind] = 0
        for index in range(last, len(keys) - 1):
            if animation_time < keys[index + 1].time_stamp:
                self._last[kind] = index
                return index
        raise ValueError(
            f"animation time {animation_time} lies outside the {kind} keys of bone {self.name!r}"
        )

    @staticmethod
    def _scale_factor(last_timestamp: float, next_timestamp: float, animation_time: float) -> float:
        return (animation_time - last_timestamp) / (next_timestamp - last_timestamp)

    def _interpolate_position(self, animation_time: float) -> np.ndarray:
        if len(self.positions) == 1:
            return self.positions[0].position.copy()
        i = self.position_index(animation_time)
        k0, k1 = self.positions[i], self.positions[i + 1]
        factor = self._scale_factor(k0.time_stamp, k1.time_stamp, animation_time)
        return _mix(k0.position, k1.position, factor)

    def _interpolate_rotation(self, animation_time: float) -> np.ndarray:
        if len(self.rotations) == 1:
            return _normalize_quat(self.rotations[0].orientation)
        i = self.rotation_index(animation_time)
        k0, k1 = self.rotations[i], self.rotations[i + 1]
        factor = self._scale_factor(k0.time_stamp, k1.time_stamp, animation_time)
        return _normalize_quat(slerp(k0.orientation, k1.orientation, factor))

    def _interpolate_scaling(self, animation_time: float) -> np.ndarray:
        if len(self.scales) == 1:
            return self.scales[0].scale.copy()
        i = self.scale_index(animation_time)
        k0, k1 = self.scales[i], self.scales[i + 1]
        factor = self._scale_factor(k0.time_stamp, k1.time_stamp, animation_time)
        return _mix(k0.scale, k1.scale, factor)