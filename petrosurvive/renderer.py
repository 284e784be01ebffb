"""Batched instanced drawing of models and meshes with per-instance data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

import numpy as np

MAX_INSTANCES = 50000
MAX_BONES = 200

_TERRAIN_TINT_LOW = (0.50, 0.70, 0.55)
_TERRAIN_TINT_HIGH = (1.45, 1.20, 0.85)
_TERRAIN_TINT_SCALE = 0.006
_TERRAIN_TINT_STRENGTH = 0.9


class UniformSink(Protocol):
    def set_bool(self, name: str, value: bool) -> None: ...

    def set_int(self, name: str, value: int) -> None: ...

    def set_float(self, name: str, value: float) -> None: ...

    def set_vec3(self, name: str, value: np.ndarray) -> None: ...


class InstancedDrawable(Protocol):
    def draw_instanced(self, shader: Any, count: int) -> None: ...


class BonePalette(Protocol):
    @property
    def final_bone_matrices(self) -> np.ndarray: ...


@dataclass
class _ModelCommand:
    model: InstancedDrawable
    transform: np.ndarray
    animator: Optional[BonePalette]
    emission: np.ndarray


@dataclass
class _MeshCommand:
    mesh: InstancedDrawable
    transform: np.ndarray
    emission: np.ndarray


@dataclass(frozen=True)
class DrawBatch:
    """One instanced draw issued by ``flush``."""

    target: Any
    base_instance: int
    count: int
    animated: bool
    terrain: bool


def _mat4(values: Any) -> np.ndarray:
    return np.array(values, dtype=float).reshape(4, 4)


def _vec3(values: Sequence[float]) -> np.ndarray:
    return np.array(values, dtype=float).reshape(3)


class Renderer:
    """Queues draw submissions for a frame and issues them as instanced batches."""

    def __init__(self, max_instances: int = MAX_INSTANCES, max_bones: int = MAX_BONES) -> None:
        if max_instances <= 0 or max_bones <= 0:
            raise ValueError("max_instances and max_bones must be positive")
        self.max_instances = max_instances
        self.max_bones = max_bones
        self._model_queue: List[_ModelCommand] = []
        self._mesh_queue: List[_MeshCommand] = []
        self._transforms: List[np.ndarray] = []
        self._emissions: List[np.ndarray] = []
        self._bones: Dict[int, np.ndarray] = {}

    @property
    def instance_count(self) -> int:
        """Number of instance slots written since the frame began."""
        return len(self._transforms)

    def instance_transform(self, index: int) -> np.ndarray:
        return self._transforms[index].copy()

    def instance_emission(self, index: int) -> np.ndarray:
        """Emission of an instance as a 4-vector with w = 0."""
        return self._emissions[index].copy()

    def bone_palette(self, index: int) -> Optional[np.ndarray]:
        """Bone matrices written for an instance, or None if none were written."""
        palette = self._bones.get(index)
        return None if palette is None else palette.copy()

    def begin_frame(self) -> None:
        """Start a new frame: empty the queues and rewind the instance slots."""
        self._transforms.clear()
        self._emissions.clear()
        self._bones.clear()
        self._model_queue.clear()
        self._mesh_queue.clear()

    def submit_model(
        self,
        model: InstancedDrawable,
        transform: Any,
        animator: Optional[BonePalette] = None,
        emission: Sequence[float] = (0.0, 0.0, 0.0),
    ) -> None:
        self._model_queue.append(_ModelCommand(model, _mat4(transform), animator, _vec3(emission)))

    def submit_mesh(
        self,
        mesh: InstancedDrawable,
        transform: Any,
        emission: Sequence[float] = (0.0, 0.0, 0.0),
    ) -> None:
        self._mesh_queue.append(_MeshCommand(mesh, _mat4(transform), _vec3(emission)))

    def _write_instance(self, transform: np.ndarray, emission: np.ndarray) -> int:
        offset = len(self._transforms)
        self._transforms.append(transform.copy())
        self._emissions.append(np.append(emission, 0.0))
        return offset

    def _identity_palette(self) -> np.ndarray:
        return np.tile(np.identity(4), (self.max_bones, 1, 1))

    def flush(self, shader: UniformSink) -> List[DrawBatch]:
        """Write instance data for all queued commands and draw them in batches."""
        batches: List[DrawBatch] = []

        self._model_queue.sort(key=lambda cmd: id(cmd.model))
        current: Optional[InstancedDrawable] = None
        has_animation = False
        count = 0
        start = self.instance_count

        def flush_models() -> None:
            nonlocal has_animation, count, start
            if count == 0 or current is None:
                return
            shader.set_bool("u_EnableTerrainTint", False)
            shader.set_bool("u_HasAnimation", has_animation)
            shader.set_int("u_BaseInstance", start)
            current.draw_instanced(shader, count)
            batches.append(DrawBatch(current, start, count, has_animation, False))
            has_animation = False
            count = 0
            start = self.instance_count

        for cmd in self._model_queue:
            if cmd.model is not current:
                flush_models()
                current = cmd.model
            if self.instance_count >= self.max_instances:
                break
            offset = self._write_instance(cmd.transform, cmd.emission)
            if cmd.animator is not None:
                has_animation = True
                bones = np.asarray(cmd.animator.final_bone_matrices, dtype=float)
                palette = self._identity_palette()
                used = min(len(bones), self.max_bones)
                palette[:used] = bones[:used]
                self._bones[offset] = palette
            elif has_animation:
                self._bones[offset] = self._identity_palette()
            count += 1
        flush_models()

        self._mesh_queue.sort(key=lambda cmd: id(cmd.mesh))
        current_mesh: Optional[InstancedDrawable] = None
        count = 0
        start = self.instance_count

        def flush_meshes() -> None:
            nonlocal count, start
            if count == 0 or current_mesh is None:
                return
            shader.set_bool("u_EnableTerrainTint", True)
            shader.set_vec3("u_TerrainTintLow", np.array(_TERRAIN_TINT_LOW))
            shader.set_vec3("u_TerrainTintHigh", np.array(_TERRAIN_TINT_HIGH))
            shader.set_float("u_TerrainTintScale", _TERRAIN_TINT_SCALE)
            shader.set_float("u_TerrainTintStrength", _TERRAIN_TINT_STRENGTH)
            shader.set_bool("u_HasAnimation", False)
            shader.set_int("u_BaseInstance", start)
            current_mesh.draw_instanced(shader, count)
            batches.append(DrawBatch(current_mesh, start, count, False, True))
            count = 0
            start = self.instance_count

        for cmd in self._mesh_queue:
            if cmd.mesh is not current_mesh:
                flush_meshes()
                current_mesh = cmd.mesh
            if self.instance_count >= self.max_instances:
                break
            self._write_instance(cmd.transform, cmd.emission)
            count += 1
        flush_meshes()

        return batches