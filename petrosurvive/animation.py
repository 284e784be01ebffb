"""A skeletal animation clip: node hierarchy plus per-bone keyframe channels."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from petrosurvive.bone import Bone, BoneInfo, KeyPosition, KeyRotation, KeyScale


def _identity() -> np.ndarray:
    return np.identity(4)


@dataclass
class Channel:
    """Keyframes that animate the node called ``name``."""

    name: str
    positions: List[KeyPosition]
    rotations: List[KeyRotation]
    scales: List[KeyScale]


@dataclass(eq=False)
class NodeData:
    """A node in the animated hierarchy, with the bone data it resolves to."""

    name: str
    transformation: np.ndarray = field(default_factory=_identity)
    children: List["NodeData"] = field(default_factory=list)
    bone: Optional[Bone] = None
    bone_info: Optional[BoneInfo] = None

    @property
    def children_count(self) -> int:
        return len(self.children)


@dataclass
class Skeleton:
    """Bone names of a model mapped to their palette slots, and the slot count."""

    bone_info: Dict[str, BoneInfo] = field(default_factory=dict)
    bone_count: int = 0


class Animation:
    """An animation clip bound to a skeleton."""

    def __init__(
        self,
        duration: float,
        ticks_per_second: float,
        root: NodeData,
        channels: Sequence[Channel],
        skeleton: Skeleton,
        global_transformation: Optional[np.ndarray] = None,
    ) -> None:
        self.duration = float(duration)
        # Ticks are held as a whole number, as the clip format stores them.
        self.ticks_per_second = float(int(ticks_per_second))
        if global_transformation is None:
            global_transformation = np.linalg.inv(np.asarray(root.transformation, dtype=float))
        self.global_transformation = np.asarray(global_transformation, dtype=float)

        self.root = self._copy_hierarchy(root)
        self._bones: Dict[str, Bone] = {}
        self.bone_info: Dict[str, BoneInfo] = {}
        self._read_missing_bones(channels, skeleton)
        self._resolve_bones(self.root)

    @property
    def bones(self) -> List[Bone]:
        """Bones of this clip, ordered by name."""
        return list(self._bones.values())

    def find_bone(self, name: str) -> Optional[Bone]:
        return self._bones.get(name)

    def _copy_hierarchy(self, src: NodeData) -> NodeData:
        return NodeData(
            name=src.name,
            transformation=np.array(src.transformation, dtype=float),
            children=[self._copy_hierarchy(child) for child in src.children],
        )

    def _read_missing_bones(self, channels: Sequence[Channel], skeleton: Skeleton) -> None:
        created: List[Bone] = []
        for channel in channels:
            info = skeleton.bone_info.get(channel.name)
            if info is None:
                info = BoneInfo(id=skeleton.bone_count)
                skeleton.bone_info[channel.name] = info
                skeleton.bone_count += 1
            created.append(
                Bone(channel.name, info.id, channel.positions, channel.rotations, channel.scales)
            )

        for bone in sorted(created, key=lambda b: b.name):
            self._bones.setdefault(bone.name, bone)

        self.bone_info = {
            name: BoneInfo(info.id, np.array(info.offset, dtype=float))
            for name, info in skeleton.bone_info.items()
        }

    def _resolve_bones(self, node: NodeData) -> None:
        node.bone = self.find_bone(node.name)
        info = self.bone_info.get(node.name)
        if info is not None:
            node.bone_info = info
        for child in node.children:
            self._resolve_bones(child)