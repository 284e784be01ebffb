"""Texture records, the built-in fallback textures and a named texture registry."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterator, Optional

import numpy as np

STATIC_WHITE_TEXTURE = "STATIC_WHITE_TEXTURE"
STATIC_BLACK_TEXTURE = "STATIC_BLACK_TEXTURE"
STATIC_NORMAL_TEXTURE = "STATIC_NORMAL_TEXTURE"
STATIC_PBR_DEFAULT_TEXTURE = "STATIC_PBR_DEFAULT_TEXTURE"

_STATIC_SIZE = 16
_ids = itertools.count(1)


class TextureType(IntEnum):
    DIFFUSE = 0
    SPECULAR = 1
    NORMAL = 2
    HEIGHT = 3
    METALLIC = 4
    ROUGHNESS = 5
    AO = 6
    HDR_CUBEMAP = 7
    IRRADIANCE_MAP = 8
    UI = 9
    UNDEFINED = 10


@dataclass(eq=False)
class Texture:
    """A texture: its kind, optional RGBA pixel data and a unique id."""

    type: TextureType = TextureType.UNDEFINED
    pixels: Optional[np.ndarray] = None
    tex_id: int = field(default_factory=lambda: next(_ids))


def _solid(rgba: tuple) -> np.ndarray:
    pixels = np.empty((_STATIC_SIZE, _STATIC_SIZE, 4), dtype=np.uint8)
    pixels[:, :] = rgba
    return pixels


def static_white_texture() -> Texture:
    return Texture(TextureType.DIFFUSE, _solid((0xFF, 0xFF, 0xFF, 0xFF)))


def static_black_texture() -> Texture:
    return Texture(TextureType.DIFFUSE, _solid((0x00, 0x00, 0x00, 0x00)))


def static_normal_texture() -> Texture:
    """Flat normal map: (0.5, 0.5, 1.0)."""
    return Texture(TextureType.NORMAL, _solid((0x80, 0x80, 0xFF, 0xFF)))


def static_pbr_default_texture() -> Texture:
    """Packed metallic-roughness default: roughness 1 in G, metallic 0 in B."""
    return Texture(TextureType.METALLIC, _solid((0x00, 0xFF, 0x00, 0xFF)))


class TextureManager:
    """Textures registered under names."""

    def __init__(self) -> None:
        self._textures: Dict[str, Texture] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._textures

    def __len__(self) -> int:
        return len(self._textures)

    def __iter__(self) -> Iterator[str]:
        return iter(self._textures)

    def manage(self, name: str, texture: Texture) -> Texture:
        """Register ``texture`` under ``name``, replacing any previous one."""
        self._textures[name] = texture
        return texture

    def manage_defaults(self) -> None:
        """Register the built-in white, black, flat-normal and PBR-default textures."""
        self.manage(STATIC_WHITE_TEXTURE, static_white_texture())
        self.manage(STATIC_BLACK_TEXTURE, static_black_texture())
        self.manage(STATIC_NORMAL_TEXTURE, static_normal_texture())
        self.manage(STATIC_PBR_DEFAULT_TEXTURE, static_pbr_default_texture())

    def get(self, name: str) -> Texture:
        try:
            return self._textures[name]
        except KeyError:
            raise KeyError(f"{name} don't exists") from None

    def try_get(self, name: str) -> Optional[Texture]:
        return self._textures.get(name)

    def exists(self, name: str) -> bool:
        return name in self._textures

    def clear(self) -> None:
        self._textures.clear()