"""PBR materials, a builder that fills in fallback textures, and a named registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from petrosurvive.texture import (
    STATIC_BLACK_TEXTURE,
    STATIC_NORMAL_TEXTURE,
    STATIC_PBR_DEFAULT_TEXTURE,
    STATIC_WHITE_TEXTURE,
    Texture,
    TextureManager,
)


@dataclass
class Material:
    """Texture slots of a PBR material and its scalar factors."""

    diffuse: Optional[Texture] = None
    normal: Optional[Texture] = None
    height: Optional[Texture] = None
    metallic: Optional[Texture] = None
    roughness: Optional[Texture] = None
    ao: Optional[Texture] = None
    metallic_factor: float = 0.0
    roughness_factor: float = 1.0
    ao_factor: float = 1.0

    @property
    def has_diffuse(self) -> bool:
        return self.diffuse is not None

    @property
    def has_normal(self) -> bool:
        return self.normal is not None

    @property
    def has_height(self) -> bool:
        return self.height is not None

    @property
    def has_metallic(self) -> bool:
        return self.metallic is not None

    @property
    def has_roughness(self) -> bool:
        return self.roughness is not None

    @property
    def has_ao(self) -> bool:
        return self.ao is not None


class MaterialBuilder:
    """Builds a material, substituting built-in textures for empty slots."""

    def __init__(self, textures: TextureManager, reference: Optional[Material] = None) -> None:
        self._textures = textures
        if reference is None:
            reference = Material()
        self._diffuse = reference.diffuse
        self._normal = reference.normal
        self._height = reference.height
        self._metallic = reference.metallic
        self._roughness = reference.roughness
        self._ao = reference.ao
        self._metallic_factor = reference.metallic_factor
        self._roughness_factor = reference.roughness_factor
        self._ao_factor = reference.ao_factor

    def set_diffuse(self, texture: Optional[Texture]) -> "MaterialBuilder":
        self._diffuse = texture
        return self

    def set_normal(self, texture: Optional[Texture]) -> "MaterialBuilder":
        self._normal = texture
        return self

    def set_height(self, texture: Optional[Texture]) -> "MaterialBuilder":
        self._height = texture
        return self

    def set_metallic(self, texture: Optional[Texture]) -> "MaterialBuilder":
        self._metallic = texture
        return self

    def set_roughness(self, texture: Optional[Texture]) -> "MaterialBuilder":
        self._roughness = texture
        return self

    def set_ao(self, texture: Optional[Texture]) -> "MaterialBuilder":
        self._ao = texture
        return self

    def set_metallic_factor(self, factor: float) -> "MaterialBuilder":
        self._metallic_factor = factor
        return self

    def set_roughness_factor(self, factor: float) -> "MaterialBuilder":
        self._roughness_factor = factor
        return self

    def set_ao_factor(self, factor: float) -> "MaterialBuilder":
        self._ao_factor = factor
        return self

    def create(self) -> Material:
        """Build the material; raises KeyError if a needed built-in texture is missing."""
        for required in (STATIC_WHITE_TEXTURE, STATIC_BLACK_TEXTURE, STATIC_NORMAL_TEXTURE):
            if not self._textures.exists(required):
                raise KeyError(f"{required} don't exists")

        get = self._textures.get
        return Material(
            diffuse=self._diffuse if self._diffuse is not None else get(STATIC_WHITE_TEXTURE),
            normal=self._normal if self._normal is not None else get(STATIC_NORMAL_TEXTURE),
            height=self._height if self._height is not None else get(STATIC_BLACK_TEXTURE),
            metallic=self._metallic if self._metallic is not None else get(STATIC_PBR_DEFAULT_TEXTURE),
            roughness=self._roughness if self._roughness is not None else get(STATIC_PBR_DEFAULT_TEXTURE),
            ao=self._ao if self._ao is not None else get(STATIC_WHITE_TEXTURE),
            metallic_factor=self._metallic_factor,
            roughness_factor=self._roughness_factor,
            ao_factor=self._ao_factor,
        )


class MaterialManager:
    """Materials registered under names."""

    def __init__(self) -> None:
        self._materials: Dict[str, Material] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._materials

    def __len__(self) -> int:
        return len(self._materials)

    def __iter__(self) -> Iterator[str]:
        return iter(self._materials)

    def load(self, name: str, material: Material) -> None:
        """Register ``material`` under ``name``, replacing any previous one."""
        self._materials[name] = material

    def get(self, name: str) -> Material:
        try:
            return self._materials[name]
        except KeyError:
            raise KeyError(f"no material named {name!r}") from None

    def try_get(self, name: str) -> Optional[Material]:
        return self._materials.get(name)

    def exists(self, name: str) -> bool:
        return name in self._materials

    def clear(self) -> None:
        self._materials.clear()