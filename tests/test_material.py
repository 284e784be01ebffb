import pytest

from petrosurvive.material import Material, MaterialBuilder, MaterialManager
from petrosurvive.texture import (
    STATIC_BLACK_TEXTURE,
    STATIC_NORMAL_TEXTURE,
    STATIC_PBR_DEFAULT_TEXTURE,
    STATIC_WHITE_TEXTURE,
    Texture,
    TextureManager,
    TextureType,
)


@pytest.fixture
def textures():
    manager = TextureManager()
    manager.manage_defaults()
    return manager


def test_create_fills_fallbacks(textures):
    material = MaterialBuilder(textures).create()
    assert material.diffuse is textures.get(STATIC_WHITE_TEXTURE)
    assert material.normal is textures.get(STATIC_NORMAL_TEXTURE)
    assert material.height is textures.get(STATIC_BLACK_TEXTURE)
    assert material.metallic is textures.get(STATIC_PBR_DEFAULT_TEXTURE)
    assert material.roughness is textures.get(STATIC_PBR_DEFAULT_TEXTURE)
    assert material.ao is textures.get(STATIC_WHITE_TEXTURE)


def test_default_factors(textures):
    material = MaterialBuilder(textures).create()
    assert material.metallic_factor == 0.0
    assert material.roughness_factor == 1.0
    assert material.ao_factor == 1.0


def test_setters_chain_and_keep_textures(textures):
    diffuse = Texture(TextureType.DIFFUSE)
    packed = Texture(TextureType.METALLIC)
    material = (
        MaterialBuilder(textures)
        .set_diffuse(diffuse)
        .set_metallic(packed)
        .set_roughness(packed)
        .set_metallic_factor(0.25)
        .set_roughness_factor(0.5)
        .set_ao_factor(0.75)
        .create()
    )
    assert material.diffuse is diffuse
    assert material.metallic is packed
    assert material.roughness is packed
    assert (material.metallic_factor, material.roughness_factor, material.ao_factor) == (0.25, 0.5, 0.75)


def test_builder_from_reference_copies(textures):
    normal = Texture(TextureType.NORMAL)
    original = MaterialBuilder(textures).set_normal(normal).set_ao_factor(0.3).create()
    copy = MaterialBuilder(textures, original).create()
    assert copy.normal is normal
    assert copy.ao_factor == 0.3
    assert copy == original


def test_create_without_defaults_raises():
    with pytest.raises(KeyError):
        MaterialBuilder(TextureManager()).create()


def test_empty_material_has_no_textures():
    material = Material()
    assert not material.has_diffuse
    assert not material.has_ao
    material.ao = Texture()
    assert material.has_ao


def test_manager_round_trip(textures):
    manager = MaterialManager()
    material = MaterialBuilder(textures).create()
    manager.load("rock", material)
    assert manager.exists("rock")
    assert manager.get("rock") is material
    assert manager.try_get("rock") is material
    assert manager.try_get("sand") is None
    with pytest.raises(KeyError):
        manager.get("sand")


def test_manager_clear(textures):
    manager = MaterialManager()
    manager.load("a", Material())
    manager.load("b", Material())
    assert len(manager) == 2
    manager.clear()
    assert not manager.exists("a")
    assert len(manager) == 0