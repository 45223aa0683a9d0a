from types import SimpleNamespace

import pytest

from meshscene.core import ObjectRegistry, Vector
from meshscene.material import (
    Material,
    MaterialRegistry,
    ObjMaterialInfo,
    StaticMaterial,
    StaticMesh,
)


@pytest.fixture
def objects():
    return ObjectRegistry()


def _render_data(names, vertices=(object(),)):
    return SimpleNamespace(
        vertices=list(vertices),
        materials=[ObjMaterialInfo(mtl_name=name) for name in names],
    )


def test_partial_transparency_marks_transparent(objects):
    material = Material(ObjMaterialInfo(mtl_name="glass"), objects)
    material.set_transparency(0.5)
    assert material.info.transparency_scalar == 0.5
    assert material.info.transparent is True


def test_full_opacity_is_not_transparent(objects):
    material = Material(ObjMaterialInfo(mtl_name="stone"), objects)
    material.set_transparency(1.0)
    assert material.info.transparent is False


def test_material_keeps_own_copy_of_info(objects):
    info = ObjMaterialInfo(mtl_name="paint", diffuse=Vector(0.2, 0.4, 0.6))
    material = Material(info, objects)
    info.diffuse = Vector.ZERO
    assert material.info.diffuse == Vector(0.2, 0.4, 0.6)


def test_registry_shares_material_per_name(objects):
    registry = MaterialRegistry(objects)
    first = registry.create_material(ObjMaterialInfo(mtl_name="wood"))
    second = registry.create_material(ObjMaterialInfo(mtl_name="wood", specular_scalar=9.0))
    assert first is second
    assert len(registry) == 1
    assert registry.get_material("wood") is first
    assert "wood" in registry


def test_registry_missing_material_is_none(objects):
    assert MaterialRegistry(objects).get_material("absent") is None


def test_set_data_creates_slots_in_order(objects):
    registry = MaterialRegistry(objects)
    mesh = StaticMesh(objects)
    data = _render_data(["red", "blue"])
    mesh.set_data(data, registry)
    assert mesh.render_data is data
    assert [slot.slot_name for slot in mesh.materials] == ["red", "blue"]
    assert mesh.get_material_index("blue") == 1
    assert mesh.get_material_index("green") is None
    assert mesh.used_materials() == [registry.get_material("red"), registry.get_material("blue")]


def test_set_data_without_vertices_adds_no_slots(objects):
    registry = MaterialRegistry(objects)
    mesh = StaticMesh(objects)
    data = _render_data(["red"], vertices=())
    mesh.set_data(data, registry)
    assert mesh.render_data is data
    assert mesh.materials == []
    assert len(registry) == 0


def test_meshes_share_materials_through_registry(objects):
    registry = MaterialRegistry(objects)
    first, second = StaticMesh(objects), StaticMesh(objects)
    first.set_data(_render_data(["metal"]), registry)
    second.set_data(_render_data(["metal"]), registry)
    assert first.materials[0].material is second.materials[0].material


def test_static_material_slot_holds_material(objects):
    material = Material(ObjMaterialInfo(mtl_name="slot"), objects)
    slot = StaticMaterial(material, "slot")
    assert slot.material.info.mtl_name == slot.slot_name
    assert material in objects