import struct

import pytest

from meshscene.core import Vector
from meshscene.material import ObjMaterialInfo
from meshscene.mesh_binary import load_static_mesh, save_static_mesh
from meshscene.obj_loader import (
    MaterialSubset,
    StaticMeshRenderData,
    VertexSimple,
    combine_material_index,
    compute_bounding_box,
    convert_to_static_mesh,
    parse_material,
    parse_obj,
)


def _sample_mesh():
    vertices = [
        VertexSimple(0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 0.0, 0.0, 1.0, 0.5, -0.25, 1),
        VertexSimple(1.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0),
        VertexSimple(1.0, 1.0, 0.0, 1.0, 1.0, 1.0, 1.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0),
    ]
    low, high = compute_bounding_box(vertices)
    material = ObjMaterialInfo(
        mtl_name="Red",
        has_texture=True,
        transparent=True,
        diffuse=Vector(1.0, 0.0, 0.0),
        specular=Vector(0.5, 0.5, 0.5),
        specular_scalar=10.0,
        transparency_scalar=0.5,
        illuminance_model=2,
        diffuse_texture_name="red.png",
        diffuse_texture_path="assets/red.png",
    )
    return StaticMeshRenderData(
        object_name="cube.obj",
        path_name="assets/",
        display_name="cube",
        vertices=vertices,
        indices=[0, 1, 2],
        materials=[material],
        material_subsets=[MaterialSubset("Red", 0, 3, 0)],
        bounding_box_min=low,
        bounding_box_max=high,
    )


def test_round_trip(tmp_path):
    mesh = _sample_mesh()
    path = tmp_path / "cube.obj.bin"
    save_static_mesh(path, mesh)
    assert load_static_mesh(path) == mesh


def test_round_trip_empty_mesh(tmp_path):
    low, high = compute_bounding_box([])
    mesh = StaticMeshRenderData(bounding_box_min=low, bounding_box_max=high)
    path = tmp_path / "empty.bin"
    save_static_mesh(path, mesh)
    assert load_static_mesh(path) == mesh


def test_round_trip_unicode_names(tmp_path):
    mesh = _sample_mesh()
    mesh.object_name = "메시.obj"
    mesh.display_name = "메시"
    mesh.materials[0].diffuse_texture_path = "텍스처/red.png"
    path = tmp_path / "unicode.bin"
    save_static_mesh(path, mesh)
    loaded = load_static_mesh(path)
    assert loaded.object_name == "메시.obj"
    assert loaded.display_name == "메시"
    assert loaded.materials[0].diffuse_texture_path == "텍스처/red.png"


def test_file_starts_with_object_name(tmp_path):
    mesh = _sample_mesh()
    path = tmp_path / "cube.obj.bin"
    save_static_mesh(path, mesh)
    data = path.read_bytes()
    assert data[:4] == struct.pack("<I", len(mesh.object_name))
    assert data[4 : 4 + 2 * len(mesh.object_name)] == mesh.object_name.encode("utf-16-le")


def test_round_trip_parsed_obj(tmp_path):
    obj = tmp_path / "tri.obj"
    obj.write_text(
        "mtllib tri.mtl\nv 0 0 0\nv 1 0 0\nv 0 1 0\nvt 0.5 0.25\n"
        "usemtl Green\nf 1/1 2/1 3/1\n",
        encoding="utf-8",
    )
    (tmp_path / "tri.mtl").write_text("newmtl Green\nKd 0 1 0\n", encoding="utf-8")
    info = parse_obj(obj)
    mesh = StaticMeshRenderData()
    parse_material(info, mesh)
    combine_material_index(mesh)
    convert_to_static_mesh(info, mesh)
    path = tmp_path / "tri.obj.bin"
    save_static_mesh(path, mesh)
    assert load_static_mesh(path) == mesh


def test_truncated_file(tmp_path):
    path = tmp_path / "cut.bin"
    save_static_mesh(path, _sample_mesh())
    path.write_bytes(path.read_bytes()[:-1])
    with pytest.raises(ValueError):
        load_static_mesh(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_static_mesh(tmp_path / "absent.bin")


def test_negative_index_cannot_be_saved(tmp_path):
    mesh = _sample_mesh()
    mesh.indices = [-1]
    with pytest.raises(ValueError):
        save_static_mesh(tmp_path / "bad.bin", mesh)