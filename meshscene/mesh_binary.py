"""Binary cache files for cooked static mesh render data.

All numbers are little-endian. Narrow strings are a uint32 byte count then
UTF-8; wide strings are a uint32 code-unit count then UTF-16-LE.
"""

from __future__ import annotations

import os
import struct
from typing import BinaryIO

from meshscene.core import Vector
from meshscene.material import ObjMaterialInfo
from meshscene.obj_loader import MaterialSubset, StaticMeshRenderData, VertexSimple

_U32 = struct.Struct("<I")
_VERTEX = struct.Struct("<12fI")
_VEC3 = struct.Struct("<3f")
_FLAGS = struct.Struct("<??")
_SCALARS = struct.Struct("<3fI")
_SUBSET = struct.Struct("<IIi")
_TEXTURE_SLOTS = ("diffuse", "ambient", "specular", "bump", "alpha")


def _pack(layout: struct.Struct, *values: object) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ValueError(f"value cannot be stored: {exc}") from exc


def _write_string(stream: BinaryIO, text: str) -> None:
    data = text.encode("utf-8")
    stream.write(_pack(_U32, len(data)))
    stream.write(data)


def _write_wide_string(stream: BinaryIO, text: str) -> None:
    data = text.encode("utf-16-le", "surrogatepass")
    stream.write(_pack(_U32, len(data) // 2))
    stream.write(data)


def _write_material(stream: BinaryIO, material: ObjMaterialInfo) -> None:
    _write_string(stream, material.mtl_name)
    stream.write(_pack(_FLAGS, material.has_texture, material.transparent))
    for colour in (material.diffuse, material.specular, material.ambient, material.emissive):
        stream.write(_pack(_VEC3, *colour))
    stream.write(
        _pack(
            _SCALARS,
            material.specular_scalar,
            material.density_scalar,
            material.transparency_scalar,
            material.illuminance_model,
        )
    )
    for slot in _TEXTURE_SLOTS:
        _write_string(stream, getattr(material, f"{slot}_texture_name"))
        _write_wide_string(stream, getattr(material, f"{slot}_texture_path"))


def save_static_mesh(path: str | os.PathLike[str], mesh: StaticMeshRenderData) -> None:
    """Write render data to a binary cache file."""
    with open(path, "wb") as stream:
        _write_wide_string(stream, mesh.object_name)
        _write_wide_string(stream, mesh.path_name)
        _write_string(stream, mesh.display_name)

        stream.write(_pack(_U32, len(mesh.vertices)))
        for v in mesh.vertices:
            stream.write(
                _pack(
                    _VERTEX,
                    v.x, v.y, v.z, v.r, v.g, v.b, v.a,
                    v.nx, v.ny, v.nz, v.u, v.v, v.material_index,
                )
            )

        stream.write(_pack(_U32, len(mesh.indices)))
        for index in mesh.indices:
            stream.write(_pack(_U32, index))

        stream.write(_pack(_U32, len(mesh.materials)))
        for material in mesh.materials:
            _write_material(stream, material)

        stream.write(_pack(_U32, len(mesh.material_subsets)))
        for subset in mesh.material_subsets:
            _write_string(stream, subset.material_name)
            stream.write(
                _pack(_SUBSET, subset.index_start, subset.index_count, subset.material_index)
            )

        stream.write(_pack(_VEC3, *mesh.bounding_box_min))
        stream.write(_pack(_VEC3, *mesh.bounding_box_max))


class _Reader:
    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def take(self, size: int) -> bytes:
        data = self._stream.read(size)
        if len(data) != size:
            raise ValueError("truncated static mesh file")
        return data

    def unpack(self, layout: struct.Struct) -> tuple:
        return layout.unpack(self.take(layout.size))

    def count(self) -> int:
        return self.unpack(_U32)[0]

    def string(self) -> str:
        return self.take(self.count()).decode("utf-8")

    def wide_string(self) -> str:
        return self.take(2 * self.count()).decode("utf-16-le", "surrogatepass")

    def vector(self) -> Vector:
        return Vector(*self.unpack(_VEC3))


def _read_material(reader: _Reader) -> ObjMaterialInfo:
    material = ObjMaterialInfo(mtl_name=reader.string())
    material.has_texture, material.transparent = reader.unpack(_FLAGS)
    material.diffuse = reader.vector()
    material.specular = reader.vector()
    material.ambient = reader.vector()
    material.emissive = reader.vector()
    (
        material.specular_scalar,
        material.density_scalar,
        material.transparency_scalar,
        material.illuminance_model,
    ) = reader.unpack(_SCALARS)
    for slot in _TEXTURE_SLOTS:
        setattr(material, f"{slot}_texture_name", reader.string())
        setattr(material, f"{slot}_texture_path", reader.wide_string())
    return material


def load_static_mesh(path: str | os.PathLike[str]) -> StaticMeshRenderData:
    """Read render data from a binary cache file; a short file raises ValueError."""
    with open(path, "rb") as stream:
        reader = _Reader(stream)
        mesh = StaticMeshRenderData(
            object_name=reader.wide_string(),
            path_name=reader.wide_string(),
            display_name=reader.string(),
        )
        mesh.vertices = [
            VertexSimple(*reader.unpack(_VERTEX)) for _ in range(reader.count())
        ]
        mesh.indices = [reader.count() for _ in range(reader.count())]
        mesh.materials = [_read_material(reader) for _ in range(reader.count())]
        mesh.material_subsets = [
            MaterialSubset(reader.string(), *reader.unpack(_SUBSET))
            for _ in range(reader.count())
        ]
        mesh.bounding_box_min = reader.vector()
        mesh.bounding_box_max = reader.vector()
    return mesh