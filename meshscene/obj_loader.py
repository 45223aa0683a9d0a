"""Wavefront OBJ and MTL parsing into static mesh render data."""

from __future__ import annotations

import dataclasses
import os
import re
from dataclasses import dataclass, field
from typing import Iterator

from meshscene.core import Vector
from meshscene.material import ObjMaterialInfo

UINT32_MAX = 0xFFFFFFFF
FLT_MAX = 3.4028234663852886e38

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_MATERIAL_KEYWORDS = frozenset(
    {"Kd", "Ks", "Ka", "Ke", "Ns", "Ni", "d", "Tr", "illum", "map_Kd"}
)


@dataclass
class VertexSimple:
    """A render vertex: position, colour, normal, texture coordinate and material."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0
    nx: float = 0.0
    ny: float = 0.0
    nz: float = 0.0
    u: float = 0.0
    v: float = 0.0
    material_index: int = 0

    @property
    def position(self) -> Vector:
        return Vector(self.x, self.y, self.z)


@dataclass
class MaterialSubset:
    """A run of indices drawn with one material."""

    material_name: str = ""
    index_start: int = 0
    index_count: int = 0
    material_index: int = 0


@dataclass
class ObjInfo:
    """Raw data read from an OBJ file."""

    path_name: str = ""
    object_name: str = ""
    display_name: str = ""
    mat_name: str = ""
    group_names: list[str] = field(default_factory=list)
    num_of_group: int = 0
    vertices: list[Vector] = field(default_factory=list)
    normals: list[Vector] = field(default_factory=list)
    uvs: list[tuple[float, float]] = field(default_factory=list)
    vertex_indices: list[int] = field(default_factory=list)
    texture_indices: list[int] = field(default_factory=list)
    normal_indices: list[int] = field(default_factory=list)
    material_subsets: list[MaterialSubset] = field(default_factory=list)


@dataclass
class StaticMeshRenderData:
    """Cooked mesh data ready for rendering and picking."""

    object_name: str = ""
    path_name: str = ""
    display_name: str = ""
    vertices: list[VertexSimple] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    materials: list[ObjMaterialInfo] = field(default_factory=list)
    material_subsets: list[MaterialSubset] = field(default_factory=list)
    bounding_box_min: Vector = field(default_factory=Vector)
    bounding_box_max: Vector = field(default_factory=Vector)


def _records(path: str) -> Iterator[tuple[str, list[str]]]:
    """Yield (keyword, arguments) for every non-blank, non-comment line."""
    with open(path, encoding="utf-8", errors="replace") as stream:
        for line in stream:
            line = line.rstrip("\n")
            if not line or line.startswith("#"):
                continue
            tokens = line.split()
            if tokens:
                yield tokens[0], tokens[1:]


def _floats(args: list[str], count: int) -> list[float]:
    """Read up to count numbers; once one fails to parse, it and the rest are zero."""
    values: list[float] = []
    failed = False
    for position in range(count):
        value = 0.0
        if not failed and position < len(args):
            try:
                value = float(args[position])
            except ValueError:
                failed = True
        else:
            failed = True
        values.append(value)
    return values


def _leading_int(text: str) -> int:
    """Parse the integer at the start of text, ignoring anything after it."""
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"not an index: {text!r}")
    return int(match.group(1))


def _obj_index(text: str) -> int:
    """Convert a one-based OBJ index into an unsigned zero-based one."""
    return (_leading_int(text) - 1) & UINT32_MAX


def _face_corner(token: str) -> tuple[int, int, int]:
    pieces = token.split("/")
    vertex = _obj_index(pieces[0]) if pieces[0] else 0
    texture = _obj_index(pieces[1]) if len(pieces) > 1 and pieces[1] else UINT32_MAX
    normal = _obj_index(pieces[2]) if len(pieces) > 2 and pieces[2] else UINT32_MAX
    return vertex, texture, normal


def _close_last_subset(info: ObjInfo) -> None:
    if info.material_subsets:
        last = info.material_subsets[-1]
        last.index_count = len(info.vertex_indices) - last.index_start


def parse_obj(path: str | os.PathLike[str]) -> ObjInfo:
    """Read an OBJ file; triangles and quads are kept, other polygons are skipped."""
    path_str = os.fspath(path)
    separator = max(path_str.rfind("\\"), path_str.rfind("/"))
    info = ObjInfo(path_name=path_str[: separator + 1], object_name=path_str[separator + 1 :])
    stem, dot, _ = info.object_name.rpartition(".")
    info.display_name = stem if dot else info.object_name

    for keyword, args in _records(path_str):
        first = args[0] if args else ""
        if keyword == "mtllib":
            info.mat_name = first
        elif keyword == "usemtl":
            _close_last_subset(info)
            info.material_subsets.append(
                MaterialSubset(material_name=first, index_start=len(info.vertex_indices))
            )
        elif keyword in ("g", "o"):
            info.group_names.append(first)
            info.num_of_group += 1
        elif keyword == "v":
            info.vertices.append(Vector(*_floats(args, 3)))
        elif keyword == "vn":
            info.normals.append(Vector(*_floats(args, 3)))
        elif keyword == "vt":
            u, v = _floats(args, 2)
            info.uvs.append((u, v))
        elif keyword == "f":
            corners = [_face_corner(token) for token in args]
            if len(corners) == 4:
                order = (0, 1, 2, 0, 2, 3)
            elif len(corners) == 3:
                order = (0, 1, 2)
            else:
                continue
            for corner in order:
                vertex, texture, normal = corners[corner]
                info.vertex_indices.append(vertex)
                info.texture_indices.append(texture)
                info.normal_indices.append(normal)

    _close_last_subset(info)
    return info


def parse_material(obj_info: ObjInfo, render_data: StaticMeshRenderData) -> StaticMeshRenderData:
    """Copy the subsets and read the material library named by the OBJ file."""
    render_data.material_subsets = [
        dataclasses.replace(subset) for subset in obj_info.material_subsets
    ]
    current: ObjMaterialInfo | None = None

    for keyword, args in _records(obj_info.path_name + obj_info.mat_name):
        if keyword == "newmtl":
            current = ObjMaterialInfo(mtl_name=args[0] if args else "")
            render_data.materials.append(current)
            continue
        if keyword not in _MATERIAL_KEYWORDS:
            continue
        if current is None:
            raise ValueError(f"material property {keyword!r} before any newmtl")

        if keyword == "Kd":
            current.diffuse = Vector(*_floats(args, 3))
        elif keyword == "Ks":
            current.specular = Vector(*_floats(args, 3))
        elif keyword == "Ka":
            current.ambient = Vector(*_floats(args, 3))
        elif keyword == "Ke":
            current.emissive = Vector(*_floats(args, 3))
        elif keyword == "Ns":
            current.specular_scalar = _floats(args, 1)[0]
        elif keyword == "Ni":
            current.density_scalar = _floats(args, 1)[0]
        elif keyword in ("d", "Tr"):
            current.transparency_scalar = _floats(args, 1)[0]
            current.transparent = True
        elif keyword == "illum":
            try:
                current.illuminance_model = _leading_int(args[0]) & UINT32_MAX if args else 0
            except ValueError:
                current.illuminance_model = 0
        elif keyword == "map_Kd":
            current.diffuse_texture_name = args[0] if args else ""
            current.diffuse_texture_path = obj_info.path_name + current.diffuse_texture_name
            current.has_texture = True

    return render_data


def compute_bounding_box(vertices: list[VertexSimple]) -> tuple[Vector, Vector]:
    """Return the minimum and maximum corners enclosing the vertices."""
    low = [FLT_MAX, FLT_MAX, FLT_MAX]
    high = [-FLT_MAX, -FLT_MAX, -FLT_MAX]
    for vertex in vertices:
        for axis, value in enumerate((vertex.x, vertex.y, vertex.z)):
            low[axis] = min(low[axis], value)
            high[axis] = max(high[axis], value)
    return Vector(*low), Vector(*high)


def convert_to_static_mesh(raw: ObjInfo, render_data: StaticMeshRenderData) -> StaticMeshRenderData:
    """Build unique render vertices and an index list from raw OBJ data."""
    render_data.object_name = raw.object_name
    render_data.path_name = raw.path_name
    render_data.display_name = raw.display_name

    seen: dict[tuple[int, int, int], int] = {}
    corners = zip(raw.vertex_indices, raw.texture_indices, raw.normal_indices)
    for position, key in enumerate(corners):
        index = seen.get(key)
        if index is None:
            v_idx, t_idx, n_idx = key
            point = raw.vertices[v_idx]
            vertex = VertexSimple(x=point.x, y=point.y, z=point.z, r=1.0, g=1.0, b=1.0, a=1.0)
            if t_idx != UINT32_MAX and t_idx < len(raw.uvs):
                vertex.u = raw.uvs[t_idx][0]
                vertex.v = -raw.uvs[t_idx][1]
            if n_idx != UINT32_MAX and n_idx < len(raw.normals):
                normal = raw.normals[n_idx]
                vertex.nx, vertex.ny, vertex.nz = normal.x, normal.y, normal.z
            vertex.material_index = next(
                (
                    subset.material_index
                    for subset in render_data.material_subsets
                    if subset.index_start <= position < subset.index_start + subset.index_count
                ),
                0,
            )
            index = len(render_data.vertices)
            render_data.vertices.append(vertex)
            seen[key] = index
        render_data.indices.append(index)

    render_data.bounding_box_min, render_data.bounding_box_max = compute_bounding_box(
        render_data.vertices
    )
    return render_data


def combine_material_index(render_data: StaticMeshRenderData) -> None:
    """Point every subset at the first material whose name it uses."""
    for subset in render_data.material_subsets:
        match = next(
            (
                index
                for index, material in enumerate(render_data.materials)
                if material.mtl_name == subset.material_name
            ),
            None,
        )
        if match is not None:
            subset.material_index = match