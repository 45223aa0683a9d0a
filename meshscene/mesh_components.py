"""Mesh components: material slots, static mesh picking and simple shapes."""

from __future__ import annotations

from typing import Callable

from meshscene.actor import Actor
from meshscene.components import PrimitiveComponent, intersect_ray_triangle
from meshscene.core import BoundingBox, ObjectRegistry, Vector
from meshscene.material import Material, StaticMesh

SKY_SCROLL_STEP = 0.005

MeshProvider = Callable[[str], "StaticMesh | None"]


class MeshComponent(PrimitiveComponent):
    """A primitive with material slots that can be overridden per component."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        super().__init__(object_registry)
        self.override_materials: list[Material | None] = []

    def num_materials(self) -> int:
        return 0

    def get_material(self, index: int) -> Material | None:
        if 0 <= index < len(self.override_materials):
            return self.override_materials[index]
        return None

    def get_material_index(self, slot_name: str) -> int | None:
        """Return the index of a named slot; a plain mesh component has none."""
        return None

    def get_material_by_name(self, slot_name: str) -> Material | None:
        index = self.get_material_index(slot_name)
        if index is None or index < 0:
            return None
        return self.get_material(index)

    def material_slot_names(self) -> list[str]:
        return []

    def set_material(self, index: int, material: Material | None) -> None:
        """Override the material of a slot; out-of-range indices are ignored."""
        if 0 <= index < len(self.override_materials):
            self.override_materials[index] = material

    def set_material_by_name(self, slot_name: str, material: Material | None) -> None:
        index = self.get_material_index(slot_name)
        if index is None or index < 0:
            return
        self.set_material(index, material)

    def used_materials(self) -> list[Material]:
        materials = (self.get_material(index) for index in range(self.num_materials()))
        return [material for material in materials if material is not None]


class StaticMeshComponent(MeshComponent):
    """A mesh component that draws and picks a static mesh asset."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        super().__init__(object_registry)
        self.static_mesh: StaticMesh | None = None
        self.selected_sub_mesh_index = -1

    def num_materials(self) -> int:
        if self.static_mesh is None:
            return 0
        return len(self.static_mesh.materials)

    def get_material(self, index: int) -> Material | None:
        """Return the override for a slot, else the mesh's own material."""
        mesh = self.static_mesh
        if mesh is None:
            return None
        if 0 <= index < len(self.override_materials):
            override = self.override_materials[index]
            if override is not None:
                return override
        if 0 <= index < len(mesh.materials):
            return mesh.materials[index].material
        return None

    def get_material_index(self, slot_name: str) -> int | None:
        if self.static_mesh is None:
            return None
        return self.static_mesh.get_material_index(slot_name)

    def material_slot_names(self) -> list[str]:
        if self.static_mesh is None:
            return []
        return [slot.slot_name for slot in self.static_mesh.materials]

    def used_materials(self) -> list[Material | None]:
        """The mesh's materials with this component's overrides applied."""
        if self.static_mesh is None:
            return []
        materials = self.static_mesh.used_materials()
        for index, override in enumerate(self.override_materials[: self.num_materials()]):
            if override is not None:
                materials[index] = override
        return materials

    def set_static_mesh(self, mesh: StaticMesh) -> None:
        """Use a mesh, resize the override slots to match and adopt its bounds."""
        self.static_mesh = mesh
        count = len(mesh.materials)
        self.override_materials = (self.override_materials + [None] * count)[:count]
        render_data = mesh.render_data
        self.aabb = BoundingBox(render_data.bounding_box_min, render_data.bounding_box_max)

    def check_ray_intersection(
        self, ray_origin: Vector, ray_direction: Vector
    ) -> tuple[int, float | None]:
        """Count the mesh triangles the ray hits and the nearest hit distance."""
        if self.aabb.intersect(ray_origin, ray_direction) is None:
            return 0, None
        if self.static_mesh is None or self.static_mesh.render_data is None:
            return 0, None
        render_data = self.static_mesh.render_data
        vertices = render_data.vertices
        if not vertices:
            return 0, None

        indices = render_data.indices
        if indices:
            triangles = (
                (indices[start], indices[start + 2], indices[start + 1])
                for start in range(0, len(indices) - len(indices) % 3, 3)
            )
        else:
            triangles = (
                (start, start + 1, start + 2)
                for start in range(0, len(vertices) - len(vertices) % 3, 3)
            )

        hits = 0
        nearest: float | None = None
        for i0, i1, i2 in triangles:
            distance = intersect_ray_triangle(
                ray_origin,
                ray_direction,
                vertices[i0].position,
                vertices[i1].position,
                vertices[i2].position,
            )
            if distance is None:
                continue
            hits += 1
            if nearest is None or distance < nearest:
                nearest = distance
        return hits, nearest


def _unit_box() -> BoundingBox:
    return BoundingBox(Vector(-1.0, -1.0, -1.0), Vector(1.0, 1.0, 1.0))


class CubeComponent(StaticMeshComponent):
    """A cube shape; loads its mesh through a provider when one is given."""

    default_mesh_path = "Assets/helloBlender.obj"

    def __init__(
        self,
        object_registry: ObjectRegistry | None = None,
        mesh_provider: MeshProvider | None = None,
    ) -> None:
        super().__init__(object_registry)
        self.type_name = type(self).__name__
        self.aabb = _unit_box()
        self.mesh_provider = mesh_provider

    def initialize_component(self) -> None:
        super().initialize_component()
        if self.mesh_provider is None:
            return
        mesh = self.mesh_provider(self.default_mesh_path)
        if mesh is not None:
            self.set_static_mesh(mesh)


class SphereComponent(StaticMeshComponent):
    """A sphere shape with unit bounds."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        super().__init__(object_registry)
        self.type_name = type(self).__name__
        self.aabb = _unit_box()


class SkySphereComponent(StaticMeshComponent):
    """A sky sphere whose texture coordinates scroll a little every tick."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        super().__init__(object_registry)
        self.type_name = type(self).__name__
        self.u_offset = 0.0
        self.v_offset = 0.0

    def tick_component(self, delta_time: float) -> None:
        self.u_offset += SKY_SCROLL_STEP
        self.v_offset += SKY_SCROLL_STEP
        super().tick_component(delta_time)


class StaticMeshActor(Actor):
    """An actor whose root is a single static mesh component."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        super().__init__(object_registry)
        self.static_mesh_component = self.add_component(StaticMeshComponent)
        self.root_component = self.static_mesh_component