"""Materials, the shared material registry and static mesh assets."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Iterator

from meshscene.core import EngineObject, ObjectRegistry, Vector


@dataclass
class ObjMaterialInfo:
    """Surface properties read from a material library entry."""

    mtl_name: str = ""
    has_texture: bool = False
    transparent: bool = False
    diffuse: Vector = field(default_factory=Vector)
    specular: Vector = field(default_factory=Vector)
    ambient: Vector = field(default_factory=Vector)
    emissive: Vector = field(default_factory=Vector)
    specular_scalar: float = 0.0
    density_scalar: float = 0.0
    transparency_scalar: float = 0.0
    illuminance_model: int = 0
    diffuse_texture_name: str = ""
    diffuse_texture_path: str = ""
    ambient_texture_name: str = ""
    ambient_texture_path: str = ""
    specular_texture_name: str = ""
    specular_texture_path: str = ""
    bump_texture_name: str = ""
    bump_texture_path: str = ""
    alpha_texture_name: str = ""
    alpha_texture_path: str = ""


class Material(EngineObject):
    """A material object holding its own copy of the surface properties."""

    def __init__(
        self,
        info: ObjMaterialInfo | None = None,
        object_registry: ObjectRegistry | None = None,
    ) -> None:
        super().__init__(object_registry)
        self.info = dataclasses.replace(info) if info is not None else ObjMaterialInfo()

    def set_transparency(self, value: float) -> None:
        """Set the opacity; anything below one marks the material transparent."""
        self.info.transparency_scalar = value
        self.info.transparent = value < 1.0


class MaterialRegistry:
    """Shares one material object per material name."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        self._object_registry = object_registry
        self._materials: dict[str, Material] = {}

    def create_material(self, info: ObjMaterialInfo) -> Material:
        """Return the material named by the info, creating it on first use."""
        existing = self._materials.get(info.mtl_name)
        if existing is not None:
            return existing
        material = Material(info, self._object_registry)
        self._materials[info.mtl_name] = material
        return material

    def get_material(self, name: str) -> Material | None:
        return self._materials.get(name)

    def __len__(self) -> int:
        return len(self._materials)

    def __contains__(self, name: object) -> bool:
        return name in self._materials

    def __iter__(self) -> Iterator[str]:
        return iter(self._materials)


@dataclass
class StaticMaterial:
    """A material slot on a static mesh."""

    material: Material | None = None
    slot_name: str = ""


class StaticMesh(EngineObject):
    """A static mesh asset: render data plus its material slots."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        super().__init__(object_registry)
        self.render_data: Any = None
        self.materials: list[StaticMaterial] = []

    def get_material_index(self, slot_name: str) -> int | None:
        """Return the index of the named slot, or None if there is none."""
        return next(
            (index for index, slot in enumerate(self.materials) if slot.slot_name == slot_name),
            None,
        )

    def used_materials(self) -> list[Material | None]:
        return [slot.material for slot in self.materials]

    def set_data(self, render_data: Any, registry: MaterialRegistry) -> None:
        """Attach render data and create a slot for each of its materials.

        Render data without vertices is stored but gets no material slots.
        """
        self.render_data = render_data
        if not render_data.vertices:
            return
        for info in render_data.materials:
            self.materials.append(
                StaticMaterial(registry.create_material(info), info.mtl_name)
            )