"""A light component with a colour, a radius and a billboard icon."""

from __future__ import annotations

from meshscene.components import PrimitiveComponent, SceneComponent
from meshscene.core import BoundingBox, ObjectRegistry, Vector, Vector4

LIGHT_ICON_PATH = "Assets/Texture/spotLight.png"


class LightComponent(SceneComponent):
    """A light source picked by a thin box around its icon."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        super().__init__(object_registry)
        self.billboard = PrimitiveComponent(object_registry=self.object_registry)
        self.billboard_texture = LIGHT_ICON_PATH
        self.billboard.initialize_component()
        self.aabb = BoundingBox(Vector(-1.0, -1.0, -0.1), Vector(1.0, 1.0, 0.1))
        self.color = Vector4(1.0, 1.0, 1.0, 1.0)
        self.radius = 5.0

    def tick_component(self, delta_time: float) -> None:
        """Tick and keep the icon on the light's world position."""
        super().tick_component(delta_time)
        self.billboard.tick_component(delta_time)
        self.billboard.relative_location = self.world_location()

    def check_ray_intersection(
        self, ray_origin: Vector, ray_direction: Vector
    ) -> tuple[int, float | None]:
        distance = self.aabb.intersect(ray_origin, ray_direction)
        if distance is None:
            return 0, None
        return 1, distance