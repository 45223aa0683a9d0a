"""The editor camera: a scene component moved and turned by fly controls."""

from __future__ import annotations

from meshscene.components import SceneComponent
from meshscene.core import ObjectRegistry, Vector

PITCH_LIMIT = 90.0


class CameraComponent(SceneComponent):
    """A perspective camera with fly-style movement scaled by a speed factor."""

    def __init__(
        self,
        object_registry: ObjectRegistry | None = None,
        speed_scalar: float = 1.0,
    ) -> None:
        super().__init__(object_registry)
        self.speed_scalar = speed_scalar
        self.mouse_speed = 0.25
        self.right_mouse_down = False
        self.fov = 60.0
        self.near_clip = 0.1
        self.far_clip = 1000.0

    @property
    def is_camera_mode(self) -> bool:
        return self.right_mouse_down

    def initialize_component(self) -> None:
        super().initialize_component()
        self.relative_location = Vector(0.0, 0.0, 0.5)
        self.fov = 60.0

    def tick_component(self, delta_time: float) -> None:
        """Tick and resynchronise the orientation with the euler rotation."""
        super().tick_component(delta_time)
        self.set_rotation(self.relative_rotation)

    def move_forward(self, value: float) -> None:
        self.relative_location = (
            self.relative_location + self.forward_vector() * self.speed_scalar * value
        )

    def move_right(self, value: float) -> None:
        self.relative_location = (
            self.relative_location + self.right_vector() * self.speed_scalar * value
        )

    def move_up(self, value: float) -> None:
        loc = self.relative_location
        self.relative_location = Vector(loc.x, loc.y, loc.z + value * self.speed_scalar)

    def rotate_yaw(self, value: float) -> None:
        rot = self.relative_rotation
        self.relative_rotation = Vector(rot.x, rot.y, rot.z + value * self.speed_scalar)

    def rotate_pitch(self, value: float) -> None:
        """Add to the pitch, clamped to straight up or straight down."""
        rot = self.relative_rotation
        pitch = min(max(rot.y + value, -PITCH_LIMIT), PITCH_LIMIT)
        self.relative_rotation = Vector(rot.x, pitch, rot.z)