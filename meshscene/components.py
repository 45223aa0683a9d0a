"""Actor components: lifecycle, scene transforms and primitive picking."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar

from meshscene.core import BoundingBox, EndPlayReason, EngineObject, ObjectRegistry, Vector


@dataclass(frozen=True)
class _Quat:
    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    IDENTITY: ClassVar[_Quat]

    @classmethod
    def from_euler(cls, euler: Vector) -> _Quat:
        """Build from roll (x), pitch (y) and yaw (z) in degrees."""
        roll, pitch, yaw = (math.radians(angle) * 0.5 for angle in euler)
        cr, sr = math.cos(roll), math.sin(roll)
        cp, sp = math.cos(pitch), math.sin(pitch)
        cy, sy = math.cos(yaw), math.sin(yaw)
        return cls(
            w=cr * cp * cy + sr * sp * sy,
            x=sr * cp * cy - cr * sp * sy,
            y=cr * sp * cy + sr * cp * sy,
            z=cr * cp * sy - sr * sp * cy,
        )

    def to_euler(self) -> Vector:
        w, x, y, z = self.w, self.x, self.y, self.z
        roll = math.atan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))
        sin_pitch = max(-1.0, min(1.0, 2.0 * (w * y - z * x)))
        pitch = math.asin(sin_pitch)
        yaw = math.atan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))
        return Vector(math.degrees(roll), math.degrees(pitch), math.degrees(yaw))

    def rotate(self, v: Vector) -> Vector:
        axis = Vector(self.x, self.y, self.z)
        t = axis.cross(v) * 2.0
        return v + t * self.w + axis.cross(t)


_Quat.IDENTITY = _Quat()


class ActorComponent(EngineObject):
    """A component owned by an actor, with an initialize/play/destroy lifecycle."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        super().__init__(object_registry)
        self.owner: Any = None
        self.has_been_initialized = False
        self.has_begun_play = False
        self.is_being_destroyed = False
        self.is_active = False
        self.auto_active = False

    def initialize_component(self) -> None:
        if self.has_been_initialized:
            raise RuntimeError(f"{self.name} is already initialized")
        self.has_been_initialized = True

    def uninitialize_component(self) -> None:
        if not self.has_been_initialized:
            raise RuntimeError(f"{self.name} was never initialized")
        self.has_been_initialized = False

    def begin_play(self) -> None:
        self.has_begun_play = True

    def tick_component(self, delta_time: float) -> None:
        """Advance the component by one frame; the base component does nothing."""

    def on_component_destroyed(self) -> None:
        """Hook called once the component has been torn down."""

    def end_play(self, reason: EndPlayReason) -> None:
        if not self.has_begun_play:
            raise RuntimeError(f"{self.name} has not begun play")
        self.has_begun_play = False

    def destroy_component(self) -> None:
        """Detach from the owner, end play, uninitialize and queue for removal."""
        if self.is_being_destroyed:
            return
        self.is_being_destroyed = True

        owner = self.owner
        if owner is not None:
            owner.remove_owned_component(self)
            if owner.root_component is self:
                owner.set_root_component(None)

        if self.has_begun_play:
            self.end_play(EndPlayReason.DESTROYED)
        if self.has_been_initialized:
            self.uninitialize_component()
        self.on_component_destroyed()
        self.object_registry.mark_remove(self)

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False


class SceneComponent(ActorComponent):
    """A component with a location, rotation and scale, attachable to a parent."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        super().__init__(object_registry)
        self.relative_location = Vector(0.0, 0.0, 0.0)
        self.relative_rotation = Vector(0.0, 0.0, 0.0)
        self.quat_rotation = _Quat.IDENTITY
        self.relative_scale = Vector(1.0, 1.0, 1.0)
        self.attach_parent: SceneComponent | None = None
        self.attach_children: list[SceneComponent] = []

    def check_ray_intersection(
        self, ray_origin: Vector, ray_direction: Vector
    ) -> tuple[int, float | None]:
        """Return the hit count and nearest hit distance; plain scene components have none."""
        return 0, None

    def forward_vector(self) -> Vector:
        return self.quat_rotation.rotate(Vector.FORWARD)

    def right_vector(self) -> Vector:
        return self.quat_rotation.rotate(Vector.RIGHT)

    def up_vector(self) -> Vector:
        return self.quat_rotation.rotate(Vector.UP)

    def add_location(self, delta: Vector) -> None:
        self.relative_location = self.relative_location + delta

    def add_rotation(self, delta: Vector) -> None:
        self.relative_rotation = self.relative_rotation + delta

    def add_scale(self, delta: Vector) -> None:
        self.relative_scale = self.relative_scale + delta

    @property
    def local_rotation(self) -> Vector:
        """Euler angles in degrees derived from the current quaternion."""
        return self.quat_rotation.to_euler()

    def world_rotation(self) -> Vector:
        if self.attach_parent is not None:
            return self.attach_parent.local_rotation + self.local_rotation
        return self.local_rotation

    def world_scale(self) -> Vector:
        if self.attach_parent is not None:
            return self.attach_parent.world_scale() + self.relative_scale
        return self.relative_scale

    def world_location(self) -> Vector:
        if self.attach_parent is not None:
            return self.attach_parent.world_location() + self.relative_location
        return self.relative_location

    def set_rotation(self, rotation: Vector) -> None:
        """Set the rotation from Euler angles in degrees."""
        self.relative_rotation = rotation
        self.quat_rotation = _Quat.from_euler(rotation)

    def setup_attachment(self, parent: SceneComponent | None) -> None:
        """Attach to a parent unless it is invalid or already attached elsewhere."""
        if (
            parent is not self.attach_parent
            and parent is not self
            and parent is not None
            and (
                self.attach_parent is None
                or all(child is not self for child in self.attach_parent.attach_children)
            )
        ):
            self.attach_parent = parent
            if all(child is not self for child in parent.attach_children):
                parent.attach_children.append(self)


class PrimitiveComponent(SceneComponent):
    """A scene component with bounds and a type tag."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        super().__init__(object_registry)
        self.aabb = BoundingBox()
        self.type_name = ""

    def check_ray_intersection(
        self, ray_origin: Vector, ray_direction: Vector
    ) -> tuple[int, float | None]:
        return 0, None


def intersect_ray_triangle(
    ray_origin: Vector, ray_direction: Vector, v0: Vector, v1: Vector, v2: Vector
) -> float | None:
    """Return the distance along the ray to the triangle, or None if it misses."""
    epsilon = 1e-6
    edge1 = v1 - v0
    edge2 = v2 - v0
    h = ray_direction.cross(edge2)
    a = edge1.dot(h)
    if abs(a) < epsilon:
        return None

    f = 1.0 / a
    s = ray_origin - v0
    u = f * s.dot(h)
    if u < 0.0 or u > 1.0:
        return None

    q = s.cross(edge1)
    v = f * ray_direction.dot(q)
    if v < 0.0 or u + v > 1.0:
        return None

    t = f * edge2.dot(q)
    if t > epsilon:
        return t
    return None