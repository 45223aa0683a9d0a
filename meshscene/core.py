"""Basic value types, object lifetime tracking and the engine object base."""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Iterator


@dataclass(frozen=True)
class Vector:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    ZERO: ClassVar[Vector]
    FORWARD: ClassVar[Vector]
    RIGHT: ClassVar[Vector]
    UP: ClassVar[Vector]

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vector:
        """Return the unit vector in the same direction; the zero vector stays zero."""
        length = self.magnitude()
        if length == 0.0:
            return Vector()
        return self / length


Vector.ZERO = Vector(0.0, 0.0, 0.0)
Vector.FORWARD = Vector(1.0, 0.0, 0.0)
Vector.RIGHT = Vector(0.0, 1.0, 0.0)
Vector.UP = Vector(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Vector4:
    """An immutable four-component vector, used for colours and clip positions."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield from (self.x, self.y, self.z, self.w)

    def __truediv__(self, scalar: float) -> Vector4:
        return Vector4(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)


@dataclass
class BoundingBox:
    """An axis-aligned box given by its minimum and maximum corners."""

    min: Vector = field(default_factory=Vector)
    max: Vector = field(default_factory=Vector)

    def intersect(self, ray_origin: Vector, ray_direction: Vector) -> float | None:
        """Return the distance along the ray to the box, or None if it misses."""
        t_near, t_far = -math.inf, math.inf
        for origin, direction, low, high in zip(ray_origin, ray_direction, self.min, self.max):
            if abs(direction) < 1e-8:
                if origin < low or origin > high:
                    return None
                continue
            t1 = (low - origin) / direction
            t2 = (high - origin) / direction
            if t1 > t2:
                t1, t2 = t2, t1
            t_near = max(t_near, t1)
            t_far = min(t_far, t2)
            if t_near > t_far:
                return None
        if t_far < 0.0:
            return None
        return max(t_near, 0.0)


class EndPlayReason(IntEnum):
    """Why an actor or component stops playing."""

    DESTROYED = 0
    WORLD_TRANSITION = 1
    QUIT = 2


class ObjectRegistry:
    """Tracks live engine objects, hands out ids and defers their removal."""

    def __init__(self) -> None:
        self._uuids = itertools.count(1)
        self._objects: dict[int, tuple[int, object]] = {}
        self._pending: list[object] = []

    def register(self, obj: object) -> int:
        """Track an object and return its unique id."""
        key = id(obj)
        if key in self._objects:
            return self._objects[key][0]
        uuid = next(self._uuids)
        self._objects[key] = (uuid, obj)
        return uuid

    def mark_remove(self, obj: object) -> None:
        """Queue an object for removal on the next pending-destroy pass."""
        if all(pending is not obj for pending in self._pending):
            self._pending.append(obj)

    def process_pending_destroy(self) -> list[object]:
        """Drop every queued object and return them in queue order."""
        removed = list(self._pending)
        for obj in removed:
            self._objects.pop(id(obj), None)
        self._pending.clear()
        return removed

    @property
    def pending(self) -> tuple[object, ...]:
        return tuple(self._pending)

    def __contains__(self, obj: object) -> bool:
        return id(obj) in self._objects

    def __len__(self) -> int:
        return len(self._objects)


_default_registry = ObjectRegistry()


class EngineObject:
    """Base of every engine object: a registered id, a name and bounds."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        self.object_registry = (
            object_registry if object_registry is not None else _default_registry
        )
        self.uuid = self.object_registry.register(self)
        self.name = type(self).__name__
        self.bounding_box = BoundingBox()