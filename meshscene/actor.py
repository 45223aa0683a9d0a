"""Actors: owners of components placed in a world."""

from __future__ import annotations

from typing import Any, TypeVar

from meshscene.components import ActorComponent, SceneComponent
from meshscene.core import EndPlayReason, EngineObject, ObjectRegistry, Vector

_ComponentT = TypeVar("_ComponentT", bound=ActorComponent)


class Actor(EngineObject):
    """An object in a world that owns a set of components and a root transform."""

    def __init__(self, object_registry: ObjectRegistry | None = None) -> None:
        super().__init__(object_registry)
        self.root_component: SceneComponent | None = None
        self.owner: Actor | None = None
        # The world or level that spawned this actor.
        self.world: Any = None
        self.is_being_destroyed = False
        self.actor_label = ""
        self._owned_components: dict[ActorComponent, None] = {}

    @property
    def components(self) -> tuple[ActorComponent, ...]:
        """The owned components, in the order they were added."""
        return tuple(self._owned_components)

    def begin_play(self) -> None:
        for component in self.components:
            component.begin_play()

    def tick(self, delta_time: float) -> None:
        for component in self.components:
            component.tick_component(delta_time)

    def destroyed(self) -> None:
        """Called when the actor is removed from its world."""
        self.end_play(EndPlayReason.DESTROYED)

    def end_play(self, reason: EndPlayReason) -> None:
        for component in self.components:
            if component.has_begun_play:
                component.end_play(reason)
        self.uninitialize_components()

    def destroy(self) -> bool:
        """Remove the actor from its world; return whether it is being destroyed."""
        if not self.is_being_destroyed and self.world is not None:
            self.world.destroy_actor(self)
            self.is_being_destroyed = True
        return self.is_being_destroyed

    def add_component(self, component_type: type[_ComponentT]) -> _ComponentT:
        """Create, attach and initialize a new component of the given type."""
        component = component_type(object_registry=self.object_registry)
        self._owned_components[component] = None
        component.owner = self
        if isinstance(component, SceneComponent):
            if self.root_component is None:
                self.root_component = component
            else:
                component.setup_attachment(self.root_component)
        component.initialize_component()
        return component

    def remove_owned_component(self, component: ActorComponent) -> None:
        self._owned_components.pop(component, None)

    def get_component_by_class(
        self, component_type: type[_ComponentT]
    ) -> _ComponentT | None:
        return next(
            (c for c in self._owned_components if isinstance(c, component_type)), None
        )

    def initialize_components(self) -> None:
        for component in self.components:
            if component.auto_active and not component.is_active:
                component.activate()
            if not component.has_been_initialized:
                component.initialize_component()

    def uninitialize_components(self) -> None:
        for component in self.components:
            if component.has_been_initialized:
                component.uninitialize_component()

    def set_root_component(self, component: SceneComponent | None) -> bool:
        """Make an owned component (or nothing) the root; refuse foreign components."""
        if component is not None and component.owner is not self:
            return False
        if self.root_component is not component:
            old_root = self.root_component
            self.root_component = component
            if old_root is not None:
                old_root.setup_attachment(component)
        return True

    @property
    def actor_location(self) -> Vector:
        root = self.root_component
        return root.world_location() if root is not None else Vector.ZERO

    @property
    def actor_rotation(self) -> Vector:
        root = self.root_component
        return root.world_rotation() if root is not None else Vector.ZERO

    @property
    def actor_scale(self) -> Vector:
        root = self.root_component
        return root.world_scale() if root is not None else Vector.ZERO

    @property
    def actor_forward_vector(self) -> Vector:
        root = self.root_component
        return root.forward_vector() if root is not None else Vector.FORWARD

    @property
    def actor_right_vector(self) -> Vector:
        root = self.root_component
        return root.right_vector() if root is not None else Vector.RIGHT

    @property
    def actor_up_vector(self) -> Vector:
        root = self.root_component
        return root.up_vector() if root is not None else Vector.UP

    def set_actor_location(self, location: Vector) -> bool:
        if self.root_component is None:
            return False
        self.root_component.relative_location = location
        return True

    def set_actor_rotation(self, rotation: Vector) -> bool:
        if self.root_component is None:
            return False
        self.root_component.set_rotation(rotation)
        return True

    def set_actor_scale(self, scale: Vector) -> bool:
        if self.root_component is None:
            return False
        self.root_component.relative_scale = scale
        return True

    def default_actor_label(self) -> str:
        return type(self).__name__

    def get_actor_label(self) -> str:
        """Return the label, defaulting to the class name followed by the id."""
        if not self.actor_label:
            self.actor_label = self.default_actor_label() + str(self.uuid)
        return self.actor_label

    def set_actor_label(self, label: str) -> None:
        """Set a new label, suffixed with the id; the current label is left alone."""
        if label != self.get_actor_label():
            self.actor_label = f"{label}_{self.uuid}"