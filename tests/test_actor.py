import pytest

from meshscene.actor import Actor
from meshscene.components import ActorComponent, SceneComponent
from meshscene.core import EndPlayReason, ObjectRegistry, Vector


class RecordingComponent(ActorComponent):
    def __init__(self, object_registry=None):
        super().__init__(object_registry)
        self.ticks = []

    def tick_component(self, delta_time):
        self.ticks.append(delta_time)


@pytest.fixture
def actor():
    return Actor(ObjectRegistry())


def test_first_scene_component_becomes_root(actor):
    root = actor.add_component(SceneComponent)
    child = actor.add_component(SceneComponent)
    assert actor.root_component is root
    assert child.attach_parent is root
    assert child in root.attach_children
    assert root.owner is actor and child.owner is actor


def test_added_component_is_initialized(actor):
    component = actor.add_component(ActorComponent)
    assert component.has_been_initialized
    assert actor.components == (component,)
    assert actor.root_component is None


def test_get_component_by_class(actor):
    plain = actor.add_component(ActorComponent)
    scene = actor.add_component(SceneComponent)
    assert actor.get_component_by_class(SceneComponent) is scene
    assert actor.get_component_by_class(ActorComponent) is plain
    assert actor.get_component_by_class(RecordingComponent) is None


def test_begin_play_and_tick(actor):
    component = actor.add_component(RecordingComponent)
    actor.begin_play()
    actor.tick(0.5)
    assert component.has_begun_play
    assert component.ticks == [0.5]


def test_end_play_ends_and_uninitializes(actor):
    component = actor.add_component(SceneComponent)
    actor.begin_play()
    actor.end_play(EndPlayReason.QUIT)
    assert not component.has_begun_play
    assert not component.has_been_initialized


def test_destroyed_tolerates_components_not_playing(actor):
    component = actor.add_component(ActorComponent)
    actor.destroyed()
    assert not component.has_been_initialized


def test_destroy_without_world_fails(actor):
    assert actor.destroy() is False
    assert not actor.is_being_destroyed


def test_remove_owned_component(actor):
    component = actor.add_component(ActorComponent)
    actor.remove_owned_component(component)
    assert actor.components == ()


def test_initialize_components_activates_auto_active(actor):
    component = actor.add_component(ActorComponent)
    component.uninitialize_component()
    component.auto_active = True
    actor.initialize_components()
    assert component.is_active
    assert component.has_been_initialized


def test_uninitialize_components(actor):
    component = actor.add_component(ActorComponent)
    actor.uninitialize_components()
    assert not component.has_been_initialized


def test_set_root_component_refuses_foreign(actor):
    other = Actor(actor.object_registry)
    foreign = other.add_component(SceneComponent)
    assert actor.set_root_component(foreign) is False
    assert actor.root_component is None


def test_set_root_component_reattaches_old_root(actor):
    old_root = actor.add_component(SceneComponent)
    new_root = SceneComponent(actor.object_registry)
    new_root.owner = actor
    assert actor.set_root_component(new_root) is True
    assert actor.root_component is new_root
    assert old_root.attach_parent is new_root


def test_set_root_component_to_none(actor):
    actor.add_component(SceneComponent)
    assert actor.set_root_component(None) is True
    assert actor.root_component is None


def test_transform_setters_need_root(actor):
    target = Vector(1.0, 2.0, 3.0)
    assert actor.set_actor_location(target) is False
    assert actor.set_actor_scale(target) is False
    assert actor.set_actor_rotation(target) is False
    assert actor.actor_location == Vector.ZERO
    assert actor.actor_forward_vector == Vector.FORWARD


def test_transform_setters_with_root(actor):
    actor.add_component(SceneComponent)
    location = Vector(1.0, 2.0, 3.0)
    scale = Vector(2.0, 2.0, 2.0)
    assert actor.set_actor_location(location) is True
    assert actor.set_actor_scale(scale) is True
    assert actor.set_actor_rotation(Vector(0.0, 0.0, 0.0)) is True
    assert actor.actor_location == location
    assert actor.actor_scale == scale


def test_default_label_is_class_name_plus_uuid(actor):
    assert actor.default_actor_label() == "Actor"
    assert actor.get_actor_label() == "Actor" + str(actor.uuid)


def test_set_label_appends_uuid(actor):
    actor.set_actor_label("Crate")
    assert actor.get_actor_label() == f"Crate_{actor.uuid}"


def test_set_label_to_current_keeps_it(actor):
    current = actor.get_actor_label()
    actor.set_actor_label(current)
    assert actor.get_actor_label() == current