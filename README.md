# meshscene

A compact scene engine core in plain Python, with no third-party dependencies.

## What is in it

- `meshscene.core`: `Vector`, `Vector4`, `BoundingBox` (with ray `intersect`),
  `EndPlayReason`, `ObjectRegistry` (ids and deferred removal) and `EngineObject`,
  the base of every engine object.
- `meshscene.components`: `ActorComponent` (initialize / begin play / tick /
  end play / destroy lifecycle), `SceneComponent` (location, rotation, scale,
  parent attachment, world-space values, forward/right/up vectors),
  `PrimitiveComponent`, and `intersect_ray_triangle`.
- `meshscene.actor`: `Actor`, which owns components, has a root component,
  exposes actor location/rotation/scale and keeps an editor label
  (`get_actor_label`, `set_actor_label`).
- `meshscene.material`: `ObjMaterialInfo`, `Material`, `MaterialRegistry` (one
  material per name), `StaticMaterial` and `StaticMesh`.
- `meshscene.obj_loader`: `parse_obj`, `parse_material`, `combine_material_index`,
  `convert_to_static_mesh` and `compute_bounding_box`, which turn Wavefront
  OBJ/MTL files into `StaticMeshRenderData` made of `VertexSimple` vertices and
  `MaterialSubset` runs. Triangles and quads are read; other polygons are skipped.
- `meshscene.mesh_binary`: `save_static_mesh` and `load_static_mesh`, a
  little-endian binary file format for `StaticMeshRenderData`. A truncated file
  raises `ValueError`.
- `meshscene.mesh_components`: `MeshComponent`, `StaticMeshComponent` (material
  overrides and ray-against-triangle picking), `CubeComponent`, `SphereComponent`,
  `SkySphereComponent` and `StaticMeshActor`.
- `meshscene.camera`: `CameraComponent` with fly controls (`move_forward`,
  `move_right`, `move_up`, `rotate_yaw`, `rotate_pitch`), scaled by `speed_scalar`.
- `meshscene.light`: `LightComponent` with a colour, a radius and a thin picking box.
- `meshscene.text`: `TextComponent` lays text out as glyph-atlas quads;
  `TextUUID` shows an object's id and is never picked.
- `meshscene.viewport`: `Viewport`, `ViewScreenLocation`, `Rect` and
  `ViewportRect` for a four-way split screen.
- `meshscene.console`: `Console`, `LogLevel`, `LogEntry` and `StatOverlay`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example: load an OBJ file and pick it with a ray

```python
from meshscene.core import Vector
from meshscene.material import MaterialRegistry, StaticMesh
from meshscene.mesh_binary import load_static_mesh, save_static_mesh
from meshscene.mesh_components import StaticMeshActor
from meshscene.obj_loader import (
    StaticMeshRenderData,
    combine_material_index,
    convert_to_static_mesh,
    parse_material,
    parse_obj,
)

info = parse_obj("assets/crate.obj")
render_data = StaticMeshRenderData()
if info.material_subsets:
    parse_material(info, render_data)   # reads the file named by "mtllib"
    combine_material_index(render_data)
convert_to_static_mesh(info, render_data)

save_static_mesh("assets/crate.obj.bin", render_data)
render_data = load_static_mesh("assets/crate.obj.bin")

mesh = StaticMesh()
mesh.set_data(render_data, MaterialRegistry())

actor = StaticMeshActor()
actor.static_mesh_component.set_static_mesh(mesh)

hits, distance = actor.static_mesh_component.check_ray_intersection(
    Vector(0.0, 0.0, 10.0), Vector(0.0, 0.0, -1.0)
)
print(hits, distance)   # distance is None when nothing is hit
```

## Example: split-screen viewports

```python
from meshscene.viewport import Viewport, ViewScreenLocation

view = Viewport(ViewScreenLocation.TOP_RIGHT)
view.resize_to_screen(1920, 1080)
print(view.viewport)   # top_left_x=960.0, top_left_y=0.0, width=960.0, height=540.0
```

## Example: the console

```python
from meshscene.console import Console

console = Console()
console.submit("help")
console.submit("stat fps")
for entry in console.visible_entries("stat"):
    print(entry.level.name, entry.message)
```

The console understands `clear`, `help`, `stat fps`, `stat memory` and
`stat none`; any other command is logged as an error. The filter passed to
`visible_entries` is a comma-separated, case-insensitive list of terms; a term
starting with `-` excludes matching entries.

## What it does not do

- There is no world or level container. Actors are created directly; nothing
  spawns, ticks or releases them as a group, and `Actor.destroy()` only acts on
  an actor whose `world` attribute has been set to an object with a
  `destroy_actor` method.
- There is no mesh asset manager. Reading an OBJ file, writing or reusing its
  binary copy, and sharing meshes by name are left to the caller, as in the
  example above.
- There are no transform gizmo handles.
- Nothing is drawn: there is no renderer, window, input handling or texture
  loading. Components hold the data a renderer would use.