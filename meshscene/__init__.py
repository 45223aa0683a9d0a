"""Scene engine core: actors, components, OBJ static meshes and editor helpers."""

__version__ = "0.1.0"