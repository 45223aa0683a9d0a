[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meshscene"
version = "0.1.0"
description = "A small scene engine core: actors, components, OBJ/MTL mesh loading, binary mesh caching and editor helpers."
requires-python = ">=3.10"
dependencies = []
keywords = ["3d", "scene-graph", "obj", "mtl", "mesh", "actor", "component", "ray-picking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["meshscene"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
