[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "noukit"
version = "0.1.0"
description = "Scene-graph transforms, cameras, meshes, keyboard state and glTF geometry loading for small 3D applications"
requires-python = ">=3.10"
keywords = ["3d", "gltf", "glb", "transform", "camera", "mesh", "entity", "scene graph"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["noukit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
