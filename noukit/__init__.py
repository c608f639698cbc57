"""Transforms, entities, cameras, meshes, keyboard state, enum tables, serialisation and glTF geometry loading."""

__version__ = "0.1.0"