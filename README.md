# noukit

Building blocks for small 3D applications, built on numpy. Matrices act on column vectors, and quaternions are stored as `(w, x, y, z)`.

## Modules

- `noukit.transform`: `Transform` holds a position (`pos`), a `scale` and a `rotation` quaternion. It can also have a parent, set with `set_parent()`. `do_fk()` computes `global_matrix` for a transform and all its descendants. `recompute_global()` computes it up through the ancestors and returns it. `normal_matrix()` gives the 3x3 matrix that transforms normals. The helpers `translate_matrix()`, `scale_matrix()` and `quat_to_matrix()` build 4x4 matrices.
- `noukit.entity`: `Registry` stores at most one component of each type for each entity id. `Entity` owns a `Transform` and has `add()`, `get()`, `remove()` and `destroy()`. An `Entity` can also be used as a context manager, which destroys it on exit.
- `noukit.camera`: `Camera` is a component whose view matrix is the inverse of its owner's transform. It has `ortho()` and `perspective()` (field of view in degrees). `ortho_matrix()` and `perspective_matrix()` build the projections on their own. `Camera.current` holds the owner of the first camera created, and `close()` clears it.
- `noukit.mesh`: `Mesh` stores vertex positions, normals and UVs. It keeps one `VertexBuffer` per `Attrib`, which you fetch with `get_vbo()`. `VertexArray` binds buffers to attribute locations, and `vertex_count()` reports how many vertices it holds. `DrawMode` lists the primitive modes.
- `noukit.gltf`: `load_mesh()` reads the first mesh of a `.gltf` or `.glb` file into a `Mesh`. The file's indexed primitives become flat per-face-vertex arrays. Indices must be 16-bit, positions and normals three 32-bit floats, and UVs two 32-bit floats. UVs are flipped vertically unless `flip_uv_y` is false. Errors raise `GLTFError`. Warnings, such as missing normals or UVs, are logged and returned. The lower-level steps are `parse_gltf()`, `extract_geometry()`, `process_primitive()`, `find_accessor()` and `build_getter()`.
- `noukit.input`: `Input` tracks which keys are held (`get_key`). It also tracks which keys were pressed (`get_key_down`) or released (`get_key_up`) since the last `frame_start()`. Feed it events with `key_callback(key, action)`, using `KeyAction` values.
- `noukit.enummap`: `EnumMap` builds a value-to-name table from declaration text such as `"A, B=0x10, C"`. It offers `name()`, `parse()`, `next_value()` and `is_valid()`. The module also provides `parse_literal()` and `generate_enum_map()`.
- `noukit.serialize`: converts vectors, matrices and quaternions to plain lists and back. Vectors become their components and matrices a list of columns. Quaternions become `[x, y, z, w]`.

## Install

```
pip install .
```

## Example

```python
from noukit.entity import Registry, Entity
from noukit.camera import Camera
from noukit.mesh import Mesh, Attrib
from noukit.gltf import load_mesh

registry = Registry()
camera_entity = Entity(registry)
camera = camera_entity.add(Camera, camera_entity)
camera.perspective(60.0, 16 / 9, 0.1, 100.0)
view_projection = camera.view_projection

mesh = Mesh()
warnings = load_mesh("model.gltf", mesh, True)
positions = mesh.get_vbo(Attrib.POSITION)
```

Parenting transforms:

```python
from noukit.transform import Transform

root = Transform()
child = Transform()
child.set_parent(root)
root.pos[:] = (1.0, 0.0, 0.0)
root.do_fk()
print(child.global_matrix)
```

## What it does not do

noukit does not open windows or draw anything. It has no graphics-API calls, shaders, textures or materials. `VertexBuffer` and `VertexArray` keep their data in numpy arrays and compute the values a renderer would need. Reading key events from a window system and sending geometry to the GPU is left to the application.

## Tests

```
pip install .[test]
pytest
```