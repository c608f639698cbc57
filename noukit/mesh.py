"""Vertex buffers, vertex arrays and mesh attribute storage."""

from __future__ import annotations

from enum import IntEnum

import numpy as np


class Attrib(IntEnum):
    """Vertex attribute layout locations used by the shaders."""

    POSITION = 0
    NORMAL = 1
    UV = 2
    JOINT_INFLUENCE = 3
    SKIN_WEIGHT = 4


class DrawMode(IntEnum):
    """Primitive assembly modes."""

    POINTS = 0x0000
    LINES = 0x0001
    LINE_LOOP = 0x0002
    LINE_STRIP = 0x0003
    TRIANGLES = 0x0004
    TRIANGLE_STRIP = 0x0005


class VertexBuffer:
    """A block of per-vertex float data with a fixed number of components."""

    def __init__(self, element_len: int, data, dynamic: bool = False) -> None:
        self.element_len = element_len
        self.start_index = 0
        self.dynamic = dynamic
        self.data = np.empty((0, element_len), dtype=np.float32)
        self.length = 0
        self.element_size = 0
        self.update_data(data)

    def update_data(self, data) -> None:
        """Replace the buffer contents."""
        array = np.asarray(data, dtype=np.float32)
        if array.size == 0 or len(array) == 0:
            raise ValueError("vertex buffer data must not be empty")
        array = array.reshape(len(array), -1)
        self.data = array.copy()
        self.length = len(array)
        self.element_size = array[0].nbytes


class VertexArray:
    """Associates vertex buffers with attribute locations for drawing."""

    def __init__(self) -> None:
        self.draw_mode = DrawMode.TRIANGLES
        self.length = 0
        self._vbos: dict[int, VertexBuffer] = {}

    @property
    def attributes(self) -> dict[int, VertexBuffer]:
        return dict(sorted(self._vbos.items()))

    def bind_attrib(self, buf: VertexBuffer, attrib_loc: int) -> None:
        """Bind ``buf`` to ``attrib_loc``, replacing any earlier binding."""
        self._vbos[int(attrib_loc)] = buf
        self.length = buf.length

    def vertex_count(self) -> int:
        """Number of vertices drawn: the length of the lowest-location buffer."""
        if not self._vbos:
            raise ValueError("no vertex buffers bound")
        self.length = self._vbos[min(self._vbos)].length
        return self.length


class Mesh:
    """Vertex positions, normals and texture coordinates of a model."""

    def __init__(self) -> None:
        self.verts = np.empty((0, 3), dtype=np.float32)
        self.normals = np.empty((0, 3), dtype=np.float32)
        self.uvs = np.empty((0, 2), dtype=np.float32)
        self._vbo: dict[Attrib, VertexBuffer] = {}

    def _as_array(self, data, width: int) -> np.ndarray:
        return np.asarray(data, dtype=np.float32).reshape(-1, width)

    def _set_vbo(self, attrib: Attrib, element_len: int, data: np.ndarray) -> None:
        if len(data) == 0:
            self._vbo.pop(attrib, None)
            return
        existing = self._vbo.get(attrib)
        if existing is None:
            self._vbo[attrib] = VertexBuffer(element_len, data)
        else:
            existing.update_data(data)

    def set_verts(self, verts) -> None:
        self.verts = self._as_array(verts, 3)
        self._set_vbo(Attrib.POSITION, 3, self.verts)

    def set_normals(self, normals) -> None:
        self.normals = self._as_array(normals, 3)
        self._set_vbo(Attrib.NORMAL, 3, self.normals)

    def set_uvs(self, uvs) -> None:
        self.uvs = self._as_array(uvs, 2)
        self._set_vbo(Attrib.UV, 2, self.uvs)

    def get_vbo(self, attrib: Attrib) -> VertexBuffer | None:
        """The buffer for ``attrib``, or ``None`` if it has no data."""
        return self._vbo.get(Attrib(attrib))