"""Object transforms with a parent/child hierarchy.

Quaternions are stored as ``(w, x, y, z)``; matrices act on column vectors.
"""

from __future__ import annotations

import numpy as np


def translate_matrix(offset) -> np.ndarray:
    """4x4 matrix translating by ``offset``."""
    matrix = np.eye(4)
    matrix[:3, 3] = np.asarray(offset, dtype=float)
    return matrix


def scale_matrix(factors) -> np.ndarray:
    """4x4 matrix scaling by ``factors`` along each axis."""
    return np.diag([*np.asarray(factors, dtype=float), 1.0])


def quat_to_matrix(quat) -> np.ndarray:
    """4x4 rotation matrix for a ``(w, x, y, z)`` quaternion (not normalised here)."""
    w, x, y, z = np.asarray(quat, dtype=float)
    matrix = np.eye(4)
    matrix[:3, :3] = [
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
    ]
    return matrix


def _normalize_quat(quat: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(quat)
    if length <= 0.0:
        return np.array([1.0, 0.0, 0.0, 0.0])
    return quat / length


class Transform:
    """Position, rotation and scale of an object, with optional parent."""

    def __init__(self) -> None:
        self.pos = np.zeros(3)
        self.scale = np.ones(3)
        self.rotation = np.array([1.0, 0.0, 0.0, 0.0])
        self.global_matrix = np.eye(4)
        self._parent: Transform | None = None
        self._children: list[Transform] = []

    @property
    def parent(self) -> Transform | None:
        return self._parent

    @property
    def children(self) -> tuple[Transform, ...]:
        return tuple(self._children)

    def _local(self, rotation) -> np.ndarray:
        return translate_matrix(self.pos) @ quat_to_matrix(rotation) @ scale_matrix(self.scale)

    def do_fk(self) -> None:
        """Update the global matrix of this transform and all descendants."""
        local = self._local(_normalize_quat(np.asarray(self.rotation, dtype=float)))
        if self._parent is not None:
            self.global_matrix = self._parent.global_matrix @ local
        else:
            self.global_matrix = local
        for child in self._children:
            child.do_fk()

    def recompute_global(self) -> np.ndarray:
        """Recompute the global matrix through all ancestors and return it."""
        local = self._local(self.rotation)
        if self._parent is not None:
            self.global_matrix = self._parent.recompute_global() @ local
        else:
            self.global_matrix = local
        return self.global_matrix

    def normal_matrix(self) -> np.ndarray:
        """3x3 matrix for transforming normals, from the current global matrix."""
        upper = self.global_matrix[:3, :3]
        sx, sy, sz = self.scale
        if sx == sy and sx == sz:
            return upper.copy()
        return np.linalg.inv(upper.T)

    def set_parent(self, parent: Transform | None) -> None:
        """Attach to ``parent`` (or detach with ``None``), updating child lists."""
        if self._parent is not None:
            siblings = self._parent._children
            for index, child in enumerate(siblings):
                if child is self:
                    del siblings[index]
                    break
        self._parent = parent
        if parent is not None:
            parent._children.append(self)