"""Conversion of vectors, matrices and quaternions to and from plain lists.

Vectors are written as their components, matrices as a list of columns and
quaternions as ``[x, y, z, w]``. In memory quaternions are ``(w, x, y, z)``
and matrices act on column vectors.
"""

from __future__ import annotations

import numpy as np

_SIZES = (2, 3, 4)


def pack_vector(vector) -> list:
    """Components of a 2, 3 or 4 element vector as a list."""
    array = np.asarray(vector)
    if array.ndim != 1 or len(array) not in _SIZES:
        raise ValueError("vector must have 2, 3 or 4 components")
    return array.tolist()


def pack_matrix(matrix) -> list[list]:
    """Columns of a 2x2, 3x3 or 4x4 matrix, each as a list."""
    array = np.asarray(matrix)
    if array.ndim != 2 or array.shape[0] != array.shape[1] or array.shape[0] not in _SIZES:
        raise ValueError("matrix must be 2x2, 3x3 or 4x4")
    return array.T.tolist()


def pack_quat(quat) -> list:
    """A ``(w, x, y, z)`` quaternion as ``[x, y, z, w]``."""
    array = np.asarray(quat)
    if array.shape != (4,):
        raise ValueError("quaternion must have 4 components")
    w, x, y, z = array.tolist()
    return [x, y, z, w]


def unpack_vector(values) -> np.ndarray:
    """Vector from a list of 2, 3 or 4 components."""
    array = np.array(values)
    if array.ndim != 1 or len(array) not in _SIZES:
        raise ValueError("vector must have 2, 3 or 4 components")
    return array


def unpack_matrix(values, size: int = 4) -> np.ndarray:
    """Square matrix from columns, given nested or as a flat column-major list."""
    if size not in _SIZES:
        raise ValueError("matrix size must be 2, 3 or 4")
    array = np.asarray(values, dtype=float)
    if array.size != size * size:
        raise ValueError(f"expected {size * size} values for a {size}x{size} matrix")
    return np.ascontiguousarray(array.reshape(size, size).T)


def unpack_quat(values) -> np.ndarray:
    """``(w, x, y, z)`` quaternion from ``[x, y, z, w]``."""
    array = np.asarray(values, dtype=float)
    if array.shape != (4,):
        raise ValueError("quaternion must have 4 components")
    x, y, z, w = array
    return np.array([w, x, y, z])