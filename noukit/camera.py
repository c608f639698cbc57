"""Camera component with orthographic and perspective projections.

Projections follow the right-handed convention with clip depth in [-1, 1].
"""

from __future__ import annotations

import math
from typing import ClassVar

import numpy as np


def ortho_matrix(left, right, bottom, top, near, far) -> np.ndarray:
    """Orthographic projection matrix."""
    if right == left or top == bottom or far == near:
        raise ValueError("degenerate orthographic volume")
    matrix = np.eye(4)
    matrix[0, 0] = 2.0 / (right - left)
    matrix[1, 1] = 2.0 / (top - bottom)
    matrix[2, 2] = -2.0 / (far - near)
    matrix[0, 3] = -(right + left) / (right - left)
    matrix[1, 3] = -(top + bottom) / (top - bottom)
    matrix[2, 3] = -(far + near) / (far - near)
    return matrix


def perspective_matrix(fov_y_radians, aspect, near, far) -> np.ndarray:
    """Perspective projection matrix for a vertical field of view in radians."""
    if aspect == 0:
        raise ValueError("aspect ratio must be non-zero")
    if far == near:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fov_y_radians / 2.0)
    if tan_half == 0:
        raise ValueError("field of view must be non-zero")
    matrix = np.zeros((4, 4))
    matrix[0, 0] = 1.0 / (aspect * tan_half)
    matrix[1, 1] = 1.0 / tan_half
    matrix[2, 2] = -(far + near) / (far - near)
    matrix[3, 2] = -1.0
    matrix[2, 3] = -(2.0 * far * near) / (far - near)
    return matrix


class Camera:
    """Camera attached to an owner whose transform gives the viewpoint.

    ``Camera.current`` holds the owner of the camera in use; the first camera
    created becomes current.
    """

    current: ClassVar[object | None] = None

    def __init__(self, owner) -> None:
        if Camera.current is None:
            Camera.current = owner
        self.owner = owner
        self.projection = np.eye(4)
        self.view = np.eye(4)
        self.view_projection = np.eye(4)

    def update(self) -> None:
        """Recompute the view and view-projection from the owner's transform."""
        self.view = np.linalg.inv(self.owner.transform.recompute_global())
        self.view_projection = self.projection @ self.view

    def ortho(self, left, right, bottom, top, near, far) -> None:
        self.projection = ortho_matrix(left, right, bottom, top, near, far)
        self.update()

    def perspective(self, fov_y_degrees, aspect, near, far) -> None:
        self.projection = perspective_matrix(math.radians(fov_y_degrees), aspect, near, far)
        self.update()

    def close(self) -> None:
        """Stop being the current camera if this camera's owner is current."""
        if Camera.current is self.owner:
            Camera.current = None

    def __enter__(self) -> Camera:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()