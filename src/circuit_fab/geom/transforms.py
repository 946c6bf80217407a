"""2-D affine transforms as 3x3 homogeneous numpy matrices.

``compose(a, b, c)`` returns ``a @ b @ c``: the right-most matrix is applied to
a point first, matching the usual reading order of a transform chain
("translate to origin, rotate, translate back" is written
``compose(translate(c), rotate(t), translate(-c))``).
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterable

    from numpy.typing import NDArray

    Matrix = NDArray[np.float64]


def identity() -> Matrix:
    return np.eye(3, dtype=np.float64)


def translate(tx: float, ty: float) -> Matrix:
    matrix = identity()
    matrix[0, 2] = tx
    matrix[1, 2] = ty
    return matrix


def rotate(angle_rad: float) -> Matrix:
    """Counter-clockwise rotation about the origin."""
    cos_a = math.cos(angle_rad)
    sin_a = math.sin(angle_rad)
    return np.array(
        [
            [cos_a, -sin_a, 0.0],
            [sin_a, cos_a, 0.0],
            [0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


def rotate_degrees(angle_deg: float) -> Matrix:
    return rotate(math.radians(angle_deg))


def mirror_horizontal() -> Matrix:
    """Mirror across the Y axis (x -> -x)."""
    matrix = identity()
    matrix[0, 0] = -1.0
    return matrix


def compose(*matrices: Matrix) -> Matrix:
    result = identity()
    for matrix in matrices:
        result = result @ matrix
    return result


def about(center: tuple[float, float], matrix: Matrix) -> Matrix:
    """Conjugate ``matrix`` so it acts about ``center`` instead of the origin."""
    cx, cy = center
    return compose(translate(cx, cy), matrix, translate(-cx, -cy))


def apply_to_point(matrix: Matrix, point: tuple[float, float]) -> tuple[float, float]:
    x, y = point
    tx = matrix[0, 0] * x + matrix[0, 1] * y + matrix[0, 2]
    ty = matrix[1, 0] * x + matrix[1, 1] * y + matrix[1, 2]
    return (float(tx), float(ty))


def apply_to_points(matrix: Matrix, points: Iterable[tuple[float, float]]) -> list[tuple[float, float]]:
    """Transform many points at once."""
    pts = np.asarray(list(points), dtype=np.float64).reshape(-1, 2)
    if pts.size == 0:
        return []
    homogeneous = np.hstack([pts, np.ones((pts.shape[0], 1))])
    transformed = homogeneous @ matrix.T
    return [(float(x), float(y)) for x, y in transformed[:, :2]]


def rotate_offset(dx: float, dy: float, angle_deg: float) -> tuple[float, float]:
    """Rotate an offset vector CCW by ``angle_deg`` degrees."""
    if not angle_deg:
        return (dx, dy)
    return apply_to_point(rotate_degrees(angle_deg), (dx, dy))


def rect_corners(
    center: tuple[float, float],
    width: float,
    height: float,
    rotation_deg: float = 0.0,
) -> list[tuple[float, float]]:
    """Corners of a (rotated) rectangle: top-left, top-right, bottom-right, bottom-left."""
    w = width / 2
    h = height / 2
    local = [(-w, h), (w, h), (w, -h), (-w, -h)]
    matrix = translate(*center)
    if rotation_deg:
        matrix = compose(matrix, rotate_degrees(rotation_deg))
    return apply_to_points(matrix, local)
