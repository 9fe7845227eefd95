"""Cardinal axes and planar embedding of 2D points into 3D."""
from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Sequence, Tuple, Union

import numpy as np

from .vector import Vec2, Vec3, as_points2

__all__ = ['CardinalDirection', 'plane_indices', 'embed_to_3d', 'embed_points_to_3d']


class CardinalDirection(IntEnum):
    X = 0
    Y = 1
    Z = 2


_PLANES = {
    CardinalDirection.X: (1, 2),
    CardinalDirection.Y: (0, 2),
    CardinalDirection.Z: (0, 1),
}


def plane_indices(axis: CardinalDirection) -> Tuple[int, int]:
    """Return the two coordinate indices spanning the plane orthogonal to ``axis``."""
    return _PLANES[CardinalDirection(axis)]


def embed_to_3d(axis: CardinalDirection, value: float, point: Union[Vec2, Sequence[float]]) -> Vec3:
    """Lift a 2D point into the plane orthogonal to ``axis`` at coordinate ``value``."""
    coords = [0.0, 0.0, 0.0]
    i, j = plane_indices(axis)
    coords[int(axis)] = value
    coords[i] = point[0]
    coords[j] = point[1]
    return Vec3(*coords)


def embed_points_to_3d(axis: CardinalDirection, value: float,
                       points: Union[np.ndarray, Iterable[Sequence[float]]]) -> np.ndarray:
    """Vectorized ``embed_to_3d`` returning an (N,3) float64 array."""
    pts = as_points2(points)
    out = np.empty((pts.shape[0], 3), dtype=np.float64)
    i, j = plane_indices(axis)
    out[:, int(axis)] = value
    out[:, i] = pts[:, 0]
    out[:, j] = pts[:, 1]
    return out
