"""Flat-array entry points for callers that exchange raw buffers.

These mirror what a native binding needs: points come in as one contiguous
float array, triangles go out as one contiguous index array. Every returned
array is freshly allocated and owned by the caller; inputs are never kept.
"""
from __future__ import annotations

from typing import Optional

import numpy as np

from .logging_utils import get_logger
from .polygon import regular, triangulate
from .vector import as_points2

logger = get_logger('cgkernel.interop')

__all__ = ['triangulate_flat', 'regular_flat']


def triangulate_flat(points) -> Optional[np.ndarray]:
    """Triangulate a polygon given as an (N,2) or flat (2N,) float array.

    Returns a C-contiguous ``uintp`` array of length ``3*(N-2)`` holding the
    index triples back to back, or None when no triangulation exists.
    """
    pts = as_points2(np.asarray(points, dtype=np.float64))
    tris = triangulate(pts)
    if tris is None:
        logger.debug("triangulate_flat: no triangulation for %d points", pts.shape[0])
        return None
    return np.ascontiguousarray(np.asarray(tris, dtype=np.uintp).reshape(-1))


def regular_flat(center_x: float, center_y: float, radius: float, corners: int) -> np.ndarray:
    """Regular polygon corners as a C-contiguous (corners, 2) float32 array."""
    poly = regular((center_x, center_y), radius, int(corners))
    if len(poly) == 0:
        return np.empty((0, 2), dtype=np.float32)
    return np.ascontiguousarray(poly.to_array().astype(np.float32))
