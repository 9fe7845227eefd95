"""Polygon vertex classification and fan triangulation.

All analysis functions accept a ``Polygon``, a sequence of ``Vec2`` / 2-tuples,
or an (N,2) array, and treat the points as a closed, counter-clockwise
boundary (first and last point implicitly connected).

Known limitation: the input is assumed to be simple. Self-intersection is not
detected, and results on self-intersecting input are meaningless. Rejecting
polygons with two or more concave vertices in ``triangulate`` is a
conservative filter, not a simplicity test.
"""
from __future__ import annotations

import math
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .cardinal import CardinalDirection, embed_points_to_3d
from .config import KernelConfig, PolygonConfig, polygon_config
from .logging_utils import get_logger
from .mesh import TriangleVertexMesh
from .vector import Vec2, as_points2, wedge2

logger = get_logger('cgkernel.polygon')

PointLike = Union[Vec2, Sequence[float]]
Triangle = Tuple[int, int, int]
ConfigLike = Optional[Union[PolygonConfig, KernelConfig]]

__all__ = [
    'Polygon', 'get_concave_vertices', 'is_convex', 'triangulate',
    'fan_triangulation', 'regular', 'signed_area', 'is_ccw',
]


def _to_vec2(p: PointLike) -> Vec2:
    if isinstance(p, Vec2):
        return p
    x, y = p
    return Vec2(x, y)


class Polygon:
    """Ordered, cyclic sequence of 2D points.

    Points are stored as immutable ``Vec2`` values; anything pushed is copied
    into a new value, so later changes to the caller's objects never leak in.
    """

    def __init__(self, points: Optional[Iterable[PointLike]] = None):
        self._points: List[Vec2] = []
        if points is not None:
            self.extend(points)

    # --- container protocol ---
    def push(self, point: PointLike) -> None:
        self._points.append(_to_vec2(point))

    def extend(self, points: Iterable[PointLike]) -> None:
        if isinstance(points, np.ndarray):
            points = as_points2(points).tolist()
        for p in points:
            self.push(p)

    @property
    def points(self) -> Tuple[Vec2, ...]:
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Vec2]:
        return iter(tuple(self._points))

    def __getitem__(self, i: int) -> Vec2:
        return self._points[i]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polygon):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        return f"Polygon({[tuple(p) for p in self._points]!r})"

    def to_array(self) -> np.ndarray:
        return as_points2(self._points)

    @classmethod
    def from_array(cls, arr) -> 'Polygon':
        return cls(as_points2(arr).tolist())

    @classmethod
    def regular(cls, center: PointLike, radius: float, corner_count: int) -> 'Polygon':
        return regular(center, radius, corner_count)

    def reversed(self) -> 'Polygon':
        """Same boundary with opposite winding."""
        return Polygon(reversed(self._points))

    # --- analysis ---
    def concave_vertices(self, config: ConfigLike = None) -> Optional[List[int]]:
        return get_concave_vertices(self, config=config)

    def is_convex(self, config: ConfigLike = None) -> Optional[bool]:
        return is_convex(self, config=config)

    def triangulate(self, config: ConfigLike = None) -> Optional[List[Triangle]]:
        return triangulate(self, config=config)

    def signed_area(self) -> float:
        return signed_area(self)

    def is_ccw(self) -> Optional[bool]:
        return is_ccw(self)

    def to_mesh(self, axis: CardinalDirection = CardinalDirection.Z, offset: float = 0.0,
                config: ConfigLike = None) -> Optional[TriangleVertexMesh]:
        """Triangulate and embed into the plane orthogonal to ``axis``.

        Returns a ``TriangleVertexMesh`` whose vertex i is polygon point i, or
        None when the polygon cannot be triangulated.
        """
        tris = triangulate(self, config=config)
        if tris is None:
            return None
        vertices = embed_points_to_3d(axis, offset, self.to_array())
        return TriangleVertexMesh.from_faces(vertices, tris)


def _points_array(polygon) -> np.ndarray:
    if isinstance(polygon, Polygon):
        return polygon.to_array()
    return as_points2(polygon)


def get_concave_vertices(polygon, config: ConfigLike = None) -> Optional[List[int]]:
    """Indices of vertices where the boundary turns clockwise.

    For vertex i the incoming edge is ``p[i] - p[i-1]`` and the outgoing edge
    is ``p[i+1] - p[i]`` (cyclic). The vertex is concave when the wedge of the
    two is negative. Collinear turns are not concave. Returns None for fewer
    than 3 points.
    """
    pts = _points_array(polygon)
    if pts.shape[0] < 3:
        return None
    tol = polygon_config(config).concave_tolerance
    incoming = pts - np.roll(pts, 1, axis=0)
    outgoing = np.roll(pts, -1, axis=0) - pts
    turns = wedge2(incoming, outgoing)
    return [int(i) for i in np.nonzero(turns < -tol)[0]]


def is_convex(polygon, config: ConfigLike = None) -> Optional[bool]:
    concave = get_concave_vertices(polygon, config=config)
    if concave is None:
        return None
    return not concave


def fan_triangulation(n: int, apex: int = 0) -> List[Triangle]:
    """Fan of ``n - 2`` triangles sharing ``apex``, following the boundary order."""
    return [(apex, (apex + 1 + i) % n, (apex + 2 + i) % n) for i in range(n - 2)]


def triangulate(polygon, config: ConfigLike = None) -> Optional[List[Triangle]]:
    """Fan-triangulate a polygon with at most one concave vertex.

    The fan apex is vertex 0 for convex input, or the single concave vertex
    otherwise. Returns None for fewer than 3 points or for two or more
    concave vertices.
    """
    pts = _points_array(polygon)
    concave = get_concave_vertices(pts, config=config)
    if concave is None:
        return None
    if len(concave) > 1:
        logger.debug("triangulate: %d concave vertices %s, no fan triangulation",
                     len(concave), concave)
        return None
    apex = concave[0] if concave else 0
    return fan_triangulation(pts.shape[0], apex)


def regular(center: PointLike, radius: float, corner_count: int) -> Polygon:
    """Regular polygon with ``corner_count`` corners on a circle around ``center``.

    The first corner lies at angle 0 and the following ones proceed
    counter-clockwise by ``2*pi / corner_count``.
    """
    if corner_count < 0:
        raise ValueError("corner_count must be non-negative")
    c = _to_vec2(center)
    poly = Polygon()
    if corner_count == 0:
        return poly
    step = 2.0 * math.pi / corner_count
    for i in range(corner_count):
        angle = i * step
        poly.push(Vec2(c.x + radius * math.cos(angle), c.y + radius * math.sin(angle)))
    return poly


def signed_area(polygon) -> float:
    """Shoelace area; positive for counter-clockwise winding."""
    pts = _points_array(polygon)
    if pts.shape[0] < 3:
        return 0.0
    return 0.5 * float(np.sum(wedge2(pts, np.roll(pts, -1, axis=0))))


def is_ccw(polygon) -> Optional[bool]:
    pts = _points_array(polygon)
    if pts.shape[0] < 3:
        return None
    return signed_area(pts) > 0.0
