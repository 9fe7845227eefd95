"""Face normals and angle-weighted pseudo vertex normals.

Face normals use Newell's method, which sums edge contributions over the
whole boundary instead of crossing two chosen edges. It tolerates slightly
non-planar faces and needs no reference plane.

Vertex pseudo-normals average the normals of the incident faces, weighted by
the interior angle each face makes at the vertex, so the result does not
depend on how a flat region around the vertex is split into triangles.

Degenerate geometry never aborts a pass: a face whose normal cannot be
normalized contributes nothing, and a vertex whose weighted sum cannot be
normalized gets the zero vector.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import KernelConfig, NormalConfig, normal_config
from .constants import EPS_LENGTH
from .logging_utils import get_logger
from .mesh import MeshComponent, TriangleVertexMesh, make_incidence_map
from .properties import NormalMap, PropertyKind
from .vector import Vec3, normalize_rows

logger = get_logger('cgkernel.normals')

ConfigLike = Optional[Union[NormalConfig, KernelConfig]]

__all__ = [
    'calculate_face_normal', 'face_normals',
    'create_angle_weighted_pseudo_vertex_normals', 'attach_vertex_normals',
]


def _to_vec3(p) -> Vec3:
    if isinstance(p, Vec3):
        return p
    x, y, z = p
    return Vec3(x, y, z)


def calculate_face_normal(vertices: Sequence, eps: float = EPS_LENGTH) -> Optional[Vec3]:
    """Unit normal of a polygon given its corners in winding order.

    Returns None for fewer than 3 corners or when the Newell sum has zero
    length (collinear, repeated or self-cancelling corners).
    """
    pts = [_to_vec3(v) for v in vertices]
    n = len(pts)
    if n < 3:
        return None
    nx = ny = nz = 0.0
    for i, cur in enumerate(pts):
        nxt = pts[(i + 1) % n]
        nx += (cur.y - nxt.y) * (cur.z + nxt.z)
        ny += (cur.z - nxt.z) * (cur.x + nxt.x)
        nz += (cur.x - nxt.x) * (cur.y + nxt.y)
    return Vec3(nx, ny, nz).normalized(eps)


def face_normals(mesh: TriangleVertexMesh, eps: float = EPS_LENGTH) -> np.ndarray:
    """Vectorized Newell normals for every face, shape (M,3).

    Rows of degenerate faces are zero.
    """
    if mesh.face_count == 0:
        return np.empty((0, 3), dtype=np.float64)
    corners = mesh.vertices[mesh.faces]          # (M,3,3)
    nxt = np.roll(corners, -1, axis=1)
    d = corners - nxt
    s = corners + nxt
    raw = np.stack([
        np.sum(d[:, :, 1] * s[:, :, 2], axis=1),
        np.sum(d[:, :, 2] * s[:, :, 0], axis=1),
        np.sum(d[:, :, 0] * s[:, :, 1], axis=1),
    ], axis=1)
    unit, _ = normalize_rows(raw, eps)
    return unit


def _vertex_contributions(mesh: TriangleVertexMesh, v: int, faces: Sequence[int],
                          eps: float) -> Tuple[List[Tuple[float, Vec3]], int]:
    """First pass: (interior angle, face normal) for each face around ``v``."""
    p = mesh.vertex(v)
    pairs: List[Tuple[float, Vec3]] = []
    degenerate = 0
    for f in faces:
        corners = mesh.get_face(f)
        k = corners.index(v)
        ordered = (corners[k], corners[(k + 1) % 3], corners[(k + 2) % 3])
        nxt = mesh.vertex(ordered[1])
        prev = mesh.vertex(ordered[2])
        angle = (prev - p).angle(nxt - p)
        normal = calculate_face_normal((p, nxt, prev), eps)
        if normal is None:
            degenerate += 1
            normal = Vec3.zero()
        pairs.append((angle if angle is not None else 0.0, normal))
    return pairs, degenerate


def _weighted_normal(pairs: List[Tuple[float, Vec3]], cfg: NormalConfig) -> Optional[Vec3]:
    """Second pass: normalized angle-weighted sum, or None if it vanishes."""
    angle_sum = sum(a for a, _ in pairs)
    if angle_sum <= cfg.eps_angle:
        return None
    acc = Vec3.zero()
    for angle, normal in pairs:
        acc = acc + normal.scale(angle / angle_sum)
    return acc.normalized(cfg.eps_length)


def create_angle_weighted_pseudo_vertex_normals(mesh: TriangleVertexMesh, config: ConfigLike = None) -> NormalMap:
    """Angle-weighted pseudo-normal for every vertex referenced by a face.

    Returns an index-aligned ``NormalMap`` with one slot per mesh vertex.
    Slots of vertices without incident faces are undefined (``get`` returns
    None). Slots whose weighted sum cannot be normalized hold the zero vector.

    The result is a snapshot of the mesh at call time.
    """
    cfg = normal_config(config)
    incident = make_incidence_map(mesh, MeshComponent.VERTEX, MeshComponent.FACE)
    out = np.zeros((mesh.vertex_count, 3), dtype=np.float64)
    defined = np.zeros(mesh.vertex_count, dtype=bool)

    def work(v: int) -> Tuple[int, bool]:
        pairs, degenerate = _vertex_contributions(mesh, v, sorted(incident[v]), cfg.eps_length)
        normal = _weighted_normal(pairs, cfg)
        # each call owns slot v only
        if normal is not None:
            out[v] = tuple(normal)
        defined[v] = True
        return degenerate, normal is None

    keys = sorted(incident)
    if cfg.max_workers > 1 and len(keys) > 1:
        with ThreadPoolExecutor(max_workers=cfg.max_workers) as executor:
            results = list(executor.map(work, keys))
    else:
        results = [work(v) for v in keys]

    degenerate_faces = sum(d for d, _ in results)
    zero_fallbacks = sum(1 for _, z in results if z)
    logger.debug("pseudo-normals: %d/%d vertices, %d degenerate face contributions, %d zero fallbacks",
                 len(keys), mesh.vertex_count, degenerate_faces, zero_fallbacks)
    return NormalMap(out, defined)


def attach_vertex_normals(mesh: TriangleVertexMesh, normals: Optional[NormalMap] = None,
                          config: ConfigLike = None) -> Optional[NormalMap]:
    """Store vertex normals on ``mesh`` as its NORMAL vertex property.

    Computes angle-weighted pseudo-normals when ``normals`` is not given.
    Returns the attached map, or None if the mesh already carries normals.
    """
    if mesh.get_vertex_property(PropertyKind.NORMAL) is not None:
        logger.warning("mesh already has vertex normals; detach them first")
        return None
    if normals is None:
        normals = create_angle_weighted_pseudo_vertex_normals(mesh, config=config)
    elif len(normals) != mesh.vertex_count:
        raise ValueError(f"normal map has {len(normals)} entries for {mesh.vertex_count} vertices")
    if not mesh.add_vertex_property(normals):
        return None
    return normals
