"""Triangle-vertex meshes and incidence maps.

A triangle-vertex mesh is a vertex buffer plus a flat index buffer where each
consecutive triple of indices forms one counter-clockwise face. This is the
layout GPUs consume; arbitrary polygons are not representable.

Incidence maps are derived on request and never cached: they describe the
buffers at the time of the call.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Optional, Sequence, Set, Tuple

import numpy as np

from .logging_utils import get_logger
from .properties import PropertyKind, PropertyMap, PropertyStore
from .vector import Vec3, as_points3

logger = get_logger('cgkernel.mesh')

IncidenceMap = Dict[int, Set[int]]

__all__ = [
    'MeshComponent', 'UnsupportedIncidenceError', 'TriangleVertexMesh',
    'make_incidence_map', 'build_vertex_to_vertex_map', 'build_vertex_to_face_map',
]


class MeshComponent(Enum):
    VERTEX = 0
    EDGE = 1
    FACE = 2


class UnsupportedIncidenceError(NotImplementedError):
    """Raised for origin/incident combinations that have no builder."""

    def __init__(self, origin: MeshComponent, incident: MeshComponent):
        self.origin = origin
        self.incident = incident
        super().__init__(f"incidence map {origin.name} -> {incident.name} is not supported")


def build_vertex_to_vertex_map(triangles) -> IncidenceMap:
    """Map each referenced vertex to the other corners of every face it belongs to."""
    v_map: IncidenceMap = {}
    for tri in np.asarray(triangles, dtype=np.int64).reshape(-1, 3).tolist():
        a, b, c = tri
        v_map.setdefault(a, set()).update((b, c))
        v_map.setdefault(b, set()).update((a, c))
        v_map.setdefault(c, set()).update((a, b))
    return v_map


def build_vertex_to_face_map(triangles) -> IncidenceMap:
    """Map each referenced vertex to the indices of the faces it belongs to."""
    f_map: IncidenceMap = {}
    for t_idx, tri in enumerate(np.asarray(triangles, dtype=np.int64).reshape(-1, 3).tolist()):
        for v in tri:
            f_map.setdefault(v, set()).add(t_idx)
    return f_map


_BUILDERS = {
    (MeshComponent.VERTEX, MeshComponent.VERTEX): build_vertex_to_vertex_map,
    (MeshComponent.VERTEX, MeshComponent.FACE): build_vertex_to_face_map,
}


class TriangleVertexMesh:
    """Indexed triangle mesh with vertex and face attribute stores.

    Parameters
    ----------
    vertices : (N,3) array-like or iterable of Vec3
    indices : flat int array-like of length 3*M, or (M,3)

    Raises ``ValueError`` if the index buffer length is not a multiple of 3
    or any index falls outside ``[0, N)``. Both buffers are copied and kept
    read-only.
    """

    def __init__(self, vertices: Optional[Iterable] = None, indices: Optional[Iterable] = None):
        verts = as_points3(vertices if vertices is not None else [])
        if indices is None:
            indices = []
        elif not isinstance(indices, np.ndarray):
            indices = list(indices)
        idx = np.asarray(indices, dtype=np.int64).reshape(-1)
        if idx.size % 3 != 0:
            raise ValueError(f"index buffer length {idx.size} is not a multiple of 3")
        n = verts.shape[0]
        if idx.size and (idx.min() < 0 or idx.max() >= n):
            raise ValueError(f"index buffer references vertices outside [0, {n})")
        verts = verts.copy()
        idx = idx.copy()
        verts.setflags(write=False)
        idx.setflags(write=False)
        self._vertices = verts
        self._indices = idx
        self._vertex_props = PropertyStore()
        self._face_props = PropertyStore()

    @classmethod
    def from_faces(cls, vertices, faces: Iterable[Sequence[int]]) -> 'TriangleVertexMesh':
        flat = [int(i) for face in faces for i in face]
        return cls(vertices, flat)

    # --- buffers ---
    @property
    def vertices(self) -> np.ndarray:
        return self._vertices

    @property
    def indices(self) -> np.ndarray:
        return self._indices

    @property
    def faces(self) -> np.ndarray:
        """(M,3) read-only view of the index buffer."""
        return self._indices.reshape(-1, 3)

    @property
    def vertex_count(self) -> int:
        return int(self._vertices.shape[0])

    @property
    def face_count(self) -> int:
        return int(self._indices.size // 3)

    def __repr__(self) -> str:
        return f"TriangleVertexMesh(vertices={self.vertex_count}, faces={self.face_count})"

    # --- faces ---
    def get_face(self, face_index: int) -> Tuple[int, int, int]:
        """Vertex indices of a face.

        Precondition: ``0 <= face_index < face_count``. This is not checked;
        use ``face()`` for a checked lookup.
        """
        s = 3 * face_index
        a, b, c = self._indices[s:s + 3].tolist()
        return a, b, c

    def face(self, face_index: int) -> Tuple[int, int, int]:
        if not 0 <= face_index < self.face_count:
            raise IndexError(f"face index {face_index} out of range [0, {self.face_count})")
        return self.get_face(face_index)

    def vertex(self, idx: int) -> Vec3:
        return Vec3.from_array(self._vertices[idx])

    def face_vertices(self, face_index: int) -> Tuple[Vec3, Vec3, Vec3]:
        a, b, c = self.face(face_index)
        return self.vertex(a), self.vertex(b), self.vertex(c)

    # --- adjacency ---
    def make_incidence_map(self, origin: MeshComponent, incident: MeshComponent) -> IncidenceMap:
        return make_incidence_map(self, origin, incident)

    # --- attribute stores ---
    def add_vertex_property(self, prop: PropertyMap) -> bool:
        return self._vertex_props.add(prop)

    def get_vertex_property(self, kind: PropertyKind) -> Optional[PropertyMap]:
        return self._vertex_props.get(kind)

    def remove_vertex_property(self, kind: PropertyKind) -> bool:
        return self._vertex_props.remove(kind)

    def add_face_property(self, prop: PropertyMap) -> bool:
        return self._face_props.add(prop)

    def get_face_property(self, kind: PropertyKind) -> Optional[PropertyMap]:
        return self._face_props.get(kind)

    def remove_face_property(self, kind: PropertyKind) -> bool:
        return self._face_props.remove(kind)


def make_incidence_map(mesh: TriangleVertexMesh, origin: MeshComponent,
                       incident: MeshComponent) -> IncidenceMap:
    """Build an incidence map from ``origin`` components to ``incident`` ones.

    Only VERTEX -> VERTEX and VERTEX -> FACE are available; any other pair
    raises ``UnsupportedIncidenceError``. Vertices not referenced by any face
    have no key.
    """
    builder = _BUILDERS.get((origin, incident))
    if builder is None:
        raise UnsupportedIncidenceError(origin, incident)
    result = builder(mesh.faces)
    logger.debug("incidence %s->%s: %d keys over %d faces",
                 origin.name, incident.name, len(result), mesh.face_count)
    return result
