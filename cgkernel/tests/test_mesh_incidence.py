"""Tests for TriangleVertexMesh construction and incidence maps."""
import itertools

import numpy as np
import pytest

from cgkernel.core.mesh import (MeshComponent, TriangleVertexMesh, UnsupportedIncidenceError,
                                build_vertex_to_face_map, build_vertex_to_vertex_map, make_incidence_map)
from cgkernel.core.vector import Vec3


SUPPORTED = {
    (MeshComponent.VERTEX, MeshComponent.VERTEX),
    (MeshComponent.VERTEX, MeshComponent.FACE),
}
UNSUPPORTED = [pair for pair in itertools.product(MeshComponent, repeat=2) if pair not in SUPPORTED]


class TestConstruction:
    """Buffer validation and accessors."""

    def test_empty_mesh(self):
        mesh = TriangleVertexMesh()
        assert mesh.vertex_count == 0
        assert mesh.face_count == 0
        assert mesh.faces.shape == (0, 3)
        assert make_incidence_map(mesh, MeshComponent.VERTEX, MeshComponent.FACE) == {}

    def test_index_length_not_multiple_of_three(self):
        verts = [(0, 0, 0), (1, 0, 0), (0, 1, 0)]
        with pytest.raises(ValueError):
            TriangleVertexMesh(verts, [0, 1, 2, 0])

    @pytest.mark.parametrize("bad", [[0, 1, 3], [0, -1, 2]])
    def test_index_out_of_range(self, bad):
        verts = [(0, 0, 0), (1, 0, 0), (0, 1, 0)]
        with pytest.raises(ValueError):
            TriangleVertexMesh(verts, bad)

    def test_bad_vertex_shape(self):
        with pytest.raises(ValueError):
            TriangleVertexMesh(np.zeros((4, 2)), [0, 1, 2])

    def test_buffers_are_copied_and_read_only(self):
        verts = np.array([(0, 0, 0), (1, 0, 0), (0, 1, 0)], dtype=float)
        idx = np.array([0, 1, 2])
        mesh = TriangleVertexMesh(verts, idx)
        verts[0, 0] = 42.0
        idx[0] = 2
        assert mesh.vertices[0, 0] == 0.0
        assert mesh.get_face(0) == (0, 1, 2)
        assert not mesh.vertices.flags.writeable
        assert not mesh.indices.flags.writeable

    def test_from_faces_matches_flat(self, unit_square_mesh):
        other = TriangleVertexMesh.from_faces(unit_square_mesh.vertices, [(0, 1, 2), (0, 2, 3)])
        assert np.array_equal(other.indices, unit_square_mesh.indices)
        assert np.array_equal(other.faces, [[0, 1, 2], [0, 2, 3]])

    def test_face_accessors(self, unit_square_mesh):
        assert unit_square_mesh.get_face(1) == (0, 2, 3)
        assert unit_square_mesh.face(0) == (0, 1, 2)
        a, b, c = unit_square_mesh.face_vertices(1)
        assert (a, b, c) == (Vec3(0.0, 0.0, 0.0), Vec3(1.0, 1.0, 0.0), Vec3(0.0, 1.0, 0.0))

    @pytest.mark.parametrize("bad", [-1, 2, 100])
    def test_checked_face_raises(self, unit_square_mesh, bad):
        with pytest.raises(IndexError):
            unit_square_mesh.face(bad)


class TestIncidence:
    """Vertex->vertex and vertex->face maps."""

    def test_square_vertex_to_vertex(self, unit_square_mesh):
        v_map = unit_square_mesh.make_incidence_map(MeshComponent.VERTEX, MeshComponent.VERTEX)
        assert v_map == {0: {1, 2, 3}, 1: {0, 2}, 2: {0, 1, 3}, 3: {0, 2}}

    def test_square_vertex_to_face(self, unit_square_mesh):
        f_map = unit_square_mesh.make_incidence_map(MeshComponent.VERTEX, MeshComponent.FACE)
        assert f_map == {0: {0, 1}, 1: {0}, 2: {0, 1}, 3: {1}}

    def test_cube_totals(self, unit_cube):
        f_map = make_incidence_map(unit_cube, MeshComponent.VERTEX, MeshComponent.FACE)
        v_map = make_incidence_map(unit_cube, MeshComponent.VERTEX, MeshComponent.VERTEX)
        assert set(f_map) == set(range(8))
        assert set(v_map) == set(range(8))
        # every face lists three vertices
        assert sum(len(s) for s in f_map.values()) == 36
        assert sum(len(s) for s in v_map.values()) == 36

    def test_cube_degrees(self, unit_cube):
        f_map = make_incidence_map(unit_cube, MeshComponent.VERTEX, MeshComponent.FACE)
        v_map = make_incidence_map(unit_cube, MeshComponent.VERTEX, MeshComponent.VERTEX)
        for v in range(8):
            assert len(v_map[v]) == len(f_map[v])
            assert v not in v_map[v]
        assert {v: len(f_map[v]) for v in range(8)} == {
            0: 6, 1: 3, 2: 6, 3: 3, 4: 3, 5: 6, 6: 3, 7: 6,
        }

    def test_cube_keeps_edge_neighbours(self, unit_cube):
        v_map = make_incidence_map(unit_cube, MeshComponent.VERTEX, MeshComponent.VERTEX)
        verts = unit_cube.vertices
        for v in range(8):
            edge_nbrs = {u for u in range(8) if np.isclose(np.linalg.norm(verts[u] - verts[v]), 1.0)}
            assert len(edge_nbrs) == 3
            assert edge_nbrs <= v_map[v]

    def test_incidence_is_symmetric(self, unit_cube):
        v_map = make_incidence_map(unit_cube, MeshComponent.VERTEX, MeshComponent.VERTEX)
        for a, nbrs in v_map.items():
            for b in nbrs:
                assert a in v_map[b]

    def test_face_map_matches_faces(self, unit_cube):
        f_map = make_incidence_map(unit_cube, MeshComponent.VERTEX, MeshComponent.FACE)
        for v, faces in f_map.items():
            for f in faces:
                assert v in unit_cube.get_face(f)

    def test_unreferenced_vertex_has_no_key(self):
        verts = [(0, 0, 0), (1, 0, 0), (0, 1, 0), (5, 5, 5)]
        mesh = TriangleVertexMesh(verts, [0, 1, 2])
        assert 3 not in make_incidence_map(mesh, MeshComponent.VERTEX, MeshComponent.VERTEX)
        assert 3 not in make_incidence_map(mesh, MeshComponent.VERTEX, MeshComponent.FACE)

    def test_maps_are_fresh(self, unit_square_mesh):
        first = make_incidence_map(unit_square_mesh, MeshComponent.VERTEX, MeshComponent.FACE)
        first[0].add(99)
        second = make_incidence_map(unit_square_mesh, MeshComponent.VERTEX, MeshComponent.FACE)
        assert 99 not in second[0]

    @pytest.mark.parametrize("origin,incident", UNSUPPORTED)
    def test_unsupported_pairs_raise(self, unit_square_mesh, origin, incident):
        with pytest.raises(UnsupportedIncidenceError) as exc:
            make_incidence_map(unit_square_mesh, origin, incident)
        assert exc.value.origin is origin
        assert exc.value.incident is incident
        assert isinstance(exc.value, NotImplementedError)

    def test_builders_accept_raw_triangles(self):
        tris = np.array([[0, 1, 2], [2, 1, 3]])
        assert build_vertex_to_face_map(tris) == {0: {0}, 1: {0, 1}, 2: {0, 1}, 3: {1}}
        assert build_vertex_to_vertex_map(tris.reshape(-1)) == {
            0: {1, 2}, 1: {0, 2, 3}, 2: {0, 1, 3}, 3: {1, 2},
        }
