"""Public package API for the cgkernel geometry kernel.

This facade provides a stable, flat import surface on top of the internal
implementation package ``cgkernel.core``.

Example
-------
    from cgkernel import Polygon, TriangleVertexMesh, create_angle_weighted_pseudo_vertex_normals

The deeper modules (``cgkernel.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import PackageNotFoundError as _NotFound, version as _pkg_version
    __version__ = _pkg_version("cgkernel")
except _NotFound:  # pragma: no cover - source checkout without install
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

_const = _imp('cgkernel.core.constants')
_config = _imp('cgkernel.core.config')
_vector = _imp('cgkernel.core.vector')
_cardinal = _imp('cgkernel.core.cardinal')
_polygon = _imp('cgkernel.core.polygon')
_props = _imp('cgkernel.core.properties')
_mesh = _imp('cgkernel.core.mesh')
_normals = _imp('cgkernel.core.normals')
_interop = _imp('cgkernel.core.interop')
_log = _imp('cgkernel.core.logging_utils')

# Vectors
Vec2 = _vector.Vec2
Vec3 = _vector.Vec3

# Polygon analysis
Polygon = _polygon.Polygon
get_concave_vertices = _polygon.get_concave_vertices
is_convex = _polygon.is_convex
triangulate = _polygon.triangulate
fan_triangulation = _polygon.fan_triangulation
regular = _polygon.regular
signed_area = _polygon.signed_area
is_ccw = _polygon.is_ccw

# Meshes
MeshComponent = _mesh.MeshComponent
TriangleVertexMesh = _mesh.TriangleVertexMesh
UnsupportedIncidenceError = _mesh.UnsupportedIncidenceError
make_incidence_map = _mesh.make_incidence_map

# Normals
calculate_face_normal = _normals.calculate_face_normal
face_normals = _normals.face_normals
create_angle_weighted_pseudo_vertex_normals = _normals.create_angle_weighted_pseudo_vertex_normals
attach_vertex_normals = _normals.attach_vertex_normals

# Attribute store
PropertyKind = _props.PropertyKind
NormalMap = _props.NormalMap
ColorMap = _props.ColorMap
PropertyStore = _props.PropertyStore

# Planar embedding
CardinalDirection = _cardinal.CardinalDirection
embed_to_3d = _cardinal.embed_to_3d
embed_points_to_3d = _cardinal.embed_points_to_3d

# Flat-array entry points
triangulate_flat = _interop.triangulate_flat
regular_flat = _interop.regular_flat

# Configuration and logging
PolygonConfig = _config.PolygonConfig
NormalConfig = _config.NormalConfig
KernelConfig = _config.KernelConfig
configure_logging = _log.configure_logging
get_logger = _log.get_logger

# Namespace submodules
constants = _const
vector = _vector
polygon = _polygon
mesh = _mesh
normals = _normals
properties = _props
interop = _interop

__all__ = [
    '__version__',
    'Vec2', 'Vec3',
    'Polygon', 'get_concave_vertices', 'is_convex', 'triangulate', 'fan_triangulation',
    'regular', 'signed_area', 'is_ccw',
    'MeshComponent', 'TriangleVertexMesh', 'UnsupportedIncidenceError', 'make_incidence_map',
    'calculate_face_normal', 'face_normals', 'create_angle_weighted_pseudo_vertex_normals',
    'attach_vertex_normals',
    'PropertyKind', 'NormalMap', 'ColorMap', 'PropertyStore',
    'CardinalDirection', 'embed_to_3d', 'embed_points_to_3d',
    'triangulate_flat', 'regular_flat',
    'PolygonConfig', 'NormalConfig', 'KernelConfig', 'configure_logging', 'get_logger',
    'constants', 'vector', 'polygon', 'mesh', 'normals', 'properties', 'interop',
]
