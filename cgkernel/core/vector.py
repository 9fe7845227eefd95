"""Small fixed-size vector types and vectorized helpers.

``Vec2`` and ``Vec3`` are immutable value types. They work for any numeric
element type: integer inputs stay integer through add/sub/dot/wedge, while
length, angle and normalization always produce floats.

Both types expose the same capability (add, subtract, scale, dot, wedge,
angle, normalize), described by the ``Vector`` protocol, so polygon and
normal code can be written once against it.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence, Tuple, TypeVar, Union

import numpy as np

from .constants import EPS_LENGTH

Number = Union[int, float]
V = TypeVar('V', bound='Vector')

__all__ = [
    'Vector', 'Vec2', 'Vec3',
    'as_points2', 'as_points3', 'wedge2', 'normalize_rows',
]


class Vector(Protocol):
    def __add__(self: V, other: V) -> V: ...
    def __sub__(self: V, other: V) -> V: ...
    def scale(self: V, k: Number) -> V: ...
    def dot(self: V, other: V) -> Number: ...
    def length(self) -> float: ...
    def angle(self: V, other: V) -> Optional[float]: ...
    def normalized(self: V, eps: float = EPS_LENGTH) -> Optional[V]: ...


@dataclass(frozen=True)
class Vec2:
    x: Number
    y: Number

    def __iter__(self):
        yield self.x
        yield self.y

    def __len__(self) -> int:
        return 2

    def __getitem__(self, i: int) -> Number:
        return (self.x, self.y)[i]

    def __add__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> 'Vec2':
        return Vec2(-self.x, -self.y)

    def __mul__(self, k: Number) -> 'Vec2':
        return self.scale(k)

    __rmul__ = __mul__

    def scale(self, k: Number) -> 'Vec2':
        return Vec2(self.x * k, self.y * k)

    def dot(self, other: 'Vec2') -> Number:
        return self.x * other.x + self.y * other.y

    def wedge(self, other: 'Vec2') -> Number:
        """Signed parallelogram area; positive when ``other`` turns CCW from ``self``."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def angle(self, other: 'Vec2') -> Optional[float]:
        """Unsigned angle in radians, or None if either vector has zero length."""
        if self.length() < EPS_LENGTH or other.length() < EPS_LENGTH:
            return None
        return math.atan2(abs(self.wedge(other)), self.dot(other))

    def normalized(self, eps: float = EPS_LENGTH) -> Optional['Vec2']:
        n = self.length()
        if not n > eps:
            return None
        return Vec2(self.x / n, self.y / n)

    def to_array(self, dtype=np.float64) -> np.ndarray:
        return np.array((self.x, self.y), dtype=dtype)

    @classmethod
    def from_array(cls, arr) -> 'Vec2':
        x, y = np.asarray(arr).reshape(2).tolist()
        return cls(x, y)


@dataclass(frozen=True)
class Vec3:
    x: Number
    y: Number
    z: Number

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    def __getitem__(self, i: int) -> Number:
        return (self.x, self.y, self.z)[i]

    def __add__(self, other: 'Vec3') -> 'Vec3':
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vec3') -> 'Vec3':
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> 'Vec3':
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, k: Number) -> 'Vec3':
        return self.scale(k)

    __rmul__ = __mul__

    def scale(self, k: Number) -> 'Vec3':
        return Vec3(self.x * k, self.y * k, self.z * k)

    def dot(self, other: 'Vec3') -> Number:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def wedge(self, other: 'Vec3') -> 'Vec3':
        """Cross product."""
        return Vec3(self.y * other.z - self.z * other.y,
                    self.z * other.x - self.x * other.z,
                    self.x * other.y - self.y * other.x)

    cross = wedge

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def angle(self, other: 'Vec3') -> Optional[float]:
        """Unsigned angle in radians, or None if either vector has zero length."""
        if self.length() < EPS_LENGTH or other.length() < EPS_LENGTH:
            return None
        return math.atan2(self.wedge(other).length(), self.dot(other))

    def normalized(self, eps: float = EPS_LENGTH) -> Optional['Vec3']:
        n = self.length()
        if not n > eps:
            return None
        return Vec3(self.x / n, self.y / n, self.z / n)

    def to_array(self, dtype=np.float64) -> np.ndarray:
        return np.array((self.x, self.y, self.z), dtype=dtype)

    @classmethod
    def from_array(cls, arr) -> 'Vec3':
        x, y, z = np.asarray(arr).reshape(3).tolist()
        return cls(x, y, z)

    @classmethod
    def zero(cls) -> 'Vec3':
        return cls(0.0, 0.0, 0.0)


# ---------------------------------------------------------------------------
# Vectorized helpers
# ---------------------------------------------------------------------------

def _as_points(points, dim: int) -> np.ndarray:
    if isinstance(points, np.ndarray):
        arr = np.asarray(points, dtype=np.float64)
    else:
        pts = list(points)
        arr = np.asarray([tuple(p) for p in pts], dtype=np.float64) if pts else np.empty((0, dim))
    if arr.size == 0:
        return np.empty((0, dim), dtype=np.float64)
    if arr.ndim == 1 and arr.size % dim == 0:
        arr = arr.reshape(-1, dim)
    if arr.ndim != 2 or arr.shape[1] != dim:
        raise ValueError(f"points must have shape (N,{dim})")
    return np.ascontiguousarray(arr)


def as_points2(points: Union[np.ndarray, Iterable[Sequence[Number]]]) -> np.ndarray:
    """Return an (N,2) float64 array from Vec2s, tuples, or a flat/2D array."""
    return _as_points(points, 2)


def as_points3(points: Union[np.ndarray, Iterable[Sequence[Number]]]) -> np.ndarray:
    """Return an (N,3) float64 array from Vec3s, tuples, or a flat/2D array."""
    return _as_points(points, 3)


def wedge2(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Row-wise 2D wedge of two (M,2) arrays."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    return a[..., 0] * b[..., 1] - a[..., 1] * b[..., 0]


def normalize_rows(arr: np.ndarray, eps: float = EPS_LENGTH) -> Tuple[np.ndarray, np.ndarray]:
    """Normalize each row of ``arr``.

    Returns ``(unit, ok)`` where rows with length <= eps are left as zero and
    flagged False in the boolean mask ``ok``.
    """
    a = np.asarray(arr, dtype=np.float64)
    lengths = np.linalg.norm(a, axis=-1)
    ok = lengths > eps
    out = np.zeros_like(a)
    out[ok] = a[ok] / lengths[ok][:, None]
    return out, ok
