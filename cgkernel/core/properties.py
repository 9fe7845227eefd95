"""Per-entity attribute store.

Properties are keyed by a small closed set of kinds. Each kind is bound to
exactly one container class, so lookups never need dynamic type checks
beyond the registry below.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, Optional, Sequence

import numpy as np

from .logging_utils import get_logger
from .vector import Vec3

logger = get_logger('cgkernel.properties')

__all__ = ['PropertyKind', 'PropertyMap', 'NormalMap', 'ColorMap', 'PropertyStore']


class PropertyKind(Enum):
    NORMAL = 0
    COLOR = 1


class PropertyMap:
    """Dense, index-aligned storage of fixed-width float rows.

    Every slot also carries a ``defined`` flag. Slots created by ``push`` or
    ``set`` are defined; ``with_size(..., defined=False)`` creates slots that
    read back as None until written.
    """
    kind: PropertyKind
    width: int

    def __init__(self, data: Optional[np.ndarray] = None, defined: Optional[np.ndarray] = None):
        if data is None:
            data = np.empty((0, self.width), dtype=np.float64)
        arr = np.array(data, dtype=np.float64).reshape(-1, self.width)
        self._data = arr
        if defined is None:
            self._defined = np.ones(arr.shape[0], dtype=bool)
        else:
            self._defined = np.array(defined, dtype=bool).reshape(arr.shape[0])

    @classmethod
    def with_size(cls, size: int, default: Optional[Sequence[float]] = None, defined: bool = True):
        row = np.zeros(cls.width) if default is None else np.asarray(tuple(default), dtype=np.float64)
        data = np.tile(row, (int(size), 1))
        return cls(data, np.full(int(size), bool(defined)))

    def __len__(self) -> int:
        return self._data.shape[0]

    def push(self, value: Sequence[float]) -> None:
        row = np.asarray(tuple(value), dtype=np.float64).reshape(1, self.width)
        self._data = np.vstack([self._data, row])
        self._defined = np.append(self._defined, True)

    def set(self, idx: int, value: Sequence[float]) -> None:
        self._data[idx] = tuple(value)
        self._defined[idx] = True

    def unset(self, idx: int) -> None:
        self._data[idx] = 0.0
        self._defined[idx] = False

    def is_defined(self, idx: int) -> bool:
        return bool(self._defined[idx])

    def get_row(self, idx: int) -> Optional[np.ndarray]:
        if not self._defined[idx]:
            return None
        return self._data[idx].copy()

    def as_array(self) -> np.ndarray:
        """Copy of the raw rows; undefined slots read as zero."""
        return self._data.copy()

    @property
    def defined(self) -> np.ndarray:
        return self._defined.copy()


class NormalMap(PropertyMap):
    kind = PropertyKind.NORMAL
    width = 3

    def get(self, idx: int) -> Optional[Vec3]:
        row = self.get_row(idx)
        if row is None:
            return None
        return Vec3.from_array(row)

    def __iter__(self) -> Iterator[Optional[Vec3]]:
        for i in range(len(self)):
            yield self.get(i)


class ColorMap(PropertyMap):
    """RGBA colors as floats in [0, 1]."""
    kind = PropertyKind.COLOR
    width = 4

    def get(self, idx: int):
        row = self.get_row(idx)
        if row is None:
            return None
        return tuple(row.tolist())


# Closed registry: one container class per kind
_CONTAINERS = {
    PropertyKind.NORMAL: NormalMap,
    PropertyKind.COLOR: ColorMap,
}


class PropertyStore:
    """Holds at most one container per ``PropertyKind``.

    Misuse (duplicate add, wrong container type, missing kind) is reported by
    return value, never by raising.
    """

    def __init__(self):
        self._maps: Dict[PropertyKind, PropertyMap] = {}

    def add(self, prop: PropertyMap) -> bool:
        kind = getattr(prop, 'kind', None)
        expected = _CONTAINERS.get(kind)
        if expected is None or not isinstance(prop, expected):
            logger.warning("rejecting property of type %s: not a registered container",
                           type(prop).__name__)
            return False
        if kind in self._maps:
            logger.warning("property %s already present", kind.name)
            return False
        self._maps[kind] = prop
        return True

    def get(self, kind: PropertyKind) -> Optional[PropertyMap]:
        return self._maps.get(kind)

    def remove(self, kind: PropertyKind) -> bool:
        return self._maps.pop(kind, None) is not None

    def kinds(self):
        return list(self._maps.keys())

    def __contains__(self, kind: PropertyKind) -> bool:
        return kind in self._maps

    def __len__(self) -> int:
        return len(self._maps)


