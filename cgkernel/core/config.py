"""Configuration objects for polygon analysis and normal computation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Union

from .constants import EPS_ANGLE, EPS_LENGTH, EPS_WEDGE


@dataclass
class PolygonConfig:
    # A turn is concave iff wedge(incoming, outgoing) < -concave_tolerance
    concave_tolerance: float = EPS_WEDGE


@dataclass
class NormalConfig:
    eps_length: float = EPS_LENGTH
    # Angle sums at or below this leave the vertex normal at zero
    eps_angle: float = EPS_ANGLE
    # Values > 1 spread the per-vertex pass over a thread pool
    max_workers: int = 1

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")


@dataclass
class KernelConfig:
    """Unified configuration.

    Attributes
    ----------
    polygon : PolygonConfig
        Parameters for vertex classification and triangulation.
    normals : NormalConfig
        Parameters for face / vertex normal computation.
    extras : dict
        Free-form dictionary for caller-specific settings.
    """
    polygon: PolygonConfig = field(default_factory=PolygonConfig)
    normals: NormalConfig = field(default_factory=NormalConfig)
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'KernelConfig':
        """Build a config from a nested plain dict, e.g. parsed from JSON.

        Unknown top-level keys are kept in ``extras``; unknown section keys
        raise ``TypeError`` from the dataclass constructor.
        """
        values = dict(values or {})
        polygon = PolygonConfig(**values.pop('polygon', {}))
        normals = NormalConfig(**values.pop('normals', {}))
        extras = dict(values.pop('extras', {}))
        extras.update(values)
        return cls(polygon=polygon, normals=normals, extras=extras)


def polygon_config(config: Union[PolygonConfig, KernelConfig, None]) -> PolygonConfig:
    """Resolve the polygon section from a section, a full KernelConfig or None."""
    if config is None:
        return PolygonConfig()
    if isinstance(config, KernelConfig):
        return config.polygon
    return config


def normal_config(config: Union[NormalConfig, KernelConfig, None]) -> NormalConfig:
    """Resolve the normals section from a section, a full KernelConfig or None."""
    if config is None:
        return NormalConfig()
    if isinstance(config, KernelConfig):
        return config.normals
    return config


__all__ = ['PolygonConfig', 'NormalConfig', 'KernelConfig', 'polygon_config', 'normal_config']
