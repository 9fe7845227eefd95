"""Central numerical tolerances.

This module centralizes tiny numeric thresholds used across the kernel so
they can be tuned consistently and referenced without scattering literals.
"""
from __future__ import annotations

# Vector tolerances
EPS_LENGTH: float = 1e-12     # vectors shorter than this cannot be normalized
EPS_ANGLE: float = 1e-15      # angle sums below this are treated as empty

# Polygon classification
EPS_WEDGE: float = 0.0        # default concave threshold: a turn is concave iff wedge < -EPS_WEDGE

__all__ = [
    'EPS_LENGTH',
    'EPS_ANGLE',
    'EPS_WEDGE',
]
