"""Central numerical constants for the triangulation engine.

Keeps the few tunable literals (super-triangle scale, size bound, check
tolerances) in one place so they are not scattered across modules.
"""
from __future__ import annotations

# Super-triangle
DEFAULT_CONVEX_MULTIPLIER: float = 1e3  # bbox span -> super-triangle offset scale
TRIANGLE_BOUND_FACTOR: int = 4          # live triangles never exceed factor * N

# Check tolerances (post-hoc validation only; the engine itself is exact)
EPS_AREA: float = 1e-12           # minimum triangle area, relative to the squared bbox span
EPS_AREA_REL: float = 1e-9        # relative tolerance for hull-area comparison
EPS_INCIRCLE_REL: float = 1e-9    # relative slack for strict in-circle violations

# Float widths accepted by the precision configuration
FLOAT_WIDTHS = (32, 64)

__all__ = [
    'DEFAULT_CONVEX_MULTIPLIER',
    'TRIANGLE_BOUND_FACTOR',
    'EPS_AREA',
    'EPS_AREA_REL',
    'EPS_INCIRCLE_REL',
    'FLOAT_WIDTHS',
]
