"""Optional input pre-pass for triangulate(validate=True).

The engine itself does not guard against coincident or all-collinear
input; this module rejects both up front with a precise error instead of
letting the build produce a partial or empty result.
"""
from __future__ import annotations

from typing import Iterable, List

from .errors import DegenerateTriangle, InvalidInput
from .geometry import cross_product
from .logging_utils import get_logger
from .primitives import Point, as_point

logger = get_logger('bowyer.validation')

__all__ = ['validate_points', 'find_duplicates']


def find_duplicates(points: Iterable) -> List[tuple]:
    """Return (first_index, duplicate_index) pairs for coincident points."""
    seen = {}
    dupes = []
    for i, p in enumerate(points):
        p = as_point(p)
        j = seen.setdefault(p, i)
        if j != i:
            dupes.append((j, i))
    return dupes


def validate_points(points: Iterable) -> List[Point]:
    """Check that points are finite, pairwise distinct and not all collinear.

    Returns the points as a list of Point. Raises InvalidInput for fewer
    than three points, non-finite coordinates or duplicates, and
    DegenerateTriangle when every point lies on one line.
    """
    pts = [as_point(p) for p in points]
    if len(pts) < 3:
        raise InvalidInput(f"cannot triangulate {len(pts)} point(s), needs at least 3")
    for i, p in enumerate(pts):
        if not p.is_finite():
            raise InvalidInput(f"point {i} has non-finite coordinates ({p.x}, {p.y})")
    dupes = find_duplicates(pts)
    if dupes:
        i, j = dupes[0]
        raise InvalidInput(
            f"{len(dupes)} duplicate point(s); first: index {j} repeats index {i} at ({pts[i].x}, {pts[i].y})")
    # pts[0] != pts[1] is guaranteed once duplicates are excluded
    a, b = pts[0], pts[1]
    if all(cross_product(a, b, p) == 0 for p in pts[2:]):
        raise DegenerateTriangle(f"all {len(pts)} points are collinear", points=pts[:3])
    logger.debug("validated %d points", len(pts))
    return pts
