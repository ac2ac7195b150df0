"""Bowyer-Watson Delaunay triangulation.

Points are inserted one at a time into a triangulation seeded with an
oversized super-triangle. Each insertion removes every triangle whose
circumcircle contains the new point (the cavity), keeps the cavity edges
that belong to exactly one removed triangle, and fans those boundary edges
to the point. Triangles touching a super vertex are discarded at the end.

Two interchangeable layouts run the same arithmetic:

- boxed: ``Point``/``Triangle`` objects and scalar predicates;
- compact: one contiguous coordinate array, an ``(M, 3)`` index array and
  cached circumcircles, with the cavity search vectorized.

The caller's points are copied on entry and never mutated; vertex ids
exist only on those private copies.
"""
from __future__ import annotations

import time
from collections import defaultdict
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import TriangulationConfig, lock_precision
from .constants import TRIANGLE_BOUND_FACTOR
from .errors import DegenerateTriangle, DelaunayError, InternalInconsistency, InvalidInput
from .geometry import circumcircles, cross_products, in_circles
from .logging_utils import get_logger
from .primitives import Point, Triangle
from .stats import TriangulationStats
from .validation import validate_points

logger = get_logger('bowyer.triangulation')

__all__ = ['triangulate', 'triangulate_indices', 'Delaunay']


def _as_points(points) -> List[Point]:
    """Copy input into engine-owned Points with 1-based ids."""
    if isinstance(points, np.ndarray) and (points.ndim != 2 or points.shape[1] != 2):
        raise InvalidInput(f"point array must have shape (N, 2), got {points.shape}")
    out = []
    for i, item in enumerate(points):
        if isinstance(item, Point):
            x, y = item.x, item.y
        else:
            try:
                x, y = item
            except (TypeError, ValueError) as exc:
                raise InvalidInput(f"point {i} is not an (x, y) pair: {item!r}") from exc
        p = Point(x, y, i + 1)
        if not p.is_finite():
            raise InvalidInput(f"point {i} has non-finite coordinates ({p.x}, {p.y})")
        out.append(p)
    return out


def _super_triangle(pts: Sequence[Point], multiplier: float) -> Tuple[Point, Point, Point]:
    """Three synthetic points enclosing the bounding box of pts, ids N+1..N+3."""
    n = len(pts)
    xs = [float(p.x) for p in pts]
    ys = [float(p.y) for p in pts]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    dx = (max_x - min_x) * multiplier
    dy = (max_y - min_y) * multiplier
    delta_max = max(dx, dy)
    mid_x = (min_x + max_x) * 0.5
    mid_y = (min_y + max_y) * 0.5
    return (Point(mid_x - 2 * delta_max, mid_y - delta_max, n + 1),
            Point(mid_x, mid_y + 2 * delta_max, n + 2),
            Point(mid_x + 2 * delta_max, mid_y - delta_max, n + 3))


def _cavity_boundary(edges, keys):
    """Keep edges whose key occurs exactly once, in first-seen order.

    An edge shared by two removed triangles is interior to the cavity. A
    multiplicity above two cannot happen in a valid triangulation.
    """
    counts = defaultdict(int)
    for k in keys:
        counts[k] += 1
    over = [k for k, c in counts.items() if c > 2]
    if over:
        raise InternalInconsistency(f"{len(over)} cavity edge(s) shared by more than two triangles")
    return [e for e, k in zip(edges, keys) if counts[k] == 1]


def _check_bound(live: int, new: int, trmax: int) -> None:
    # mirrors a per-append check of the live count against trmax
    if new and live + new - 1 > trmax:
        raise InternalInconsistency(f"generated more triangles than the bound allows ({trmax})")


def _build_boxed(work: List[Point], n: int, stats, progress_every: int) -> np.ndarray:
    trmax = n * TRIANGLE_BOUND_FACTOR
    super_tri = Triangle(work[n], work[n + 1], work[n + 2])
    super_tri.circumcircle()
    triangles = [super_tri]
    for i in range(n):
        point = work[i]
        kept = []
        edges = []
        for tri in triangles:
            if tri.in_circumcircle(point):
                edges.extend(tri.edges)
            else:
                kept.append(tri)
        boundary = _cavity_boundary(edges, [e.key() for e in edges])
        _check_bound(len(kept), len(boundary), trmax)
        for edge in boundary:
            tri = Triangle(edge.p1, edge.p2, point)
            tri.circumcircle()
            kept.append(tri)
        if stats is not None:
            stats.record_insertion(len(edges) // 3, len(boundary), len(kept))
        triangles = kept
        if progress_every and (i + 1) % progress_every == 0:
            logger.debug("inserted %d/%d points, %d live triangles", i + 1, n, len(triangles))
    simplices = [(t.p1.id - 1, t.p2.id - 1, t.p3.id - 1) for t in triangles
                 if t.p1.id <= n and t.p2.id <= n and t.p3.id <= n]
    if stats is not None:
        stats.hull_removed = len(triangles) - len(simplices)
    if not simplices:
        return np.empty((0, 3), dtype=np.intp)
    return np.asarray(simplices, dtype=np.intp)


def _check_flat(coords: np.ndarray, tris: np.ndarray, work: List[Point]) -> None:
    flat = cross_products(coords, tris) == 0
    if np.any(flat):
        a, b, c = (work[int(k)] for k in tris[int(np.nonzero(flat)[0][0])])
        raise DegenerateTriangle(
            "angle (p1, p2, p3) is flat:\n  %s\n  %s\n  %s" % (a.describe(), b.describe(), c.describe()),
            points=(a, b, c))


def _build_compact(work: List[Point], n: int, dtype, stats, progress_every: int) -> np.ndarray:
    trmax = n * TRIANGLE_BOUND_FACTOR
    coords = np.array([[p.x, p.y] for p in work], dtype=dtype)
    tris = np.array([[n, n + 1, n + 2]], dtype=np.intp)
    _check_flat(coords, tris, work)
    cx, cy, r = circumcircles(coords, tris)
    for i in range(n):
        inside = in_circles(coords[i, 0], coords[i, 1], cx, cy, r)
        bad = tris[inside]
        # per triangle: e1=(p1,p2), e2=(p2,p3), e3=(p3,p1)
        edges = np.stack((bad[:, [0, 1]], bad[:, [1, 2]], bad[:, [2, 0]]), axis=1).reshape(-1, 2)
        keys = [tuple(k) for k in np.sort(edges, axis=1).tolist()]
        boundary = _cavity_boundary(edges.tolist(), keys)
        keep = ~inside
        tris, cx, cy, r = tris[keep], cx[keep], cy[keep], r[keep]
        _check_bound(len(tris), len(boundary), trmax)
        if boundary:
            new = np.empty((len(boundary), 3), dtype=np.intp)
            new[:, :2] = boundary
            new[:, 2] = i
            _check_flat(coords, new, work)
            ncx, ncy, nr = circumcircles(coords, new)
            tris = np.vstack((tris, new))
            cx = np.concatenate((cx, ncx))
            cy = np.concatenate((cy, ncy))
            r = np.concatenate((r, nr))
        if stats is not None:
            stats.record_insertion(int(bad.shape[0]), len(boundary), len(tris))
        if progress_every and (i + 1) % progress_every == 0:
            logger.debug("inserted %d/%d points, %d live triangles", i + 1, n, len(tris))
    real = np.all(tris < n, axis=1)
    if stats is not None:
        stats.hull_removed = int(np.count_nonzero(~real))
    return np.ascontiguousarray(tris[real])


def _triangulate(points, cfg: TriangulationConfig, stats: Optional[TriangulationStats]):
    """Shared driver: returns (simplices, clean_points)."""
    work = _as_points(points)
    n = len(work)
    if n < 3:
        raise InvalidInput(f"cannot triangulate {n} point(s), needs at least 3")
    if cfg.validate:
        validate_points(work)
    # rejected input leaves the precision unlocked
    precision = lock_precision()
    if stats is None and cfg.collect_stats:
        stats = TriangulationStats()
    layout = 'compact' if precision.compact_layout else 'boxed'
    start = time.perf_counter()
    try:
        if n == 3:
            Triangle(*work)
            simplices = np.array([[0, 1, 2]], dtype=np.intp)
            multiplier = 0.0
        else:
            multiplier = cfg.resolved_multiplier()
            work.extend(_super_triangle(work, multiplier))
            logger.debug("super-triangle for %d points: %s", n,
                         ", ".join(p.describe() for p in work[n:]))
            if precision.compact_layout:
                simplices = _build_compact(work, n, precision.dtype, stats, cfg.log_progress_every)
            else:
                simplices = _build_boxed(work, n, stats, cfg.log_progress_every)
    except DelaunayError as exc:
        logger.debug("triangulation of %d points failed (%s layout): %s", n, layout, exc)
        raise
    elapsed = time.perf_counter() - start
    logger.debug("triangulated %d points into %d triangles in %.3f ms (%s, %d-bit)",
                 n, len(simplices), elapsed * 1000.0, layout, precision.float_bits)
    if stats is not None:
        stats.n_points = n
        stats.layout = layout
        stats.float_bits = precision.float_bits
        stats.convex_multiplier = multiplier
        stats.n_triangles = int(len(simplices))
        stats.time_total = elapsed
    clean = [p.with_id(None) for p in work[:n]]
    return simplices, clean


def _resolve_config(config, **overrides) -> TriangulationConfig:
    return (config if config is not None else TriangulationConfig()).with_overrides(**overrides)


def triangulate(points, config: Optional[TriangulationConfig] = None, *,
                convex_multiplier: Optional[float] = None, validate: Optional[bool] = None,
                stats: Optional[TriangulationStats] = None) -> List[Triangle]:
    """Delaunay triangulation of a planar point set.

    Parameters
    ----------
    points : sequence of Point or (x, y) pairs, or (N, 2) array
        At least three points. The input is copied and left untouched.
    config : TriangulationConfig, optional
        Per-call options; keyword arguments below override its fields.
    convex_multiplier : float, optional
        Super-triangle scale for this call (defaults to the module setting).
    validate : bool, optional
        Reject duplicate or all-collinear input before building.
    stats : TriangulationStats, optional
        Filled in place with counters and timing.

    Returns
    -------
    list of Triangle
        Triangles over value copies of the input points (ids cleared).

    Raises
    ------
    InvalidInput, DegenerateTriangle, InternalInconsistency
    """
    cfg = _resolve_config(config, convex_multiplier=convex_multiplier, validate=validate)
    simplices, clean = _triangulate(points, cfg, stats)
    return [Triangle(clean[a], clean[b], clean[c]) for a, b, c in simplices.tolist()]


def triangulate_indices(points, config: Optional[TriangulationConfig] = None, *,
                        convex_multiplier: Optional[float] = None, validate: Optional[bool] = None,
                        stats: Optional[TriangulationStats] = None) -> np.ndarray:
    """Like triangulate() but return an (M, 3) array of 0-based input indices."""
    cfg = _resolve_config(config, convex_multiplier=convex_multiplier, validate=validate)
    simplices, _ = _triangulate(points, cfg, stats)
    return simplices


class Delaunay:
    """Array-oriented facade: ``Delaunay(points).simplices``.

    Attributes
    ----------
    points : (N, 2) ndarray in the configured float dtype
    simplices : (M, 3) ndarray of int
    stats : TriangulationStats
    """

    def __init__(self, points, config: Optional[TriangulationConfig] = None, **overrides):
        cfg = _resolve_config(config, **overrides)
        self.stats = TriangulationStats()
        self.simplices, self._points = _triangulate(points, cfg, self.stats)
        dtype = lock_precision().dtype
        self.points = np.array([[p.x, p.y] for p in self._points], dtype=dtype).reshape(-1, 2)

    @property
    def triangles(self) -> List[Triangle]:
        pts = self._points
        return [Triangle(pts[a], pts[b], pts[c]) for a, b, c in self.simplices.tolist()]

    def check(self):
        """Run the conformity and Delaunay checks; returns (ok, messages)."""
        from .conformity import check_delaunay, check_triangulation
        ok_c, msgs_c = check_triangulation(self.points, self.simplices)
        ok_d, msgs_d = check_delaunay(self.points, self.simplices)
        return ok_c and ok_d, msgs_c + msgs_d

    def __len__(self):
        return len(self.simplices)

    def __repr__(self):
        return f"Delaunay(n_points={len(self.points)}, n_triangles={len(self.simplices)})"
