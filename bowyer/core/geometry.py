"""Geometric predicates for points, triangles and circumcircles.

Scalar functions accept any objects exposing ``.x`` and ``.y`` (``Point``
in practice). The vectorized variants operate on an ``(N, 2)`` coordinate
array and an ``(M, 3)`` index array and evaluate the *same* expressions in
the *same* order as their scalar counterparts, so the boxed and compact
engine layouts make bit-identical decisions.

Coordinates are read as double precision whatever width they are stored
in, so 32-bit storage only rounds the inputs, never the predicates.
"""
from __future__ import annotations
import numpy as np
from scipy.spatial import ConvexHull, QhullError

from .errors import InternalInconsistency

__all__ = [
	'cross_product','is_flat_angle','dist2','dist','is_in_circle','quat_cross',
	'circumcenter','circumradius','circumcircle','triangle_area','in_circumcircle',
	'circumcircles','in_circles','cross_products','triangles_signed_areas','hull_area',
]

def _xy(p):
	return float(p.x), float(p.y)

def cross_product(p1, p2, p3):
	"""Cross product of (p1->p2) and (p2->p3).

	Positive for a counter-clockwise turn, negative for clockwise, zero when
	the three points are collinear. Magnitude is twice the triangle area.
	"""
	(ax, ay), (bx, by), (cx, cy) = _xy(p1), _xy(p2), _xy(p3)
	x1, x2 = bx - ax, cx - bx
	y1, y2 = by - ay, cy - by
	return x1 * y2 - y1 * x2

def is_flat_angle(p1, p2, p3):
	# exact comparison; near-collinear triples pass
	return cross_product(p1, p2, p3) == 0

def dist2(a, b):
	(ax, ay), (bx, by) = _xy(a), _xy(b)
	dx, dy = ax - bx, ay - by
	return dx * dx + dy * dy

def dist(a, b):
	return np.sqrt(dist2(a, b))

def is_in_circle(p, cx, cy, r):
	"""True when p lies inside or on the circle (cx, cy, r)."""
	px, py = _xy(p)
	dx = cx - px
	dy = cy - py
	return (dx * dx + dy * dy) <= (r * r)

def quat_cross(a, b, c):
	"""Heron's product for side lengths a, b, c: four times the triangle area.

	Raises InternalInconsistency when the side lengths violate the triangle
	inequality (negative or NaN radicand), which only happens after an
	upstream numerical failure.
	"""
	p = (a + b + c) * (a + b - c) * (a - b + c) * (-a + b + c)
	if not p >= 0:
		raise InternalInconsistency(f"invalid side lengths for Heron's formula: {a!r}, {b!r}, {c!r}")
	return np.sqrt(p)

def circumcenter(p1, p2, p3):
	x1, y1 = _xy(p1)
	x2, y2 = _xy(p2)
	x3, y3 = _xy(p3)
	d = (x1 * (y2 - y3) + x2 * (y3 - y1) + x3 * (y1 - y2)) * 2
	if d == 0:
		raise InternalInconsistency(f"zero circumcenter denominator for ({x1}, {y1}), ({x2}, {y2}), ({x3}, {y3})")
	s1 = x1 * x1 + y1 * y1
	s2 = x2 * x2 + y2 * y2
	s3 = x3 * x3 + y3 * y3
	ux = s1 * (y2 - y3) + s2 * (y3 - y1) + s3 * (y1 - y2)
	uy = s1 * (x3 - x2) + s2 * (x1 - x3) + s3 * (x2 - x1)
	return ux / d, uy / d

def _sides(p1, p2, p3):
	return dist(p1, p2), dist(p2, p3), dist(p3, p1)

def circumradius(p1, p2, p3):
	a, b, c = _sides(p1, p2, p3)
	q = quat_cross(a, b, c)
	if q == 0:
		raise InternalInconsistency("circumradius undefined: Heron's product vanished")
	return a * b * c / q

def circumcircle(p1, p2, p3):
	"""Return (cx, cy, r) of the circle through p1, p2, p3."""
	cx, cy = circumcenter(p1, p2, p3)
	return cx, cy, circumradius(p1, p2, p3)

def triangle_area(p1, p2, p3):
	a, b, c = _sides(p1, p2, p3)
	return quat_cross(a, b, c) / 4

def in_circumcircle(p1, p2, p3, p):
	cx, cy, r = circumcircle(p1, p2, p3)
	return is_in_circle(p, cx, cy, r)

# ----------------------------------------------------------------------------
# Vectorized variants (compact layout)
# ----------------------------------------------------------------------------

def cross_products(coords, tris):
	"""Vectorized cross_product over triangle rows (M,) of an (M,3) index array."""
	P = np.asarray(coords, dtype=np.float64)
	T = np.asarray(tris, dtype=np.intp)
	if T.size == 0:
		return np.empty((0,), dtype=P.dtype)
	p1 = P[T[:, 0]]; p2 = P[T[:, 1]]; p3 = P[T[:, 2]]
	x1 = p2[:, 0] - p1[:, 0]; x2 = p3[:, 0] - p2[:, 0]
	y1 = p2[:, 1] - p1[:, 1]; y2 = p3[:, 1] - p2[:, 1]
	return x1 * y2 - y1 * x2

def circumcircles(coords, tris):
	"""Circumcircle centers and radii for a batch of triangles.

	coords: (N,2) float array
	tris:   (M,3) int array
	Returns: (cx, cy, r), each (M,) float64.
	"""
	P = np.asarray(coords, dtype=np.float64)
	T = np.asarray(tris, dtype=np.intp)
	if T.size == 0:
		empty = np.empty((0,), dtype=P.dtype)
		return empty, empty.copy(), empty.copy()
	x1 = P[T[:, 0], 0]; y1 = P[T[:, 0], 1]
	x2 = P[T[:, 1], 0]; y2 = P[T[:, 1], 1]
	x3 = P[T[:, 2], 0]; y3 = P[T[:, 2], 1]
	d = (x1 * (y2 - y3) + x2 * (y3 - y1) + x3 * (y1 - y2)) * 2
	if np.any(d == 0):
		bad = int(np.nonzero(d == 0)[0][0])
		raise InternalInconsistency(f"zero circumcenter denominator for triangle {T[bad].tolist()}")
	s1 = x1 * x1 + y1 * y1
	s2 = x2 * x2 + y2 * y2
	s3 = x3 * x3 + y3 * y3
	ux = s1 * (y2 - y3) + s2 * (y3 - y1) + s3 * (y1 - y2)
	uy = s1 * (x3 - x2) + s2 * (x1 - x3) + s3 * (x2 - x1)
	# side lengths in Triangle edge order: |p1p2|, |p2p3|, |p3p1|
	dx = x1 - x2; dy = y1 - y2
	a = np.sqrt(dx * dx + dy * dy)
	dx = x2 - x3; dy = y2 - y3
	b = np.sqrt(dx * dx + dy * dy)
	dx = x3 - x1; dy = y3 - y1
	c = np.sqrt(dx * dx + dy * dy)
	p = (a + b + c) * (a + b - c) * (a - b + c) * (-a + b + c)
	if not np.all(p > 0):
		bad = int(np.nonzero(~(p > 0))[0][0])
		raise InternalInconsistency(f"invalid Heron product {p[bad]!r} for triangle {T[bad].tolist()}")
	r = a * b * c / np.sqrt(p)
	return ux / d, uy / d, r

def in_circles(px, py, cx, cy, r):
	"""Boolean mask of circles (cx, cy, r) containing (px, py), boundary inclusive."""
	px, py = float(px), float(py)
	dx = cx - px
	dy = cy - py
	return (dx * dx + dy * dy) <= (r * r)

def triangles_signed_areas(points, tris):
	"""Vectorized signed area for a batch of triangles.

	points: (N,2) float array
	tris:   (M,3) int array
	Returns: (M,) float64 array of signed areas (0.5 * cross).
	"""
	pts = np.asarray(points, dtype=np.float64)
	T = np.asarray(tris, dtype=np.intp)
	if T.size == 0:
		return np.empty((0,), dtype=float)
	p0 = pts[T[:, 0]]; p1 = pts[T[:, 1]]; p2 = pts[T[:, 2]]
	e1 = p1 - p0; e2 = p2 - p0
	return 0.5 * (e1[:, 0] * e2[:, 1] - e1[:, 1] * e2[:, 0])

def hull_area(points):
	"""Area of the convex hull of (N,2) points; 0.0 for degenerate sets."""
	pts = np.asarray(points, dtype=np.float64)
	if pts.shape[0] < 3:
		return 0.0
	try:
		return float(ConvexHull(pts).volume)  # 2D "volume" is the area
	except QhullError:
		# collinear or coincident input has no 2D hull
		return 0.0
