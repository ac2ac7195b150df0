"""Structural and Delaunay checks on a finished triangulation.

These work on plain ``(N, 2)`` point and ``(M, 3)`` index arrays (the
output of triangulate_indices()) and return ``(ok, messages)`` rather than
raising, so they can be used both in tests and for diagnostics.
"""
from __future__ import annotations
import numpy as np
from .geometry import circumcircles, triangles_signed_areas, hull_area
from .constants import EPS_AREA, EPS_AREA_REL, EPS_INCIRCLE_REL
from .errors import InternalInconsistency

__all__ = [
	'build_edge_to_tri_map','check_triangulation','check_delaunay',
]

_MAX_MSGS = 50

def build_edge_to_tri_map(triangles):
	"""Map each unordered edge (lo, hi) to the set of triangle rows using it."""
	edge_map = {}
	for t_idx, (a, b, c) in enumerate(np.asarray(triangles, dtype=np.intp).reshape(-1, 3).tolist()):
		for u, v in ((a, b), (b, c), (c, a)):
			edge_map.setdefault((min(u, v), max(u, v)), set()).add(t_idx)
	return edge_map

def check_triangulation(points, triangles, eps_area=EPS_AREA, area_rel_tol=EPS_AREA_REL):
	"""Conformity check: valid indices, no degenerate or duplicate triangles,
	every edge shared by at most two triangles, and triangle areas summing to
	the convex hull area (which together rule out overlaps and holes).

	Both area tolerances are relative: ``eps_area`` to the squared
	bounding-box span, ``area_rel_tol`` to the hull area.
	"""
	pts = np.ascontiguousarray(np.asarray(points, dtype=np.float64))
	tris = np.asarray(triangles, dtype=np.intp).reshape(-1, 3)
	msgs = []
	if tris.size == 0:
		return False, ["No triangles."]
	npts = len(pts)
	if tris.max() >= npts or tris.min() < 0:
		return False, ["Triangle indices out of range."]
	ok = True
	areas = np.abs(triangles_signed_areas(pts, tris))
	span = float(np.ptp(pts, axis=0).max())
	small = np.nonzero(areas <= eps_area * span * span)[0]
	for i in small[:_MAX_MSGS]:
		msgs.append(f"Triangle {int(i)} has near-zero area ({areas[i]:.3e}).")
	if small.size:
		ok = False
	_, tri_counts = np.unique(np.sort(tris, axis=1), axis=0, return_counts=True)
	if np.any(tri_counts > 1):
		msgs.append("Duplicate triangles detected.")
		ok = False
	edge_map = build_edge_to_tri_map(tris)
	non_manifold = [e for e, ts in edge_map.items() if len(ts) > 2]
	for e in non_manifold[:_MAX_MSGS]:
		msgs.append(f"Edge {e} shared by {len(edge_map[e])} triangles.")
	if non_manifold:
		ok = False
	total = float(areas.sum())
	hull = hull_area(pts)
	if abs(total - hull) > area_rel_tol * hull:
		msgs.append(f"Triangle area {total:.12g} differs from convex hull area {hull:.12g}.")
		ok = False
	return ok, msgs

def check_delaunay(points, triangles, rel_tol=EPS_INCIRCLE_REL, chunk=256):
	"""Empty-circumcircle check.

	Flags any point strictly inside a triangle's circumcircle by more than
	``rel_tol * r**2``. Points on the circle (cocircular input) pass.
	"""
	pts = np.ascontiguousarray(np.asarray(points, dtype=np.float64))
	tris = np.asarray(triangles, dtype=np.intp).reshape(-1, 3)
	msgs = []
	if tris.size == 0:
		return True, msgs
	try:
		cx, cy, r = circumcircles(pts, tris)
	except InternalInconsistency as exc:
		return False, [f"Circumcircle undefined: {exc}"]
	px = pts[:, 0]; py = pts[:, 1]
	for start in range(0, len(tris), chunk):
		stop = min(start + chunk, len(tris))
		dx = px[None, :] - cx[start:stop, None]
		dy = py[None, :] - cy[start:stop, None]
		r2 = (r[start:stop] ** 2)[:, None]
		inside = (dx * dx + dy * dy) < r2 * (1.0 - rel_tol)
		# a triangle's own vertices sit on its circle
		rows = np.arange(stop - start)[:, None]
		inside[rows, tris[start:stop]] = False
		for ti, pi in zip(*np.nonzero(inside)):
			if len(msgs) < _MAX_MSGS:
				msgs.append(f"Point {int(pi)} lies inside circumcircle of triangle {start + int(ti)}.")
			else:
				break
		if len(msgs) >= _MAX_MSGS:
			break
	return not msgs, msgs
