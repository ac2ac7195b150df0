"""Tests for the post-hoc conformity and Delaunay checks."""
import numpy as np

from bowyer.core.conformity import build_edge_to_tri_map, check_triangulation, check_delaunay


SQUARE = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])


def test_valid_square():
    ok, msgs = check_triangulation(SQUARE, [[0, 1, 2], [0, 2, 3]])
    assert ok, msgs
    ok, msgs = check_delaunay(SQUARE, [[0, 1, 2], [0, 2, 3]])
    assert ok, msgs


def test_missing_triangle_leaves_hull_uncovered():
    ok, msgs = check_triangulation(SQUARE, [[0, 1, 2]])
    assert not ok
    assert any('convex hull' in m for m in msgs)


def test_duplicate_and_overlapping_triangles():
    ok, msgs = check_triangulation(SQUARE, [[0, 1, 2], [2, 1, 0]])
    assert not ok
    assert any('Duplicate' in m for m in msgs)


def test_non_manifold_edge():
    pts = np.array([[0, 0], [1, 0], [0.5, 1], [0.5, -1], [0.5, 0.5]], dtype=float)
    ok, msgs = check_triangulation(pts, [[0, 1, 2], [0, 1, 3], [0, 1, 4]])
    assert not ok
    assert any('shared by 3' in m for m in msgs)


def test_degenerate_and_out_of_range():
    pts = np.array([[0, 0], [1, 0], [2, 0]], dtype=float)
    ok, msgs = check_triangulation(pts, [[0, 1, 2]])
    assert not ok and any('near-zero' in m for m in msgs)
    ok, msgs = check_triangulation(pts, [[0, 1, 5]])
    assert not ok and msgs == ["Triangle indices out of range."]
    ok, msgs = check_triangulation(pts, np.empty((0, 3), dtype=int))
    assert not ok


def test_non_delaunay_diagonal_detected():
    # thin rhombus: the long diagonal violates the empty-circle property
    pts = np.array([[0.0, 0.0], [2.0, 0.0], [1.0, 0.2], [1.0, -0.2]])
    ok, _ = check_triangulation(pts, [[0, 1, 2], [0, 3, 1]])
    assert ok
    ok, msgs = check_delaunay(pts, [[0, 1, 2], [0, 3, 1]])
    assert not ok
    assert msgs
    ok, msgs = check_delaunay(pts, [[0, 3, 2], [3, 1, 2]])
    assert ok, msgs


def test_edge_map():
    emap = build_edge_to_tri_map([[0, 1, 2], [0, 2, 3]])
    assert emap[(0, 2)] == {0, 1}
    assert sorted(e for e, ts in emap.items() if len(ts) == 1) == [(0, 1), (0, 3), (1, 2), (2, 3)]


def test_tolerances_follow_the_point_scale():
    pts = np.array([[0, 0], [1, 0], [1, 1], [0, 1], [0.3, 0.6]]) * 1e-6
    tris = [[0, 1, 4], [1, 2, 4], [2, 3, 4], [3, 0, 4]]
    ok, msgs = check_triangulation(pts, tris)
    assert ok, msgs
    ok, msgs = check_triangulation(pts, tris[:3])
    assert not ok
    assert any('convex hull' in m for m in msgs)
