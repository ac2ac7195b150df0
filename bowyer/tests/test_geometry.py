"""Unit tests for scalar and vectorized geometric predicates."""
import math

import numpy as np
import pytest

from bowyer import Point, InternalInconsistency, set_float_width
from bowyer.core import geometry


def test_cross_product_sign():
    assert geometry.cross_product(Point(0, 0), Point(1, 0), Point(1, 1)) > 0
    assert geometry.cross_product(Point(0, 0), Point(1, 1), Point(1, 0)) < 0


def test_cross_product_is_twice_signed_area():
    assert geometry.cross_product(Point(0, 0), Point(2, 0), Point(2, 3)) == 6.0


def test_is_flat_angle():
    assert geometry.is_flat_angle(Point(0, 0), Point(1, 0), Point(2, 0))
    assert geometry.is_flat_angle(Point(0, 0), Point(1, 1), Point(-3, -3))
    assert not geometry.is_flat_angle(Point(0, 0), Point(1, 0), Point(2, 1e-9))


def test_distances():
    a, b = Point(0, 0), Point(3, 4)
    assert geometry.dist2(a, b) == 25.0
    assert geometry.dist(a, b) == 5.0


def test_is_in_circle_boundary_inclusive():
    assert geometry.is_in_circle(Point(1, 0), 0.0, 0.0, 1.0)
    assert geometry.is_in_circle(Point(0.5, 0.5), 0.0, 0.0, 1.0)
    assert not geometry.is_in_circle(Point(1, 1), 0.0, 0.0, 1.0)


def test_quat_cross_is_four_times_area():
    # 3-4-5 right triangle has area 6
    assert geometry.quat_cross(3.0, 4.0, 5.0) == pytest.approx(24.0)


def test_quat_cross_rejects_impossible_sides():
    with pytest.raises(InternalInconsistency):
        geometry.quat_cross(1.0, 1.0, 5.0)


def test_circumcircle_right_triangle():
    # circumcenter of a right triangle is the midpoint of the hypotenuse
    cx, cy, r = geometry.circumcircle(Point(0, 0), Point(4, 0), Point(0, 3))
    assert cx == pytest.approx(2.0)
    assert cy == pytest.approx(1.5)
    assert r == pytest.approx(2.5)


def test_circumcenter_zero_denominator():
    with pytest.raises(InternalInconsistency):
        geometry.circumcenter(Point(0, 0), Point(1, 1), Point(2, 2))


def test_triangle_area_and_in_circumcircle():
    p1, p2, p3 = Point(0, 0), Point(1, 0), Point(0, 1)
    assert geometry.triangle_area(p1, p2, p3) == pytest.approx(0.5)
    assert geometry.in_circumcircle(p1, p2, p3, Point(0.5, 0.5))
    assert not geometry.in_circumcircle(p1, p2, p3, Point(2, 2))


def test_vectorized_circumcircles_match_scalar_bitwise():
    rng = np.random.default_rng(3)
    coords = rng.random((30, 2))
    tris = np.array([[i, i + 1, i + 2] for i in range(0, 27, 3)])
    cx, cy, r = geometry.circumcircles(coords, tris)
    for k, (a, b, c) in enumerate(tris):
        pa, pb, pc = (Point(*coords[j]) for j in (a, b, c))
        sx, sy, sr = geometry.circumcircle(pa, pb, pc)
        assert cx[k] == sx and cy[k] == sy and r[k] == sr


def test_float32_storage_uses_double_predicates():
    set_float_width(32)
    coords = (np.random.default_rng(4).random((30, 2)) * 1e3).astype(np.float32)
    tris = np.array([[i, i + 1, i + 2] for i in range(0, 27, 3)])
    cx, cy, r = geometry.circumcircles(coords, tris)
    assert cx.dtype == cy.dtype == r.dtype == np.float64
    ref = geometry.circumcircles(coords.astype(np.float64), tris)
    assert all(np.array_equal(got, want) for got, want in zip((cx, cy, r), ref))
    for k, (a, b, c) in enumerate(tris):
        pa, pb, pc = (Point(*coords[j]) for j in (a, b, c))
        assert isinstance(pa.x, np.float32)
        assert geometry.circumcircle(pa, pb, pc) == (cx[k], cy[k], r[k])
        assert type(geometry.cross_product(pa, pb, pc)) is float


def test_vectorized_in_circles_and_cross_products():
    coords = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
    tris = np.array([[0, 1, 2], [0, 2, 1]])
    cp = geometry.cross_products(coords, tris)
    assert cp[0] > 0 and cp[1] < 0
    cx, cy, r = geometry.circumcircles(coords, tris)
    mask = geometry.in_circles(0.0, 1.0, cx, cy, r)
    assert mask.dtype == bool and mask.shape == (2,)


def test_vectorized_empty_inputs():
    coords = np.zeros((3, 2))
    cx, cy, r = geometry.circumcircles(coords, np.empty((0, 3), dtype=int))
    assert cx.shape == cy.shape == r.shape == (0,)
    assert geometry.cross_products(coords, np.empty((0, 3), dtype=int)).shape == (0,)


def test_triangles_signed_areas():
    pts = np.array([[0, 0], [1, 0], [0, 1]], dtype=float)
    areas = geometry.triangles_signed_areas(pts, [[0, 1, 2], [0, 2, 1]])
    assert areas.tolist() == [0.5, -0.5]


def test_hull_area():
    square = np.array([[0, 0], [1, 0], [1, 1], [0, 1], [0.5, 0.5]], dtype=float)
    assert geometry.hull_area(square) == pytest.approx(1.0)
    assert geometry.hull_area(np.array([[0, 0], [1, 1], [2, 2]], dtype=float)) == 0.0
    assert math.isclose(geometry.hull_area(np.zeros((2, 2))), 0.0)
