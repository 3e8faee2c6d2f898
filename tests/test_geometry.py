import math

import numpy as np
import pytest

from shapedrag_core.errors import AmbiguousSweepDirection, DegenerateGeometry
from shapedrag_core.geometry import (
    TWO_PI,
    SweepDirection,
    angle_of,
    arc_from_3_points,
    arc_sweep,
    circle_from,
    circumcircle_from_3_points,
    ellipse_from_3_points,
    euclid_len,
    normalize_angle,
    point_to_polyline_distance,
    smooth_curve,
)

TRIPLES = [
    ((0.0, 0.0), (1.0, 0.0), (0.0, 1.0)),
    ((50.0, 50.0), (100.0, 100.0), (100.0, 0.0)),
    ((3.2, -1.5), (7.7, 4.1), (-2.0, 9.3)),
    ((210.0, 35.0), (260.0, 80.0), (205.0, 140.0)),
    ((0.0, 0.0), (400.0, 1.0), (399.0, 400.0)),
]


def test_circle_from_radius():
    circle = circle_from((100.0, 100.0), (150.0, 100.0))
    assert circle.center == (100.0, 100.0)
    assert circle.radius == pytest.approx(50.0)


def test_circle_from_zero_radius_is_valid():
    circle = circle_from((10.0, 10.0), (10.0, 10.0))
    assert circle.radius == 0.0
    assert circle.outline(8).shape == (8, 2)


@pytest.mark.parametrize("p1,p2,p3", TRIPLES)
def test_circumcenter_is_equidistant(p1, p2, p3):
    circle = circumcircle_from_3_points(p1, p2, p3)
    for p in (p1, p2, p3):
        assert abs(euclid_len(circle.center, p) - circle.radius) <= 1e-6 * max(circle.radius, 1.0)


def test_circumcircle_of_demo_arc():
    circle = circumcircle_from_3_points((50.0, 50.0), (100.0, 100.0), (100.0, 0.0))
    assert circle.center[0] == pytest.approx(100.0)
    assert circle.center[1] == pytest.approx(50.0)
    assert circle.radius == pytest.approx(50.0)


@pytest.mark.parametrize(
    "p1,p2,p3",
    [
        ((0.0, 0.0), (1.0, 1.0), (2.0, 2.0)),
        ((5.0, 5.0), (5.0, 5.0), (9.0, 1.0)),
        ((0.0, 10.0), (100.0, 10.0), (250.0, 10.0)),
    ],
)
def test_collinear_points_are_degenerate(p1, p2, p3):
    with pytest.raises(DegenerateGeometry):
        circumcircle_from_3_points(p1, p2, p3)


def test_normalize_angle_range():
    assert normalize_angle(-math.pi / 2) == pytest.approx(3 * math.pi / 2)
    assert normalize_angle(TWO_PI) == pytest.approx(0.0)
    assert 0.0 <= normalize_angle(-1e-20) < TWO_PI


def test_arc_sweep_ascending():
    sweep = arc_sweep((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (-1.0, 0.0))
    assert sweep.direction is SweepDirection.ASCENDING
    assert not sweep.ambiguous
    assert sweep.span == pytest.approx(math.pi)


def test_arc_sweep_descending_through_mid():
    arc = arc_from_3_points((50.0, 50.0), (100.0, 100.0), (100.0, 0.0))
    assert arc.direction is SweepDirection.DESCENDING
    assert arc.start_angle == pytest.approx(math.pi)
    assert arc.end_angle == pytest.approx(3 * math.pi / 2)
    assert arc.sweep.span == pytest.approx(3 * math.pi / 2)


@pytest.mark.parametrize("p1,p2,p3", TRIPLES)
def test_arc_passes_through_mid_point(p1, p2, p3):
    arc = arc_from_3_points(p1, p2, p3)
    t = arc.sweep.parameter_of(angle_of(arc.center, p2))
    assert t is not None
    assert 0.0 < t < 1.0
    x, y = arc.point_at(t)
    assert x == pytest.approx(p2[0], abs=1e-6)
    assert y == pytest.approx(p2[1], abs=1e-6)


def test_arc_outline_endpoints():
    arc = arc_from_3_points((50.0, 50.0), (100.0, 100.0), (100.0, 0.0))
    outline = arc.outline(64)
    assert np.allclose(outline[0], (50.0, 50.0))
    assert np.allclose(outline[-1], (100.0, 0.0))


def test_arc_sweep_ambiguous_when_start_equals_end():
    sweep = arc_sweep((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (2.0, 0.0))
    assert sweep.ambiguous
    assert sweep.direction is SweepDirection.ASCENDING


def test_arc_sweep_strict_raises():
    with pytest.raises(AmbiguousSweepDirection):
        arc_sweep((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (2.0, 0.0), strict=True)


def test_ellipse_circle_case():
    ellipse = ellipse_from_3_points((0.0, 50.0), (50.0, 0.0), (100.0, 50.0))
    assert ellipse.center == (50.0, 50.0)
    assert ellipse.semi_major == pytest.approx(50.0)
    assert ellipse.semi_minor == pytest.approx(50.0)
    assert ellipse.rotation == pytest.approx(0.0)


def test_ellipse_rotation_follows_major_axis():
    ellipse = ellipse_from_3_points((0.0, 0.0), (0.0, 20.0), (100.0, 100.0))
    assert ellipse.rotation == pytest.approx(math.pi / 4)
    assert ellipse.semi_major == pytest.approx(math.hypot(100.0, 100.0) / 2)
    local = ellipse.to_local(ellipse.point_at(0.0))
    assert local[0] == pytest.approx(ellipse.semi_major)
    assert local[1] == pytest.approx(0.0, abs=1e-9)


def test_ellipse_co_vertex_not_projected():
    ellipse = ellipse_from_3_points((0.0, 0.0), (70.0, 30.0), (100.0, 0.0))
    assert ellipse.semi_minor == pytest.approx(math.hypot(20.0, 30.0))


def test_zero_size_ellipse_is_valid():
    ellipse = ellipse_from_3_points((10.0, 10.0), (10.0, 30.0), (10.0, 10.0))
    assert ellipse.semi_major == 0.0
    assert ellipse.semi_minor == pytest.approx(20.0)


def test_smooth_curve_empty_and_single_point():
    assert smooth_curve([]).is_empty
    single = smooth_curve([(3.0, 4.0)])
    assert single.is_empty
    assert single.points == ((3.0, 4.0),)
    assert single.polyline().shape == (1, 2)


def test_smooth_curve_two_points_is_straight():
    path = smooth_curve([(0.0, 0.0), (100.0, 50.0)])
    assert len(path.segments) == 1
    seg = path.segments[0]
    assert seg.is_line
    assert seg.start == (0.0, 0.0)
    assert seg.end == (100.0, 50.0)
    samples = path.polyline(10)
    # every sample lies on y = x / 2
    assert np.allclose(samples[:, 1], samples[:, 0] / 2.0)


def test_smooth_curve_control_offsets():
    path = smooth_curve([(0.0, 0.0), (10.0, 10.0), (20.0, 0.0)])
    first, second = path.segments
    assert first.c1 == pytest.approx((2.5, 2.5))
    assert first.c2 == pytest.approx((5.0, 10.0))
    assert second.c1 == pytest.approx((15.0, 10.0))
    assert second.c2 == pytest.approx((17.5, 2.5))
    samples = path.polyline(8)
    assert np.allclose(samples[0], (0.0, 0.0))
    assert np.allclose(samples[-1], (20.0, 0.0))


def test_smooth_curve_is_deterministic():
    pts = [(0.0, 0.0), (30.0, 40.0), (80.0, 10.0), (120.0, 60.0)]
    assert smooth_curve(pts) == smooth_curve(pts)


def test_point_to_polyline_distance_clamps_to_segment():
    line = np.array([[0.0, 0.0], [10.0, 0.0]])
    assert point_to_polyline_distance((5.0, 5.0), line) == pytest.approx(5.0)
    assert point_to_polyline_distance((15.0, 0.0), line) == pytest.approx(5.0)
    assert point_to_polyline_distance((0.0, 0.0), np.zeros((0, 2))) == math.inf
