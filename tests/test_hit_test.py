import math

from shapedrag_core.config import EngineConfig
from shapedrag_core.events import PointerType
from shapedrag_core.geometry import ArcGeometry, arc_sweep
from shapedrag_core.hit_test import Hit, HitKind, hit_test, near_control_point, on_boundary, on_geometry
from shapedrag_core.shapes import compute_derived_geometry, create_shape

CIRCLE = create_shape("circle", [(100.0, 100.0), (150.0, 100.0)])
ARC = create_shape("arc", [(50.0, 50.0), (100.0, 100.0), (100.0, 0.0)])
ELLIPSE = create_shape("ellipse", [(50.0, 100.0), (100.0, 50.0), (150.0, 100.0)])
LINE = create_shape("line", [(0.0, 0.0), (100.0, 0.0)])


def test_near_control_point_inclusive_and_first_wins():
    points = [(0.0, 0.0), (3.0, 0.0)]
    assert near_control_point((1.5, 0.0), points, 5.0) == 0
    assert near_control_point((3.0, 4.0), [(0.0, 0.0)], 5.0) == 0
    assert near_control_point((30.0, 0.0), points, 5.0) is None


def test_circle_boundary_ring():
    assert on_boundary((100.0, 153.0), CIRCLE, 5.0)
    assert not on_boundary((100.0, 160.0), CIRCLE, 5.0)
    assert not on_boundary((110.0, 100.0), CIRCLE, 5.0)


def test_arc_boundary_respects_sweep():
    # the arc runs from 180deg through 90deg and 0deg to 270deg around (100, 50)
    assert on_boundary((150.0, 50.0), ARC, 5.0)
    gap = (100.0 + 50.0 * math.cos(math.radians(225)), 50.0 + 50.0 * math.sin(math.radians(225)))
    assert not on_boundary(gap, ARC, 5.0)


def test_degenerate_arc_has_no_boundary():
    flat = create_shape("arc", [(0.0, 0.0), (50.0, 50.0), (100.0, 100.0)])
    assert not on_boundary((25.0, 25.0), flat, 5.0)
    assert hit_test((25.0, 25.0), flat) is None
    assert hit_test((0.0, 0.0), flat) == Hit(HitKind.CONTROL, 0)


def test_ambiguous_arc_geometry_is_never_hit():
    sweep = arc_sweep((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (2.0, 0.0))
    geometry = ArcGeometry(center=(0.0, 0.0), radius=1.0, sweep=sweep)
    assert not on_geometry((1.0, 0.0), geometry, 5.0)


def test_ellipse_boundary_band():
    assert on_boundary((100.0, 151.0), ELLIPSE, 5.0)
    assert not on_boundary((100.0, 100.0), ELLIPSE, 5.0)
    assert not on_boundary((100.0, 170.0), ELLIPSE, 5.0)


def test_rotated_ellipse_boundary():
    shape = create_shape("ellipse", [(0.0, 0.0), (40.0, 60.0), (100.0, 100.0)])
    geometry = compute_derived_geometry(shape)
    assert on_boundary(geometry.point_at(1.0), shape, 5.0)
    assert not on_boundary(geometry.center, shape, 5.0)


def test_flat_ellipse_uses_outline_distance():
    shape = create_shape("ellipse", [(0.0, 0.0), (50.0, 0.0), (100.0, 0.0)])
    assert on_boundary((25.0, 2.0), shape, 5.0)
    assert not on_boundary((25.0, 20.0), shape, 5.0)


def test_curve_boundary():
    config = EngineConfig()
    assert hit_test((50.0, 8.0), LINE, config) == Hit(HitKind.BOUNDARY)
    assert hit_test((110.0, 0.0), LINE, config) == Hit(HitKind.BOUNDARY)
    assert hit_test((50.0, 15.0), LINE, config) is None
    assert hit_test((120.0, 0.0), LINE, config) is None


def test_smoothed_curve_boundary():
    curve = create_shape("curve", [(0.0, 0.0), (100.0, 100.0), (200.0, 0.0)])
    assert hit_test((100.0, 100.0), curve) == Hit(HitKind.CONTROL, 1)
    assert hit_test((100.0, 95.0), curve) is not None
    assert hit_test((100.0, 40.0), curve) is None


def test_control_point_beats_boundary():
    # (150, 100) is both the edge control point and on the ring
    assert hit_test((150.0, 100.0), CIRCLE) == Hit(HitKind.CONTROL, 1)
    assert hit_test((100.0, 150.0), CIRCLE) == Hit(HitKind.BOUNDARY)


def test_target_index_hint():
    assert hit_test((350.0, 350.0), CIRCLE, target_index=0) == Hit(HitKind.CONTROL, 0)
    assert hit_test((350.0, 350.0), CIRCLE, target_index=7) is None


def test_touch_widens_tolerance():
    config = EngineConfig()
    assert hit_test((100.0, 158.0), CIRCLE, config) is None
    assert hit_test((100.0, 158.0), CIRCLE, config, pointer_type=PointerType.TOUCH) == Hit(HitKind.BOUNDARY)
    assert hit_test((100.0, 158.0), CIRCLE, config, pointer_type="pen") == Hit(HitKind.BOUNDARY)


def test_hit_test_is_idempotent():
    first = hit_test((100.0, 153.0), CIRCLE)
    second = hit_test((100.0, 153.0), CIRCLE)
    assert first == second == Hit(HitKind.BOUNDARY)
