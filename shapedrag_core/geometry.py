"""Geometry kernel for shapedrag.

Turns a shape's defining points into the parameters used for painting and
hit-testing: circle center and radius, circumcircle and sweep of a
three-point arc, ellipse axes from two vertices and a co-vertex, and the
smoothed cubic path of a free-form curve. Everything here is pure; the
numpy helpers sample outlines for renderers and for path hit-testing.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import AmbiguousSweepDirection, DegenerateGeometry

Point = Tuple[float, float]

TWO_PI = 2.0 * math.pi
COLLINEAR_EPS = 1e-9
ANGLE_EPS = 1e-9
DEFAULT_SMOOTHING = 0.25


def as_point(value: Sequence[float]) -> Point:
    return (float(value[0]), float(value[1]))


def euclid_len(p1: Sequence[float], p2: Sequence[float]) -> float:
    """Return the Euclidean distance between two points."""
    return float(math.hypot(float(p2[0]) - float(p1[0]), float(p2[1]) - float(p1[1])))


def midpoint(a: Sequence[float], b: Sequence[float]) -> Point:
    return ((float(a[0]) + float(b[0])) / 2.0, (float(a[1]) + float(b[1])) / 2.0)


def normalize_angle(theta: float) -> float:
    """Wrap ``theta`` into ``[0, 2π)``."""
    wrapped = math.fmod(theta, TWO_PI)
    if wrapped < 0.0:
        wrapped += TWO_PI
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


def angle_of(center: Sequence[float], point: Sequence[float]) -> float:
    """Polar angle of ``point`` around ``center`` normalised to ``[0, 2π)``."""
    return normalize_angle(math.atan2(float(point[1]) - float(center[1]), float(point[0]) - float(center[0])))


# ---------------------------------------------------------------------------
# Polyline helpers


def project_point_to_segment(p: Sequence[float], a: Sequence[float], b: Sequence[float]) -> Tuple[Point, float]:
    """Project ``p`` onto segment ``ab``; returns the foot point and the clamped parameter."""
    ax, ay = float(a[0]), float(a[1])
    abx = float(b[0]) - ax
    aby = float(b[1]) - ay
    ab2 = abx * abx + aby * aby
    if ab2 < 1e-18:
        return (ax, ay), 0.0
    t = ((float(p[0]) - ax) * abx + (float(p[1]) - ay) * aby) / ab2
    t = max(0.0, min(1.0, t))
    return (ax + abx * t, ay + aby * t), t


def point_to_polyline_distance(point: Sequence[float], polyline: np.ndarray) -> float:
    """Compute the minimum distance from ``point`` to the given ``polyline``."""
    polyline = np.asarray(polyline, dtype=float).reshape(-1, 2)
    if polyline.shape[0] == 0:
        return float("inf")
    if polyline.shape[0] == 1:
        return float(np.hypot(point[0] - polyline[0, 0], point[1] - polyline[0, 1]))
    seg_vec = polyline[1:] - polyline[:-1]
    seg_len_sq = np.sum(seg_vec ** 2, axis=1)
    to_point = np.asarray(point, dtype=float) - polyline[:-1]
    with np.errstate(divide="ignore", invalid="ignore"):
        t = np.sum(to_point * seg_vec, axis=1) / seg_len_sq
    # zero-length segments collapse onto their start point
    t = np.where(seg_len_sq > 0.0, t, 0.0)
    t = np.clip(t, 0.0, 1.0)
    projection = polyline[:-1] + seg_vec * t[:, None]
    dist = np.hypot(point[0] - projection[:, 0], point[1] - projection[:, 1])
    return float(np.min(dist))


def polyline_length(points: np.ndarray) -> float:
    """Return the cumulative length of a polyline."""
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    if points.shape[0] < 2:
        return 0.0
    delta = np.diff(points, axis=0)
    seg = np.hypot(delta[:, 0], delta[:, 1])
    return float(np.sum(seg))


def _bezier_sample(control_points: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Evaluate a Bezier curve of arbitrary degree at parameter values ``t``."""
    if control_points.shape[0] == 0:
        return np.zeros((len(t), 2))
    if control_points.shape[0] == 1:
        return np.repeat(control_points, len(t), axis=0)
    pts = np.broadcast_to(control_points, (len(t),) + control_points.shape).copy()
    for _ in range(1, control_points.shape[0]):
        pts = (1.0 - t)[:, None, None] * pts[:, :-1, :] + t[:, None, None] * pts[:, 1:, :]
    return pts[:, 0, :]


# ---------------------------------------------------------------------------
# Circles


@dataclass(frozen=True)
class CircleGeometry:
    center: Point
    radius: float

    def outline(self, samples: int = 256) -> np.ndarray:
        return circle_points(self.center, self.radius, samples)

    def asdict(self) -> dict:
        return {"type": "circle", "center": list(self.center), "radius": self.radius}


def circle_points(center: Sequence[float], radius: float, samples: int = 256) -> np.ndarray:
    """Sample a full circle as a closed polyline."""
    angle = np.linspace(0.0, TWO_PI, samples, endpoint=True)
    cx, cy = float(center[0]), float(center[1])
    x = cx + radius * np.cos(angle)
    y = cy + radius * np.sin(angle)
    return np.column_stack((x, y))


def circle_from(center: Sequence[float], edge: Sequence[float]) -> CircleGeometry:
    """Circle through ``edge`` around ``center``. A zero radius is a valid point-circle."""
    return CircleGeometry(center=as_point(center), radius=euclid_len(center, edge))


def circumcircle_from_3_points(p1: Sequence[float], p2: Sequence[float], p3: Sequence[float]) -> CircleGeometry:
    """Return the unique circle through three points.

    Uses the determinant form of the circumcenter. ``a`` is twice the signed
    area of the triangle; when it vanishes (relative to the triangle's extent)
    the points are collinear or coincident and ``DegenerateGeometry`` is raised
    instead of returning an infinite center.
    """
    x1, y1 = as_point(p1)
    x2, y2 = as_point(p2)
    x3, y3 = as_point(p3)

    a = x1 * (y2 - y3) - y1 * (x2 - x3) + x2 * y3 - x3 * y2
    extent = max(abs(x1 - x2), abs(x1 - x3), abs(x2 - x3), abs(y1 - y2), abs(y1 - y3), abs(y2 - y3), 1.0)
    if abs(a) <= COLLINEAR_EPS * extent * extent:
        raise DegenerateGeometry(f"points {(x1, y1)}, {(x2, y2)}, {(x3, y3)} are collinear")

    s1 = x1 * x1 + y1 * y1
    s2 = x2 * x2 + y2 * y2
    s3 = x3 * x3 + y3 * y3
    b = s1 * (y3 - y2) + s2 * (y1 - y3) + s3 * (y2 - y1)
    c = s1 * (x2 - x3) + s2 * (x3 - x1) + s3 * (x1 - x2)

    center = (-b / (2.0 * a), -c / (2.0 * a))
    return CircleGeometry(center=center, radius=euclid_len(center, (x1, y1)))


# ---------------------------------------------------------------------------
# Arcs


class SweepDirection(str, Enum):
    """Direction of travel from the start angle to the end angle."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class ArcSweep:
    start_angle: float
    end_angle: float
    mid_angle: float
    direction: SweepDirection
    ambiguous: bool = False

    @property
    def span(self) -> float:
        """Unsigned angle travelled from start to end."""
        ascending = normalize_angle(self.end_angle - self.start_angle)
        if self.direction is SweepDirection.ASCENDING:
            return ascending
        return normalize_angle(TWO_PI - ascending)

    @property
    def signed_span(self) -> float:
        return self.span if self.direction is SweepDirection.ASCENDING else -self.span

    def offset(self, angle: float) -> float:
        """Angular distance from the start to ``angle`` measured along the sweep."""
        if self.direction is SweepDirection.ASCENDING:
            return normalize_angle(angle - self.start_angle)
        return normalize_angle(self.start_angle - angle)

    def contains(self, angle: float, eps: float = ANGLE_EPS) -> bool:
        off = self.offset(angle)
        return off <= self.span + eps or off >= TWO_PI - eps

    def parameter_of(self, angle: float) -> Optional[float]:
        """Map ``angle`` to the arc parameter in ``[0, 1]``; ``None`` when outside the sweep."""
        if self.span <= ANGLE_EPS:
            return None
        off = self.offset(angle)
        if off >= TWO_PI - ANGLE_EPS:
            return 0.0
        if off > self.span + ANGLE_EPS:
            return None
        return min(off / self.span, 1.0)

    def angle_at(self, t: float) -> float:
        return normalize_angle(self.start_angle + self.signed_span * t)

    def asdict(self) -> dict:
        return {
            "start_angle": self.start_angle,
            "end_angle": self.end_angle,
            "mid_angle": self.mid_angle,
            "direction": self.direction.value,
            "ambiguous": self.ambiguous,
        }


def arc_sweep(
    center: Sequence[float],
    p1: Sequence[float],
    p_mid: Sequence[float],
    p3: Sequence[float],
    *,
    strict: bool = False,
) -> ArcSweep:
    """Pick the sweep from ``p1`` to ``p3`` that passes through ``p_mid``.

    Three points on a circle split it into two arcs; the ascending arc is
    chosen when the middle point's angle lies strictly inside the ascending
    span from start to end, otherwise the descending one. Coinciding start and
    end angles leave the direction undefined: ``ASCENDING`` is returned with
    ``ambiguous=True``, or ``AmbiguousSweepDirection`` is raised when
    ``strict`` is set.
    """
    start = angle_of(center, p1)
    mid = angle_of(center, p_mid)
    end = angle_of(center, p3)

    ascending_span = normalize_angle(end - start)
    if ascending_span < ANGLE_EPS or ascending_span > TWO_PI - ANGLE_EPS:
        if strict:
            raise AmbiguousSweepDirection(f"start and end angles coincide at {start:.6f} rad")
        return ArcSweep(start, end, mid, SweepDirection.ASCENDING, ambiguous=True)

    mid_offset = normalize_angle(mid - start)
    if 0.0 < mid_offset < ascending_span:
        direction = SweepDirection.ASCENDING
    else:
        direction = SweepDirection.DESCENDING
    return ArcSweep(start, end, mid, direction)


@dataclass(frozen=True)
class ArcGeometry:
    center: Point
    radius: float
    sweep: ArcSweep

    @property
    def start_angle(self) -> float:
        return self.sweep.start_angle

    @property
    def end_angle(self) -> float:
        return self.sweep.end_angle

    @property
    def direction(self) -> SweepDirection:
        return self.sweep.direction

    @property
    def ambiguous(self) -> bool:
        return self.sweep.ambiguous

    def point_at(self, t: float) -> Point:
        theta = self.sweep.angle_at(t)
        return (self.center[0] + self.radius * math.cos(theta), self.center[1] + self.radius * math.sin(theta))

    def outline(self, samples: int = 256) -> np.ndarray:
        return arc_points(self.center, self.radius, self.sweep, samples)

    def asdict(self) -> dict:
        data = {"type": "arc", "center": list(self.center), "radius": self.radius}
        data.update(self.sweep.asdict())
        return data


def arc_points(center: Sequence[float], radius: float, sweep: ArcSweep, samples: int = 256) -> np.ndarray:
    """Sample the arc from its start angle along the chosen sweep."""
    t = np.linspace(0.0, 1.0, max(samples, 2))
    angle = sweep.start_angle + sweep.signed_span * t
    cx, cy = float(center[0]), float(center[1])
    return np.column_stack((cx + radius * np.cos(angle), cy + radius * np.sin(angle)))


def arc_from_3_points(
    p1: Sequence[float], p_mid: Sequence[float], p3: Sequence[float], *, strict: bool = False
) -> ArcGeometry:
    circle = circumcircle_from_3_points(p1, p_mid, p3)
    sweep = arc_sweep(circle.center, p1, p_mid, p3, strict=strict)
    return ArcGeometry(center=circle.center, radius=circle.radius, sweep=sweep)


# ---------------------------------------------------------------------------
# Ellipses


@dataclass(frozen=True)
class EllipseGeometry:
    center: Point
    semi_major: float
    semi_minor: float
    rotation: float

    def to_local(self, point: Sequence[float]) -> Point:
        """Express ``point`` in the ellipse's centred, unrotated frame."""
        dx = float(point[0]) - self.center[0]
        dy = float(point[1]) - self.center[1]
        c = math.cos(self.rotation)
        s = math.sin(self.rotation)
        return (dx * c + dy * s, -dx * s + dy * c)

    def point_at(self, t: float) -> Point:
        x = self.semi_major * math.cos(t)
        y = self.semi_minor * math.sin(t)
        c = math.cos(self.rotation)
        s = math.sin(self.rotation)
        return (self.center[0] + x * c - y * s, self.center[1] + x * s + y * c)

    def outline(self, samples: int = 256) -> np.ndarray:
        return ellipse_points(self, samples)

    def asdict(self) -> dict:
        return {
            "type": "ellipse",
            "center": list(self.center),
            "semi_major": self.semi_major,
            "semi_minor": self.semi_minor,
            "rotation": self.rotation,
        }


def ellipse_points(ellipse: EllipseGeometry, samples: int = 256) -> np.ndarray:
    t = np.linspace(0.0, TWO_PI, samples, endpoint=True)
    x = ellipse.semi_major * np.cos(t)
    y = ellipse.semi_minor * np.sin(t)
    c = math.cos(ellipse.rotation)
    s = math.sin(ellipse.rotation)
    return np.column_stack((ellipse.center[0] + x * c - y * s, ellipse.center[1] + x * s + y * c))


def ellipse_from_3_points(
    vertex1: Sequence[float], co_vertex: Sequence[float], vertex2: Sequence[float]
) -> EllipseGeometry:
    """Ellipse whose major axis joins the two vertices.

    The co-vertex distance to the center is taken as the minor semi-axis
    without projecting it onto the minor axis, so an off-axis co-vertex does
    not lie on the resulting outline.
    """
    center = midpoint(vertex1, vertex2)
    semi_major = euclid_len(vertex1, vertex2) / 2.0
    rotation = math.atan2(float(vertex2[1]) - float(vertex1[1]), float(vertex2[0]) - float(vertex1[0]))
    semi_minor = euclid_len(co_vertex, center)
    return EllipseGeometry(center=center, semi_major=semi_major, semi_minor=semi_minor, rotation=rotation)


# ---------------------------------------------------------------------------
# Curves


@dataclass(frozen=True)
class PathSegment:
    """A straight segment, or a cubic Bezier when both control points are set."""

    start: Point
    end: Point
    c1: Optional[Point] = None
    c2: Optional[Point] = None

    @property
    def is_line(self) -> bool:
        return self.c1 is None or self.c2 is None

    def sample(self, samples: int = 16) -> np.ndarray:
        t = np.linspace(0.0, 1.0, max(samples, 2))
        if self.is_line:
            control = np.array([self.start, self.end], dtype=float)
        else:
            control = np.array([self.start, self.c1, self.c2, self.end], dtype=float)
        return _bezier_sample(control, t)

    def asdict(self) -> dict:
        data = {"start": list(self.start), "end": list(self.end)}
        if not self.is_line:
            data["c1"] = list(self.c1)
            data["c2"] = list(self.c2)
        return data


@dataclass(frozen=True)
class CurvePath:
    points: Tuple[Point, ...]
    segments: Tuple[PathSegment, ...]

    @property
    def is_empty(self) -> bool:
        return not self.segments

    def polyline(self, samples_per_segment: int = 16) -> np.ndarray:
        if not self.segments:
            return np.asarray(self.points, dtype=float).reshape(-1, 2)
        parts = [seg.sample(samples_per_segment) for seg in self.segments]
        return np.vstack([parts[0]] + [part[1:] for part in parts[1:]])


def smooth_curve(points: Iterable[Sequence[float]], fraction: float = DEFAULT_SMOOTHING) -> CurvePath:
    """Build an open, locally smoothed path through ``points``.

    Each interior point gets tangent handles along the chord between its
    neighbours scaled by ``fraction``; the ends reuse themselves as their
    missing neighbour. This is a Catmull-Rom style approximation, not a fitted
    spline.
    """
    pts = tuple(as_point(p) for p in points)
    if len(pts) < 2:
        return CurvePath(points=pts, segments=())
    if len(pts) == 2:
        return CurvePath(points=pts, segments=(PathSegment(pts[0], pts[1]),))

    f = float(fraction)
    last = len(pts) - 1
    segments = []
    for i in range(last):
        prev = pts[max(i - 1, 0)]
        cur = pts[i]
        nxt = pts[i + 1]
        after = pts[min(i + 2, last)]
        c1 = (cur[0] + f * (nxt[0] - prev[0]), cur[1] + f * (nxt[1] - prev[1]))
        c2 = (nxt[0] - f * (after[0] - cur[0]), nxt[1] - f * (after[1] - cur[1]))
        segments.append(PathSegment(cur, nxt, c1, c2))
    return CurvePath(points=pts, segments=tuple(segments))


@dataclass(frozen=True)
class CurveGeometry:
    path: CurvePath

    def outline(self, samples: int = 256) -> np.ndarray:
        per_segment = max(2, samples // max(len(self.path.segments), 1))
        return self.path.polyline(per_segment)

    @property
    def length(self) -> float:
        return polyline_length(self.path.polyline())

    def asdict(self) -> dict:
        return {
            "type": "curve",
            "segments": [seg.asdict() for seg in self.path.segments],
            "length": self.length,
        }


DerivedGeometry = Union[CircleGeometry, ArcGeometry, EllipseGeometry, CurveGeometry]


__all__ = [
    "Point",
    "TWO_PI",
    "COLLINEAR_EPS",
    "ANGLE_EPS",
    "DEFAULT_SMOOTHING",
    "as_point",
    "euclid_len",
    "midpoint",
    "normalize_angle",
    "angle_of",
    "project_point_to_segment",
    "point_to_polyline_distance",
    "polyline_length",
    "CircleGeometry",
    "circle_points",
    "circle_from",
    "circumcircle_from_3_points",
    "SweepDirection",
    "ArcSweep",
    "arc_sweep",
    "ArcGeometry",
    "arc_points",
    "arc_from_3_points",
    "EllipseGeometry",
    "ellipse_points",
    "ellipse_from_3_points",
    "PathSegment",
    "CurvePath",
    "smooth_curve",
    "CurveGeometry",
    "DerivedGeometry",
]
