"""Shape model: kinds, defining points, drag state and derived geometry."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple, Union

from .errors import InvalidPointCount
from .geometry import (
    DEFAULT_SMOOTHING,
    CurveGeometry,
    DerivedGeometry,
    Point,
    arc_from_3_points,
    as_point,
    circle_from,
    ellipse_from_3_points,
    smooth_curve,
)


class ShapeKind(str, Enum):
    CIRCLE = "circle"
    ARC = "arc"
    ELLIPSE = "ellipse"
    CURVE = "curve"


# ---------------------------------------------------------------------------
# Drag state


@dataclass(frozen=True)
class DragSession:
    """Pointer position and point snapshot captured when a drag starts."""

    start: Point
    snapshot: Tuple[Point, ...]


@dataclass(frozen=True)
class Idle:
    selected: bool = False


@dataclass(frozen=True)
class DraggingWhole:
    session: DragSession


@dataclass(frozen=True)
class DraggingPoint:
    index: int
    session: DragSession


DragState = Union[Idle, DraggingWhole, DraggingPoint]


def state_name(state: DragState) -> str:
    if isinstance(state, DraggingPoint):
        return f"dragging_point[{state.index}]"
    if isinstance(state, DraggingWhole):
        return "dragging_whole"
    return "idle_selected" if state.selected else "idle"


# ---------------------------------------------------------------------------
# Shape


@dataclass(frozen=True)
class Shape:
    kind: ShapeKind
    points: Tuple[Point, ...]
    state: DragState = field(default_factory=Idle)
    id: Optional[str] = None

    @property
    def selected(self) -> bool:
        if isinstance(self.state, Idle):
            return self.state.selected
        return True

    @property
    def dragging(self) -> bool:
        return not isinstance(self.state, Idle)

    @property
    def active_index(self) -> Optional[int]:
        if isinstance(self.state, DraggingPoint):
            return self.state.index
        return None

    @property
    def session(self) -> Optional[DragSession]:
        if isinstance(self.state, Idle):
            return None
        return self.state.session

    def with_points(self, points: Iterable[Sequence[float]]) -> "Shape":
        return replace(self, points=tuple(as_point(p) for p in points))

    def with_state(self, state: DragState) -> "Shape":
        return replace(self, state=state)

    def asdict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "points": [list(p) for p in self.points],
            "selected": self.selected,
            "state": state_name(self.state),
            "active_index": self.active_index,
        }


# ---------------------------------------------------------------------------
# Per-kind capabilities


@dataclass(frozen=True)
class KindSpec:
    min_points: int
    max_points: Optional[int]
    derive: Callable[[Tuple[Point, ...], float], DerivedGeometry]

    def accepts(self, count: int) -> bool:
        if count < self.min_points:
            return False
        return self.max_points is None or count <= self.max_points

    def describe(self) -> str:
        if self.max_points is None:
            return f"at least {self.min_points}"
        if self.max_points == self.min_points:
            return f"exactly {self.min_points}"
        return f"{self.min_points}-{self.max_points}"


def _derive_circle(points: Tuple[Point, ...], _smoothing: float) -> DerivedGeometry:
    return circle_from(points[0], points[1])


def _derive_arc(points: Tuple[Point, ...], _smoothing: float) -> DerivedGeometry:
    return arc_from_3_points(points[0], points[1], points[2])


def _derive_ellipse(points: Tuple[Point, ...], _smoothing: float) -> DerivedGeometry:
    return ellipse_from_3_points(points[0], points[1], points[2])


def _derive_curve(points: Tuple[Point, ...], smoothing: float) -> DerivedGeometry:
    return CurveGeometry(path=smooth_curve(points, smoothing))


KINDS: Dict[ShapeKind, KindSpec] = {
    ShapeKind.CIRCLE: KindSpec(2, 2, _derive_circle),
    ShapeKind.ARC: KindSpec(3, 3, _derive_arc),
    ShapeKind.ELLIPSE: KindSpec(3, 3, _derive_ellipse),
    ShapeKind.CURVE: KindSpec(2, None, _derive_curve),
}


def coerce_kind(kind: str | ShapeKind) -> ShapeKind:
    if isinstance(kind, ShapeKind):
        return kind
    # the source app calls two-point polylines "lines"
    name = str(kind).lower()
    if name in ("line", "polyline"):
        return ShapeKind.CURVE
    try:
        return ShapeKind(name)
    except ValueError as exc:
        raise ValueError(f"Unknown shape kind '{kind}'") from exc


def create_shape(
    kind: str | ShapeKind,
    points: Iterable[Sequence[float]],
    shape_id: Optional[str] = None,
) -> Shape:
    """Create an unselected, idle shape; raises ``InvalidPointCount`` on a bad count."""
    shape_kind = coerce_kind(kind)
    pts = []
    for item in points:
        if len(item) != 2:
            raise ValueError("Shape points must be 2D sequences")
        pts.append(as_point(item))
    spec = KINDS[shape_kind]
    if not spec.accepts(len(pts)):
        raise InvalidPointCount(shape_kind.value, len(pts), spec.describe())
    return Shape(kind=shape_kind, points=tuple(pts), state=Idle(False), id=shape_id)


def compute_derived_geometry(shape: Shape, smoothing: float = DEFAULT_SMOOTHING) -> DerivedGeometry:
    """Recompute render and hit parameters from the shape's current points.

    Raises ``DegenerateGeometry`` when an arc's points are collinear.
    """
    return KINDS[shape.kind].derive(shape.points, smoothing)


__all__ = [
    "ShapeKind",
    "DragSession",
    "Idle",
    "DraggingWhole",
    "DraggingPoint",
    "DragState",
    "state_name",
    "Shape",
    "KindSpec",
    "KINDS",
    "coerce_kind",
    "create_shape",
    "compute_derived_geometry",
]
