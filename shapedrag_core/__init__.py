"""shapedrag core: geometry, hit-testing and drag interaction for vector shapes."""
from __future__ import annotations

from .config import CanvasSize, EngineConfig, load_config
from .controller import DragController, RenderFrame, handle_pointer_event, render_frame
from .errors import AmbiguousSweepDirection, DegenerateGeometry, InvalidPointCount, ShapeError
from .events import PointerEvent, PointerPhase, PointerType, pointer_event
from .geometry import (
    ArcGeometry,
    CircleGeometry,
    CurveGeometry,
    EllipseGeometry,
    SweepDirection,
    arc_sweep,
    circle_from,
    circumcircle_from_3_points,
    ellipse_from_3_points,
    smooth_curve,
)
from .hit_test import Hit, HitKind, hit_test, near_control_point, on_boundary
from .scene import Scene, default_scene
from .shapes import (
    DraggingPoint,
    DraggingWhole,
    DragSession,
    Idle,
    Shape,
    ShapeKind,
    compute_derived_geometry,
    create_shape,
)

__version__ = "0.1.0"

__all__ = [
    "CanvasSize",
    "EngineConfig",
    "load_config",
    "DragController",
    "RenderFrame",
    "handle_pointer_event",
    "render_frame",
    "AmbiguousSweepDirection",
    "DegenerateGeometry",
    "InvalidPointCount",
    "ShapeError",
    "PointerEvent",
    "PointerPhase",
    "PointerType",
    "pointer_event",
    "ArcGeometry",
    "CircleGeometry",
    "CurveGeometry",
    "EllipseGeometry",
    "SweepDirection",
    "arc_sweep",
    "circle_from",
    "circumcircle_from_3_points",
    "ellipse_from_3_points",
    "smooth_curve",
    "Hit",
    "HitKind",
    "hit_test",
    "near_control_point",
    "on_boundary",
    "Scene",
    "default_scene",
    "DraggingPoint",
    "DraggingWhole",
    "DragSession",
    "Idle",
    "Shape",
    "ShapeKind",
    "compute_derived_geometry",
    "create_shape",
]
