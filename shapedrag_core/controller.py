"""Pointer-driven selection and drag state machine.

One generic controller serves every shape kind. The shape carries its own
``DragState`` (``Idle``, ``DraggingWhole`` or ``DraggingPoint``), so the
"dragging but not selected" combination cannot exist. ``handle_pointer_event``
is a pure transition; ``DragController`` keeps the current shape for hosts
that prefer an object.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .config import CanvasSize, EngineConfig
from .errors import DegenerateGeometry
from .events import PointerEvent, PointerPhase, PointerType, cancel
from .geometry import ArcGeometry, DerivedGeometry, Point
from .hit_test import Hit, HitKind, hit_test
from .shapes import (
    DraggingPoint,
    DraggingWhole,
    DragSession,
    Idle,
    Shape,
    ShapeKind,
    compute_derived_geometry,
    state_name,
)

log = logging.getLogger(__name__)


def _label(shape: Shape) -> str:
    return shape.id or shape.kind.value


@dataclass(frozen=True)
class RenderFrame:
    """What a renderer needs for one shape after one event."""

    shape: Shape
    geometry: Optional[DerivedGeometry]
    drawable: bool
    ambiguous: bool = False
    error: Optional[str] = None

    def outline(self, samples: int = 256) -> Optional[np.ndarray]:
        if not self.drawable or self.geometry is None:
            return None
        return self.geometry.outline(samples)

    def asdict(self) -> dict:
        return {
            "shape": self.shape.asdict(),
            "geometry": None if self.geometry is None else self.geometry.asdict(),
            "drawable": self.drawable,
            "ambiguous": self.ambiguous,
            "error": self.error,
        }


def render_frame(shape: Shape, config: Optional[EngineConfig] = None) -> RenderFrame:
    config = config or EngineConfig()
    try:
        geometry = compute_derived_geometry(shape, config.curve_smoothing_fraction)
    except DegenerateGeometry as exc:
        log.debug("skipping draw for %s: %s", _label(shape), exc)
        return RenderFrame(shape=shape, geometry=None, drawable=False, error=str(exc))
    ambiguous = isinstance(geometry, ArcGeometry) and geometry.ambiguous
    if ambiguous:
        log.debug("arc %s has an ambiguous sweep; skipping draw", _label(shape))
    return RenderFrame(shape=shape, geometry=geometry, drawable=not ambiguous, ambiguous=ambiguous)


# ---------------------------------------------------------------------------
# Transitions


def _clamp_translation(
    snapshot: Sequence[Point], dx: float, dy: float, canvas: CanvasSize
) -> Tuple[float, float]:
    """Limit a rigid translation so no point leaves the canvas.

    Points already outside the canvas are not pulled back in; they only
    cannot move further out.
    """
    xs = [p[0] for p in snapshot]
    ys = [p[1] for p in snapshot]
    lo_x = min(0.0, -min(xs))
    hi_x = max(0.0, canvas.width - max(xs))
    lo_y = min(0.0, -min(ys))
    hi_y = max(0.0, canvas.height - max(ys))
    return (min(max(dx, lo_x), hi_x), min(max(dy, lo_y), hi_y))


def _translated(snapshot: Sequence[Point], dx: float, dy: float) -> Tuple[Point, ...]:
    return tuple((x + dx, y + dy) for x, y in snapshot)


def _begin_drag(shape: Shape, event: PointerEvent, config: EngineConfig) -> Shape:
    hit: Optional[Hit] = hit_test(
        event.position,
        shape,
        config,
        pointer_type=event.pointer_type,
        target_index=event.target_index,
    )
    if hit is None:
        if shape.selected:
            log.debug("%s deselected by pointer-down at %s", _label(shape), event.position)
            return shape.with_state(Idle(False))
        return shape

    session = DragSession(start=event.position, snapshot=shape.points)
    if hit.kind is HitKind.CONTROL:
        state = DraggingPoint(index=hit.index, session=session)
    else:
        state = DraggingWhole(session=session)
    log.debug("%s: %s -> %s", _label(shape), state_name(shape.state), state_name(state))
    return shape.with_state(state)


def _drag_whole(shape: Shape, state: DraggingWhole, position: Point, config: EngineConfig) -> Shape:
    session = state.session
    dx = position[0] - session.start[0]
    dy = position[1] - session.start[1]
    if config.clamp_to_canvas_bounds:
        dx, dy = _clamp_translation(session.snapshot, dx, dy, config.canvas_size)
    return shape.with_points(_translated(session.snapshot, dx, dy))


def _drag_point(shape: Shape, state: DraggingPoint, position: Point, config: EngineConfig) -> Shape:
    session = state.session
    if shape.kind is ShapeKind.CIRCLE and state.index == 0 and config.circle_center_drags_edge:
        center = session.snapshot[0]
        dx = position[0] - center[0]
        dy = position[1] - center[1]
        if config.clamp_to_canvas_bounds:
            dx, dy = _clamp_translation(session.snapshot, dx, dy, config.canvas_size)
        return shape.with_points(_translated(session.snapshot, dx, dy))

    target = config.canvas_size.clamp(position) if config.clamp_to_canvas_bounds else position
    points = list(shape.points)
    points[state.index] = target
    return shape.with_points(points)


def handle_pointer_event(shape: Shape, event: PointerEvent, config: Optional[EngineConfig] = None) -> Shape:
    """Return the shape that results from feeding ``event`` to ``shape``.

    * Down while idle grabs a control point, then the outline, or deselects
      on a miss.
    * Down while dragging is ignored; the first session wins.
    * Move while dragging translates the snapshot or repositions one point.
    * Up, leave and cancel end any drag and leave the shape selected.
    """
    config = config or EngineConfig()
    state = shape.state

    if event.phase is PointerPhase.DOWN:
        if not isinstance(state, Idle):
            log.debug("%s: ignoring pointer-down during %s", _label(shape), state_name(state))
            return shape
        return _begin_drag(shape, event, config)

    if isinstance(state, Idle):
        return shape

    if event.phase is PointerPhase.MOVE:
        if isinstance(state, DraggingWhole):
            return _drag_whole(shape, state, event.position, config)
        return _drag_point(shape, state, event.position, config)

    if event.ends_drag:
        log.debug("%s: %s -> idle_selected (%s)", _label(shape), state_name(state), event.phase.value)
        return shape.with_state(Idle(True))
    return shape


class DragController:
    """Owns one shape and applies pointer events to it."""

    def __init__(self, shape: Shape, config: Optional[EngineConfig] = None):
        self._shape = shape
        self.config = config or EngineConfig()

    @property
    def shape(self) -> Shape:
        return self._shape

    def handle(self, event: PointerEvent) -> Shape:
        self._shape = handle_pointer_event(self._shape, event, self.config)
        return self._shape

    def cancel(self) -> Shape:
        """End any drag, e.g. when the host window loses focus."""
        return self.handle(cancel(*self._last_position()))

    def hit(self, pointer: Sequence[float], pointer_type: str | PointerType = PointerType.MOUSE) -> Optional[Hit]:
        """What a pointer-down at ``pointer`` would grab; hosts use it for hover cursors."""
        return hit_test(pointer, self._shape, self.config, pointer_type=pointer_type)

    def frame(self) -> RenderFrame:
        return render_frame(self._shape, self.config)

    def _last_position(self) -> Point:
        session = self._shape.session
        return session.start if session is not None else (0.0, 0.0)


__all__ = [
    "RenderFrame",
    "render_frame",
    "handle_pointer_event",
    "DragController",
]
