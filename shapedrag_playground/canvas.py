"""Qt canvas that paints a shapedrag scene and feeds it mouse input."""
from __future__ import annotations

import math
from typing import Optional

from PySide6.QtCore import QPointF, Qt, Signal
from PySide6.QtGui import QColor, QInputDevice, QPainter, QPainterPath, QPen, QPolygonF
from PySide6.QtWidgets import QWidget

from shapedrag_core.controller import RenderFrame
from shapedrag_core.events import PointerEvent, PointerPhase, PointerType, pointer_event
from shapedrag_core.geometry import ArcGeometry, CircleGeometry, CurveGeometry, EllipseGeometry, Point
from shapedrag_core.scene import Scene, default_scene
from shapedrag_core.shapes import ShapeKind

SHAPE_COLORS = {
    ShapeKind.CIRCLE: QColor(40, 80, 220),
    ShapeKind.ARC: QColor(215, 175, 0),
    ShapeKind.ELLIPSE: QColor(128, 0, 128),
    ShapeKind.CURVE: QColor(220, 30, 30),
}
HANDLE_RADIUS = 4.0
ACTIVE_HANDLE_RADIUS = 8.0


def describe_frame(frame: RenderFrame) -> str:
    """One-line readout for the status bar."""
    label = frame.shape.id or frame.shape.kind.value
    if not frame.drawable:
        return f"{label}: not drawable"
    geometry = frame.geometry
    if isinstance(geometry, CircleGeometry):
        return f"{label}: r={geometry.radius:.1f}"
    if isinstance(geometry, ArcGeometry):
        sweep = math.degrees(geometry.sweep.span)
        return f"{label}: r={geometry.radius:.1f} sweep={sweep:.1f}° {geometry.direction.value}"
    if isinstance(geometry, EllipseGeometry):
        return f"{label}: a={geometry.semi_major:.1f} b={geometry.semi_minor:.1f}"
    if isinstance(geometry, CurveGeometry):
        return f"{label}: length={geometry.length:.1f}"
    return label


def _pointer_type(event) -> PointerType:
    device = event.pointingDevice() if hasattr(event, "pointingDevice") else None
    if device is None:
        return PointerType.MOUSE
    kind = device.type()
    if kind == QInputDevice.DeviceType.TouchScreen:
        return PointerType.TOUCH
    if kind == QInputDevice.DeviceType.Stylus:
        return PointerType.PEN
    return PointerType.MOUSE


class ShapeCanvas(QWidget):
    """Fixed-size tracking surface hosting one ``Scene``."""

    status_changed = Signal(str)

    def __init__(self, scene: Optional[Scene] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.scene = scene or default_scene()
        self._last_pos: Point = (0.0, 0.0)
        size = self.scene.config.canvas_size
        self.setFixedSize(int(size.width), int(size.height))
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)

    def set_scene(self, scene: Scene) -> None:
        self.scene = scene
        self._emit_status()
        self.update()

    def pointer_from_event(self, event, phase: PointerPhase) -> PointerEvent:
        pos = event.position()
        self._last_pos = (pos.x(), pos.y())
        return pointer_event(phase, self._last_pos, pointer_type=_pointer_type(event))

    def _dispatch(self, event: PointerEvent) -> None:
        self.scene.dispatch(event)
        self._emit_status()
        self._update_cursor(event.position, event.pointer_type)
        self.update()

    def _emit_status(self) -> None:
        frames = self.scene.frames()
        parts = [describe_frame(frame) for frame in frames.values() if frame.shape.selected]
        self.status_changed.emit(" | ".join(parts) if parts else "No selection")

    def _update_cursor(self, point: Point, pointer_type: PointerType) -> None:
        shapes = self.scene.shapes()
        if any(shape.dragging for shape in shapes):
            self.setCursor(Qt.ClosedHandCursor)
            return
        for sid in self.scene.ids():
            if self.scene.controller(sid).hit(point, pointer_type) is not None:
                self.setCursor(Qt.OpenHandCursor)
                return
        self.setCursor(Qt.ArrowCursor)

    # ------------------------------------------------------------------
    # Qt events
    def mousePressEvent(self, event):  # pragma: no cover - GUI entry point
        if event.button() != Qt.LeftButton:
            return
        self._dispatch(self.pointer_from_event(event, PointerPhase.DOWN))

    def mouseMoveEvent(self, event):  # pragma: no cover - GUI entry point
        self._dispatch(self.pointer_from_event(event, PointerPhase.MOVE))

    def mouseReleaseEvent(self, event):  # pragma: no cover - GUI entry point
        if event.button() != Qt.LeftButton:
            return
        self._dispatch(self.pointer_from_event(event, PointerPhase.UP))

    def leaveEvent(self, event):  # pragma: no cover - GUI entry point
        self._dispatch(pointer_event(PointerPhase.LEAVE, self._last_pos))
        super().leaveEvent(event)

    def focusOutEvent(self, event):  # pragma: no cover - GUI entry point
        self.scene.cancel_all()
        self.update()
        super().focusOutEvent(event)

    # ------------------------------------------------------------------
    # Painting
    def paintEvent(self, event):  # pragma: no cover - GUI entry point
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.fillRect(self.rect(), QColor(245, 245, 245))
        samples = self.scene.config.outline_samples
        for frame in self.scene.frames().values():
            self._draw_frame(painter, frame, samples)
        painter.end()

    def _draw_frame(self, painter: QPainter, frame: RenderFrame, samples: int) -> None:  # pragma: no cover
        color = SHAPE_COLORS.get(frame.shape.kind, QColor(30, 30, 30))
        if frame.drawable:
            painter.setPen(QPen(color, 2))
            painter.setBrush(Qt.NoBrush)
            if isinstance(frame.geometry, CurveGeometry):
                painter.drawPath(self._curve_path(frame.geometry))
            else:
                outline = frame.outline(samples)
                polygon = QPolygonF([QPointF(float(x), float(y)) for x, y in outline])
                painter.drawPolyline(polygon)
        if frame.shape.selected:
            self._draw_handles(painter, frame, color)

    def _curve_path(self, geometry: CurveGeometry) -> QPainterPath:  # pragma: no cover
        path = QPainterPath()
        segments = geometry.path.segments
        if not segments:
            return path
        path.moveTo(QPointF(*segments[0].start))
        for seg in segments:
            if seg.is_line:
                path.lineTo(QPointF(*seg.end))
            else:
                path.cubicTo(QPointF(*seg.c1), QPointF(*seg.c2), QPointF(*seg.end))
        return path

    def _draw_handles(self, painter: QPainter, frame: RenderFrame, color: QColor) -> None:  # pragma: no cover
        active = frame.shape.active_index
        for index, (x, y) in enumerate(frame.shape.points):
            if index == active:
                painter.setPen(QPen(color, 2))
                painter.setBrush(Qt.NoBrush)
                radius = ACTIVE_HANDLE_RADIUS
            else:
                painter.setPen(Qt.NoPen)
                painter.setBrush(color)
                radius = HANDLE_RADIUS
            painter.drawEllipse(QPointF(x, y), radius, radius)
