"""A set of independently interactive shapes sharing one canvas.

Shapes never see each other: every pointer event is handed to each
controller in turn and each decides for itself. There is no stacking order.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from .config import EngineConfig
from .controller import DragController, RenderFrame
from .events import PointerEvent
from .shapes import Shape, ShapeKind, coerce_kind, create_shape


class Scene:
    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self._controllers: Dict[str, DragController] = {}
        self._counter = 0

    def _next_id(self, kind: ShapeKind) -> str:
        self._counter += 1
        return f"{kind.value}-{self._counter}"

    def add(self, kind: str | ShapeKind, points: Iterable[Sequence[float]], shape_id: Optional[str] = None) -> str:
        shape_kind = coerce_kind(kind)
        sid = shape_id or self._next_id(shape_kind)
        if sid in self._controllers:
            raise ValueError(f"Shape id '{sid}' already exists")
        self._controllers[sid] = DragController(create_shape(shape_kind, points, shape_id=sid), self.config)
        return sid

    def remove(self, shape_id: str) -> None:
        del self._controllers[shape_id]

    def get(self, shape_id: str) -> Shape:
        return self._controllers[shape_id].shape

    def controller(self, shape_id: str) -> DragController:
        return self._controllers[shape_id]

    def ids(self) -> List[str]:
        return list(self._controllers)

    def shapes(self) -> List[Shape]:
        return [ctrl.shape for ctrl in self._controllers.values()]

    def dispatch(self, event: PointerEvent) -> Dict[str, Shape]:
        return {sid: ctrl.handle(event) for sid, ctrl in self._controllers.items()}

    def cancel_all(self) -> None:
        for ctrl in self._controllers.values():
            ctrl.cancel()

    def frames(self) -> Dict[str, RenderFrame]:
        return {sid: ctrl.frame() for sid, ctrl in self._controllers.items()}

    def __len__(self) -> int:
        return len(self._controllers)


def default_scene(config: Optional[EngineConfig] = None) -> Scene:
    """The four demo shapes laid out on a 400x400 canvas."""
    scene = Scene(config)
    scene.add(ShapeKind.CIRCLE, [(100.0, 100.0), (150.0, 100.0)], shape_id="circle")
    scene.add(ShapeKind.ARC, [(50.0, 50.0), (100.0, 100.0), (100.0, 0.0)], shape_id="arc")
    scene.add(ShapeKind.ELLIPSE, [(50.0, 100.0), (100.0, 50.0), (150.0, 100.0)], shape_id="ellipse")
    scene.add(ShapeKind.CURVE, [(200.0, 200.0), (300.0, 120.0)], shape_id="line")
    return scene


__all__ = ["Scene", "default_scene"]
