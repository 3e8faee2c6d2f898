"""In-memory shape sessions, one drag controller per shape."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from shapedrag_core.config import EngineConfig
from shapedrag_core.controller import DragController
from shapedrag_core.events import PointerEvent
from shapedrag_core.shapes import create_shape


@dataclass
class ShapeSession:
    """Stored shape with metadata."""

    id: str
    controller: DragController
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    event_count: int = 0


class ShapeStore:
    """Simple store backing the shape routes."""

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        self._items: Dict[str, ShapeSession] = {}

    def create(self, kind: str, points: Sequence[Sequence[float]], shape_id: Optional[str] = None) -> ShapeSession:
        sid = shape_id or str(uuid4())
        if sid in self._items:
            raise ValueError(f"Shape id '{sid}' already exists")
        shape = create_shape(kind, points, shape_id=sid)
        session = ShapeSession(id=sid, controller=DragController(shape, self.config))
        self._items[sid] = session
        return session

    def list(self) -> List[ShapeSession]:
        return list(self._items.values())

    def get(self, shape_id: str) -> ShapeSession:
        session = self._items.get(shape_id)
        if session is None:
            raise KeyError(shape_id)
        return session

    def delete(self, shape_id: str) -> None:
        if self._items.pop(shape_id, None) is None:
            raise KeyError(shape_id)

    def apply(self, shape_id: str, event: PointerEvent) -> ShapeSession:
        session = self.get(shape_id)
        session.controller.handle(event)
        session.event_count += 1
        session.updated_at = datetime.utcnow()
        return session


def serialize_session(session: ShapeSession) -> Dict[str, Any]:
    frame = session.controller.frame()
    data = frame.asdict()
    data["id"] = session.id
    data["created_at"] = session.created_at.isoformat() + "Z"
    data["updated_at"] = session.updated_at.isoformat() + "Z"
    data["event_count"] = session.event_count
    return data
