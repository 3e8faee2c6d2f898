"""Abstract pointer input consumed by the drag controller."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .geometry import Point, as_point


class PointerPhase(str, Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    LEAVE = "leave"
    CANCEL = "cancel"


class PointerType(str, Enum):
    MOUSE = "mouse"
    TOUCH = "touch"
    PEN = "pen"


ENDING_PHASES = frozenset({PointerPhase.UP, PointerPhase.LEAVE, PointerPhase.CANCEL})


@dataclass(frozen=True)
class PointerEvent:
    """One normalised pointer sample.

    ``target_index`` is set by hosts that already know which control handle
    sits under the pointer (for example a toolkit that draws handles as
    separate items); the controller then skips its own proximity search.
    """

    phase: PointerPhase
    position: Point
    target_index: Optional[int] = None
    pointer_type: PointerType = PointerType.MOUSE

    @property
    def ends_drag(self) -> bool:
        return self.phase in ENDING_PHASES

    def asdict(self) -> dict:
        data = {
            "phase": self.phase.value,
            "position": list(self.position),
            "pointer_type": self.pointer_type.value,
        }
        if self.target_index is not None:
            data["target_index"] = self.target_index
        return data


def pointer_event(
    phase: str | PointerPhase,
    position: Sequence[float],
    target_index: Optional[int] = None,
    pointer_type: str | PointerType = PointerType.MOUSE,
) -> PointerEvent:
    """Build a ``PointerEvent`` from loosely typed host data."""
    return PointerEvent(
        phase=PointerPhase(phase),
        position=as_point(position),
        target_index=None if target_index is None else int(target_index),
        pointer_type=PointerType(pointer_type),
    )


def down(x: float, y: float, **kwargs) -> PointerEvent:
    return pointer_event(PointerPhase.DOWN, (x, y), **kwargs)


def move(x: float, y: float, **kwargs) -> PointerEvent:
    return pointer_event(PointerPhase.MOVE, (x, y), **kwargs)


def up(x: float, y: float, **kwargs) -> PointerEvent:
    return pointer_event(PointerPhase.UP, (x, y), **kwargs)


def cancel(x: float = 0.0, y: float = 0.0) -> PointerEvent:
    return pointer_event(PointerPhase.CANCEL, (x, y))


__all__ = [
    "PointerPhase",
    "PointerType",
    "PointerEvent",
    "pointer_event",
    "down",
    "move",
    "up",
    "cancel",
]
