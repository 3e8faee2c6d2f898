"""Error types raised by the shapedrag engine."""
from __future__ import annotations


class ShapeError(ValueError):
    """Base class for shape construction and geometry failures."""


class InvalidPointCount(ShapeError):
    """The number of defining points does not match the shape kind."""

    def __init__(self, kind: str, count: int, expected: str):
        self.kind = kind
        self.count = count
        self.expected = expected
        super().__init__(f"{kind} expects {expected} points, got {count}")


class DegenerateGeometry(ShapeError):
    """Defining points do not describe a drawable figure (e.g. collinear arc points)."""


class AmbiguousSweepDirection(ShapeError):
    """Arc start and end angles coincide so the sweep direction is undefined."""


__all__ = [
    "ShapeError",
    "InvalidPointCount",
    "DegenerateGeometry",
    "AmbiguousSweepDirection",
]
