"""Engine configuration models."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from pydantic import BaseModel, Field, field_validator

DEFAULT_BOUNDARY_TOLERANCE: Dict[str, float] = {
    "circle": 5.0,
    "arc": 5.0,
    "ellipse": 5.0,
    "curve": 10.0,
}

WIDE_POINTER_TYPES = frozenset({"touch", "pen"})


class CanvasSize(BaseModel):
    width: float = Field(400.0, gt=0.0, description="Canvas width in canvas units.")
    height: float = Field(400.0, gt=0.0, description="Canvas height in canvas units.")

    def clamp(self, point) -> tuple[float, float]:
        x = min(max(0.0, float(point[0])), self.width)
        y = min(max(0.0, float(point[1])), self.height)
        return (x, y)


class EngineConfig(BaseModel):
    hit_tolerance_points: float = Field(
        5.0, ge=0.0, description="Radius around a control point that still grabs it."
    )
    hit_tolerance_boundary: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_BOUNDARY_TOLERANCE),
        description="Per-kind distance from the outline that counts as touching it.",
    )
    clamp_to_canvas_bounds: bool = Field(False, description="Keep dragged points inside the canvas.")
    canvas_size: CanvasSize = Field(default_factory=CanvasSize, description="Tracking surface extent.")
    curve_smoothing_fraction: float = Field(
        0.25, ge=0.0, le=1.0, description="Chord fraction used for curve tangent handles."
    )
    touch_tolerance_scale: float = Field(
        2.0, ge=1.0, description="Multiplier applied to tolerances for touch and pen pointers."
    )
    circle_center_drags_edge: bool = Field(
        False, description="Dragging a circle's center carries the edge point along, keeping the radius."
    )
    outline_samples: int = Field(256, ge=8, le=4096, description="Samples used when flattening outlines.")

    @field_validator("hit_tolerance_boundary", mode="before")
    @classmethod
    def _merge_boundary_defaults(cls, value: Dict[str, float] | None) -> Dict[str, float]:
        merged = dict(DEFAULT_BOUNDARY_TOLERANCE)
        if value is None:
            return merged
        for kind, tol in dict(value).items():
            tol = float(tol)
            if tol < 0.0:
                raise ValueError(f"Boundary tolerance for '{kind}' must be non-negative")
            merged[str(kind).lower()] = tol
        return merged

    def point_tolerance(self, pointer_type: str = "mouse") -> float:
        return self.hit_tolerance_points * self._scale(pointer_type)

    def boundary_tolerance(self, kind: str, pointer_type: str = "mouse") -> float:
        key = getattr(kind, "value", kind)
        base = self.hit_tolerance_boundary.get(str(key), self.hit_tolerance_points)
        return base * self._scale(pointer_type)

    def _scale(self, pointer_type: str) -> float:
        key = str(getattr(pointer_type, "value", pointer_type))
        return self.touch_tolerance_scale if key in WIDE_POINTER_TYPES else 1.0


def load_config(path: str | Path | None) -> EngineConfig:
    """Read an ``EngineConfig`` from JSON; a missing path yields the defaults."""
    if path is None:
        return EngineConfig()
    config_path = Path(path)
    if not config_path.exists():
        return EngineConfig()
    with config_path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a JSON object.")
    return EngineConfig.model_validate(data)


__all__ = ["CanvasSize", "EngineConfig", "DEFAULT_BOUNDARY_TOLERANCE", "load_config"]
