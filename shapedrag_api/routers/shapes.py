from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from shapedrag_core.errors import InvalidPointCount
from shapedrag_core.events import pointer_event

from ..adapters.store import ShapeStore, serialize_session


class ShapeCreate(BaseModel):
    kind: Literal["circle", "arc", "ellipse", "curve", "line"] = Field(..., description="Shape kind")
    points: List[tuple[float, float]] = Field(..., description="Defining points in canvas space (x, y).")
    id: Optional[str] = Field(default=None, description="Optional caller-chosen shape id")


class PointerEventBody(BaseModel):
    phase: Literal["down", "move", "up", "leave", "cancel"]
    position: tuple[float, float] = Field(..., description="Pointer position in canvas space.")
    target_index: Optional[int] = Field(default=None, ge=0, description="Control point known to be under the pointer.")
    pointer_type: Literal["mouse", "touch", "pen"] = "mouse"


class ShapeResponse(BaseModel):
    id: str
    shape: Dict[str, Any]
    geometry: Optional[Dict[str, Any]] = None
    drawable: bool
    ambiguous: bool
    error: Optional[str] = None
    created_at: str
    updated_at: str
    event_count: int


def build(store: ShapeStore) -> APIRouter:
    router = APIRouter(prefix="/shapes", tags=["shapes"])

    @router.get("/", response_model=List[ShapeResponse])
    async def list_shapes() -> List[ShapeResponse]:
        return [ShapeResponse(**serialize_session(item)) for item in store.list()]

    @router.post("/", response_model=ShapeResponse, status_code=status.HTTP_201_CREATED)
    async def create_shape(body: ShapeCreate) -> ShapeResponse:
        try:
            session = store.create(body.kind, body.points, shape_id=body.id)
        except InvalidPointCount as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
        return ShapeResponse(**serialize_session(session))

    @router.get("/{shape_id}", response_model=ShapeResponse)
    async def get_shape(shape_id: str) -> ShapeResponse:
        try:
            session = store.get(shape_id)
        except KeyError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shape not found") from exc
        return ShapeResponse(**serialize_session(session))

    @router.delete("/{shape_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_shape(shape_id: str) -> None:
        try:
            store.delete(shape_id)
        except KeyError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shape not found") from exc

    @router.post("/{shape_id}/events", response_model=ShapeResponse)
    async def post_event(shape_id: str, body: PointerEventBody) -> ShapeResponse:
        event = pointer_event(body.phase, body.position, body.target_index, body.pointer_type)
        try:
            session = store.apply(shape_id, event)
        except KeyError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shape not found") from exc
        return ShapeResponse(**serialize_session(session))

    return router
