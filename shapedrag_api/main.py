from __future__ import annotations

import os
from typing import Any, Dict, Optional

from fastapi import FastAPI

from shapedrag_core.config import EngineConfig, load_config

from .adapters.store import ShapeStore
from .routers.shapes import build as build_shapes_router


def create_app(config: Optional[EngineConfig] = None) -> FastAPI:
    config = config or load_config(os.getenv("SHAPEDRAG_CONFIG"))
    store = ShapeStore(config)
    api = FastAPI(title="shapedrag API", version="0.1.0", description="Pointer-driven shape editing sessions")
    api.state.store = store
    api.include_router(build_shapes_router(store))

    @api.get("/")
    async def index() -> Dict[str, Any]:
        return {
            "name": "shapedrag-api",
            "version": api.version,
            "routes": [
                {"path": "/shapes", "methods": ["GET", "POST"]},
                {"path": "/shapes/{id}/events", "methods": ["POST"]},
                {"path": "/config", "methods": ["GET"]},
            ],
            "shape_count": len(store.list()),
        }

    @api.get("/config")
    async def get_config() -> Dict[str, Any]:
        return store.config.model_dump()

    return api


app = create_app()
