"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from modgraph.web.api import router


def create_app() -> FastAPI:
    app = FastAPI(title="modgraph", version="0.1.0")
    app.include_router(router)

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return app
