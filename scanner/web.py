from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Request

from .capture import RawImage
from .presentation import describe_state
from .session import ScanSession

logger = logging.getLogger(__name__)


def create_app(session: ScanSession) -> FastAPI:
    """Expose a ScanSession to a browser or any other rendering layer."""
    app = FastAPI(title="Plant Scanner")
    app.state.session = session

    @app.get("/health", response_model=dict[str, str])
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/scan/state")
    async def scan_state() -> dict[str, Any]:
        return describe_state(session.state)

    @app.post("/scan/image")
    async def scan_image(
        request: Request,
        filename: str = Query(default="upload"),
        wait: bool = Query(default=False),
    ) -> dict[str, Any]:
        if session.is_scanning:
            raise HTTPException(status_code=409, detail="A scan is already in progress")
        body = await request.body()
        content_type = request.headers.get("content-type", "")
        image = RawImage.from_bytes(
            body,
            filename=filename,
            media_type=content_type if content_type.startswith("image/") else None,
        )
        logger.info("Upload received file=%s bytes=%d", filename, len(body))
        task = session.start(image)
        if wait:
            await task
        return describe_state(session.state)

    @app.post("/scan/clear")
    async def scan_clear() -> dict[str, Any]:
        return describe_state(session.clear())

    return app


__all__ = ["create_app"]
