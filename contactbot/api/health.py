from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/healthz")
async def healthz(request: Request) -> JSONResponse:
    """Probe endpoint. Always 200; reports the number of pending follow-ups."""
    runtime = getattr(request.app.state, "runtime", None)
    pending = None
    if runtime is not None:
        try:
            pending = await runtime.controller.pending_count()
        except Exception as e:
            logger.error("health.failed", extra={"meta": {"error": str(e)}})
    resp = JSONResponse(
        {
            "ok": runtime is not None,
            "status": "ok" if runtime is not None else "starting",
            "pending": pending,
        }
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp
