from __future__ import annotations

import hmac
import logging
from typing import Any

from fastapi import APIRouter, Body, Header, HTTPException, Request

from ..poller import dispatch_update

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Telegram"])


@router.post("/telegram/webhook")
async def telegram_webhook(
    request: Request,
    payload: dict[str, Any] = Body(...),
    x_telegram_bot_api_secret_token: str | None = Header(default=None),
) -> dict[str, bool]:
    """Receive one Telegram update.

    Answers 200 even when handling fails so Telegram does not redeliver.
    """
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(status_code=503, detail="bot not ready")

    expected = runtime.config.telegram.webhook_secret
    if expected and not hmac.compare_digest(
        (x_telegram_bot_api_secret_token or "").encode(), expected.encode()
    ):
        logger.warning("webhook secret mismatch")
        raise HTTPException(status_code=401, detail="invalid secret token")

    await dispatch_update(runtime.handlers, payload)
    return {"ok": True}
