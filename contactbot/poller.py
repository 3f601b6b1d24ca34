from __future__ import annotations

import asyncio
import logging

from pydantic import ValidationError

from .errors import TelegramAPIError
from .handlers import BotHandlers
from .integrations.telegram_api import TelegramClient
from .logging_config import update_id_var
from .schemas import Update

logger = logging.getLogger(__name__)


async def _sleep_or_stop(stop: asyncio.Event, seconds: float) -> None:
    try:
        await asyncio.wait_for(stop.wait(), timeout=seconds)
    except asyncio.TimeoutError:
        pass


async def dispatch_update(handlers: BotHandlers, raw: dict) -> None:
    """Validate one raw update and run it through the handlers.

    Invalid updates and handler failures are logged and swallowed so one bad
    update never stalls intake.
    """
    try:
        update = Update.model_validate(raw)
    except ValidationError as e:
        logger.warning("invalid update skipped", extra={"meta": {"error": str(e)}})
        return
    token = update_id_var.set(str(update.update_id))
    try:
        await handlers.handle_update(update)
    except Exception:
        logger.exception("update handling failed")
    finally:
        update_id_var.reset(token)


async def poll_updates(
    client: TelegramClient,
    handlers: BotHandlers,
    *,
    timeout: int = 60,
    stop: asyncio.Event,
    backoff_seconds: float = 5.0,
) -> None:
    """Long-poll ``getUpdates`` until ``stop`` is set."""
    offset = 0
    logger.info("polling for updates", extra={"meta": {"timeout": timeout}})
    while not stop.is_set():
        try:
            updates = await client.get_updates(offset, timeout)
        except TelegramAPIError as e:
            logger.warning(
                "getUpdates failed", extra={"meta": {"error": e.description, "error_code": e.error_code}}
            )
            await _sleep_or_stop(stop, backoff_seconds)
            continue
        for raw in updates:
            uid = raw.get("update_id")
            if isinstance(uid, int):
                offset = max(offset, uid + 1)
            await dispatch_update(handlers, raw)
    logger.info("polling stopped")


__all__ = ["dispatch_update", "poll_updates"]
