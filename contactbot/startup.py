"""Startup orchestrator.

Exposes the ``lifespan`` context manager that wires the pending-action store,
its lifecycle controller, the Telegram client and the background daemons
(reminder sweeper, optional long-poller), and tears them down in order.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import FastAPI

from .config import POLLING, BotConfig
from .handlers import BotHandlers
from .integrations.telegram_api import TelegramClient
from .lifecycle import ActionLifecycleController
from .metrics import PENDING_ACTIONS
from .notifier import TelegramReminderNotifier
from .pending_store import Clock, PendingActionStore
from .poller import poll_updates
from .reminder_daemon import ReminderSweeper

logger = logging.getLogger(__name__)

_background_tasks: set[asyncio.Task] = set()


def start_background_task(coro) -> asyncio.Task:
    task = asyncio.create_task(coro)
    _background_tasks.add(task)
    task.add_done_callback(lambda t: _background_tasks.discard(t))
    return task


async def cancel_background_tasks(timeout: float = 2.0) -> None:
    if not _background_tasks:
        return
    for t in list(_background_tasks):
        t.cancel()
    await asyncio.wait(list(_background_tasks), timeout=timeout)
    _background_tasks.clear()


@dataclass
class BotRuntime:
    config: BotConfig
    store: PendingActionStore
    controller: ActionLifecycleController
    client: TelegramClient
    handlers: BotHandlers
    sweeper: ReminderSweeper
    stop: asyncio.Event


def build_runtime(
    config: BotConfig,
    *,
    client: TelegramClient | None = None,
    clock: Clock | None = None,
) -> BotRuntime:
    store = PendingActionStore(clock=clock)
    controller = ActionLifecycleController(store)
    if client is None:
        client = TelegramClient(
            config.telegram.token,
            config.telegram.api_base,
            timeout=config.telegram.http_timeout,
        )
    handlers = BotHandlers(client, controller, config.telegram.admin_chat_id)
    sweeper = ReminderSweeper(
        store,
        TelegramReminderNotifier(client),
        tick_seconds=config.reminder.tick_seconds,
        ttl_seconds=config.reminder.ttl_seconds,
    )
    return BotRuntime(config, store, controller, client, handlers, sweeper, asyncio.Event())


def _start_daemons(runtime: BotRuntime) -> None:
    start_background_task(runtime.sweeper.run(runtime.stop))
    if runtime.config.telegram.mode == POLLING:
        start_background_task(
            poll_updates(
                runtime.client,
                runtime.handlers,
                timeout=runtime.config.telegram.poll_timeout,
                stop=runtime.stop,
            )
        )


async def _shutdown(runtime: BotRuntime) -> None:
    runtime.stop.set()
    if _background_tasks:
        # Let an in-flight sweep finish before cancelling what is left
        # (a long-poll request mostly).
        _, pending = await asyncio.wait(
            list(_background_tasks), timeout=runtime.config.server.shutdown_grace_seconds
        )
        if pending:
            logger.info("cancelling %d background tasks", len(pending))
    await cancel_background_tasks()

    await runtime.store.clear()
    PENDING_ACTIONS.set(0)
    try:
        await runtime.client.aclose()
    except Exception:
        logger.debug("telegram client close failed", exc_info=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan: build the runtime, start daemons, shut down cleanly.

    Uses ``app.state.config`` and, when present, ``app.state.telegram_client``
    and ``app.state.clock`` (tests inject fakes through these).
    """
    config: BotConfig = app.state.config
    runtime = build_runtime(
        config,
        client=getattr(app.state, "telegram_client", None),
        clock=getattr(app.state, "clock", None),
    )
    app.state.runtime = runtime
    _start_daemons(runtime)
    logger.info("bot started", extra={"meta": {"mode": config.telegram.mode}})
    try:
        yield
    finally:
        await _shutdown(runtime)
        logger.info("bot shut down")


__all__ = [
    "BotRuntime",
    "build_runtime",
    "lifespan",
    "start_background_task",
    "cancel_background_tasks",
]
