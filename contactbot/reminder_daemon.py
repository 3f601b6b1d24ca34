from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass, field

from .metrics import (
    PENDING_ACTIONS,
    PENDING_EXPIRED,
    REMINDER_SEND_FAILURES,
    REMINDERS_SENT,
    SWEEP_ERRORS,
    SWEEP_LATENCY,
)
from .pending_store import PendingActionStore

logger = logging.getLogger(__name__)

Notify = Callable[[Hashable], Awaitable[bool]]


@dataclass
class SweepResult:
    drained: list[Hashable] = field(default_factory=list)
    delivered: list[Hashable] = field(default_factory=list)
    failed: list[Hashable] = field(default_factory=list)


class ReminderSweeper:
    """Periodically drain expired pending actions and send one reminder each.

    Delivery is best-effort: a recipient whose reminder fails is logged and
    counted, never put back into the store and never retried.
    """

    def __init__(
        self,
        store: PendingActionStore,
        notify: Notify,
        *,
        tick_seconds: float,
        ttl_seconds: float,
    ) -> None:
        self.store = store
        self.notify = notify
        self.tick_seconds = tick_seconds
        self.ttl_seconds = ttl_seconds

    async def sweep_once(self) -> SweepResult:
        started = time.perf_counter()
        result = SweepResult(drained=await self.store.drain_expired(self.ttl_seconds))
        if result.drained:
            PENDING_EXPIRED.inc(len(result.drained))
            PENDING_ACTIONS.dec(len(result.drained))

        # Store lock is released here; slow sends do not block handlers.
        for recipient_id in result.drained:
            try:
                ok = await self.notify(recipient_id)
            except Exception:
                logger.warning(
                    "reminder dispatch raised",
                    extra={"meta": {"recipient_id": recipient_id}},
                    exc_info=True,
                )
                REMINDER_SEND_FAILURES.labels("exception").inc()
                result.failed.append(recipient_id)
                continue
            if ok:
                REMINDERS_SENT.inc()
                result.delivered.append(recipient_id)
            else:
                REMINDER_SEND_FAILURES.labels("rejected").inc()
                result.failed.append(recipient_id)
                logger.warning(
                    "reminder not delivered", extra={"meta": {"recipient_id": recipient_id}}
                )

        SWEEP_LATENCY.observe(time.perf_counter() - started)
        if result.drained:
            logger.info(
                "reminder sweep",
                extra={
                    "meta": {
                        "drained": len(result.drained),
                        "delivered": len(result.delivered),
                        "failed": len(result.failed),
                    }
                },
            )
        return result

    async def run(self, stop: asyncio.Event) -> None:
        """Tick every ``tick_seconds`` until ``stop`` is set.

        The wait between ticks returns as soon as ``stop`` is set; a tick that
        already started runs to completion first.
        """
        logger.info(
            "reminder sweeper started",
            extra={"meta": {"tick_seconds": self.tick_seconds, "ttl_seconds": self.ttl_seconds}},
        )
        while not stop.is_set():
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.tick_seconds)
            except asyncio.TimeoutError:
                pass
            if stop.is_set():
                break
            try:
                await self.sweep_once()
            except Exception:
                SWEEP_ERRORS.inc()
                logger.exception("reminder sweep failed")
        logger.info("reminder sweeper stopped")


__all__ = ["Notify", "SweepResult", "ReminderSweeper"]
