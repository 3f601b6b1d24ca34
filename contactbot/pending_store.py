"""
In-memory store of recipients with an outstanding contact request.

Each recipient has at most one ``PendingAction``. Entries are never updated
in place: they are created, cancelled, or drained by the sweep, and every one
of those transitions happens under a single ``asyncio.Lock`` so concurrent
message handlers and sweep ticks cannot duplicate or double-fire an entry.

Nothing here is persisted; entries are lost when the process exits.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class PendingAction:
    """A recipient awaiting follow-up and the moment the wait began."""

    recipient_id: Hashable
    created_at: float

    def age(self, now: float) -> float:
        return now - self.created_at

    def is_expired(self, ttl: float, now: float) -> bool:
        return self.age(now) >= ttl


class PendingActionStore:
    """
    Keyed record of pending follow-ups.

    Callers only ever pass recipient ids in and get booleans, timestamps or
    ids back; the stored ``PendingAction`` objects never leave the store.

    Args:
        clock: Returns the current time in seconds. Injected so tests can
               move time forward without sleeping.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or time.time
        self._entries: dict[Hashable, PendingAction] = {}
        self._lock = asyncio.Lock()

    def now(self) -> float:
        return self._clock()

    async def try_create(self, recipient_id: Hashable) -> bool:
        """
        Start a pending entry for ``recipient_id`` unless one already exists.

        Returns:
            True if a new entry was inserted, False if the recipient was
            already pending (the existing ``created_at`` is kept).
        """
        async with self._lock:
            if recipient_id in self._entries:
                return False
            self._entries[recipient_id] = PendingAction(recipient_id, self._clock())
            return True

    async def cancel(self, recipient_id: Hashable) -> bool:
        """Remove the entry if present. Returns whether anything was removed."""
        async with self._lock:
            return self._entries.pop(recipient_id, None) is not None

    async def drain_expired(self, ttl: float, now: float | None = None) -> list[Hashable]:
        """
        Remove and return every recipient whose entry is at least ``ttl`` old.

        Args:
            ttl: Age threshold in seconds.
            now: Reference time; defaults to the store clock.

        Returns:
            Recipient ids in no particular order. Each expired entry appears
            in exactly one drain result.
        """
        async with self._lock:
            if now is None:
                now = self._clock()
            expired = [
                rid for rid, entry in self._entries.items() if entry.is_expired(ttl, now)
            ]
            for rid in expired:
                del self._entries[rid]
        if expired:
            logger.debug("drained %d expired pending actions", len(expired))
        return expired

    async def pending_since(self, recipient_id: Hashable) -> float | None:
        """Creation time of the recipient's entry, or None when not pending."""
        async with self._lock:
            entry = self._entries.get(recipient_id)
            return entry.created_at if entry is not None else None

    async def is_pending(self, recipient_id: Hashable) -> bool:
        return await self.pending_since(recipient_id) is not None

    async def count(self) -> int:
        async with self._lock:
            return len(self._entries)

    async def clear(self) -> int:
        """Discard every entry (shutdown). Returns how many were dropped."""
        async with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
        if dropped:
            logger.info("discarded %d pending actions", dropped)
        return dropped


__all__ = ["Clock", "PendingAction", "PendingActionStore"]
