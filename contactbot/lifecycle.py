"""Entry points the message handlers use to start and resolve contact requests."""

from __future__ import annotations

import logging
from collections.abc import Hashable

from .metrics import PENDING_ACTIONS, PENDING_CANCELLED, PENDING_COALESCED, PENDING_CREATED
from .pending_store import PendingActionStore

logger = logging.getLogger(__name__)


class ActionLifecycleController:
    """
    Bridge between inbound chat events and the pending-action store.

    Per recipient: ``NoPending -> Pending`` on a request (only if not already
    pending), ``Pending -> NoPending`` on fulfilment or when the sweep fires
    the reminder. Repeated requests while pending are coalesced into the
    original timer.
    """

    def __init__(self, store: PendingActionStore) -> None:
        self.store = store

    async def on_request_issued(self, recipient_id: Hashable) -> None:
        created = await self.store.try_create(recipient_id)
        if created:
            PENDING_CREATED.inc()
            PENDING_ACTIONS.inc()
            logger.info(
                "contact request pending", extra={"meta": {"recipient_id": recipient_id}}
            )
        else:
            PENDING_COALESCED.inc()
            logger.debug(
                "contact request already pending",
                extra={"meta": {"recipient_id": recipient_id}},
            )

    async def on_request_fulfilled(self, recipient_id: Hashable) -> None:
        # Contacts may arrive without a prior request; that is a no-op.
        removed = await self.store.cancel(recipient_id)
        if removed:
            PENDING_CANCELLED.inc()
            PENDING_ACTIONS.dec()
            logger.info(
                "contact request fulfilled", extra={"meta": {"recipient_id": recipient_id}}
            )

    async def is_pending(self, recipient_id: Hashable) -> bool:
        return await self.store.is_pending(recipient_id)

    async def pending_count(self) -> int:
        return await self.store.count()


__all__ = ["ActionLifecycleController"]
