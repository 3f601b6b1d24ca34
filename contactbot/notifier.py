from __future__ import annotations

import logging

from . import content
from .errors import TelegramAPIError
from .integrations.telegram_api import TelegramClient

logger = logging.getLogger(__name__)


class TelegramReminderNotifier:
    """Sends the follow-up reminder; used by the sweep as its ``notify`` callable."""

    def __init__(self, client: TelegramClient) -> None:
        self.client = client

    async def __call__(self, recipient_id: int) -> bool:
        try:
            await self.client.send_message(
                recipient_id, content.REMINDER_TEXT, reply_markup=content.reminder_menu()
            )
        except TelegramAPIError as e:
            logger.warning(
                "reminder send failed",
                extra={
                    "meta": {
                        "recipient_id": recipient_id,
                        "error_code": e.error_code,
                        "error": e.description,
                    }
                },
            )
            return False
        return True


__all__ = ["TelegramReminderNotifier"]
