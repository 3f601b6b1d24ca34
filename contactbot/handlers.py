"""
Update handlers for the bot's menus and the contact-request flow.

Handlers render static content and delegate pending-action bookkeeping to
``ActionLifecycleController``: asking for a contact starts the follow-up
timer, sharing one cancels it.
"""

from __future__ import annotations

import logging

from . import content
from .errors import TelegramAPIError
from .integrations.telegram_api import TelegramClient
from .lifecycle import ActionLifecycleController
from .metrics import UPDATES_HANDLED
from .schemas import CallbackQuery, Message, Update

logger = logging.getLogger(__name__)


class BotHandlers:
    def __init__(
        self,
        client: TelegramClient,
        controller: ActionLifecycleController,
        admin_chat_id: int,
    ) -> None:
        self.client = client
        self.controller = controller
        self.admin_chat_id = admin_chat_id

    async def handle_update(self, update: Update) -> None:
        if update.message is not None:
            UPDATES_HANDLED.labels("message").inc()
            await self.handle_message(update.message)
        if update.callback_query is not None:
            UPDATES_HANDLED.labels("callback_query").inc()
            await self.handle_callback(update.callback_query)

    async def handle_message(self, msg: Message) -> None:
        chat_id = msg.chat.id

        if msg.contact is not None:
            await self.controller.on_request_fulfilled(chat_id)
            try:
                await self.client.forward_message(
                    self.admin_chat_id, chat_id, msg.message_id
                )
            except TelegramAPIError as e:
                logger.warning(
                    "contact forward failed",
                    extra={"meta": {"chat_id": chat_id, "error": str(e)}},
                )
            await self.client.send_message(
                chat_id, content.CONTACT_THANKS, reply_markup=content.remove_keyboard()
            )
            return

        text = (msg.text or "").strip()
        if text == "/start":
            await self.send_start(chat_id)
        elif text == "/about":
            await self.send_text(chat_id, content.ABOUT_TEXT)
        elif text == "/faq":
            await self.send_faq_menu(chat_id)
        elif text == "/contact":
            await self.request_contact(chat_id)

    async def handle_callback(self, cb: CallbackQuery) -> None:
        try:
            if cb.message is not None:
                await self._route_callback(cb.message.chat.id, cb.data or "")
        finally:
            # Acknowledged even when rendering failed
            await self.client.answer_callback_query(cb.id)

    async def _route_callback(self, chat_id: int, data: str) -> None:
        if data in (content.CB_START, content.CB_BACK):
            await self.send_start(chat_id)
        elif data == content.CB_ABOUT:
            await self.send_text(chat_id, content.ABOUT_TEXT)
        elif data == content.CB_FAQ:
            await self.send_faq_menu(chat_id)
        elif data in (content.CB_CONTACT, content.CB_LEAVE_CONTACT):
            await self.request_contact(chat_id)
        elif data in content.FAQ:
            await self.send_text(chat_id, content.FAQ[data][1])
        else:
            logger.debug("unknown callback data", extra={"meta": {"data": data}})

    async def send_start(self, chat_id: int) -> None:
        await self.client.send_message(
            chat_id, content.WELCOME_TEXT, reply_markup=content.main_menu()
        )

    async def send_text(self, chat_id: int, text: str) -> None:
        await self.client.send_message(chat_id, text, reply_markup=content.back_menu())

    async def send_faq_menu(self, chat_id: int) -> None:
        await self.client.send_message(
            chat_id, content.FAQ_TITLE, reply_markup=content.faq_menu()
        )

    async def request_contact(self, chat_id: int) -> None:
        await self.controller.on_request_issued(chat_id)
        await self.client.send_message(
            chat_id, content.CONTACT_PROMPT, reply_markup=content.contact_request_keyboard()
        )


__all__ = ["BotHandlers"]
