"""Subset of Telegram Bot API objects read by the handlers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _TelegramModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Chat(_TelegramModel):
    id: int


class Contact(_TelegramModel):
    phone_number: str
    first_name: str | None = None
    user_id: int | None = None


class Message(_TelegramModel):
    message_id: int
    chat: Chat
    text: str | None = None
    contact: Contact | None = None


class CallbackQuery(_TelegramModel):
    id: str
    data: str | None = None
    message: Message | None = None


class Update(_TelegramModel):
    update_id: int
    message: Message | None = None
    callback_query: CallbackQuery | None = None

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "update_id": 1001,
                "message": {"message_id": 7, "chat": {"id": 42}, "text": "/start"},
            }
        },
    )


__all__ = ["Chat", "Contact", "Message", "CallbackQuery", "Update"]
