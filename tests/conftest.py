"""Test-specific fixtures."""

import asyncio
import logging
import os
import sys

import pytest

from contactbot.config import BotConfig, ReminderCfg, ServerCfg, TelegramCfg
from contactbot.errors import TelegramAPIError


@pytest.fixture(autouse=True, scope="session")
def _lock_test_env():
    """Force test-mode environment: no real bot token, no network."""
    os.environ.setdefault("PYTEST_RUNNING", "1")
    os.environ.setdefault("ENV", "test")
    os.environ.setdefault("BOT_TOKEN", "test-token")
    os.environ.setdefault("ADMIN_CHAT_ID", "999")
    os.environ.setdefault("TELEGRAM_API_BASE", "http://127.0.0.1:9")  # Blackhole port
    yield


@pytest.fixture(scope="session", autouse=True)
def sane_logging():
    """Force a simple stdout handler for the whole test session."""
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    h = logging.StreamHandler(sys.stdout)
    h.setLevel(logging.INFO)
    root.addHandler(h)
    root.setLevel(logging.INFO)
    yield


class FakeClock:
    """Settable clock; tests move time instead of sleeping."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTelegram:
    """Records Bot API calls made through the ``TelegramClient`` surface."""

    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.forwarded: list[dict] = []
        self.answered: list[str] = []
        self.fail_for: set[int] = set()
        self.updates: list[list[dict]] = []
        self.closed = False

    async def send_message(self, chat_id, text, reply_markup=None):
        if chat_id in self.fail_for:
            raise TelegramAPIError("sendMessage", "Forbidden: bot was blocked by the user", 403)
        msg = {"chat_id": chat_id, "text": text, "reply_markup": reply_markup}
        self.sent.append(msg)
        return {"message_id": len(self.sent), "chat": {"id": chat_id}}

    async def forward_message(self, chat_id, from_chat_id, message_id):
        if chat_id in self.fail_for:
            raise TelegramAPIError("forwardMessage", "Bad Request: chat not found", 400)
        self.forwarded.append(
            {"chat_id": chat_id, "from_chat_id": from_chat_id, "message_id": message_id}
        )
        return {"message_id": message_id}

    async def answer_callback_query(self, callback_query_id, text=""):
        self.answered.append(callback_query_id)
        return True

    async def get_updates(self, offset, timeout):
        if self.updates:
            return self.updates.pop(0)
        # stands in for the long-poll wait
        await asyncio.sleep(0.01)
        return []

    async def aclose(self):
        self.closed = True

    def texts_to(self, chat_id) -> list[str]:
        return [m["text"] for m in self.sent if m["chat_id"] == chat_id]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_telegram():
    return FakeTelegram()


def make_config(**overrides) -> BotConfig:
    telegram = TelegramCfg(
        token="test-token",
        admin_chat_id=overrides.pop("admin_chat_id", 999),
        api_base="http://127.0.0.1:9",
        mode=overrides.pop("mode", "webhook"),
        poll_timeout=1,
        webhook_secret=overrides.pop("webhook_secret", ""),
        http_timeout=1.0,
    )
    reminder = ReminderCfg(
        tick_seconds=overrides.pop("tick_seconds", 600.0),
        ttl_seconds=overrides.pop("ttl_seconds", 86400.0),
    )
    server = ServerCfg(
        host="127.0.0.1",
        port=8000,
        shutdown_grace_seconds=overrides.pop("shutdown_grace_seconds", 1.0),
        prometheus_enabled=overrides.pop("prometheus_enabled", True),
    )
    assert not overrides, f"unknown overrides: {overrides}"
    return BotConfig(telegram, reminder, server)


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def config_factory():
    return make_config
