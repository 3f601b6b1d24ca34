from __future__ import annotations

import logging
import math
import os
from dataclasses import asdict, dataclass
from typing import Any

from .errors import ConfigError

logger = logging.getLogger(__name__)

POLLING = "polling"
WEBHOOK = "webhook"
_MODES = {POLLING, WEBHOOK}


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _as_float(val: str | None, default: float) -> float:
    try:
        return float(val) if val is not None else float(default)
    except Exception:
        return float(default)


def _as_int(val: str | None, default: int) -> int:
    try:
        return int(val) if val is not None else int(default)
    except Exception:
        return int(default)


@dataclass(frozen=True)
class TelegramCfg:
    token: str
    admin_chat_id: int
    api_base: str
    mode: str
    poll_timeout: int
    webhook_secret: str
    http_timeout: float


@dataclass(frozen=True)
class ReminderCfg:
    tick_seconds: float
    ttl_seconds: float


@dataclass(frozen=True)
class ServerCfg:
    host: str
    port: int
    shutdown_grace_seconds: float
    prometheus_enabled: bool


@dataclass(frozen=True)
class BotConfig:
    telegram: TelegramCfg
    reminder: ReminderCfg
    server: ServerCfg

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["telegram"]["token"] = "***" if self.telegram.token else ""
        d["telegram"]["webhook_secret"] = "***" if self.telegram.webhook_secret else ""
        return d


def _require(name: str) -> str:
    val = (os.getenv(name) or "").strip()
    if not val:
        raise ConfigError(f"{name} is not set")
    return val


def load_config() -> BotConfig:
    """Build a ``BotConfig`` from the process environment.

    Raises ``ConfigError`` when a required value is missing or invalid.
    """
    token = _require("BOT_TOKEN")
    raw_admin = _require("ADMIN_CHAT_ID")
    try:
        admin_chat_id = int(raw_admin)
    except ValueError as e:
        raise ConfigError(f"ADMIN_CHAT_ID must be an integer, got {raw_admin!r}") from e

    mode = os.getenv("TELEGRAM_MODE", POLLING).strip().lower()
    if mode not in _MODES:
        raise ConfigError(f"TELEGRAM_MODE must be one of {sorted(_MODES)}, got {mode!r}")

    telegram = TelegramCfg(
        token=token,
        admin_chat_id=admin_chat_id,
        api_base=os.getenv("TELEGRAM_API_BASE", "https://api.telegram.org").rstrip("/"),
        mode=mode,
        poll_timeout=_as_int(os.getenv("TELEGRAM_POLL_TIMEOUT"), 60),
        webhook_secret=os.getenv("TELEGRAM_WEBHOOK_SECRET", "").strip(),
        http_timeout=_as_float(os.getenv("TELEGRAM_HTTP_TIMEOUT"), 10.0),
    )

    reminder = ReminderCfg(
        tick_seconds=_as_float(os.getenv("REMINDER_TICK_SECONDS"), 600.0),
        ttl_seconds=_as_float(os.getenv("REMINDER_TTL_SECONDS"), 86400.0),
    )
    for name, value in (
        ("REMINDER_TICK_SECONDS", reminder.tick_seconds),
        ("REMINDER_TTL_SECONDS", reminder.ttl_seconds),
    ):
        if not math.isfinite(value) or value <= 0:
            raise ConfigError(f"{name} must be a positive finite number, got {value!r}")
    if reminder.ttl_seconds < reminder.tick_seconds:
        # Entries may wait up to one extra tick past their TTL.
        logger.warning(
            "reminder ttl shorter than sweep interval",
            extra={
                "meta": {
                    "ttl_seconds": reminder.ttl_seconds,
                    "tick_seconds": reminder.tick_seconds,
                }
            },
        )

    server = ServerCfg(
        host=os.getenv("HOST", "0.0.0.0"),
        port=_as_int(os.getenv("PORT"), 8000),
        shutdown_grace_seconds=_as_float(os.getenv("SHUTDOWN_GRACE_SECONDS"), 5.0),
        prometheus_enabled=_as_bool(os.getenv("PROMETHEUS_ENABLED"), True),
    )
    return BotConfig(telegram, reminder, server)


__all__ = [
    "BotConfig",
    "TelegramCfg",
    "ReminderCfg",
    "ServerCfg",
    "POLLING",
    "WEBHOOK",
    "load_config",
]
