import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import UTC, datetime

# Telegram update currently being handled; "-" outside of update handling
update_id_var: ContextVar[str] = ContextVar("update_id", default="-")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "update_id": getattr(record, "update_id", update_id_var.get()),
            "level": record.levelname,
            "component": record.name,
            "msg": record.getMessage(),
        }
        env = os.getenv("ENV", "").strip()
        if env:
            payload["env"] = env
        if hasattr(record, "meta"):
            payload["meta"] = record.meta
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        try:
            return json.dumps(payload, ensure_ascii=False)
        except Exception:
            # Fallback to plain message if payload has unserialisable types
            return payload.get("msg", "")


class UpdateIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.update_id = update_id_var.get()
        return True


def configure_logging() -> None:
    """
    Call once at startup.
    LOG_LEVEL env var controls verbosity (default INFO).
    LOG_TO_STDOUT / DEBUG_MODE switch to human-readable lines on stdout.
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    force_stdout = os.getenv("LOG_TO_STDOUT", "").lower() in {"1", "true", "yes", "on"}
    debug_mode = os.getenv("DEBUG_MODE", "").lower() in {"1", "true", "yes", "on"}

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level, logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if force_stdout or debug_mode:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - [%(update_id)s] %(message)s"
            )
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter())
    # Handler-level so records from child loggers are stamped too
    handler.addFilter(UpdateIdFilter())
    root_logger.addHandler(handler)

    if level != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.info(
        "Logging configured: level=%s, stdout=%s, debug_mode=%s",
        level,
        force_stdout,
        debug_mode,
    )


__all__ = ["update_id_var", "JsonFormatter", "UpdateIdFilter", "configure_logging"]
