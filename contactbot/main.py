"""FastAPI application entrypoint.

``create_app`` is the composition root: it resolves configuration, mounts the
health, metrics and webhook routers, and hands the runtime wiring to
``contactbot.startup.lifespan``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from .api import health, metrics_root, webhook
from .config import BotConfig, load_config
from .env_utils import load_env
from .errors import register_error_handlers
from .logging_config import configure_logging
from .startup import lifespan

logger = logging.getLogger(__name__)


def create_app(config: BotConfig | None = None) -> FastAPI:
    if config is None:
        load_env()
        config = load_config()

    app = FastAPI(title="contactbot", lifespan=lifespan)
    app.state.config = config

    app.include_router(health.router)
    app.include_router(webhook.router)
    if config.server.prometheus_enabled:
        app.include_router(metrics_root.router)

    register_error_handlers(app)
    return app


def main() -> None:
    import uvicorn

    load_env()
    configure_logging()
    config = load_config()
    logger.info("config loaded", extra={"meta": config.to_dict()})
    # uvicorn turns SIGINT/SIGTERM into a lifespan shutdown
    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()


__all__ = ["create_app", "main"]
