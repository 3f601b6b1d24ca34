"""Application-level errors and standardized error handlers."""

from datetime import UTC, datetime
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse


class ConfigError(ValueError):
    """Raised when required settings are missing or malformed."""


class TelegramAPIError(RuntimeError):
    """Raised when a Bot API call fails (transport, HTTP status or ``ok: false``)."""

    def __init__(
        self, method: str, description: str, error_code: int | None = None
    ) -> None:
        super().__init__(f"{method}: {description}")
        self.method = method
        self.description = description
        self.error_code = error_code


def json_error(
    code: str, message: str, status: int, meta: dict[str, Any] | None = None
) -> JSONResponse:
    """Create a standardized JSON error response: ``{"code", "message", "meta"}``."""
    return JSONResponse(
        {"code": code.lower(), "message": message, "meta": meta or {}},
        status_code=status,
    )


async def global_error_handler(request: Request, exc: Exception) -> JSONResponse:
    now = datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
    base_meta = {"path": request.url.path, "timestamp": now}

    if isinstance(exc, HTTPException):
        status_to_code = {
            400: "bad_request",
            401: "unauthorized",
            404: "not_found",
            422: "validation_error",
            503: "service_unavailable",
        }
        code = status_to_code.get(exc.status_code, "http_error")
        return json_error(code, str(exc.detail), exc.status_code, meta=base_meta)

    if isinstance(exc, ValueError):
        return json_error("validation_error", "Invalid input data", 422, meta=base_meta)

    return json_error("internal_error", "Something went wrong", 500, meta=base_meta)


def register_error_handlers(app) -> None:
    app.add_exception_handler(Exception, global_error_handler)
    app.add_exception_handler(HTTPException, global_error_handler)


__all__ = [
    "ConfigError",
    "TelegramAPIError",
    "json_error",
    "global_error_handler",
    "register_error_handlers",
]
