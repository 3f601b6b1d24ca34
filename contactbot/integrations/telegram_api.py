from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from ..errors import TelegramAPIError

logger = logging.getLogger(__name__)


class TelegramClient:
    """Minimal async Bot API client over a shared ``httpx.AsyncClient``.

    Every call POSTs JSON to ``{api_base}/bot{token}/{method}`` and returns
    the ``result`` field. Failures raise ``TelegramAPIError``.
    """

    def __init__(
        self,
        token: str,
        api_base: str = "https://api.telegram.org",
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        retry_delay: float = 1.0,
    ) -> None:
        self._base_url = f"{api_base.rstrip('/')}/bot{token}"
        self._timeout = timeout
        self._transport = transport
        self._retry_delay = retry_delay
        self._client: httpx.AsyncClient | None = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def call(
        self,
        method: str,
        payload: dict[str, Any] | None = None,
        *,
        attempts: int = 1,
        timeout: float | None = None,
    ) -> Any:
        """Invoke a Bot API method.

        Network errors and 5xx responses are retried up to ``attempts`` times
        with a doubling delay; 4xx responses and ``ok: false`` are not.
        """
        url = f"{self._base_url}/{method}"
        delay = self._retry_delay
        kwargs: dict[str, Any] = {"json": payload or {}}
        if timeout is not None:
            kwargs["timeout"] = timeout

        for attempt in range(1, attempts + 1):
            try:
                resp = await self._http().post(url, **kwargs)
            except httpx.RequestError as e:
                logger.warning(
                    "telegram.network_error",
                    extra={"meta": {"method": method, "attempt": attempt, "error": str(e)}},
                )
                if attempt < attempts:
                    await asyncio.sleep(delay)
                    delay *= 2
                    continue
                raise TelegramAPIError(method, f"network error: {e}") from e

            if resp.status_code >= 500 and attempt < attempts:
                logger.warning(
                    "telegram.status_error",
                    extra={"meta": {"method": method, "status": resp.status_code, "attempt": attempt}},
                )
                await asyncio.sleep(delay)
                delay *= 2
                continue

            try:
                body = resp.json()
            except ValueError:
                body = None
            if not isinstance(body, dict):
                raise TelegramAPIError(
                    method, f"unexpected response (HTTP {resp.status_code})", resp.status_code
                )
            if not body.get("ok"):
                raise TelegramAPIError(
                    method,
                    str(body.get("description") or "request failed"),
                    body.get("error_code", resp.status_code),
                )
            return body.get("result")

        raise TelegramAPIError(method, "retries exhausted")  # pragma: no cover

    async def send_message(
        self, chat_id: int, text: str, reply_markup: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"chat_id": chat_id, "text": text}
        if reply_markup is not None:
            payload["reply_markup"] = reply_markup
        return await self.call("sendMessage", payload)

    async def forward_message(
        self, chat_id: int, from_chat_id: int, message_id: int
    ) -> dict[str, Any]:
        return await self.call(
            "forwardMessage",
            {"chat_id": chat_id, "from_chat_id": from_chat_id, "message_id": message_id},
        )

    async def answer_callback_query(self, callback_query_id: str, text: str = "") -> bool:
        payload: dict[str, Any] = {"callback_query_id": callback_query_id}
        if text:
            payload["text"] = text
        return bool(await self.call("answerCallbackQuery", payload))

    async def get_updates(self, offset: int, timeout: int) -> list[dict[str, Any]]:
        # HTTP timeout must outlast the long-poll window.
        result = await self.call(
            "getUpdates",
            {"offset": offset, "timeout": timeout, "allowed_updates": ["message", "callback_query"]},
            attempts=3,
            timeout=timeout + self._timeout,
        )
        return list(result or [])


__all__ = ["TelegramClient"]
