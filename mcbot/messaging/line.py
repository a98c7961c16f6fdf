"""LINE Messaging API transport -- webhook signatures and reply delivery.

Thin wrapper over ``line-bot-sdk`` so the rest of the bot only sees
``verify_signature`` / ``reply_text`` and a single error type.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
from linebot.v3.messaging import (
    ApiException,
    AsyncApiClient,
    AsyncMessagingApi,
    Configuration,
    ReplyMessageRequest,
    TextMessage,
)
from linebot.v3.webhook import SignatureValidator

logger = logging.getLogger(__name__)

REPLY_PATH = "/v2/bot/message/reply"
MAX_TEXT_LENGTH = 5000
REQUEST_ID_HEADER = "x-line-request-id"


class LineApiError(Exception):
    """A reply request was rejected by (or never reached) the LINE API."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"LINE API error {status}: {message}")
        self.status = status
        self.message = message


class LineClient:
    """LINE bot client: one text reply per reply token.

    The SDK's API client owns an ``aiohttp`` session, so it is created on
    first use inside the running loop and closed by :meth:`close`.
    """

    def __init__(
        self,
        channel_access_token: str,
        channel_secret: str,
        *,
        api_base: str = "https://api.line.me",
        timeout: float = 10.0,
    ) -> None:
        self._configuration = Configuration(
            host=api_base.rstrip("/"),
            access_token=channel_access_token,
        )
        self._validator = SignatureValidator(channel_secret)
        self._timeout = timeout
        self._api_client: AsyncApiClient | None = None
        self._api: AsyncMessagingApi | None = None

    def verify_signature(self, body: bytes, signature: str) -> bool:
        """Check ``X-Line-Signature`` against the raw request body."""
        if not signature:
            return False
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError:
            return False
        return self._validator.validate(text, signature)

    def _get_api(self) -> AsyncMessagingApi:
        if self._api is None:
            self._api_client = AsyncApiClient(self._configuration)
            self._api = AsyncMessagingApi(self._api_client)
        return self._api

    async def reply_text(self, reply_token: str, text: str) -> dict[str, Any]:
        """Send *text* against *reply_token* and return the send acknowledgement."""
        if len(text) > MAX_TEXT_LENGTH:
            text = text[: MAX_TEXT_LENGTH - 3] + "..."
        request = ReplyMessageRequest(reply_token=reply_token, messages=[TextMessage(text=text)])
        try:
            response = await self._get_api().reply_message_with_http_info(
                request, _request_timeout=self._timeout,
            )
        except ApiException as exc:
            body = exc.body or exc.reason or ""
            if isinstance(body, bytes):
                body = body.decode("utf-8", errors="replace")
            logger.warning(
                "[line] reply rejected: status=%s token=%s... body=%s",
                exc.status, reply_token[:8], str(body)[:200],
            )
            raise LineApiError(exc.status or 0, str(body)) from exc
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("[line] reply request failed: %s", exc)
            raise LineApiError(0, str(exc)) from exc

        ack: dict[str, Any] = {}
        headers = {k.lower(): v for k, v in (response.headers or {}).items()}
        if headers.get(REQUEST_ID_HEADER):
            ack[REQUEST_ID_HEADER] = headers[REQUEST_ID_HEADER]
        if response.data is not None:
            ack.update(response.data.to_dict())
        return ack

    async def close(self) -> None:
        if self._api_client is not None:
            await self._api_client.close()
            self._api_client = None
            self._api = None
