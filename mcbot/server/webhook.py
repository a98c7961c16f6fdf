"""LINE webhook endpoint -- POST /webhook."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from aiohttp import web

from ..messaging.events import WebhookBodyError, parse_events

if TYPE_CHECKING:
    from ..messaging.dispatcher import EventDispatcher
    from ..messaging.line import LineClient

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Line-Signature"


class WebhookEndpoint:
    """Verifies, parses, and dispatches incoming LINE event batches."""

    def __init__(self, line: LineClient, dispatcher: EventDispatcher) -> None:
        self._line = line
        self._dispatcher = dispatcher

    def register(self, router: web.UrlDispatcher) -> None:
        router.add_post("/webhook", self.handle)

    async def handle(self, req: web.Request) -> web.Response:
        raw_body = await req.read()
        logger.info("[webhook] POST /webhook from %s | %d bytes", req.remote, len(raw_body))

        signature = req.headers.get(SIGNATURE_HEADER, "")
        if not signature:
            logger.warning("[webhook] Rejected: no signature (from %s)", req.remote)
            return web.json_response(
                {"status": "error", "message": "no signature"}, status=401,
            )
        if not self._line.verify_signature(raw_body, signature):
            logger.warning("[webhook] Rejected: signature validation failed (from %s)", req.remote)
            return web.json_response(
                {"status": "error", "message": f"signature validation failed: {signature}"},
                status=401,
            )

        try:
            body = json.loads(raw_body)
        except ValueError as exc:
            logger.error("[webhook] Failed to parse JSON body: %s | raw=%s", exc, raw_body[:500])
            return web.json_response(
                {
                    "name": "JSONParseError",
                    "message": str(exc),
                    "raw_body": raw_body.decode("utf-8", errors="replace"),
                },
                status=400,
            )

        try:
            events = parse_events(body)
        except WebhookBodyError as exc:
            logger.error("[webhook] Unusable webhook body: %s", exc)
            return web.Response(status=400, text=str(exc))

        results = await self._dispatcher.run(events)
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.error(
                "[webhook] %d of %d reply(ies) failed; first: %s",
                len(failures), len(results), failures[0],
            )
            return web.Response(status=400, text=str(failures[0]))
        return web.json_response(results)
