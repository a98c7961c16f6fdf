"""Fan a webhook event batch out into per-event reply operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import Any

from .events import InboundEvent, TextMessageEvent
from .orchestrator import ReplyOrchestrator

logger = logging.getLogger(__name__)

ReplyOperation = Awaitable[dict[str, Any]]


class EventDispatcher:
    def __init__(self, orchestrator: ReplyOrchestrator) -> None:
        self._orchestrator = orchestrator

    def dispatch(self, events: Sequence[InboundEvent]) -> list[ReplyOperation]:
        """One reply operation per text message, in input order."""
        return [
            self._orchestrator.handle(event)
            for event in events
            if isinstance(event, TextMessageEvent)
        ]

    async def run(self, events: Sequence[InboundEvent]) -> list[dict[str, Any] | BaseException]:
        """Run every reply operation concurrently and wait for all of them.

        A failed send is returned in its slot instead of being raised, so it
        never cancels or hides the other replies.
        """
        operations = self.dispatch(events)
        skipped = len(events) - len(operations)
        if skipped:
            logger.debug("[dispatch] ignoring %d non-text event(s)", skipped)
        if not operations:
            return []
        results = await asyncio.gather(*operations, return_exceptions=True)
        failed = sum(1 for r in results if isinstance(r, BaseException))
        logger.info("[dispatch] %d reply(ies) sent, %d failed", len(results) - failed, failed)
        return list(results)
