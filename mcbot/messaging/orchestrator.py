"""Per-event reply orchestration.

Each text message gets exactly one reply.  The status path is a single
awaited chain (store lookup, address parse, status query, format) whose
every failure is turned into a fixed ``Server is offline. Code: ...``
text, so chat users never see a raw exception.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from ..services.address import ServerAddress, parse_address
from ..services.game_status import StatusSnapshot
from ..util.result import Result
from .commands import HELP_MESSAGE, INVALID_MESSAGE, CommandKind, ReplyError, extract_command
from .events import TextMessageEvent
from .formatting import format_status

logger = logging.getLogger(__name__)


class ReplySender(Protocol):
    async def reply_text(self, reply_token: str, text: str) -> dict[str, Any]: ...


class AddressSource(Protocol):
    async def get_address(self) -> Result: ...


class StatusQuery(Protocol):
    async def query(self, address: ServerAddress) -> StatusSnapshot: ...


class ReplyOrchestrator:
    _HANDLERS: dict[CommandKind, str] = {
        CommandKind.HELP: "_cmd_help",
        CommandKind.STATUS: "_cmd_status",
        CommandKind.INVALID: "_cmd_invalid",
    }

    def __init__(
        self,
        line: ReplySender,
        store: AddressSource,
        status_client: StatusQuery,
    ) -> None:
        self._line = line
        self._store = store
        self._status = status_client

    async def handle(self, event: TextMessageEvent) -> dict[str, Any]:
        """Answer *event* with one reply and return the send acknowledgement."""
        text = await self.compose(event.text)
        return await self._line.reply_text(event.reply_token, text)

    async def compose(self, message: str) -> str:
        kind = extract_command(message)
        logger.info("[reply] command=%s", kind.value)
        return await getattr(self, self._HANDLERS[kind])()

    async def _cmd_help(self) -> str:
        return HELP_MESSAGE

    async def _cmd_invalid(self) -> str:
        return INVALID_MESSAGE

    async def _cmd_status(self) -> str:
        try:
            lookup = await self._store.get_address()
        except Exception as exc:
            logger.warning("[reply] address lookup raised: %s", exc)
            return ReplyError.REDIS_FAIL_GET.reply_text
        if not lookup:
            logger.warning("[reply] address lookup failed: %s", lookup.message)
            return ReplyError.REDIS_FAIL_GET.reply_text

        raw = lookup.value
        if not isinstance(raw, str):
            logger.warning("[reply] no usable address registered (got %s)", type(raw).__name__)
            return ReplyError.REDIS_NOT_STRING.reply_text

        try:
            address = parse_address(raw)
        except ValueError as exc:
            logger.warning("[reply] stored address %r is unusable: %s", raw, exc)
            return ReplyError.MC_QUERY_FAIL.reply_text

        try:
            snapshot = await self._status.query(address)
        except Exception as exc:
            logger.warning("[reply] status query for %s failed: %s", address, exc)
            return ReplyError.MC_QUERY_FAIL.reply_text

        return format_status(snapshot)
