"""Chat messaging pipeline -- events, commands, orchestration, and LINE transport."""

from .commands import CommandKind, ReplyError, extract_command
from .dispatcher import EventDispatcher
from .events import (
    InboundEvent,
    MessageEvent,
    TextMessageEvent,
    UnsupportedEvent,
    WebhookBodyError,
    parse_events,
)
from .formatting import format_status
from .line import LineApiError, LineClient
from .orchestrator import ReplyOrchestrator

__all__ = [
    "CommandKind",
    "EventDispatcher",
    "InboundEvent",
    "LineApiError",
    "LineClient",
    "MessageEvent",
    "ReplyError",
    "ReplyOrchestrator",
    "TextMessageEvent",
    "UnsupportedEvent",
    "WebhookBodyError",
    "extract_command",
    "format_status",
    "parse_events",
]
