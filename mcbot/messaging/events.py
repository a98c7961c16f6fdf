"""LINE webhook events as a closed set of tagged variants.

Each raw event is validated against the ``line-bot-sdk`` webhook models
and then narrowed to one of the variants below, so callers never inspect
SDK objects or raw dicts.  Only :class:`TextMessageEvent` leads to a
reply; stickers, follows, postbacks and anything the SDK cannot model
become ignored variants.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

from linebot.v3.webhooks import Event
from linebot.v3.webhooks import MessageEvent as LineMessageEvent
from linebot.v3.webhooks import TextMessageContent

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextMessageEvent:
    reply_token: str
    text: str
    user_id: str = ""
    timestamp: int = 0


@dataclass(frozen=True, slots=True)
class MessageEvent:
    """A message event whose payload is not text."""

    reply_token: str
    message_type: str


@dataclass(frozen=True, slots=True)
class UnsupportedEvent:
    type: str


InboundEvent = Union[TextMessageEvent, MessageEvent, UnsupportedEvent]


class WebhookBodyError(ValueError):
    """The webhook body is valid JSON but not a LINE event batch."""


def parse_event(raw: Any) -> InboundEvent:
    if not isinstance(raw, dict):
        return UnsupportedEvent(type="?")
    event_type = str(raw.get("type", "?"))
    try:
        event = Event.from_dict(raw)
    except (ValueError, KeyError, TypeError) as exc:
        logger.debug("[events] ignoring %s event the SDK cannot model: %s", event_type, exc)
        return UnsupportedEvent(type=event_type)

    if not isinstance(event, LineMessageEvent):
        return UnsupportedEvent(type=event_type)

    reply_token = event.reply_token or ""
    message = event.message
    if not isinstance(message, TextMessageContent):
        return MessageEvent(reply_token=reply_token, message_type=str(getattr(message, "type", "?")))

    return TextMessageEvent(
        reply_token=reply_token,
        text=message.text,
        user_id=getattr(event.source, "user_id", None) or "",
        timestamp=event.timestamp or 0,
    )


def parse_events(body: Any) -> list[InboundEvent]:
    """Parse a webhook body ``{"destination": ..., "events": [...]}``."""
    if not isinstance(body, dict):
        raise WebhookBodyError("Webhook body must be a JSON object")
    events = body.get("events")
    if not isinstance(events, list):
        raise WebhookBodyError("Webhook body must contain an 'events' list")
    return [parse_event(raw) for raw in events]
