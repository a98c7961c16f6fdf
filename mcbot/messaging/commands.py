"""Chat command classification and the fixed reply texts."""

from __future__ import annotations

from enum import Enum

HELP_TOKEN = "/help"
STATUS_TOKEN = "/mcstatus"

HELP_MESSAGE = "\n".join([
    "Command list:",
    f"{HELP_TOKEN} Display this message",
    f"{STATUS_TOKEN} Check the status of the registered Minecraft server",
])

INVALID_MESSAGE = f"Invalid command. Type {HELP_TOKEN} to get some help"


class CommandKind(Enum):
    HELP = "help"
    STATUS = "status"
    INVALID = "invalid"


class ReplyError(str, Enum):
    """Codes shown to chat users when a status lookup cannot be answered."""

    REDIS_FAIL_GET = "redis_fail_get"
    REDIS_NOT_STRING = "redis_not_string"
    MC_QUERY_FAIL = "mc_query_fail"

    @property
    def reply_text(self) -> str:
        return f"Server is offline. Code: {self.value}"


def extract_command(text: str) -> CommandKind:
    """Classify *text* by case-sensitive substring match; help wins over status."""
    if HELP_TOKEN in text:
        return CommandKind.HELP
    if STATUS_TOKEN in text:
        return CommandKind.STATUS
    return CommandKind.INVALID
