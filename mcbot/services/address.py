"""Game-server address parsing and validation.

Addresses are stored as ``host[:port]``; the older ``tcp://host:port``
form is accepted as well.  Parsing is shared by the registration route
(which requires a port) and the status path (which falls back to the
default game port).
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit

DEFAULT_GAME_PORT = 25565
MAX_ADDRESS_LENGTH = 2083
ALLOWED_SCHEME = "tcp"

_LABEL = r"[A-Za-z0-9_](?:[A-Za-z0-9_-]{0,61}[A-Za-z0-9])?"
_HOSTNAME_RE = re.compile(rf"{_LABEL}(?:\.{_LABEL})*\.?")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


@dataclass(frozen=True, slots=True)
class ServerAddress:
    host: str
    port: int | None = None

    @property
    def effective_port(self) -> int:
        return self.port if self.port is not None else DEFAULT_GAME_PORT

    def __str__(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return host if self.port is None else f"{host}:{self.port}"


def _split(text: str) -> SplitResult:
    # Without a scheme urlsplit would read "host:port" as scheme "host".
    return urlsplit(text if "://" in text else f"//{text}")


def _valid_host(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        return bool(_HOSTNAME_RE.fullmatch(host))


def address_problems(value: object, *, require_port: bool = True) -> list[str]:
    """Return every rule *value* violates; an empty list means it is valid."""
    if value is None:
        return ["Server address is required"]
    if not isinstance(value, str):
        return ["Server address must be a string"]
    text = value.strip()
    if not text:
        return ["Server address must not be empty"]

    problems: list[str] = []
    if len(text) > MAX_ADDRESS_LENGTH:
        problems.append(f"Server address must be at most {MAX_ADDRESS_LENGTH} characters")

    # urlsplit silently drops tabs and newlines, so catch them first.
    if _CONTROL_RE.search(text):
        problems.append("Server address must not contain control characters")
        return problems

    try:
        parts = _split(text)
    except ValueError as exc:
        problems.append(f"Server address is not a valid network address ({exc})")
        return problems

    if parts.scheme and parts.scheme != ALLOWED_SCHEME:
        problems.append(f"Server address scheme must be {ALLOWED_SCHEME}")
    if parts.username is not None or parts.path or parts.query or parts.fragment:
        problems.append("Server address must only contain a host and a port")

    host = parts.hostname or ""
    if not host:
        problems.append("Server address must include a host")
    elif not _valid_host(host):
        problems.append(f"Server address host {host!r} is not a valid hostname or IP")

    try:
        port = parts.port
    except ValueError:
        problems.append("Server address port must be a number between 1 and 65535")
    else:
        if port is None:
            if require_port:
                problems.append("Server address must include a port")
        elif not 1 <= port <= 65535:
            problems.append("Server address port must be a number between 1 and 65535")

    return problems


def parse_address(value: str) -> ServerAddress:
    """Parse a stored address, raising :class:`ValueError` when unusable.

    The port is optional here; callers use :attr:`ServerAddress.effective_port`.
    """
    problems = address_problems(value, require_port=False)
    if problems:
        raise ValueError("; ".join(problems))
    parts = _split(value.strip())
    return ServerAddress(host=parts.hostname or "", port=parts.port)
