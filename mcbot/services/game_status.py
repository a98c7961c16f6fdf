"""Minecraft server status queries via ``mcstatus``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from mcstatus import JavaServer

from .address import ServerAddress

logger = logging.getLogger(__name__)


@dataclass
class StatusSnapshot:
    """Point-in-time result of a server list ping.  Never cached."""

    host: str = ""
    port: int | None = None
    version: str = ""
    online_players: int = 0
    max_players: int = 0
    player_names: list[str] = field(default_factory=list)
    description: str = ""


class StatusClient:
    """Queries a Java-edition server's public status interface.

    Errors (timeouts, refused connections, malformed handshakes) propagate
    to the caller unchanged.
    """

    def __init__(self, timeout: float = 3.0) -> None:
        self._timeout = timeout

    async def query(self, address: ServerAddress) -> StatusSnapshot:
        server = JavaServer(address.host, address.effective_port, timeout=self._timeout)
        logger.debug("[status] pinging %s:%d", address.host, address.effective_port)
        status = await server.async_status()
        sample = status.players.sample or []
        return StatusSnapshot(
            host=address.host,
            port=address.port,
            version=status.version.name,
            online_players=status.players.online,
            max_players=status.players.max,
            player_names=[p.name for p in sample],
            description=status.motd.to_plain(),
        )
