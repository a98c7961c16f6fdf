"""External service integrations -- game-server status and addresses."""

from .address import DEFAULT_GAME_PORT, ServerAddress, address_problems, parse_address
from .game_status import StatusClient, StatusSnapshot

__all__ = [
    "DEFAULT_GAME_PORT",
    "ServerAddress",
    "StatusClient",
    "StatusSnapshot",
    "address_problems",
    "parse_address",
]
