"""Plain-text rendering of server status replies."""

from __future__ import annotations

from ..services.address import DEFAULT_GAME_PORT
from ..services.game_status import StatusSnapshot


def format_players(names: list[str] | None) -> str:
    return ",".join(names) if names else "none"


def format_status(snapshot: StatusSnapshot) -> str:
    """Render *snapshot* one field per line; the port falls back to 25565."""
    port = snapshot.port if snapshot.port is not None else DEFAULT_GAME_PORT
    description = (snapshot.description or "").strip()
    lines = [
        f"Server address: {snapshot.host}",
        f"Server port: {port}",
        f"Server version: {snapshot.version}",
        f"Online players: {snapshot.online_players}/{snapshot.max_players}",
        f"Players: {format_players(snapshot.player_names)}",
        f"Server description: {description}",
    ]
    return "\n".join(lines)
