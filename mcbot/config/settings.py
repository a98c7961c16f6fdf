"""Application settings -- reads from the ``.env`` file and environment.

Values are read once when :class:`Settings` is constructed; the running
server never reloads them.  Every key has a fallback so the process can
start (and answer liveness checks) with nothing configured.
"""

from __future__ import annotations

import os

from ..util.env_file import EnvFile
from ..util.singletons import register_singleton

DEFAULT_REDIS_URL = "redis://localhost:6379/"
DEFAULT_PORT = 3000
DEFAULT_QUERY_TIMEOUT = 3.0
DEFAULT_LINE_API_BASE = "https://api.line.me"


class Settings:
    """Runtime configuration sourced from ``.env`` and environment variables."""

    def __init__(self) -> None:
        self.env = EnvFile(os.getenv("DOTENV_PATH") or ".env")
        e = self._read

        # LINE Messaging API
        self.channel_access_token: str = e("CHANNEL_ACCESS_TOKEN") or "YOUR_CHANNEL_ACCESS_TOKEN"
        self.channel_secret: str = e("CHANNEL_SECRET") or "YOUR_CHANNEL_SECRET"
        self.line_api_base: str = (e("LINE_API_BASE") or DEFAULT_LINE_API_BASE).rstrip("/")

        self.redis_url: str = e("REDIS_URL") or DEFAULT_REDIS_URL

        # Empty means registration is closed: no header can match it.
        self.auth_key: str = e("AUTH_KEY")

        self.port: int = int(e("PORT") or DEFAULT_PORT)
        self.query_timeout: float = float(e("MC_QUERY_TIMEOUT") or DEFAULT_QUERY_TIMEOUT)

    def _read(self, key: str) -> str:
        return self.env.read(key) or os.getenv(key, "")

    def describe(self) -> dict[str, str]:
        """Loggable view of the settings with secrets masked."""
        return {
            "channel_access_token": _mask(self.channel_access_token),
            "channel_secret": _mask(self.channel_secret),
            "auth_key": "set" if self.auth_key else "MISSING",
            "redis_url": self.redis_url,
            "port": str(self.port),
            "query_timeout": str(self.query_timeout),
        }


def _mask(value: str) -> str:
    return (value[:6] + "...") if value else "(none)"


# Module-level singleton, built at import time for the entry point.
cfg = Settings()


def _reset_cfg() -> None:
    global cfg
    cfg = Settings()


register_singleton(_reset_cfg)
