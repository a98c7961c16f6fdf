"""Registered server address -- a single Redis string key."""

from __future__ import annotations

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from ..util.result import Result

logger = logging.getLogger(__name__)

SERVER_URL_KEY = "serverURL"


class AddressStore:
    """Get/set of the one registered address.

    Plain ``GET``/``SET`` only: the last writer wins and there is no
    read-modify-write, so no locking is needed.  Failures come back as
    failed :class:`Result` objects rather than exceptions.
    """

    def __init__(self, client: aioredis.Redis, key: str = SERVER_URL_KEY) -> None:
        self._client = client
        self._key = key

    @classmethod
    def from_url(cls, url: str, key: str = SERVER_URL_KEY) -> AddressStore:
        return cls(aioredis.from_url(url, decode_responses=True), key)

    async def get_address(self) -> Result:
        """Ok with ``value=None`` when the key is unset."""
        try:
            value = await self._client.get(self._key)
        except UnicodeDecodeError as exc:
            # Bytes that are not UTF-8 are not an address we can use.
            logger.warning("[store] %s holds a non-text value: %s", self._key, exc)
            return Result.ok("value is not text", value=None)
        except (RedisError, OSError) as exc:
            logger.warning("[store] GET %s failed: %s", self._key, exc)
            return Result.fail(str(exc), error=exc)
        return Result.ok(value=value)

    async def set_address(self, value: str) -> Result:
        try:
            reply = await self._client.set(self._key, value)
        except (RedisError, OSError) as exc:
            logger.warning("[store] SET %s failed: %s", self._key, exc)
            return Result.fail(str(exc), error=exc)
        if not reply:
            return Result.fail(f"SET {self._key} was not acknowledged")
        logger.info("[store] %s = %s", self._key, value)
        return Result.ok("OK", value=value)

    async def close(self) -> None:
        await self._client.aclose()
