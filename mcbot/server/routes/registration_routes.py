"""Server address registration -- POST /serverURL."""

from __future__ import annotations

import logging
from typing import Any

from aiohttp import web

from ...services.address import address_problems
from ...state.address_store import AddressStore

logger = logging.getLogger(__name__)

FIELD = "serverURL"


class RegistrationRoutes:
    """Lets the holder of the pre-shared key set the queried server."""

    def __init__(self, store: AddressStore, auth_key: str) -> None:
        self._store = store
        self._auth_key = auth_key

    def register(self, router: web.UrlDispatcher) -> None:
        router.add_post("/serverURL", self._set_server_url)

    def _check_auth(self, req: web.Request) -> web.Response | None:
        auth = req.headers.get("Authorization")
        peer = f"{req.remote}:{_peer_port(req)}"
        if auth is None:
            logger.warning("[register] Undefined auth header from %s", peer)
            return web.Response(status=400, text="Undefined auth header")
        if not self._auth_key or auth != self._auth_key:
            logger.warning("[register] Invalid auth header from %s", peer)
            return web.Response(status=400, text="Invalid auth header")
        return None

    async def _set_server_url(self, req: web.Request) -> web.Response:
        rejected = self._check_auth(req)
        if rejected is not None:
            return rejected

        data = await _read_json(req)
        value = data.get(FIELD) if isinstance(data, dict) else None
        problems = address_problems(value)
        if problems:
            return web.json_response(
                {"errors": [
                    {"location": "body", "param": FIELD, "value": value, "msg": msg}
                    for msg in problems
                ]},
                status=400,
            )

        result = await self._store.set_address(value)
        if not result:
            logger.warning("[register] Failed to store %s: %s", FIELD, result.message)
            return web.Response(status=500, text="Server Error")
        return web.Response(text=result.message)


async def _read_json(req: web.Request) -> Any:
    try:
        return await req.json()
    except ValueError:
        return None


def _peer_port(req: web.Request) -> str:
    peer = req.transport.get_extra_info("peername") if req.transport else None
    return str(peer[1]) if isinstance(peer, tuple) and len(peer) > 1 else "?"
