"""Bot web server -- app factory and entry point."""

from __future__ import annotations

import logging

from aiohttp import web
from aiohttp.abc import AbstractAccessLogger

from .. import __version__
from ..config import settings as settings_module
from ..config.settings import Settings
from ..messaging.dispatcher import EventDispatcher
from ..messaging.line import LineClient
from ..messaging.orchestrator import ReplyOrchestrator
from ..services.game_status import StatusClient
from ..state.address_store import AddressStore
from .routes.registration_routes import RegistrationRoutes
from .webhook import WebhookEndpoint

logger = logging.getLogger(__name__)

_QUIET_PATHS = frozenset({"/", "/health"})

LIVENESS_TEXT = "Meow"


# ---------------------------------------------------------------------------
# Access logger
# ---------------------------------------------------------------------------


class QuietAccessLogger(AbstractAccessLogger):
    """Demotes liveness and health-check log entries to DEBUG."""

    def log(self, request: web.BaseRequest, response: web.StreamResponse, time: float) -> None:
        level = logging.DEBUG if request.path in _QUIET_PATHS else logging.INFO
        self.logger.log(
            level,
            "%s %s %s %s %.3fs",
            request.remote,
            request.method,
            request.path,
            response.status,
            time,
        )


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


async def create_app(settings: Settings | None = None) -> web.Application:
    return AppFactory(settings or settings_module.cfg).build()


class AppFactory:
    """Builds the aiohttp application with every collaborator wired explicitly.

    Collaborators default to the real LINE, Redis and ``mcstatus`` clients
    built from *settings*; tests pass substitutes instead.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        line: LineClient | None = None,
        store: AddressStore | None = None,
        status_client: StatusClient | None = None,
    ) -> None:
        self._settings = settings
        self._line = line or LineClient(
            settings.channel_access_token,
            settings.channel_secret,
            api_base=settings.line_api_base,
        )
        self._store = store or AddressStore.from_url(settings.redis_url)
        self._status_client = status_client or StatusClient(timeout=settings.query_timeout)

    def build(self) -> web.Application:
        if not self._settings.auth_key:
            logger.warning("AUTH_KEY is not set -- POST /serverURL will reject every request")

        orchestrator = ReplyOrchestrator(self._line, self._store, self._status_client)
        dispatcher = EventDispatcher(orchestrator)

        app = web.Application()
        router = app.router
        WebhookEndpoint(self._line, dispatcher).register(router)
        RegistrationRoutes(self._store, self._settings.auth_key).register(router)
        router.add_get("/", _liveness)
        router.add_get("/health", _health)

        app.on_cleanup.append(self._on_cleanup)
        return app

    async def _on_cleanup(self, _app: web.Application) -> None:
        await self._line.close()
        await self._store.close()


# ---------------------------------------------------------------------------
# Utility handlers
# ---------------------------------------------------------------------------


async def _liveness(_req: web.Request) -> web.Response:
    return web.Response(text=LIVENESS_TEXT)


async def _health(_req: web.Request) -> web.Response:
    return web.json_response({"status": "ok", "version": __version__})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )
    cfg = settings_module.cfg
    logger.info("Settings: %s", cfg.describe())
    logger.info("listening on %d", cfg.port)
    web.run_app(create_app(cfg), host="0.0.0.0", port=cfg.port, access_log_class=QuietAccessLogger)


if __name__ == "__main__":
    main()
