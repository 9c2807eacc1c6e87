"""Keep-alive HTTP server.

Hosting platforms that put idle processes to sleep poll these endpoints. They
carry no bot logic: ``/`` answers with a static text and ``/health`` with
``{"status": "ok"}``.
"""

import logging

from aiohttp import web

from ..bot.messages import ALIVE_MESSAGE

logger = logging.getLogger(__name__)


async def alive(request: web.Request) -> web.Response:
    return web.Response(text=ALIVE_MESSAGE)


async def health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


def create_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/", alive)
    app.router.add_get("/health", health)
    return app


class HealthServer:
    """Runs the keep-alive app next to the bot's polling loop."""

    def __init__(self, host: str = "0.0.0.0", port: int = 3000):
        self.host = host
        self.port = port
        self._runner: web.AppRunner | None = None

    async def start(self) -> None:
        if self._runner is not None:
            return
        runner = web.AppRunner(create_app())
        await runner.setup()
        site = web.TCPSite(runner, self.host, self.port)
        await site.start()
        self._runner = runner
        logger.info(f"Web server running on {self.host}:{self.port}")

    async def stop(self) -> None:
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        logger.info("Web server stopped")
