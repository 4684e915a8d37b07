"""
Keep-alive HTTP server for external uptime monitors.

Serves a fixed plain-text body on ``GET /``; it carries no bot state.
"""

from aiohttp import web

from utils.logging import get_logger

logger = get_logger(__name__)

ALIVE_TEXT = "Bot is alive!"


class KeepAliveServer:
    """Lightweight aiohttp server that only answers liveness probes."""

    def __init__(self, host: str = "0.0.0.0", port: int = 3000) -> None:  # noqa: S104
        self.host = host
        self.port = port
        self.app = web.Application()
        self.app.router.add_get("/", self.alive)
        self.runner: web.AppRunner | None = None
        self.site: web.TCPSite | None = None

    async def alive(self, request: web.Request) -> web.Response:
        return web.Response(text=ALIVE_TEXT)

    async def start(self) -> None:
        """Start serving; errors are logged and re-raised."""
        try:
            self.runner = web.AppRunner(self.app)
            await self.runner.setup()
            self.site = web.TCPSite(self.runner, self.host, self.port)
            await self.site.start()
            logger.info(f"Web server running on port {self.port}")
        except Exception as e:
            logger.exception("Failed to start keep-alive server", exc_info=e)
            raise

    async def stop(self) -> None:
        """Stop serving."""
        try:
            if self.site:
                await self.site.stop()
            if self.runner:
                await self.runner.cleanup()
            logger.info("Keep-alive server stopped")
        except Exception as e:
            logger.exception("Error stopping keep-alive server", exc_info=e)
        finally:
            self.site = None
            self.runner = None
