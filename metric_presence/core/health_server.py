"""HTTP health check server"""

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from aiohttp import web

if TYPE_CHECKING:
    from ..supervisor import Supervisor

logger = logging.getLogger(__name__)

SERVICE_NAME = "metric-presence"


class HealthCheckServer:
    """HTTP health check server"""

    def __init__(self, supervisor: "Supervisor", host: str = "127.0.0.1", port: int = 4345):
        self.supervisor = supervisor
        self.host = host
        self.port = port
        self.app = web.Application()
        self.runner: web.AppRunner | None = None
        self._start_time: float = time.time()
        self._heartbeat_task: asyncio.Task | None = None
        self._setup_routes()

    def _setup_routes(self) -> None:
        """Configure HTTP routes"""
        self.app.router.add_get("/", self.handle_root)
        self.app.router.add_get("/health", self.handle_health)
        self.app.router.add_get("/status", self.handle_status)
        self.app.router.add_get("/ping", self.handle_ping)

    def _ready(self) -> bool:
        scheduler = self.supervisor.scheduler
        return scheduler is not None and bool(scheduler.connected_kinds)

    async def handle_root(self, request: web.Request) -> web.Response:
        """Root endpoint - minimal service info"""
        return web.json_response({"service": SERVICE_NAME, "status": "running"})

    async def handle_health(self, request: web.Request) -> web.Response:
        """Liveness check - always 200"""
        ready = self._ready()
        return web.json_response(
            {"status": "healthy" if ready else "starting", "ready": ready},
        )

    async def handle_status(self, request: web.Request) -> web.Response:
        """Detailed status of the current presence run"""
        scheduler = self.supervisor.scheduler
        active = scheduler.active_kind if scheduler else None
        return web.json_response(
            {
                "service": SERVICE_NAME,
                "uptime_seconds": int(time.time() - self._start_time),
                "runs": self.supervisor.runs,
                "restarts": self.supervisor.restarts,
                "last_error": self.supervisor.last_error,
                "active_metric": active.value if active else None,
                "connected_metrics": [k.value for k in scheduler.connected_kinds] if scheduler else [],
                "ticks": scheduler.ticks if scheduler else 0,
            }
        )

    async def handle_ping(self, request: web.Request) -> web.Response:
        """Ping endpoint"""
        return web.Response(text="pong")

    async def _heartbeat(self) -> None:
        """Periodic heartbeat, logs uptime and rotation status"""
        while True:
            await asyncio.sleep(300)
            uptime = int(time.time() - self._start_time)
            scheduler = self.supervisor.scheduler
            active = scheduler.active_kind.value if scheduler and scheduler.active_kind else None
            logger.info(
                f"Heartbeat: uptime={uptime}s, ready={self._ready()}, "
                f"active={active}, restarts={self.supervisor.restarts}"
            )

    async def start(self) -> None:
        """Start health check server"""
        try:
            self.runner = web.AppRunner(self.app)
            await self.runner.setup()

            site = web.TCPSite(self.runner, self.host, self.port)
            await site.start()

            self._heartbeat_task = asyncio.create_task(self._heartbeat())

            logger.info(f"Health server started on {self.host}:{self.port}")
            logger.info(f"  GET http://{self.host}:{self.port}/health - Health check")
            logger.info(f"  GET http://{self.host}:{self.port}/status - Detailed status")

        except Exception as e:
            logger.exception(f"Failed to start health server: {e}")
            raise

    async def stop(self) -> None:
        """Stop health check server"""
        if self._heartbeat_task:
            self._heartbeat_task.cancel()
        if self.runner:
            try:
                await self.runner.cleanup()
                logger.info("Health server stopped")
            except Exception as e:
                logger.exception(f"Error stopping health server: {e}")
