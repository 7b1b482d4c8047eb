"""
Metric presence agent
Publishes steps / water / sleep summaries as Discord rich presence
"""

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from .core import HealthCheckServer, load_settings, setup_logging
from .core.config import AgentSettings
from .errors import ConfigurationError
from .presence import discord_channel_factory
from .services import MetricsAPIClient
from .supervisor import Supervisor

logger = logging.getLogger("metric_presence")


async def run_agent(settings: AgentSettings) -> None:
    client = MetricsAPIClient(settings.api_url, settings.api_token)
    supervisor = Supervisor(
        settings.metric_configs(),
        client,
        discord_channel_factory,
        restart_cooldown=settings.restart_cooldown,
        scheduler_options={
            "tick_interval": settings.tick_interval,
            "single_metric_tick_interval": settings.single_metric_tick_interval,
            "idle_interval": settings.idle_interval,
            "connect_grace": settings.connect_grace_seconds,
        },
    )

    health_server: HealthCheckServer | None = None
    if settings.health_port:
        health_server = HealthCheckServer(supervisor, port=settings.health_port)
        await health_server.start()

    logger.info(f"Connecting to API: {settings.api_url}")
    try:
        await supervisor.run_forever()
    finally:
        if health_server:
            await health_server.stop()
        await client.close()


def main() -> int:
    load_dotenv()
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 1

    try:
        asyncio.run(run_agent(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
