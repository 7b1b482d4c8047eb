from __future__ import annotations

import asyncio

from aiohttp import test_utils

from metric_presence.core.health_server import HealthCheckServer
from metric_presence.models import MetricKind
from metric_presence.supervisor import Supervisor

from conftest import FakeChannelFactory, FakeSleep, FakeSource, make_configs


def _get_json(server: HealthCheckServer, path: str) -> tuple[int, object]:
    async def go():
        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            response = await client.get(path)
            if response.content_type == "application/json":
                return response.status, await response.json()
            return response.status, await response.text()

    return asyncio.run(go())


def _supervisor() -> Supervisor:
    return Supervisor(make_configs(), FakeSource(), FakeChannelFactory(), sleep=FakeSleep())


def test_health_before_first_run_is_starting() -> None:
    server = HealthCheckServer(_supervisor())

    status, body = _get_json(server, "/health")

    assert status == 200
    assert body == {"status": "starting", "ready": False}


def test_status_reports_rotation() -> None:
    supervisor = _supervisor()
    scheduler = supervisor.build_scheduler()
    supervisor.scheduler = scheduler

    async def start_and_tick() -> None:
        await scheduler.start()
        await scheduler.tick()

    asyncio.run(start_and_tick())
    server = HealthCheckServer(supervisor)

    status, body = _get_json(server, "/status")

    assert status == 200
    assert body["active_metric"] == MetricKind.WATER.value
    assert body["connected_metrics"] == ["steps", "water", "sleep"]
    assert body["ticks"] == 1
    assert body["restarts"] == 0

    _, health = _get_json(HealthCheckServer(supervisor), "/health")
    assert health == {"status": "healthy", "ready": True}


def test_ping() -> None:
    status, body = _get_json(HealthCheckServer(_supervisor()), "/ping")
    assert (status, body) == (200, "pong")
