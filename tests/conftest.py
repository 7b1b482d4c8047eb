from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from metric_presence.errors import MetricFetchError
from metric_presence.models import (
    MetricConfig,
    MetricKind,
    PresenceStatus,
    SleepSummary,
    StepsSummary,
    WaterSummary,
)


class StopLoop(BaseException):
    """Escapes the scheduler/supervisor loops, which only catch Exception."""


class FakeChannel:
    def __init__(self, kind: MetricKind, events: list[tuple[str, str]]):
        self.kind = kind
        self.events = events
        self.connect_error: BaseException | None = None
        self.update_error: BaseException | None = None
        self.clear_error: BaseException | None = None
        self.updates: list[PresenceStatus] = []
        self.visible = False
        self.closed = False

    async def connect(self) -> None:
        self.events.append((self.kind.value, "connect"))
        if self.connect_error is not None:
            raise self.connect_error

    async def update(self, status: PresenceStatus) -> None:
        self.events.append((self.kind.value, "update"))
        if self.update_error is not None:
            raise self.update_error
        self.updates.append(status)
        self.visible = True

    async def clear(self) -> None:
        self.events.append((self.kind.value, "clear"))
        if self.clear_error is not None:
            raise self.clear_error
        self.visible = False

    def close(self) -> None:
        self.closed = True


class FakeChannelFactory:
    def __init__(self, configure: Callable[[FakeChannel, int], None] | None = None):
        self.events: list[tuple[str, str]] = []
        self.created: list[FakeChannel] = []
        self._configure = configure

    def __call__(self, config: MetricConfig) -> FakeChannel:
        channel = FakeChannel(config.kind, self.events)
        generation = sum(1 for c in self.created if c.kind is config.kind)
        self.created.append(channel)
        if self._configure is not None:
            self._configure(channel, generation)
        return channel

    def latest(self, kind: MetricKind) -> FakeChannel:
        return [c for c in self.created if c.kind is kind][-1]

    def visible_kinds(self) -> list[MetricKind]:
        latest = {c.kind: c for c in self.created}
        return [kind for kind, c in latest.items() if c.visible and not c.closed]


SAMPLE_SUMMARIES = {
    MetricKind.STEPS: StepsSummary(daily=12345, monthly=654321, yearly=7890123),
    MetricKind.WATER: WaterSummary(
        daily_ml=1500,
        monthly_ml=42000,
        yearly_ml=510000,
        daily_display="1.5 L",
        monthly_display="42 L",
        yearly_display="510 L",
    ),
    MetricKind.SLEEP: SleepSummary(daily_minutes=450, monthly_minutes=13500, yearly_minutes=160000),
}


class FakeSource:
    """Scripted metric source; falls back to SAMPLE_SUMMARIES once the script runs out."""

    def __init__(self, script: list[object] | None = None):
        self.script = list(script or [])
        self.calls: list[MetricKind] = []

    async def fetch_summary(self, kind: MetricKind):
        self.calls.append(kind)
        if self.script:
            result = self.script.pop(0)
            if isinstance(result, BaseException):
                raise result
            return result
        return SAMPLE_SUMMARIES[kind]


class FakeSleep:
    def __init__(self, stop_after: int | None = None):
        self.calls: list[float] = []
        self.stop_after = stop_after

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if self.stop_after is not None and len(self.calls) >= self.stop_after:
            raise StopLoop()


def fetch_error(kind: MetricKind) -> MetricFetchError:
    return MetricFetchError(kind.value, "HTTP 503 Service Unavailable", status_code=503)


def make_configs(
    enabled: tuple[MetricKind, ...] = tuple(MetricKind),
    output_dir: Path | None = None,
) -> dict[MetricKind, MetricConfig]:
    return {
        kind: MetricConfig(
            kind=kind,
            enabled=kind in enabled,
            client_id=f"{kind.value}-client",
            large_image_key=f"{kind.value}_icon",
            large_text=f"{kind.value} hover",
            output_file=(output_dir / f"{kind.value}.txt") if output_dir else None,
        )
        for kind in MetricKind
    }


@pytest.fixture
def configs() -> dict[MetricKind, MetricConfig]:
    return make_configs()


@pytest.fixture
def factory() -> FakeChannelFactory:
    return FakeChannelFactory()
