"""Presence cycle scheduler: rotates metric summaries across presence sessions."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime
from typing import Protocol

from ..errors import ChannelError, MetricFetchError, SchedulerRunError
from ..formatting import build_status, degraded_status
from ..models import MetricConfig, MetricKind, MetricSummary
from ..services.overlay import write_overlay
from .channel import ChannelFactory
from .rotation import Rotation
from .session import PresenceSession

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class MetricSource(Protocol):
    async def fetch_summary(self, kind: MetricKind) -> MetricSummary: ...


class PresenceScheduler:
    """Drives one run of the fetch → publish → clear → advance cycle.

    A run starts by connecting a session for every enabled kind, then ticks
    until a publish on the active session fails. Fetch failures and clear
    failures are absorbed; a publish failure raises ``SchedulerRunError`` and
    the supervisor discards every session.
    """

    def __init__(
        self,
        configs: Mapping[MetricKind, MetricConfig],
        source: MetricSource,
        channel_factory: ChannelFactory,
        *,
        tick_interval: float = 60.0,
        single_metric_tick_interval: float = 30.0,
        idle_interval: float = 60.0,
        connect_grace: float = 2.0,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.configs = configs
        self.source = source
        self.channel_factory = channel_factory
        self.tick_interval = tick_interval
        self.single_metric_tick_interval = single_metric_tick_interval
        self.idle_interval = idle_interval
        self.connect_grace = connect_grace
        self._sleep = sleep
        self._clock = clock

        self.sessions: dict[MetricKind, PresenceSession] = {}
        self.rotation = Rotation(list(MetricKind), self._in_rotation)
        self.ticks = 0
        self._was_idle = False

    # ------------------------------------------------------------------
    # Rotation membership
    # ------------------------------------------------------------------

    def _in_rotation(self, kind: MetricKind) -> bool:
        config = self.configs.get(kind)
        session = self.sessions.get(kind)
        return (
            config is not None
            and config.enabled
            and session is not None
            and session.connected
        )

    @property
    def active_kind(self) -> MetricKind | None:
        return self.rotation.active

    @property
    def connected_kinds(self) -> list[MetricKind]:
        return [kind for kind, session in self.sessions.items() if session.connected]

    def current_interval(self) -> float:
        """Tick period: faster cadence when only one metric is cycling."""
        count = len(self.rotation.enabled_kinds())
        if count == 0:
            return self.idle_interval
        if count == 1:
            return self.single_metric_tick_interval
        return self.tick_interval

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Connect a session for every enabled kind.

        A kind whose channel cannot be built or connected sits out this run.
        """
        for kind in MetricKind:
            config = self.configs.get(kind)
            if config is None or not config.enabled:
                continue
            try:
                session = PresenceSession(kind, self.channel_factory(config))
                await session.connect()
            except Exception as e:
                logger.warning(f"Presence session for {kind.value} unavailable this run: {e}")
                continue
            self.sessions[kind] = session

        if self.sessions:
            # Handshakes finish in the background; give them a moment
            await self._sleep(self.connect_grace)

        self.rotation.active = self.rotation.first()
        if self.rotation.idle:
            logger.warning("No presence sessions in rotation, idling")
        else:
            kinds = ", ".join(kind.value for kind in self.rotation.enabled_kinds())
            logger.info(f"Cycling presence through: {kinds}")

    def close(self) -> None:
        for session in self.sessions.values():
            session.close()
        self.sessions.clear()
        self.rotation.active = None

    async def run(self) -> None:
        """Run until the active channel fails. Never returns normally."""
        try:
            await self.start()
            while True:
                await self.tick()
                await self._sleep(self.current_interval())
        finally:
            self.close()

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    async def tick(self) -> bool:
        """Run one rotation step.

        Returns False when idle (nothing fetched or published).

        Raises:
            SchedulerRunError: the active session failed to publish.
        """
        kind = self.rotation.settle()
        if kind is None:
            if not self._was_idle:
                logger.info("All metrics disabled, presence idle")
            self._was_idle = True
            return False
        self._was_idle = False
        self.ticks += 1

        session = self.sessions[kind]
        config = self.configs[kind]

        try:
            summary = await self.source.fetch_summary(kind)
        except MetricFetchError as e:
            logger.error(f"Error fetching {kind.value}: {e.message}")
            if await self._publish_degraded(session):
                await self._clear_others(kind)
            self.rotation.advance()
            return True

        status = build_status(config, summary, self._clock())
        logger.info(f"Fetched {kind.value} - {status.details} | {status.state}")

        if config.output_file is not None:
            write_overlay(config.output_file, status)

        try:
            await session.publish(status)
        except ChannelError as e:
            logger.error(f"Failed to set {kind.value} presence: {e}")
            raise SchedulerRunError(f"Presence channel for {kind.value} lost: {e}") from e

        await self._clear_others(kind)
        self.rotation.advance()
        return True

    async def _publish_degraded(self, session: PresenceSession) -> bool:
        try:
            await session.publish(degraded_status(session.kind))
        except ChannelError as e:
            logger.warning(f"Could not show degraded status for {session.kind.value}: {e}")
            return False
        return True

    async def _clear_others(self, active: MetricKind) -> None:
        for kind, session in self.sessions.items():
            if kind is active or not session.connected:
                continue
            try:
                await session.clear()
            except ChannelError as e:
                logger.warning(f"Failed to clear {kind.value} presence: {e}")
