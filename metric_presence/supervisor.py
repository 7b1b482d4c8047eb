"""Outer restart loop around the presence scheduler."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Mapping

from .models import MetricConfig, MetricKind
from .presence.channel import ChannelFactory
from .presence.scheduler import MetricSource, PresenceScheduler, Sleep

logger = logging.getLogger(__name__)


class Supervisor:
    """Rebuilds every presence session after any scheduler exit.

    Each run gets a brand-new ``PresenceScheduler``; nothing carries over
    between runs except the configs mapping and the restart counter.
    """

    def __init__(
        self,
        configs: Mapping[MetricKind, MetricConfig],
        source: MetricSource,
        channel_factory: ChannelFactory,
        *,
        restart_cooldown: float = 5.0,
        scheduler_options: dict[str, float] | None = None,
        sleep: Sleep = asyncio.sleep,
        scheduler_cls: Callable[..., PresenceScheduler] = PresenceScheduler,
    ):
        self.configs = configs
        self.source = source
        self.channel_factory = channel_factory
        self.restart_cooldown = restart_cooldown
        self.scheduler_options = dict(scheduler_options or {})
        self._sleep = sleep
        self._scheduler_cls = scheduler_cls

        self.scheduler: PresenceScheduler | None = None
        self.runs = 0
        self.restarts = 0
        self.last_error: str | None = None
        self.started_at = time.time()

    def build_scheduler(self) -> PresenceScheduler:
        return self._scheduler_cls(
            self.configs,
            self.source,
            self.channel_factory,
            sleep=self._sleep,
            **self.scheduler_options,
        )

    async def run_once(self) -> None:
        """Run one scheduler to completion, absorbing whatever ended it."""
        self.runs += 1
        self.scheduler = self.build_scheduler()
        try:
            await self.scheduler.run()
        except Exception as e:
            self.last_error = str(e)
            logger.error(
                f"Presence run {self.runs} failed: {e}. "
                f"Restarting in {self.restart_cooldown:g} seconds..."
            )
        else:
            self.last_error = None
            logger.warning(
                f"Presence run {self.runs} exited normally. "
                f"Restarting in {self.restart_cooldown:g} seconds..."
            )

    async def run_forever(self, max_runs: int | None = None) -> None:
        """Supervise scheduler runs until cancelled.

        *max_runs* bounds the loop for tests and one-shot invocations.
        """
        while max_runs is None or self.runs < max_runs:
            await self.run_once()
            if max_runs is not None and self.runs >= max_runs:
                break
            await self._sleep(self.restart_cooldown)
            self.restarts += 1
