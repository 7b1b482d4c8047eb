"""Discord IPC presence channel.

Thin adapter over ``pypresence.AioPresence``. Library errors surface as
``ChannelError`` so the session layer never sees pypresence types.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from pypresence import AioPresence
from pypresence.exceptions import PyPresenceException

from ..errors import ChannelError
from ..models import MetricConfig, PresenceStatus

logger = logging.getLogger(__name__)


class PresenceChannel(Protocol):
    """Connect/update/clear surface of one rich presence connection."""

    async def connect(self) -> None: ...

    async def update(self, status: PresenceStatus) -> None: ...

    async def clear(self) -> None: ...

    def close(self) -> None: ...


ChannelFactory = Callable[[MetricConfig], PresenceChannel]


class DiscordPresenceChannel:
    """Rich presence for one Discord application ID."""

    def __init__(self, client_id: str):
        self.client_id = client_id
        self._rpc: AioPresence | None = None

    async def connect(self) -> None:
        try:
            # Constructed here so it binds to the running event loop
            self._rpc = AioPresence(self.client_id)
            await self._rpc.connect()
        except (PyPresenceException, OSError) as e:
            rpc, self._rpc = self._rpc, None
            if rpc is not None:
                self._close_socket(rpc)
            raise ChannelError(f"Discord RPC connect failed ({self.client_id}): {e}") from e
        logger.debug(f"Discord RPC handshake sent for client {self.client_id}")

    async def update(self, status: PresenceStatus) -> None:
        rpc = self._require_rpc()
        try:
            await rpc.update(
                details=status.details,
                state=status.state,
                start=status.start,
                end=status.end,
                large_image=status.large_image,
                large_text=status.large_text,
            )
        except (PyPresenceException, OSError) as e:
            raise ChannelError(f"Discord RPC update failed: {e}") from e

    async def clear(self) -> None:
        rpc = self._require_rpc()
        try:
            await rpc.clear()
        except (PyPresenceException, OSError) as e:
            raise ChannelError(f"Discord RPC clear failed: {e}") from e

    def close(self) -> None:
        rpc, self._rpc = self._rpc, None
        if rpc is None:
            return
        # AioPresence.close() also closes the event loop, which fails inside a running loop
        try:
            if rpc.sock_writer is not None:
                rpc.send_data(2, {"v": 1, "client_id": self.client_id})
        except Exception as e:
            logger.debug(f"Discord RPC goodbye for client {self.client_id} failed: {e}")
        self._close_socket(rpc)

    def _close_socket(self, rpc: AioPresence) -> None:
        writer = getattr(rpc, "sock_writer", None)
        if writer is None:
            return
        try:
            writer.close()
        except Exception as e:
            logger.debug(f"Discord RPC socket close for client {self.client_id} raised: {e}")

    def _require_rpc(self) -> AioPresence:
        if self._rpc is None:
            raise ChannelError("Discord RPC is not connected")
        return self._rpc


def discord_channel_factory(config: MetricConfig) -> PresenceChannel:
    return DiscordPresenceChannel(config.client_id)
