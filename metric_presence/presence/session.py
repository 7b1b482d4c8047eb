"""One presence connection per metric kind."""

from __future__ import annotations

import logging
from enum import Enum

from ..errors import ChannelError, ChannelFault
from ..models import MetricKind, PresenceStatus
from .channel import PresenceChannel

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class PresenceSession:
    """Owns a single channel handle and mediates every call made on it.

    No retries happen here; a failed session is dropped and rebuilt by the
    supervisor on the next run.
    """

    def __init__(self, kind: MetricKind, channel: PresenceChannel):
        self.kind = kind
        self._channel = channel
        self.state = ConnectionState.DISCONNECTED
        self.visible = False

    @property
    def connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    async def connect(self) -> None:
        try:
            await self._channel.connect()
        except ChannelError:
            self.state = ConnectionState.DISCONNECTED
            raise
        except Exception as e:
            self.state = ConnectionState.DISCONNECTED
            raise ChannelFault(f"{self.kind.value}: connect crashed: {e!r}") from e
        self.state = ConnectionState.CONNECTED
        logger.info(f"Presence session for {self.kind.value} connected")

    async def publish(self, status: PresenceStatus) -> None:
        """Set the visible status.

        Raises:
            ChannelError: not connected, or the channel rejected the update.
            ChannelFault: anything else escaped the presence library.
        """
        if not self.connected:
            raise ChannelError(f"{self.kind.value}: session is not connected")
        try:
            await self._channel.update(status)
        except ChannelError:
            raise
        except Exception as e:
            raise ChannelFault(f"{self.kind.value}: presence library fault: {e!r}") from e
        self.visible = True

    async def clear(self) -> None:
        if not self.connected:
            raise ChannelError(f"{self.kind.value}: session is not connected")
        try:
            await self._channel.clear()
        except ChannelError:
            raise
        except Exception as e:
            raise ChannelFault(f"{self.kind.value}: presence library fault: {e!r}") from e
        self.visible = False

    def close(self) -> None:
        try:
            self._channel.close()
        except Exception as e:
            logger.debug(f"Closing {self.kind.value} session raised: {e}")
        self.state = ConnectionState.DISCONNECTED
        self.visible = False

    def __repr__(self) -> str:
        return f"<PresenceSession kind={self.kind.value} state={self.state.value}>"
