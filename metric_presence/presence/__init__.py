"""Presence sessions and the rotation scheduler."""

from .channel import ChannelFactory, DiscordPresenceChannel, PresenceChannel, discord_channel_factory
from .rotation import Rotation
from .scheduler import MetricSource, PresenceScheduler
from .session import ConnectionState, PresenceSession

__all__ = [
    # Channel
    "PresenceChannel",
    "ChannelFactory",
    "DiscordPresenceChannel",
    "discord_channel_factory",
    # Sessions
    "ConnectionState",
    "PresenceSession",
    # Scheduling
    "MetricSource",
    "PresenceScheduler",
    "Rotation",
]
