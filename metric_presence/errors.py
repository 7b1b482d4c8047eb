"""Exception hierarchy for the presence agent."""


class MetricPresenceError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(MetricPresenceError):
    """Required settings are missing or invalid. Fatal at startup."""


class MetricFetchError(MetricPresenceError):
    """The metrics API could not produce a summary."""

    def __init__(self, kind: str, message: str, status_code: int | None = None):
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message
        self.status_code = status_code


class ChannelError(MetricPresenceError):
    """A presence channel rejected a connect, publish or clear call."""


class ChannelFault(ChannelError):
    """An unexpected exception escaped the presence library during a call."""


class SchedulerRunError(MetricPresenceError):
    """Ends the current scheduler run; the supervisor rebuilds everything."""
