"""External collaborators: metrics API and overlay output."""

from .metrics_api import MetricsAPIClient
from .overlay import write_overlay

__all__ = ["MetricsAPIClient", "write_overlay"]
