"""Core modules for the presence agent."""

from .config import PACKAGE_DIR, PROJECT_DIR, AgentSettings, get_settings, load_settings
from .health_server import HealthCheckServer
from .logging import setup_logging

__all__ = [
    # Settings
    "AgentSettings",
    "get_settings",
    "load_settings",
    # Path Constants
    "PACKAGE_DIR",
    "PROJECT_DIR",
    # Setup functions
    "setup_logging",
    # Services
    "HealthCheckServer",
]
