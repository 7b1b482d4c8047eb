"""Plain-text overlay files for streaming software."""

import logging
from pathlib import Path

from ..formatting import overlay_text
from ..models import PresenceStatus

logger = logging.getLogger(__name__)


def write_overlay(path: Path, status: PresenceStatus) -> bool:
    """Write the status to *path*, creating parent directories.

    Failures are logged and reported through the return value only.
    """
    try:
        path = path.expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(overlay_text(status), encoding="utf-8")
    except OSError as e:
        logger.warning(f"Failed to write overlay file {path}: {e}")
        return False
    logger.debug(f"Overlay written to {path}")
    return True
