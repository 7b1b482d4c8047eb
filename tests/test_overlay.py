from __future__ import annotations

from pathlib import Path

from metric_presence.models import PresenceStatus
from metric_presence.services.overlay import write_overlay


def test_write_overlay_creates_parent_dirs(tmp_path: Path) -> None:
    target = tmp_path / "obs" / "text" / "steps.txt"
    status = PresenceStatus(details="Today: 12.3K", state="Monthly: 654.3K | Yearly: 7.9M")

    assert write_overlay(target, status)
    assert target.read_text(encoding="utf-8") == "Today: 12.3K\nMonthly: 654.3K | Yearly: 7.9M\n"


def test_write_overlay_failure_is_reported_not_raised(tmp_path: Path) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    status = PresenceStatus(details="a", state="b")

    assert write_overlay(blocker / "steps.txt", status) is False
