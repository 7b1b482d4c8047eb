"""Turn metric summaries into presence status text."""

from __future__ import annotations

from datetime import datetime, time

from .models import (
    MetricConfig,
    MetricKind,
    MetricSummary,
    PresenceStatus,
    SleepSummary,
    StepsSummary,
    WaterSummary,
)


def format_number(n: int) -> str:
    """Compact a count: 12345 -> '12.3K', 7890123 -> '7.9M'."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(n)


def format_minutes(minutes: int) -> str:
    """Render a sleep duration: 450 -> '7h 30m'."""
    hours, mins = divmod(max(minutes, 0), 60)
    if hours and mins:
        return f"{hours}h {mins}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"


def day_timestamps(now: datetime | None = None) -> tuple[int, int]:
    """Unix timestamps for 00:00:00 and 23:59:59 of the current local day."""
    today = (now or datetime.now()).date()
    start = datetime.combine(today, time(0, 0, 0))
    end = datetime.combine(today, time(23, 59, 59))
    return int(start.timestamp()), int(end.timestamp())


def summary_values(summary: MetricSummary) -> tuple[str, str, str]:
    """Display strings for (daily, monthly, yearly)."""
    if isinstance(summary, StepsSummary):
        return (
            format_number(summary.daily),
            format_number(summary.monthly),
            format_number(summary.yearly),
        )
    if isinstance(summary, WaterSummary):
        # Water volumes arrive pre-formatted
        return summary.daily_display, summary.monthly_display, summary.yearly_display
    if isinstance(summary, SleepSummary):
        return (
            format_minutes(summary.daily_minutes),
            format_minutes(summary.monthly_minutes),
            format_minutes(summary.yearly_minutes),
        )
    raise TypeError(f"Unsupported summary type: {type(summary).__name__}")


def build_status(
    config: MetricConfig,
    summary: MetricSummary,
    now: datetime | None = None,
) -> PresenceStatus:
    daily, monthly, yearly = summary_values(summary)
    start, end = day_timestamps(now)
    image = config.large_image_key or None
    return PresenceStatus(
        details=f"Today: {daily}",
        state=f"Monthly: {monthly} | Yearly: {yearly}",
        start=start,
        end=end,
        large_image=image,
        large_text=(config.large_text or None) if image else None,
    )


def degraded_status(kind: MetricKind) -> PresenceStatus:
    """Placeholder shown while the metrics API is unreachable."""
    return PresenceStatus(details="API connection error", state=f"Unable to fetch {kind.value}")


def overlay_text(status: PresenceStatus) -> str:
    return f"{status.details}\n{status.state}\n"
