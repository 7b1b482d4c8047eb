"""Metric kinds, per-kind configuration and API summary shapes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class MetricKind(str, Enum):
    """Tracked metrics. Declaration order is the rotation priority order."""

    STEPS = "steps"
    WATER = "water"
    SLEEP = "sleep"


DEFAULT_IMAGE_KEYS: dict[MetricKind, str] = {
    MetricKind.STEPS: "man_walking_emoji_copy",
    MetricKind.WATER: "droplet_emoji",
    MetricKind.SLEEP: "sleeping_emoji",
}

DEFAULT_LARGE_TEXT: dict[MetricKind, str] = {
    MetricKind.STEPS: "I'm walking here!",
    MetricKind.WATER: "Staying hydrated!",
    MetricKind.SLEEP: "Catching some Z's",
}


@dataclass(frozen=True)
class MetricConfig:
    kind: MetricKind
    enabled: bool = True
    client_id: str = ""
    large_image_key: str = ""
    large_text: str = ""
    output_file: Path | None = None


@dataclass(frozen=True)
class PresenceStatus:
    """A status update ready to be pushed to a presence channel."""

    details: str
    state: str
    start: int | None = None
    end: int | None = None
    large_image: str | None = None
    large_text: str | None = None


# === API response shapes ===


class StepsSummary(BaseModel):
    daily: int
    monthly: int
    yearly: int


class WaterSummary(BaseModel):
    daily_ml: int
    monthly_ml: int
    yearly_ml: int
    daily_display: str
    monthly_display: str
    yearly_display: str


class SleepSummary(BaseModel):
    daily_minutes: int
    monthly_minutes: int
    yearly_minutes: int


class ErrorResponse(BaseModel):
    error: str


MetricSummary = StepsSummary | WaterSummary | SleepSummary

SUMMARY_MODELS: dict[MetricKind, type[BaseModel]] = {
    MetricKind.STEPS: StepsSummary,
    MetricKind.WATER: WaterSummary,
    MetricKind.SLEEP: SleepSummary,
}
