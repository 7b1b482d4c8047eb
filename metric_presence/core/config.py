"""Agent configuration"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors import ConfigurationError
from ..models import DEFAULT_IMAGE_KEYS, DEFAULT_LARGE_TEXT, MetricConfig, MetricKind

logger = logging.getLogger(__name__)

# === Path Configuration ===
PACKAGE_DIR = Path(__file__).parent.parent
PROJECT_DIR = PACKAGE_DIR.parent


class AgentSettings(BaseSettings):
    """Presence agent settings"""

    model_config = SettingsConfigDict(
        env_file=PROJECT_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Metrics API
    api_url: str = Field(..., description="Base URL of the metrics API")
    api_token: str = Field(..., description="Metrics API access token")

    # Steps
    steps_enabled: bool = Field(default=True)
    steps_discord_client_id: str = Field(default="", description="Discord application ID for steps")
    steps_large_image_key: str = Field(default=DEFAULT_IMAGE_KEYS[MetricKind.STEPS])
    steps_large_text: str = Field(default=DEFAULT_LARGE_TEXT[MetricKind.STEPS])
    steps_output_file: Path | None = Field(default=None, description="Overlay file for steps")

    # Water
    water_enabled: bool = Field(default=True)
    water_discord_client_id: str = Field(default="", description="Discord application ID for water")
    water_large_image_key: str = Field(default=DEFAULT_IMAGE_KEYS[MetricKind.WATER])
    water_large_text: str = Field(default=DEFAULT_LARGE_TEXT[MetricKind.WATER])
    water_output_file: Path | None = Field(default=None, description="Overlay file for water")

    # Sleep
    sleep_enabled: bool = Field(default=True)
    sleep_discord_client_id: str = Field(default="", description="Discord application ID for sleep")
    sleep_large_image_key: str = Field(default=DEFAULT_IMAGE_KEYS[MetricKind.SLEEP])
    sleep_large_text: str = Field(default=DEFAULT_LARGE_TEXT[MetricKind.SLEEP])
    sleep_output_file: Path | None = Field(default=None, description="Overlay file for sleep")

    # Timing (seconds)
    tick_interval: float = Field(default=60.0, gt=0)
    single_metric_tick_interval: float = Field(default=30.0, gt=0)
    idle_interval: float = Field(default=60.0, gt=0)
    connect_grace_seconds: float = Field(default=2.0, ge=0)
    restart_cooldown: float = Field(default=5.0, ge=0)

    # Health server
    health_port: int | None = Field(default=None, description="Health server port, disabled if unset")

    # Environment
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Strip the trailing slash and require an http(s) scheme"""
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("API_URL must start with 'http://' or 'https://'")
        return v

    @field_validator("api_token")
    @classmethod
    def validate_api_token(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("API_TOKEN must not be empty")
        return v.strip()

    @field_validator("steps_output_file", "water_output_file", "sleep_output_file", mode="before")
    @classmethod
    def empty_path_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            logger.warning(f"Invalid log level '{v}', defaulting to INFO")
            return "INFO"
        return v_upper

    @model_validator(mode="after")
    def require_client_ids(self) -> "AgentSettings":
        """Every enabled metric needs its own Discord application"""
        missing = [
            f"{kind.name}_DISCORD_CLIENT_ID"
            for kind in MetricKind
            if getattr(self, f"{kind.value}_enabled")
            and not getattr(self, f"{kind.value}_discord_client_id").strip()
        ]
        if missing:
            raise ValueError(
                "Missing Discord client ID for enabled metrics: " + ", ".join(missing)
            )
        return self

    def metric_config(self, kind: MetricKind) -> MetricConfig:
        prefix = kind.value
        return MetricConfig(
            kind=kind,
            enabled=getattr(self, f"{prefix}_enabled"),
            client_id=getattr(self, f"{prefix}_discord_client_id").strip(),
            large_image_key=getattr(self, f"{prefix}_large_image_key").strip(),
            large_text=getattr(self, f"{prefix}_large_text"),
            output_file=getattr(self, f"{prefix}_output_file"),
        )

    def metric_configs(self) -> dict[MetricKind, MetricConfig]:
        """Per-kind configs in rotation priority order"""
        return {kind: self.metric_config(kind) for kind in MetricKind}


@lru_cache
def get_settings() -> AgentSettings:
    """Get cached settings instance"""
    return AgentSettings()  # type: ignore[call-arg]


def load_settings() -> AgentSettings:
    """Load and validate settings, raising ConfigurationError on any problem."""
    try:
        settings = get_settings()
    except ValidationError as e:
        problems = "\n".join(
            f"  - {'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration:\n{problems}") from e

    enabled = [kind.value for kind, cfg in settings.metric_configs().items() if cfg.enabled]
    logger.info(f"Configuration loaded, enabled metrics: {', '.join(enabled) or 'none'}")
    return settings
