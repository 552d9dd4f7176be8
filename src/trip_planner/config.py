"""Application configuration and settings management."""

from dataclasses import dataclass
from typing import Annotated, Any, Literal, Optional

import json
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


MAX_LOCATIONS = 20
WARNING_THRESHOLD = 15


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TRIP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Trip Planner API"
    api_prefix: str = "/api"
    deployment_mode: Literal["production", "development"] = Field(
        default="development",
        description="Selects which optimizer endpoint submissions are sent to.",
    )
    optimizer_url_production: Optional[str] = Field(
        default=None,
        description="Route optimizer endpoint used in production (e.g., https://optimizer.example.com/optimize).",
    )
    optimizer_url_development: Optional[str] = Field(
        default="http://localhost:5000/optimize",
        description="Route optimizer endpoint used during development.",
    )
    request_timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=0, ge=0)
    backoff_seconds: float = Field(default=1.0, ge=0.0)
    max_locations: int = Field(default=MAX_LOCATIONS, ge=2)
    warning_threshold: int = Field(default=WARNING_THRESHOLD, ge=0)
    supports_designated_end: bool = True
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @model_validator(mode="after")
    def _check_thresholds(self) -> "Settings":
        if self.warning_threshold > self.max_locations:
            raise ValueError("warning_threshold must not exceed max_locations.")
        return self

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @property
    def optimizer_endpoint(self) -> Optional[str]:
        """Optimizer URL for the current deployment mode."""
        if self.deployment_mode == "production":
            return self.optimizer_url_production
        return self.optimizer_url_development


@dataclass(frozen=True, slots=True)
class PlannerConfig:
    """Variant behaviour of the location form, passed to the controller and builder."""

    max_locations: int = MAX_LOCATIONS
    warning_threshold: int = WARNING_THRESHOLD
    supports_designated_end: bool = True

    @classmethod
    def from_settings(cls, source: Settings) -> "PlannerConfig":
        return cls(
            max_locations=source.max_locations,
            warning_threshold=source.warning_threshold,
            supports_designated_end=source.supports_designated_end,
        )


settings = Settings()
