from __future__ import annotations

import json
import logging
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CHRONOLANES_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_title: str = Field(default="Chronolanes API", description="FastAPI application title")
    app_description: str = Field(
        default="Lane-packed, conflict-aware timeline layouts for date records",
        description="Description shown in the OpenAPI document",
    )
    allowed_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by CORS; JSON list or comma separated",
    )
    log_level: str = Field(
        default="INFO",
        description="Application log level (DEBUG/INFO/WARNING/ERROR/CRITICAL)",
    )
    enable_request_logging: bool = Field(
        default=True,
        description="Log one line per handled request",
    )
    default_pixels_per_day: float = Field(
        default=8.0,
        gt=0,
        le=200,
        description="Axis scale used when a layout request does not set one",
    )
    min_label_px: float = Field(
        default=40.0,
        gt=0,
        description="Minimum spacing between axis labels, in pixels",
    )
    max_records: int = Field(
        default=5_000,
        ge=1,
        le=100_000,
        description="Largest record batch accepted by the layout endpoint",
    )
    max_axis_ticks: int = Field(
        default=2_000,
        ge=1,
        le=100_000,
        description="Upper bound on axis ticks returned with a layout",
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value):
        if isinstance(value, str):
            raw = value.strip()
            if raw.startswith("["):
                return json.loads(raw)
            return [origin.strip() for origin in raw.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        candidate = value.upper()
        if candidate not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            logging.getLogger("chronolanes.settings").warning(
                "Unknown log level '%s', falling back to INFO.", value
            )
            return "INFO"
        return candidate


settings = Settings()
