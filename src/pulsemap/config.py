"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="PULSE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Pulse Inventory Insights Map API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")
    data_root: Path = Field(default=Path("data"), description="Root directory for static data files.")
    stores_file: Path = Field(
        default=Path("data/stores.geo.json"),
        description="Store point FeatureCollection.",
    )
    regions_file: Path = Field(
        default=Path("data/regions.geo.json"),
        description="Division polygon FeatureCollection used for framing and highlighting.",
    )
    dc_locations_file: Optional[Path] = Field(
        default=None,
        description="Optional workbook overriding DC names, divisions and coordinates.",
    )
    country: str = Field(default="USA", description="Only stores in this country are ever shown.")

    mapbox_token: Optional[str] = Field(
        default=None,
        description="Public Mapbox access token handed to browser clients.",
    )
    map_style: str = Field(default="mapbox://styles/mapbox/dark-v11")
    mapbox_api_url: str = Field(default="https://api.mapbox.com")
    mapbox_timeout_seconds: float = Field(default=5.0, ge=0.0)

    store_zoom_threshold: float = Field(
        default=6.0,
        ge=0.0,
        description="Zoom at which individual stores replace DC roll-ups.",
    )
    fit_visible_stores: bool = Field(
        default=False,
        description="Frame the visible stores instead of the national view when nothing is selected.",
    )
    default_period: Literal["DAILY", "WEEKLY"] = Field(default="DAILY")
    max_sessions: int = Field(default=500, ge=1)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", "stores_file", "regions_file", "dc_locations_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (value.strip(),)
        # Return empty tuple if value is None or empty
        return tuple()

    @field_validator("mapbox_token", mode="before")
    @classmethod
    def _blank_token_is_missing(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value


settings = Settings()
