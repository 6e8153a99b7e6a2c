"""Application configuration and settings management."""

from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="HOMEVISIT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Home Visit Logistics API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level for the API process.")
    osrm_base_url: Optional[str] = Field(
        default=None,
        description="Base URL for the OSRM routing service (e.g., http://localhost:5000).",
    )
    osrm_profile: Literal["driving", "driving-hgv"] = Field(
        default="driving",
        description="OSRM profile to use when computing travel times.",
    )
    osrm_max_retries: int = Field(default=3, ge=0)
    osrm_backoff_seconds: float = Field(default=1.0, ge=0.0)
    osrm_timeout_seconds: float = Field(default=10.0, gt=0.0)
    average_speed_kmh: float = Field(
        default=40.0,
        gt=0.0,
        description="Speed used to turn straight-line distances into travel minutes.",
    )
    leg_buffer_minutes: float = Field(
        default=0.0,
        ge=0.0,
        description="Fixed minutes added to every route leg (parking, finding the door).",
    )
    zone_selection: Literal["first", "cheapest"] = Field(
        default="first",
        description="Which zone prices a point covered by several service areas.",
    )
    surcharge_decimal_places: int = Field(default=2, ge=0, le=6)
    business_latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    business_longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    service_areas_table: str = "serviceAreas"
    bookings_table: str = "bookings"
    bookings_service_area_column: str = "serviceAreaId"

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
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
