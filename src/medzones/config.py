"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="MEDZONES_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Medical Zones API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")
    zones_file: Optional[Path] = Field(
        default=None,
        description="Optional JSON file with a seed zone catalog (used when Supabase is not configured).",
    )
    default_search_radius_km: float = Field(default=10.0, gt=0.0)
    max_search_radius_km: float = Field(
        default=500.0,
        gt=0.0,
        description="Upper bound for proximity searches; larger radii are rejected as invalid input.",
    )
    batch_max_workers: int = Field(
        default=1,
        ge=1,
        description="Worker threads used to classify records during a zone assignment batch.",
    )
    commit_timeout_seconds: Optional[float] = Field(
        default=30.0,
        gt=0.0,
        description="Upper bound for the atomic assignment commit. None waits indefinitely.",
    )
    zones_table: str = "medical_zones"
    doctors_table: str = "doctors"
    assign_zones_function: str = Field(
        default="assign_doctor_zones",
        description="Postgres function applying a batch of zone assignments in one transaction.",
    )
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

    @field_validator("zones_file", mode="before")
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
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
