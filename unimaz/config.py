"""Configuration management for the unimaz attendance core.

This module uses Pydantic Settings to load configuration from environment
variables (or a .env file). Settings are validated on first access so that
a bad storage backend or threshold is reported before any data is touched.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Supabase credentials are only required when ``storage_backend`` is
    ``supabase``; the file and memory backends work without them.
    """

    # Storage Configuration
    storage_backend: Literal["memory", "file", "supabase"] = Field(
        default="file",
        description="Where the user data blob is persisted"
    )
    storage_path: str = Field(
        default=".unimaz/userdata.json",
        description="JSON file used by the file storage backend"
    )
    storage_key: str = Field(
        default="unimaz-userdata",
        description="Key under which the user data blob is stored"
    )

    # Matching Configuration
    min_containment_length: int = Field(
        default=3,
        description="Shortest normalized name allowed to match by substring containment (0 disables the gate)"
    )
    similarity_threshold: int = Field(
        default=70,
        description="Minimum similarity ratio (0-100) for academic load fallback matching"
    )

    # Academics
    absence_limit_ratio: float = Field(
        default=0.25,
        description="Share of total hours a student may miss"
    )

    # Supabase Configuration (optional)
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL"
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous/service role key"
    )
    supabase_table: str = Field(
        default="user_data",
        description="Table holding one row per (user_id, storage_key)"
    )
    supabase_user_id: str = Field(
        default="local",
        description="Owner of the rows read and written by this process"
    )

    log_level: str = Field(
        default="INFO",
        description="Root logging level for the CLI"
    )

    # Model configuration
    model_config = SettingsConfigDict(
        env_prefix="UNIMAZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("storage_key")
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        """Validate that the storage key is non-empty."""
        if not v or not v.strip():
            raise ValueError("UNIMAZ_STORAGE_KEY must not be empty")
        return v.strip()

    @field_validator("min_containment_length")
    @classmethod
    def validate_min_containment_length(cls, v: int) -> int:
        if v < 0:
            raise ValueError("UNIMAZ_MIN_CONTAINMENT_LENGTH must be >= 0")
        return v

    @field_validator("similarity_threshold")
    @classmethod
    def validate_similarity_threshold(cls, v: int) -> int:
        """Validate that the similarity threshold is a percentage."""
        if not 0 <= v <= 100:
            raise ValueError(
                f"UNIMAZ_SIMILARITY_THRESHOLD must be between 0 and 100 (got: {v})"
            )
        return v

    @field_validator("absence_limit_ratio")
    @classmethod
    def validate_absence_limit_ratio(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise ValueError("UNIMAZ_ABSENCE_LIMIT_RATIO must be in (0, 1]")
        return v

    @field_validator("supabase_url")
    @classmethod
    def validate_supabase_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate that the Supabase URL, when given, is properly formatted."""
        if v is None or not v.strip():
            return None

        url = v.strip()
        if not url.startswith("https://"):
            raise ValueError(
                "UNIMAZ_SUPABASE_URL must start with https:// "
                f"(got: {url[:20]}...)"
            )

        return url

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached Settings instance.

    Returns:
        Settings: Validated application settings

    Raises:
        ValueError: If environment variables are invalid
    """
    return Settings()
