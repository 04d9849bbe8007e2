"""
Application configuration using Pydantic Settings.
"""

from pathlib import Path
from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """
    Flat-file store configuration.

    Each repository persists its collection to
    ``<data_dir>/<ClassName>s<file_extension>``.
    """

    model_config = SettingsConfigDict(env_prefix="STORE_")

    data_dir: str = Field(default="./data", description="Directory holding collection files")
    file_extension: str = Field(default=".json")
    encoding: str = Field(default="utf-8")
    indent: int | None = Field(
        default=None,
        ge=0,
        description="JSON indentation (None writes compact files)",
    )

    @field_validator("file_extension")
    @classmethod
    def validate_file_extension(cls, v: str) -> str:
        if not v.startswith("."):
            raise ValueError("file_extension must start with '.'")
        return v

    def collection_path(self, collection_name: str) -> Path:
        """Storage path for a named collection."""
        return Path(self.data_dir) / f"{collection_name}{self.file_extension}"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="flatstore")
    app_version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json", description="json or text")

    # Collation for string sorts ("" takes LC_COLLATE from the environment)
    collation_locale: str = Field(default="")

    # Nested settings
    store: StoreSettings = Field(default_factory=StoreSettings)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        allowed = {"development", "staging", "production", "testing"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in {"json", "text"}:
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
