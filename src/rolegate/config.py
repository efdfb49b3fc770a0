"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rolegate.core.constants import DEFAULT_MAX_HIERARCHY_DEPTH


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ROLEGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "rolegate"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Role graph
    max_hierarchy_depth: int = DEFAULT_MAX_HIERARCHY_DEPTH
    bootstrap_path: Path | None = None

    # Task ownership: "acting_role" pins the owner to the caller's role,
    # "draft" honours an owner named in the request body.
    owner_source: Literal["acting_role", "draft"] = "acting_role"

    # Database (optional - tasks are kept in memory when unset)
    database_url: str | None = None
    database_echo: bool = False

    # API Documentation
    api_docs_base_url: str = "https://rolegate.example.com"

    # Observability
    log_level: str = "INFO"

    @field_validator("max_hierarchy_depth")
    @classmethod
    def validate_max_hierarchy_depth(cls, v: int) -> int:
        """Ensure the depth bound admits at least the role itself.

        Raises:
            ValueError: If the bound is smaller than one
        """
        if v < 1:
            raise ValueError("MAX_HIERARCHY_DEPTH must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
