"""Configuration management for Project Intel."""

import logging
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .store import DEFAULT_INDEX_NAME, find_project_root


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PROJECT_INTEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Project settings
    project_root: Path | None = Field(
        default=None,
        description="Project root (defaults to the nearest directory holding the index)",
    )
    index_path: str = Field(
        default=DEFAULT_INDEX_NAME,
        description="Path to the index file",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Exclusion settings
    ignore_file: str = Field(
        default=".gitignore",
        description="Ignore file (relative to project_root) whose rules are appended to the defaults",
    )
    use_ignore_file: bool = Field(
        default=True,
        description="Whether to read the project's ignore file",
    )
    extra_exclusions: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Additional exclusion patterns (comma-separated)",
    )

    # Default result limits
    callers_limit: int = Field(default=20, description="Default limit for callers/callees")
    dead_limit: int = Field(default=50, description="Default limit for dead symbols")
    importers_limit: int = Field(default=50, description="Default limit for module importers")
    hotspot_count: int = Field(default=10, description="Number of hotspots per direction")
    search_limit: int = Field(default=20, description="Default limit for search results")
    docs_limit: int = Field(default=10, description="Default limit for documentation search")
    investigate_limit: int = Field(default=5, description="Default limit per investigated term")

    @field_validator("extra_exclusions", mode="before")
    @classmethod
    def parse_extra_exclusions(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated string into list."""
        if isinstance(v, str):
            if not v.strip():
                return []
            return [p.strip() for p in v.split(",") if p.strip()]
        return v

    @field_validator("project_root", mode="before")
    @classmethod
    def validate_project_root(cls, v: str | Path | None) -> Path | None:
        """Convert string to Path and validate it exists."""
        if v is None or v == "":
            return None
        path = Path(v) if isinstance(v, str) else v
        if not path.exists():
            raise ValueError(f"Project root does not exist: {path}")
        if not path.is_dir():
            raise ValueError(f"Project root is not a directory: {path}")
        return path.resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v

    @property
    def effective_project_root(self) -> Path:
        """Get the project root, discovering it from the working directory if unset."""
        return self.project_root or find_project_root()


def setup_logging(level: str) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def resolve_limit(limit: int | None, default: int) -> int:
    """Use an explicit limit (zero included), else the configured default."""
    return default if limit is None else limit
