"""Application settings loaded from the environment and ``.env``.

Example:
    >>> from shelf_common.config import get_settings
    >>> settings = get_settings()
    >>> settings.database_path
    '~/.local/share/media-shelf/library.db'
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_LOG_FORMATS = {"console", "json"}


class Settings(BaseSettings):
    """Media-shelf settings.

    Every field can be overridden by an environment variable of the same
    name (case-insensitive), e.g. ``DATABASE_PATH=/tmp/shelf.db``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    database_path: str = Field(
        default="~/.local/share/media-shelf/library.db",
        description="SQLite file holding user-added records and notes",
    )
    log_level: str = Field(default="INFO", description="Minimum log level")
    log_format: str = Field(default="console", description="Log renderer: console or json")
    ingestion_defer_seconds: float = Field(
        default=0.1,
        ge=0.0,
        description="Delay between placeholder insertion and ingestion finalization",
    )
    analysis_backend: str = Field(
        default="disabled",
        description="Analysis service backend",
    )
    cover_snippet_chars: int = Field(
        default=300,
        gt=0,
        description="Characters of document text printed on generated covers",
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(VALID_LOG_LEVELS)}")
        return upper

    @field_validator("log_format")
    @classmethod
    def _validate_log_format(cls, value: str) -> str:
        lower = value.lower()
        if lower not in VALID_LOG_FORMATS:
            raise ValueError(f"log_format must be one of {sorted(VALID_LOG_FORMATS)}")
        return lower


@lru_cache
def get_settings() -> Settings:
    """Return the cached process-wide settings."""
    return Settings()
