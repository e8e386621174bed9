from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from .base import SnapBaseSettings
from .decoding import DecodingSettings
from .output import OutputSettings

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class _Settings(SnapBaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

    program_id: Optional[str] = Field(
        default=None,
        description="Address of the program whose accounts are decoded; attached to logs and spans"
    )
    schema_path: Optional[Path] = Field(
        default=None,
        description="Path to the program's interface description (IDL JSON)"
    )
    log_level: str = Field(
        default="INFO",
        description="Base log level applied by configure_logging"
    )
    log_json: bool = Field(
        default=True,
        description="Emit JSON log lines; plain text when False"
    )
    max_workers: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Number of threads decoding accounts concurrently"
    )

    decoding: DecodingSettings = Field(
        default_factory=DecodingSettings,
        description="Decoding behaviour"
    )
    output: OutputSettings = Field(
        default_factory=OutputSettings,
        description="Snapshot output"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}. Use one of {', '.join(_LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    """Get the settings singleton, loaded from the environment on first call."""
    return _Settings()


def _reload_settings() -> _Settings:
    """Drop the cached settings and load them again from the environment."""
    get_settings.cache_clear()
    return get_settings()
