from pathlib import Path

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .base import SnapBaseSettings


class OutputSettings(SnapBaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="OUTPUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    snapshot_path: Path = Field(
        default=Path("snapshots/snapshot.json"),
        description="File the JSON snapshot is written to"
    )

    indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="JSON indentation of the written snapshot"
    )
