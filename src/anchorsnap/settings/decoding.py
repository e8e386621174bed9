from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from .base import SnapBaseSettings


class DecodingSettings(SnapBaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="DECODING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    allowed_account_types: str = Field(
        default="",
        description=(
            "Comma-separated account type names kept in the snapshot "
            "(e.g., 'Pool,Vault'). Empty keeps every structurally decoded account."
        )
    )

    strict_trailing_bytes: bool = Field(
        default=False,
        description="Reject accounts with bytes left after the last declared field"
    )

    max_depth: int = Field(
        default=32,
        ge=1,
        le=256,
        description="Maximum nesting of named type references while decoding"
    )

    @field_validator("allowed_account_types")
    @classmethod
    def validate_allowed_account_types(cls, v: str) -> str:
        """Validate and normalize the allowed account types list."""
        if not v:
            return v

        names = [n.strip() for n in v.split(",") if n.strip()]

        for name in names:
            if not name.replace("_", "").isalnum():
                raise ValueError(
                    f"Invalid account type name '{name}'. "
                    f"Account type names must be alphanumeric with optional underscores."
                )

        return ",".join(names)

    def get_allowed_account_types(self) -> Optional[List[str]]:
        """Get the allowed account types, or None when no filter is configured."""
        if not self.allowed_account_types:
            return None
        return self.allowed_account_types.split(",")
