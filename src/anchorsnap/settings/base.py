from pydantic_settings import BaseSettings, SettingsConfigDict


class SnapBaseSettings(BaseSettings):
    """Base class for anchorsnap settings.

    Carries the shared loading conventions: ``.env`` support,
    case-insensitive variable names and ``__`` as the nested delimiter.
    Domain settings subclass it and add an ``env_prefix``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )
