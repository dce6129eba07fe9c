"""Settings for urlql."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class UrlqlSettings(BaseSettings):
    """urlql configuration settings."""

    LOG_LEVEL: str = "INFO"

    # Upper bound on the raw query string length; None disables the check
    MAX_QUERY_LENGTH: Optional[int] = None

    # Deepest allowed parenthesised group
    MAX_NESTING_DEPTH: int = 100

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = UrlqlSettings()
