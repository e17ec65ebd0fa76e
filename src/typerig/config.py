"""
TypeRig - Configuration and settings.

Values come from TYPERIG_* environment variables or a local .env file.
CLI options (see typerig.main) override them per run.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-level settings for the rig."""

    model_config = SettingsConfigDict(
        env_prefix="TYPERIG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Folder scanned for source units (relative paths resolve from the cwd)
    source_folder: str = "Sources"
    recursive: bool = False

    # Build behaviour
    skip_if_exists: bool = True
    rebuild_stale: bool = False  # Rebuild artifacts older than their source

    # Console
    title: str = "TEST-RIG"

    # Logging (empty log_file -> stderr)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: str = "typerig.log"


@lru_cache
def get_settings() -> Settings:
    """Settings for this process, read once from TYPERIG_* and .env."""
    return Settings()


class _SettingsProxy:
    # Settings are read on first attribute access, not at import

    def __getattr__(self, name: str):
        return getattr(get_settings(), name)


settings = _SettingsProxy()
