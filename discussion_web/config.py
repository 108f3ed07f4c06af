"""
Configuration Management Module

Typed application settings layered by pydantic-settings, in increasing
precedence: appsettings.json, appsettings.<environment>.json, environment
variables. Explicit constructor arguments win over every layer.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from discussion_web.hosting import HostingEnvironment

BASE_SETTINGS_FILE = "appsettings.json"


def settings_files(hosting_environment: HostingEnvironment) -> list[Path]:
    """Settings files below the content root, lowest precedence first."""
    content_root = hosting_environment.content_root
    return [
        content_root / BASE_SETTINGS_FILE,
        content_root / f"appsettings.{hosting_environment.environment_name}.json",
    ]


class LoggingSettings(BaseModel):
    """Logging section (``LOGGING__LEVEL`` in the environment)"""

    level: Optional[str] = None


class Settings(BaseSettings):
    """
    Application Configuration Class

    Every item can be set in either settings file or overridden by an
    environment variable of the same name (case-insensitive). Nested
    sections use "__" in environment variable names.
    """

    # Application Config
    APP_NAME: str = "Discussion"
    DEBUG: bool = False

    # Logging Config
    LOGGING: LoggingSettings = Field(default_factory=LoggingSettings)

    # Storage Config
    # MongoDB connection string; absent or blank selects the in-memory store
    MONGO_CONNECTION_STRING: Optional[str] = Field(
        default=None, validation_alias="mongoConnectionString"
    )
    # Server selection timeout for the database existence probe (ms)
    MONGO_PROBE_TIMEOUT_MS: int = 5000

    # Static Files Config
    # Directory below the content root that static files are served from
    WEB_ROOT: str = "wwwroot"

    # Runtime Config
    # Interpreter implementation whose async file reads are unreliable;
    # on this runtime static files are read synchronously
    SYNC_FILE_RUNTIME: str = "PyPy"

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_nested_delimiter="__",
        json_file_encoding="utf-8-sig",
        extra="allow",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # One source per file so sections merge key by key; the last file wins
        json_files = settings_cls.model_config.get("json_file") or []
        file_settings = [
            JsonConfigSettingsSource(settings_cls, json_file=path)
            for path in reversed(list(json_files))
        ]
        return (init_settings, env_settings, *file_settings)

    @classmethod
    def for_environment(cls, hosting_environment: HostingEnvironment) -> "Settings":
        """
        Load settings for a hosting environment

        Missing settings files are skipped; malformed ones raise the JSON
        parser's error.

        Args:
            hosting_environment: Content root and environment name

        Returns:
            Settings: Validated settings instance
        """

        class HostedSettings(cls):
            model_config = SettingsConfigDict(json_file=settings_files(hosting_environment))

        return HostedSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application configuration (Singleton)

    Built from the process hosting environment; loaded only once.

    Returns:
        Settings: Application configuration instance
    """
    return Settings.for_environment(HostingEnvironment.from_environ())
