from pathlib import Path
from pydantic import ValidationError as SettingsValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from functools import lru_cache

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Centralized application configuration with type validation.
    Automatically reads variables from the environment and an optional .env file.

    Every provider setting is optional at load time: a missing value only becomes
    an error (ConfigurationError) when the provider that needs it is first used,
    so the process can start and report the problem instead of crashing.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- General Settings ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[Path] = None
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    REQUEST_TIMEOUT_SECONDS: float = 60.0

    # --- Azure Blob Storage (destination) ---
    AZURE_STORAGE_CONNECTION_STRING: Optional[str] = None
    AZURE_CONTAINER_NAME: Optional[str] = None

    # --- Google Drive (source) ---
    GOOGLE_SERVICE_ACCOUNT_CREDENTIALS: Optional[str] = None
    GOOGLE_FOLDER_ID: Optional[str] = None
    # Only the first page of the folder is ever listed.
    DRIVE_PAGE_SIZE: int = 10

    @field_validator(
        "AZURE_STORAGE_CONNECTION_STRING",
        "AZURE_CONTAINER_NAME",
        "GOOGLE_SERVICE_ACCOUNT_CREDENTIALS",
        "GOOGLE_FOLDER_ID",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("DRIVE_PAGE_SIZE", "REQUEST_TIMEOUT_SECONDS")
    @classmethod
    def must_be_positive(cls, value):
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value


@lru_cache()
def get_settings() -> Settings:
    """
    Returns a cached instance of the application settings.
    The first call to this function will initialize the settings.
    A malformed environment value is reported as a ConfigurationError.
    """
    try:
        return Settings()
    except SettingsValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
