"""
Configuration module
====================

Loads runtime settings from environment variables and an optional ``.env``
file. Algorithm thresholds live in :mod:`tablelens.table.config`; this
module only covers knobs an operator may want to change per deployment.
"""

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

EXPORT_FORMATS = ("csv", "tsv", "markdown", "json")


class Settings(BaseSettings):
    """
    Application settings, populated from ``TABLELENS_*`` environment variables.

    Attributes:
        LOG_LEVEL: level name for the ``tablelens`` root logger
        FORMAT_SAMPLE_LIMIT: max values fed to number-format inference per column
        CLASSIFY_SAMPLE_LIMIT: max values inspected per column when classifying
            (0 inspects every value)
        DEFAULT_EXPORT_FORMAT: export format used by the CLI when none is given
    """

    model_config = SettingsConfigDict(
        env_prefix="TABLELENS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    LOG_LEVEL: str = "INFO"
    FORMAT_SAMPLE_LIMIT: int = 60
    CLASSIFY_SAMPLE_LIMIT: int = 0
    DEFAULT_EXPORT_FORMAT: str = "csv"

    @field_validator("FORMAT_SAMPLE_LIMIT", "CLASSIFY_SAMPLE_LIMIT")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("sample limits must be >= 0")
        return v

    @field_validator("DEFAULT_EXPORT_FORMAT")
    @classmethod
    def validate_export_format(cls, v: str) -> str:
        value = (v or "").strip().lower()
        if value not in EXPORT_FORMATS:
            raise ValueError(
                f"DEFAULT_EXPORT_FORMAT must be one of {', '.join(EXPORT_FORMATS)}, got {v!r}"
            )
        return value


# Module-level singleton, avoids re-reading the environment on every call
_settings_instance = None


def get_settings() -> Settings:
    """Return the cached :class:`Settings` instance, creating it on first call."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next ``get_settings()`` re-reads the env."""
    global _settings_instance
    _settings_instance = None
