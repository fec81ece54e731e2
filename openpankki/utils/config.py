"""Application configuration loaded from environment variables.

Environment Variables:
- OPENPANKKI_IBAN_PATTERN_VALIDATION: Match IBANs against per-country patterns (default: true)
- OPENPANKKI_LOG_LEVEL: Logging level (default: INFO)
- OPENPANKKI_JSON_LOGS: Emit JSON log lines (default: false)
- OPENPANKKI_DEV_MODE: Colorful console logging (default: true)
"""

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from openpankki.exceptions import ConfigurationError, wrap_exception

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Process-wide OpenPankki settings.

    Settings are read once and cached by :func:`get_settings`. Nothing in the
    library mutates them afterwards; use :func:`reload_settings` to pick up
    a changed environment.

    Example:
        >>> settings = Settings()
        >>> settings.iban_pattern_validation
        True
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENPANKKI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    iban_pattern_validation: bool = Field(
        default=True,
        description="Validate IBANs against the per-country structural pattern",
    )

    log_level: str = Field(default="INFO", description="Logging level")

    json_logs: bool = Field(default=False, description="Output JSON logs")

    dev_mode: bool = Field(default=True, description="Development-friendly console logs")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}")
        return level


_settings: Settings | None = None


def _load_settings() -> Settings:
    try:
        return Settings()
    except PydanticValidationError as e:
        raise wrap_exception(
            e,
            "Invalid OpenPankki configuration",
            exception_class=ConfigurationError,
            errors=e.error_count(),
        ) from e


def get_settings() -> Settings:
    """Get cached application settings."""
    global _settings

    if _settings is None:
        _settings = _load_settings()

    return _settings


def reload_settings() -> Settings:
    """Rebuild the cached settings from the current environment."""
    global _settings

    _settings = _load_settings()
    return _settings
