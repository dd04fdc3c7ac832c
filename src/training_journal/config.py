"""Configuration settings for the Training Journal."""

from pathlib import Path
from functools import lru_cache

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


# __file__ = src/training_journal/config.py
# .parent.parent.parent = project root
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from JOURNAL_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="JOURNAL_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False

    # Storage
    db_path: Path | None = None

    # Risk engine
    risk_window_days: int = 45
    model_version: str = "A-2"
    persist_note_signals: bool = True

    # Logging
    log_level: str = "INFO"

    @field_validator("risk_window_days")
    @classmethod
    def _window_covers_chronic_load(cls, value: int) -> int:
        # The chronic (28-day) average needs at least that much history.
        if value < 28:
            raise ValueError("risk_window_days must be at least 28")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    def model_post_init(self, __context) -> None:
        """Set default database path after initialization."""
        if self.db_path is None:
            self.db_path = PROJECT_ROOT / "journal.db"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Raises:
        ConfigurationError: If a JOURNAL_* value is invalid
    """
    try:
        return Settings()
    except ValidationError as e:
        first = e.errors()[0]
        setting = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid setting {setting or '(unknown)'}: {first.get('msg', e)}",
            setting=setting or None,
        ) from e
