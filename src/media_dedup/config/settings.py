"""Application settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..actions.strategies import get_strategy
from ..common.constants import ACTION_SCRIPT_FILE, LEDGER_FILE, VIDEO_FORMATS
from ..common.exceptions import ConfigError
from ..detector.models import ClassificationMode, ReadErrorPolicy


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MEDIA_DEDUP_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Paths
    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory receiving the checksum ledger and action script",
    )
    ledger_name: str = Field(
        default=LEDGER_FILE,
        description="File name of the checksum ledger",
    )
    script_name: str = Field(
        default=ACTION_SCRIPT_FILE,
        description="File name of the generated action script",
    )

    # Scan settings
    media_extensions: list[str] = Field(
        default_factory=lambda: list(VIDEO_FORMATS),
        description="File extensions treated as media (case-insensitive)",
    )
    hash_workers: int = Field(
        default=1,
        ge=1,
        description="Threads used to fingerprint files within a directory",
    )
    on_read_error: ReadErrorPolicy = Field(
        default=ReadErrorPolicy.ABORT,
        description="What to do with unreadable files: abort or skip",
    )

    # Analysis settings
    classification_mode: ClassificationMode = Field(
        default=ClassificationMode.DIRECTORY_SET,
        description="Duplicate classification: directory-set or first-seen",
    )
    keep_strategy: str = Field(
        default="clean-name",
        description="Keeper selection for same-directory duplicates",
    )
    strict_renames: bool = Field(
        default=False,
        description="Fail the run when a disambiguated rename still collides",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("media_extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        extensions = [ext.lower().lstrip(".") for ext in value if ext.strip(". ")]
        if not extensions:
            raise ValueError("at least one media extension is required")
        return extensions

    @field_validator("keep_strategy")
    @classmethod
    def _check_strategy(cls, value: str) -> str:
        get_strategy(value)
        return value.lower()

    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def ledger_path(self) -> Path:
        """Path to the checksum ledger."""
        return self.output_dir / self.ledger_name

    @property
    def script_path(self) -> Path:
        """Path to the generated action script."""
        return self.output_dir / self.script_name


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance.

    Raises:
        ConfigError: If the environment holds an invalid value
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
    return _settings


def reset_settings() -> None:
    """Reset global settings instance."""
    global _settings
    _settings = None
