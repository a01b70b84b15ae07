"""
Application settings using Pydantic.

Loads configuration from environment variables with validation and type coercion.
"""

from enum import Enum
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(str, Enum):
    """Which bet store implementation to use."""

    SQL = "sql"
    JSON = "json"
    MEMORY = "memory"


class DatabaseType(str, Enum):
    """Database backend type."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Storage
    storage_backend: StorageBackend = Field(
        default=StorageBackend.SQL,
        alias="STORAGE_BACKEND",
        description="Bet store implementation - sql, json or memory",
    )
    database_type: DatabaseType = Field(
        default=DatabaseType.SQLITE,
        alias="DATABASE_TYPE",
        description="Database backend type",
    )
    database_url: str = Field(
        default="sqlite:///data/betledger.db",
        alias="DATABASE_URL",
        description="Database connection URL",
    )
    local_storage_dir: Path = Field(
        default=Path("local-storage"),
        alias="LOCAL_STORAGE_DIR",
        description="Directory for the JSON file store",
    )

    # Ledger
    reference_timezone: str = Field(
        default="America/Sao_Paulo",
        alias="REFERENCE_TIMEZONE",
        description="Civil timezone for day/month/year boundaries",
    )
    currency_symbol: str = Field(
        default="R$",
        alias="CURRENCY_SYMBOL",
        description="Currency symbol used in text reports",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    log_file: Path | None = Field(
        default=None,
        alias="LOG_FILE",
        description="Log file path",
    )
    log_json: bool = Field(
        default=False,
        alias="LOG_JSON",
        description="Emit JSON log lines instead of console output",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    @field_validator("reference_timezone")
    @classmethod
    def validate_reference_timezone(cls, v: str) -> str:
        """Validate the timezone name is known to zoneinfo."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    def tz(self) -> ZoneInfo:
        """Reference timezone as a tzinfo."""
        return ZoneInfo(self.reference_timezone)

    def is_sql_backend(self) -> bool:
        """Check if bets are stored in a SQL database."""
        return self.storage_backend == StorageBackend.SQL


# Global settings instance - import this
settings = Settings()
