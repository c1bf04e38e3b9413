"""Configuration schema models using Pydantic."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_DATABASE_URL = "sqlite:///./data/concerts.db"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class DatabaseConfig(BaseModel):
    """Where the store keeps its data and how a fresh database is seeded."""

    url: str = Field(DEFAULT_DATABASE_URL, min_length=1, description="SQLAlchemy database URL")
    init_script: Optional[Path] = Field(
        None, description="SQL script executed against the database when the store opens"
    )

    @field_validator("url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        """Strip whitespace and reject blank URLs."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Database URL cannot be empty or whitespace-only")
        return stripped


class LoggingConfig(BaseModel):
    """Logging configuration settings."""

    level: LogLevel = Field(LogLevel.INFO, description="Logging level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="Log output format")

    @field_validator("level", mode="before")
    @classmethod
    def uppercase_level(cls, v):
        """Accept level names in any case."""
        return v.upper() if isinstance(v, str) else v

    model_config = {"use_enum_values": True}


class StoreConfig(BaseModel):
    """Top-level configuration for opening a concert store."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    environment: str = Field("local", min_length=1, description="Environment label for logs")

    model_config = {"json_schema_extra": {"example": {
        "database": {
            "url": "sqlite:///./data/concerts.db",
            "init_script": "tests/fixtures/db-init.sql",
        },
        "logging": {"level": "INFO", "format": "key-value"},
        "environment": "local",
    }}}
