"""Configuration management for the concert store."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import apply_environment_overrides, load_config
from .models import (
    DEFAULT_DATABASE_URL,
    DatabaseConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    StoreConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "load_environment_config",
    "apply_environment_overrides",
    # Configuration models
    "StoreConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    "DEFAULT_DATABASE_URL",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
