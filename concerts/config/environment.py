"""Environment variable loading and validation."""

import os
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError
from .models import LogFormat, LogLevel


class EnvironmentConfig:
    """Settings read from environment variables.

    Every attribute is None when the corresponding variable is unset, so the
    loader can tell "not given" apart from a default and only override what
    the environment actually provides.
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        init_script: Optional[Path] = None,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.database_url = database_url
        self.init_script = init_script
        self.log_level = log_level
        self.log_format = log_format
        self.environment = environment


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - CONCERT_DATABASE_URL: SQLAlchemy URL of the concert database
    - CONCERT_INIT_SCRIPT: SQL script run against the database when the store opens
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
    - LOG_FORMAT: json or key-value
    - ENVIRONMENT: environment label attached to log records

    Returns:
        EnvironmentConfig with validated values

    Raises:
        ConfigurationError: If any variable is set to an invalid value
    """
    errors = []

    database_url = os.getenv("CONCERT_DATABASE_URL")
    init_script_str = os.getenv("CONCERT_INIT_SCRIPT")
    log_level = os.getenv("LOG_LEVEL")
    log_format = os.getenv("LOG_FORMAT")
    environment = os.getenv("ENVIRONMENT")

    if database_url is not None and not database_url.strip():
        errors.append("CONCERT_DATABASE_URL is set but empty")

    init_script = None
    if init_script_str:
        init_script = Path(init_script_str)
        if not init_script.is_file():
            errors.append(f"CONCERT_INIT_SCRIPT does not point to a file: '{init_script_str}'")

    if log_level:
        valid_levels = [level.value for level in LogLevel]
        if log_level.upper() not in valid_levels:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(valid_levels)}"
            )
        log_level = log_level.upper()

    if log_format:
        valid_formats = [fmt.value for fmt in LogFormat]
        if log_format not in valid_formats:
            errors.append(
                f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(valid_formats)}"
            )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and adjust the values",
                "Unset variables you don't need; every setting has a default",
            ],
        )

    return EnvironmentConfig(
        database_url=database_url.strip() if database_url else None,
        init_script=init_script,
        log_level=log_level or None,
        log_format=log_format or None,
        environment=environment or None,
    )
