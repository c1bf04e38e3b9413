"""Configuration loader for the concert store."""

from pathlib import Path
from typing import Optional

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import StoreConfig

DEFAULT_CONFIG_FILE = Path("concerts.yaml")


def load_config(config_path: Optional[Path] = None) -> StoreConfig:
    """
    Load configuration from an optional YAML file and environment variables.

    Precedence, lowest to highest:
    1. Built-in defaults (StoreConfig)
    2. YAML file: config_path if given, else concerts.yaml in the current
       directory when it exists
    3. Environment variables (a .env file in the current directory is loaded
       first, without overriding variables that are already set)

    Args:
        config_path: Optional path to a YAML configuration file

    Returns:
        Validated StoreConfig

    Raises:
        ConfigurationError: If the given file is missing, unparseable or invalid,
            or if an environment variable is invalid
    """
    load_dotenv(find_dotenv(usecwd=True))

    config_dict = _read_yaml(config_path) if config_path else {}
    if config_path is None and DEFAULT_CONFIG_FILE.is_file():
        config_dict = _read_yaml(DEFAULT_CONFIG_FILE)

    try:
        config = StoreConfig.model_validate(config_dict)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            if error["type"] == "missing":
                errors.append(f"Missing required field: {field_path}")
            else:
                errors.append(f"{field_path}: {error['msg']}")
        raise ConfigurationError(
            "Configuration validation failed",
            errors=errors,
            suggestions=[
                "Check field names and types against StoreConfig",
                "Valid log levels are DEBUG, INFO, WARNING, ERROR, CRITICAL",
            ],
        ) from e

    return apply_environment_overrides(config, load_environment_config())


def apply_environment_overrides(config: StoreConfig, env: EnvironmentConfig) -> StoreConfig:
    """Return a copy of config with every setting the environment provides applied."""
    database = config.database.model_copy(update={
        key: value
        for key, value in (("url", env.database_url), ("init_script", env.init_script))
        if value is not None
    })
    logging_config = config.logging.model_copy(update={
        key: value
        for key, value in (("level", env.log_level), ("format", env.log_format))
        if value is not None
    })
    return config.model_copy(update={
        "database": database,
        "logging": logging_config,
        "environment": env.environment or config.environment,
    })


def _read_yaml(config_file: Path) -> dict:
    """Read a YAML mapping from config_file; an empty file yields {}."""
    try:
        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {config_file}",
            suggestions=[f"Ensure {config_file} exists and is readable"],
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[f"Check the permissions of {config_file}"],
        )

    if config_dict is None:
        return {}
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping at the top level",
            suggestions=["See StoreConfig for the expected layout"],
        )
    return config_dict
