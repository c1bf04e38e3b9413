"""Command-line entry point for the concert store."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from concerts.config.exceptions import ConfigurationError
from concerts.config.loader import load_config
from concerts.config.models import StoreConfig
from concerts.logging import get_logger
from concerts.logging.config import configure_logging
from concerts.persistence import StoreError, open_store

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path],
    init_script: Optional[Path] = None,
    log_level_override: Optional[str] = None,
) -> StoreConfig:
    """
    Load configuration and apply command-line overrides.

    Args:
        config_path: Path to configuration file, or None for the default lookup
        init_script: SQL script from the command line (takes precedence)
        log_level_override: Log level from the command line (takes precedence)

    Returns:
        StoreConfig with CLI > environment > file > default precedence applied

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = load_config(config_path)

    if init_script is not None:
        if not init_script.is_file():
            raise ConfigurationError(
                f"Init script not found: {init_script}",
                suggestions=["Pass the path of an existing .sql file to --init-script"],
            )
        config = config.model_copy(update={
            "database": config.database.model_copy(update={"init_script": init_script}),
        })

    if log_level_override:
        config = config.model_copy(update={
            "logging": config.logging.model_copy(update={"level": log_level_override}),
        })

    return config


def main(argv: Optional[List[str]] = None) -> int:
    """
    Open the configured store and print every concert in title order.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = argparse.ArgumentParser(
        description="Concert store - seed the concert database and list its concerts"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: concerts.yaml if present)",
    )
    parser.add_argument(
        "--init-script",
        type=Path,
        default=None,
        help="SQL script to run against the database before listing",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    args = parser.parse_args(argv)

    try:
        config = load_runtime_config(args.config, args.init_script, args.log_level)
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1

    configure_logging(
        level=config.logging.level,
        format_type=config.logging.format,
        environment=config.environment,
    )

    try:
        with open_store(config) as store:
            concerts = store.get_all()
    except StoreError as e:
        logger.error(
            f"Store error: {e}",
            extra={"event": "cli.failed", "operation": e.operation},
            exc_info=True,
        )
        print(f"Store Error: {e}", file=sys.stderr)
        return 1

    for concert in concerts:
        print(concert)

    logger.info(
        f"Listed {len(concerts)} concerts",
        extra={"event": "cli.listed", "concert_count": len(concerts)},
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
