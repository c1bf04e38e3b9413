"""Factory function for opening a concert store from configuration."""

import logging

from concerts.config.models import StoreConfig

from .store import ConcertStore, RelationalConcertStore

logger = logging.getLogger(__name__)


def open_store(config: StoreConfig) -> ConcertStore:
    """Open the store described by config.

    Args:
        config: Store configuration (database URL and optional init script)

    Returns:
        An open RelationalConcertStore; close it (or use it in a ``with``
        block) when done

    Raises:
        StoreError: If the database can't be opened or the init script fails

    Example:
        >>> with open_store(load_config()) as store:
        ...     concerts = store.get_all()
    """
    database = config.database
    logger.debug(
        "Opening concert store",
        extra={
            "init_script": str(database.init_script) if database.init_script else None,
        },
    )
    return RelationalConcertStore(database.url, init_script=database.init_script)
