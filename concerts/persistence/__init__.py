"""Persistence layer for concerts and performers.

Public API:
    # Store contract and implementation
    - ConcertStore: abstract data access contract
    - RelationalConcertStore: SQL implementation over one connection
    - open_store(config: StoreConfig) -> ConcertStore

    # Bootstrap helpers
    - create_database_engine(database_url: str) -> Engine
    - run_script(connection, script_path) -> None

    # Exceptions
    - StoreError: raised by every failing store operation

Example usage:
    >>> from concerts.persistence import RelationalConcertStore
    >>>
    >>> with RelationalConcertStore("sqlite:///./data/concerts.db") as store:
    ...     for concert in store.get_all():
    ...         print(concert)
"""

from .database import create_database_engine, run_script
from .exceptions import StoreError
from .factory import open_store
from .store import ConcertStore, RelationalConcertStore

__all__ = [
    # Store
    "ConcertStore",
    "RelationalConcertStore",
    "open_store",
    # Bootstrap
    "create_database_engine",
    "run_script",
    # Exceptions
    "StoreError",
]
