"""Concert store: the data access contract and its relational implementation.

ConcertStore defines what callers can do with persisted concerts.
RelationalConcertStore implements it with parameterized SQL over a single
SQLAlchemy connection, resolving the concert → performer reference by hand
and generating primary keys as max(id) + 1.
"""

import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from concerts.domain.models import Concert, Performer
from concerts.logging import get_logger, log_context

from .database import create_database_engine, redact_url, run_script
from .exceptions import (
    ERROR_CLOSING_STORE,
    ERROR_CREATING_STORE,
    ERROR_DELETING_CONCERT,
    ERROR_LOADING_ALL_CONCERTS,
    ERROR_LOADING_CONCERT,
    ERROR_SAVING_CONCERT,
    StoreError,
)
from .schema import (
    concert_from_row,
    concert_table,
    concert_values,
    create_schema,
    performer_from_row,
    performer_table,
    performer_values,
)

logger = get_logger(__name__, component="store")


class ConcertStore(ABC):
    """Data access contract for concerts and their performers.

    Implementations are free to use any persistence technology. Every
    operation raises StoreError when the underlying storage fails. Stores are
    context managers: leaving a ``with`` block closes the store.
    """

    @abstractmethod
    def save(self, concert: Concert) -> None:
        """Persist a concert and its performer.

        A concert (or performer) without an id is inserted and gets its new
        id assigned in place; one with an id has its row updated. The
        performer is always saved before the concert.

        Raises:
            StoreError: If the concert has no performer or storing fails
        """

    @abstractmethod
    def get_by_id(self, concert_id: int) -> Optional[Concert]:
        """Retrieve a concert, with its performer, by id.

        Returns:
            A new Concert instance, or None if there's no concert with that id

        Raises:
            StoreError: If retrieval fails
        """

    @abstractmethod
    def get_all(self) -> List[Concert]:
        """Retrieve every concert, ordered by title.

        Concerts featuring the same stored performer share one Performer
        instance.

        Returns:
            List of concerts (empty if none are stored)

        Raises:
            StoreError: If retrieval fails
        """

    @abstractmethod
    def delete(self, concert: Concert) -> None:
        """Delete a concert. Its performer is left in place.

        Deleting a concert that isn't stored is not an error.

        Raises:
            StoreError: If deletion fails
        """

    @abstractmethod
    def close(self) -> None:
        """Release the store's connection. Calling it again does nothing.

        Raises:
            StoreError: If the connection can't be closed
        """

    def __enter__(self) -> "ConcertStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False


class RelationalConcertStore(ConcertStore):
    """ConcertStore backed by the ``performer`` and ``concert`` tables.

    The store owns exactly one connection, opened in autocommit mode: each
    statement is committed as it runs, so a save whose concert half fails
    still leaves its performer stored (and carrying its new id). Retrying
    the save is safe.

    Primary keys are not generated by the database. Before each insert the
    store reads the table's largest id and uses the next value. A lock held
    around every operation keeps that read-then-insert atomic for this store
    instance; two stores writing to the same database can still collide.

    Attributes:
        database_url: URL the store was opened with (password redacted)
    """

    def __init__(
        self,
        database_url: str,
        init_script: Optional[Union[str, Path]] = None,
    ) -> None:
        """Open the database, create missing tables and run init_script.

        Args:
            database_url: SQLAlchemy URL, e.g. "sqlite:///./data/concerts.db"
            init_script: Optional SQL script executed after the tables exist,
                typically to reset and seed a test database

        Raises:
            StoreError: If the database can't be opened or the script fails
        """
        self.database_url = redact_url(database_url) if database_url else database_url
        self._engine = None
        self._connection = None
        self._lock = threading.Lock()

        try:
            self._engine = create_database_engine(database_url)
            self._connection = self._engine.connect().execution_options(
                isolation_level="AUTOCOMMIT"
            )
            create_schema(self._connection)
            if init_script is not None:
                run_script(self._connection, init_script)
        except StoreError:
            self._release()
            raise
        except Exception as e:
            logger.error(
                f"{ERROR_CREATING_STORE}: {e}",
                exc_info=True,
                extra={"event": "store.open_failed", "database_url": self.database_url},
            )
            self._release()
            raise StoreError(ERROR_CREATING_STORE, operation="create") from e

        logger.info(
            "Store opened",
            extra={"event": "store.opened", "database_url": self.database_url},
        )

    @property
    def closed(self) -> bool:
        """True once close() has been called."""
        return self._connection is None

    def save(self, concert: Concert) -> None:
        if concert.performer is None:
            raise StoreError(
                f"{ERROR_SAVING_CONCERT}: concert '{concert.title}' has no performer",
                operation="save",
            )

        with log_context(operation="save", concert_id=concert.id), self._lock:
            self._require_open(ERROR_SAVING_CONCERT, "save")
            try:
                # The performer goes first: a new concert row needs its id.
                self._save_performer(concert.performer)
                self._save_concert(concert)
            except SQLAlchemyError as e:
                logger.error(f"Error saving concert '{concert.title}': {e}", exc_info=True)
                raise StoreError(ERROR_SAVING_CONCERT, operation="save") from e

    def get_by_id(self, concert_id: int) -> Optional[Concert]:
        with log_context(operation="get_by_id", concert_id=concert_id), self._lock:
            self._require_open(ERROR_LOADING_CONCERT, "get_by_id")
            try:
                stmt = select(concert_table).where(concert_table.c.id == concert_id)
                row = self._connection.execute(stmt).first()
                if row is None:
                    logger.debug(f"No concert with id {concert_id}")
                    return None

                return concert_from_row(row, self._load_performer(row.fk_performer_id))

            except (SQLAlchemyError, ValueError) as e:
                logger.error(f"Error retrieving concert {concert_id}: {e}", exc_info=True)
                raise StoreError(ERROR_LOADING_CONCERT, operation="get_by_id") from e

    def get_all(self) -> List[Concert]:
        with log_context(operation="get_all"), self._lock:
            self._require_open(ERROR_LOADING_ALL_CONCERTS, "get_all")
            try:
                stmt = select(concert_table).order_by(concert_table.c.title)
                rows = self._connection.execute(stmt).all()

                # One Performer instance per performer id for this call only.
                performers: Dict[int, Optional[Performer]] = {}
                concerts: List[Concert] = []
                for row in rows:
                    performer_id = row.fk_performer_id
                    if performer_id not in performers:
                        performers[performer_id] = self._load_performer(performer_id)
                    concerts.append(concert_from_row(row, performers[performer_id]))

            except (SQLAlchemyError, ValueError) as e:
                logger.error(f"Error retrieving all concerts: {e}", exc_info=True)
                raise StoreError(ERROR_LOADING_ALL_CONCERTS, operation="get_all") from e

        logger.info(
            f"Loaded {len(concerts)} concerts",
            extra={
                "event": "concerts.loaded",
                "concert_count": len(concerts),
                "performer_count": len(performers),
            },
        )
        return concerts

    def delete(self, concert: Concert) -> None:
        with log_context(operation="delete", concert_id=concert.id), self._lock:
            self._require_open(ERROR_DELETING_CONCERT, "delete")
            if concert.id is None:
                logger.debug(f"Concert '{concert.title}' was never saved; nothing to delete")
                return

            try:
                stmt = delete(concert_table).where(concert_table.c.id == concert.id)
                result = self._connection.execute(stmt)
            except SQLAlchemyError as e:
                logger.error(f"Error deleting concert {concert.id}: {e}", exc_info=True)
                raise StoreError(ERROR_DELETING_CONCERT, operation="delete") from e

            if result.rowcount:
                logger.info(
                    f"Deleted concert '{concert.title}'",
                    extra={"event": "concert.deleted"},
                )
            else:
                logger.debug(f"No concert with id {concert.id} to delete")

    def close(self) -> None:
        with self._lock:
            if self._connection is None:
                return
            try:
                self._connection.close()
                self._engine.dispose()
            except SQLAlchemyError as e:
                logger.error(f"Error closing store: {e}", exc_info=True)
                raise StoreError(ERROR_CLOSING_STORE, operation="close") from e
            finally:
                self._connection = None
                self._engine = None

        logger.info(
            "Store closed",
            extra={"event": "store.closed", "database_url": self.database_url},
        )

    def _require_open(self, message: str, operation: str) -> None:
        if self._connection is None:
            raise StoreError(f"{message}: store is closed", operation=operation)

    def _release(self) -> None:
        """Drop whatever a failed __init__ managed to open."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def _next_id(self, table: Table) -> int:
        """Next primary key for table: current maximum plus one, or 1 if empty."""
        current = self._connection.execute(select(func.max(table.c.id))).scalar()
        return (current or 0) + 1

    def _save_performer(self, performer: Performer) -> None:
        if performer.id is None:
            performer_id = self._next_id(performer_table)
            self._connection.execute(
                insert(performer_table).values(id=performer_id, **performer_values(performer))
            )
            performer.id = performer_id
            logger.info(
                f"Inserted performer '{performer.name}'",
                extra={"event": "performer.inserted", "performer_id": performer_id},
            )
        else:
            result = self._connection.execute(
                update(performer_table)
                .where(performer_table.c.id == performer.id)
                .values(**performer_values(performer))
            )
            if result.rowcount == 0:
                logger.warning(
                    f"Performer {performer.id} is not stored; nothing updated",
                    extra={"event": "performer.missing", "performer_id": performer.id},
                )

    def _save_concert(self, concert: Concert) -> None:
        if concert.id is None:
            concert_id = self._next_id(concert_table)
            self._connection.execute(
                insert(concert_table).values(id=concert_id, **concert_values(concert))
            )
            concert.id = concert_id
            logger.info(
                f"Inserted concert '{concert.title}'",
                extra={"event": "concert.inserted", "concert_id": concert_id},
            )
        else:
            self._connection.execute(
                update(concert_table)
                .where(concert_table.c.id == concert.id)
                .values(**concert_values(concert))
            )
            logger.info(
                f"Updated concert '{concert.title}'",
                extra={"event": "concert.updated"},
            )

    def _load_performer(self, performer_id: int) -> Optional[Performer]:
        """Load a performer row as a new Performer, or None if it's missing."""
        stmt = select(performer_table).where(performer_table.c.id == performer_id)
        row = self._connection.execute(stmt).first()
        if row is None:
            logger.warning(
                f"Performer {performer_id} referenced by a concert does not exist",
                extra={"event": "performer.missing", "performer_id": performer_id},
            )
            return None
        return performer_from_row(row)
