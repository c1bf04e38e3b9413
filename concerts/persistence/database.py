"""Engine creation and database bootstrap helpers.

This module knows how to turn a database URL into a validated SQLAlchemy
engine (creating the directory of a SQLite file and enabling SQLite foreign
keys on every connection) and how to run an initialisation SQL script on an
open connection.
"""

from pathlib import Path
from typing import Union

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import ArgumentError

from concerts.logging import get_logger

from .exceptions import ERROR_CREATING_STORE, StoreError

logger = get_logger(__name__, component="database")


def create_database_engine(database_url: str) -> Engine:
    """Create and validate an engine for database_url.

    For SQLite file databases the parent directory is created when missing,
    and every new DBAPI connection gets ``PRAGMA foreign_keys=ON`` so the
    concert → performer reference is enforced.

    Args:
        database_url: Database URL (e.g. "sqlite:///./data/concerts.db")

    Returns:
        Engine: validated SQLAlchemy engine

    Raises:
        StoreError: If the URL is malformed
        sqlalchemy.exc.SQLAlchemyError: If the database can't be reached
    """
    if not database_url or not isinstance(database_url, str):
        raise StoreError(
            f"{ERROR_CREATING_STORE}: database URL must be a non-empty string",
            operation="create",
        )

    try:
        url = make_url(database_url)
    except ArgumentError as e:
        raise StoreError(
            f"{ERROR_CREATING_STORE}: invalid database URL", operation="create"
        ) from e

    is_sqlite = url.get_backend_name() == "sqlite"
    if is_sqlite and url.database and url.database != ":memory:":
        db_file = Path(url.database)
        if not db_file.parent.exists():
            logger.info(f"Creating database directory: {db_file.parent}")
            db_file.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        url,
        echo=False,
        # The store's single connection may be used from several threads
        # (saves are serialised by the store's lock).
        connect_args={"check_same_thread": False, "timeout": 30} if is_sqlite else {},
    )

    if is_sqlite:
        _configure_sqlite(engine)

    with engine.connect() as conn:
        conn.execute(text("SELECT 1")).fetchone()

    logger.debug(
        "Database engine created",
        extra={"event": "database.engine_created", "database_url": redact_url(database_url)},
    )
    return engine


def _configure_sqlite(engine: Engine) -> None:
    """Enable foreign key enforcement on every SQLite connection."""

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def redact_url(url: str) -> str:
    """Return url with any password masked, safe for logging."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return "<invalid url>"


def run_script(connection: Connection, script_path: Union[str, Path]) -> None:
    """Execute every statement of a SQL script on connection.

    SQLite scripts are handed to the driver's executescript(), which copes
    with semicolons inside string literals. For other dialects the script is
    split on ';' and each statement runs on its own.

    Args:
        connection: Open SQLAlchemy connection
        script_path: Path of the SQL script

    Raises:
        OSError: If the script can't be read
        sqlalchemy.exc.SQLAlchemyError: If a statement fails
    """
    script = Path(script_path).read_text(encoding="utf-8")

    if connection.dialect.name == "sqlite":
        connection.connection.driver_connection.executescript(script)
    else:
        for statement in script.split(";"):
            if statement.strip():
                connection.exec_driver_sql(statement)

    logger.info(
        f"Ran initialisation script {script_path}",
        extra={"event": "database.script_executed", "script": str(script_path)},
    )
