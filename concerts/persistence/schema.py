"""Database schema definition and row mapping.

The two tables are declared with SQLAlchemy's declarative base, but the store
talks to them through Core statements on a single connection; the mapped
classes only supply the table definitions. The helpers at the bottom convert
result rows to domain objects and domain objects to column values.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, inspect
from sqlalchemy.engine import Connection, Row
from sqlalchemy.orm import declarative_base

from concerts.domain.models import Concert, Genre, Performer

logger = logging.getLogger(__name__)

Base = declarative_base()


class PerformerModel(Base):
    """Table of performers. Rows are shared by any number of concerts."""

    __tablename__ = "performer"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)
    image_ref = Column(Text, nullable=True)
    genre = Column(String(32), nullable=False)


class ConcertModel(Base):
    """Table of concerts, each referencing exactly one performer row."""

    __tablename__ = "concert"

    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(255), nullable=False)
    date = Column(DateTime, nullable=False)
    fk_performer_id = Column(Integer, ForeignKey("performer.id"), nullable=False)

    __table_args__ = (Index("idx_concert_title", "title"),)


performer_table = PerformerModel.__table__
concert_table = ConcertModel.__table__


def truncate_to_minute(dt: datetime) -> datetime:
    """Drop seconds and microseconds; concert dates are stored per minute."""
    return dt.replace(second=0, microsecond=0)


def performer_from_row(row: Row) -> Performer:
    """Build a new Performer from a performer table row."""
    return Performer(
        id=row.id,
        name=row.name,
        image_ref=row.image_ref,
        genre=Genre(row.genre),
    )


def concert_from_row(row: Row, performer: Optional[Performer]) -> Concert:
    """Build a new Concert from a concert table row.

    The performer is passed in rather than loaded here so callers control
    whether it is a fresh instance or a shared one.
    """
    return Concert(
        id=row.id,
        title=row.title,
        date=row.date,
        performer=performer,
    )


def performer_values(performer: Performer) -> Dict[str, Any]:
    """Column values for the mutable fields of a performer row."""
    return {
        "name": performer.name,
        "image_ref": performer.image_ref,
        "genre": performer.genre.value,
    }


def concert_values(concert: Concert) -> Dict[str, Any]:
    """Column values for the mutable fields of a concert row.

    The performer must already be persisted (have an id).
    """
    return {
        "title": concert.title,
        "date": truncate_to_minute(concert.date),
        "fk_performer_id": concert.performer.id,
    }


def create_schema(connection: Connection) -> None:
    """Create both tables if they don't exist (idempotent).

    Runs on the given connection rather than an engine so that it also works
    for in-memory SQLite databases, which exist per connection.

    Args:
        connection: Open SQLAlchemy connection
    """
    Base.metadata.create_all(connection, checkfirst=True)
    tables = inspect(connection).get_table_names()
    logger.debug(f"Database schema ready. Tables: {', '.join(tables)}")
