"""Core domain models for concerts and performers.

This module defines the value objects persisted by the store:
- Genre: closed set of music category labels
- Performer: an artist or band that plays at concerts
- Concert: a titled, dated event featuring one performer

Equality is value-based on a single field (Performer.name, Concert.title) and
is exposed through explicit functions (same_performer/same_concert, sort_key).
The == operator and hashing delegate to those functions so sets and dicts agree
with the contract.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Genre(str, Enum):
    """Music genres a performer can belong to."""

    POP = "Pop"
    HIP_HOP = "HipHop"
    RHYTHM_AND_BLUES = "RhythmAndBlues"
    ACAPPELLA = "Acappella"
    METAL = "Metal"
    ROCK = "Rock"


class Performer(BaseModel):
    """An artist or band that plays at concerts.

    A Performer is identified in the real world by its name: two Performer
    values with the same name are the same performer, whatever their id,
    image or genre. The id is the database primary key and is assigned by the
    store the first time the performer is saved.
    """

    id: Optional[int] = Field(
        None, description="Primary key; assigned by the store on first save"
    )
    name: str = Field(..., description="Performer name")
    image_ref: Optional[str] = Field(
        None, description="Name or URI of the performer's image; not validated"
    )
    genre: Genre = Field(..., description="Performer genre")

    model_config = {
        "validate_assignment": True,
        "json_schema_extra": {"example": {
            "id": 4,
            "name": "Bruno Mars",
            "image_ref": "BrunoMars.jpg",
            "genre": "RhythmAndBlues",
        }},
    }

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject empty names."""
        if not v or not v.strip():
            raise ValueError("Performer name cannot be empty or whitespace-only")
        return v

    def same_performer(self, other: object) -> bool:
        """Return True if other represents the same real-world performer."""
        return isinstance(other, Performer) and self.name == other.name

    @staticmethod
    def sort_key(performer: "Performer") -> str:
        """Ordering key for performers (their name)."""
        return performer.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Performer):
            return NotImplemented
        return self.same_performer(other)

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return (
            f"Performer, id: {self.id}, name: {self.name}, "
            f"image: {self.image_ref}, genre: {self.genre.value}"
        )


class Concert(BaseModel):
    """A concert: a title, a date and time, and a featured performer.

    Concerts compare equal when their titles are equal. The id isn't part of
    the comparison because a concert loaded from the database and one that so
    far only exists in memory can represent the same real-world concert.

    The date is a naive local date-time. The store keeps it with minute
    precision.

    The performer is a shared reference, not a copy: many concerts may point
    at the same Performer instance, and saving a concert saves its performer
    first.
    """

    id: Optional[int] = Field(
        None, description="Primary key; assigned by the store on first save"
    )
    title: str = Field(..., description="Concert title")
    date: datetime = Field(..., description="Local date and time of the concert")
    performer: Optional[Performer] = Field(
        None, description="Featured performer"
    )

    model_config = {"validate_assignment": True}

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Reject empty titles."""
        if not v or not v.strip():
            raise ValueError("Concert title cannot be empty or whitespace-only")
        return v

    @field_validator("date")
    @classmethod
    def ensure_naive(cls, v: datetime) -> datetime:
        """Reject timezone-aware datetimes; concert times are local."""
        if v.tzinfo is not None:
            raise ValueError("Concert date must be a naive local date-time")
        return v

    def same_concert(self, other: object) -> bool:
        """Return True if other represents the same real-world concert."""
        return isinstance(other, Concert) and self.title == other.title

    @staticmethod
    def sort_key(concert: "Concert") -> str:
        """Natural ordering key for concerts (their title)."""
        return concert.title

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Concert):
            return NotImplemented
        return self.same_concert(other)

    def __hash__(self) -> int:
        return hash(self.title)

    def __str__(self) -> str:
        featuring = self.performer.name if self.performer is not None else None
        return (
            f"Concert, id: {self.id}, title: {self.title}, "
            f"date: {self.date.isoformat()}, featuring: {featuring}"
        )
