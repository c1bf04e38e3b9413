"""Domain models for the concert store."""

from .models import Concert, Genre, Performer

__all__ = ["Concert", "Performer", "Genre"]
