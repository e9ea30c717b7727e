"""
models/movie.py
---------------
Domain model for catalog movies.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from models.genre import Genre


@dataclass
class Movie:
    """
    Represents a single movie in the catalog.

    Attributes:
        id: Database primary key.
        title: Movie title.
        release_date: Theatrical release date.
        runtime: Length in minutes.
        mpaa_rating: MPAA rating code (e.g., 'PG-13').
        description: Synopsis.
        image: Poster path; empty string when the movie has none.
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last change.
        genres: Genres attached to the movie, ordered by name.
        genres_array: Ids of ``genres`` in the same order (edit mode only).
    """
    id: int
    title: str
    release_date: date
    runtime: int
    mpaa_rating: str
    description: str
    image: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    genres: list[Genre] = field(default_factory=list)
    genres_array: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.image is None:
            self.image = ""

    def to_dict(self) -> dict:
        """Return a JSON-ready representation (dates as ISO strings)."""
        data = {
            "id": self.id,
            "title": self.title,
            "release_date": self.release_date.isoformat() if self.release_date else None,
            "runtime": self.runtime,
            "mpaa_rating": self.mpaa_rating,
            "description": self.description,
            "image": self.image,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if self.genres:
            data["genres"] = [g.to_dict() for g in self.genres]
        if self.genres_array:
            data["genres_array"] = list(self.genres_array)
        return data

    def __str__(self) -> str:
        year = self.release_date.year if self.release_date else "?"
        return f"{self.title} ({year}) | {self.runtime} min | {self.mpaa_rating}"
