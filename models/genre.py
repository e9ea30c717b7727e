"""
models/genre.py
---------------
Domain model for movie genres.
"""

from dataclasses import dataclass


@dataclass
class Genre:
    """
    A genre a movie can be tagged with.

    Attributes:
        id: Database primary key.
        genre: Display name (e.g., 'Drama').
    """
    id: int
    genre: str

    def to_dict(self) -> dict:
        return {"id": self.id, "genre": self.genre}

    def __str__(self) -> str:
        return self.genre
