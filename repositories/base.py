"""
repositories/base.py
--------------------
Abstract contract for the catalog data access layer.
Callers depend on DatabaseRepo, never on a concrete storage engine.
"""

from abc import ABC, abstractmethod

from models.genre import Genre
from models.movie import Movie
from models.user import User


class DatabaseRepo(ABC):
    """Read operations the application needs from storage."""

    @abstractmethod
    def connection(self):
        """Return the underlying connection pool (owned by the caller)."""

    @abstractmethod
    def all_movies(self) -> list[Movie]:
        """Return every movie ordered by title."""

    @abstractmethod
    def one_movie(self, movie_id: int) -> Movie:
        """Return one movie with its genres."""

    @abstractmethod
    def one_movie_for_edit(self, movie_id: int) -> tuple[Movie, list[Genre]]:
        """Return one movie with genre ids filled in, plus every genre."""

    @abstractmethod
    def get_user_by_email(self, email: str) -> User:
        """Return the user with exactly this email."""

    @abstractmethod
    def get_user_by_id(self, user_id: int) -> User:
        """Return the user with this id."""
