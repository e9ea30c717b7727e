"""
repositories/postgres_repo.py
-----------------------------
PostgreSQL implementation of DatabaseRepo.
All SQL queries for movies, genres and users live here.

Every public method is one repository call: it checks a connection out
of the injected pool, runs its statements inside a single transaction
that is always rolled back, under one deadline, and always hands the
connection back.
"""

import time
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import errors, pool

from config import DB_TIMEOUT_SECONDS
from models.genre import Genre
from models.movie import Movie
from models.user import User
from repositories.base import DatabaseRepo
from repositories.errors import (
    DatabaseConnectionError,
    NotFoundError,
    QueryTimeoutError,
    ScanError,
    StorageError,
)
from utils.logger import get_logger

logger = get_logger(__name__)


class _TimedCursor:
    """Cursor wrapper that caps every statement by the time left on the call."""

    def __init__(self, cur, deadline: float):
        self._cur = cur
        self._deadline = deadline

    def execute(self, sql: str, params: Optional[tuple] = None) -> None:
        remaining = self._deadline - time.monotonic()
        if remaining <= 0:
            logger.warning("Database call ran out of time before its next statement.")
            raise QueryTimeoutError("Database call exceeded its time budget.")
        # 0 would disable the server-side limit
        timeout_ms = max(1, int(remaining * 1000))
        self._cur.execute(
            "SELECT set_config('statement_timeout', %s, true);", (str(timeout_ms),)
        )
        logger.debug(f"Executing (timeout {timeout_ms} ms): {' '.join(sql.split())}")
        self._cur.execute(sql, params)

    def fetchone(self):
        return self._cur.fetchone()

    def fetchall(self) -> list:
        return self._cur.fetchall()


def _translate_error(e: psycopg2.Error) -> StorageError:
    """Map a psycopg2 exception onto the storage error taxonomy."""
    if isinstance(e, errors.QueryCanceled):
        return QueryTimeoutError(f"Query cancelled by the server: {e}")
    if isinstance(e, (psycopg2.OperationalError, psycopg2.InterfaceError, pool.PoolError)):
        return DatabaseConnectionError(f"Database connection failed: {e}")
    if isinstance(e, psycopg2.DataError):
        return ScanError(f"Cannot decode column value: {e}")
    return StorageError(f"Database query failed: {e}")


def _scan_int(value, column: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ScanError(f"Column '{column}' expected an integer, got {value!r}")
    return value


def _scan_str(value, column: str) -> str:
    if not isinstance(value, str):
        raise ScanError(f"Column '{column}' expected text, got {value!r}")
    return value


class PostgresDBRepo(DatabaseRepo):
    """Read-only repository over the movies, genres and users tables."""

    def __init__(self, db_pool: pool.AbstractConnectionPool, timeout: float = DB_TIMEOUT_SECONDS):
        """
        Args:
            db_pool: Connection pool created at startup; not closed by the repo.
            timeout: Time budget in seconds for each repository call.
        """
        self.db_pool = db_pool
        self.timeout = timeout

    def connection(self) -> pool.AbstractConnectionPool:
        return self.db_pool

    # ── SESSION ───────────────────────────────────────────

    @contextmanager
    def _session(self) -> Iterator[_TimedCursor]:
        """
        Check out a connection and yield a deadline-bound cursor.

        The transaction is always rolled back (nothing is written) and the
        connection is returned to the pool, closed if it broke.
        """
        deadline = time.monotonic() + self.timeout
        try:
            conn = self.db_pool.getconn()
        except psycopg2.Error as e:
            logger.warning(f"Could not get a database connection: {e}")
            raise _translate_error(e) from e
        try:
            with conn.cursor() as cur:
                yield _TimedCursor(cur, deadline)
        except psycopg2.Error as e:
            error = _translate_error(e)
            logger.warning(f"{type(error).__name__}: {error}")
            self._release(conn)
            raise error from e
        except BaseException:
            self._release(conn)
            raise
        self._release(conn, raise_errors=True)

    def _release(self, conn, raise_errors: bool = False) -> None:
        """
        Roll back and hand the connection back to the pool, whatever happens.

        A failed rollback marks the connection as broken so the pool closes
        it. The failure is only raised when no other error is on its way out.
        """
        broken = bool(conn.closed)
        try:
            if not broken:
                conn.rollback()
        except psycopg2.Error as e:
            broken = True
            logger.warning(f"Rollback failed, discarding connection: {e}")
            if raise_errors:
                raise _translate_error(e) from e
        finally:
            self.db_pool.putconn(conn, close=broken or bool(conn.closed))

    # ── MOVIES ────────────────────────────────────────────

    def all_movies(self) -> list[Movie]:
        """
        Fetch every movie in the catalog.

        Returns:
            List of Movie objects ordered by title (empty if there are none).
        """
        sql = """
            SELECT id, title, release_date, runtime, mpaa_rating,
                   description, COALESCE(image, ''), created_at, updated_at
            FROM movies
            ORDER BY title;
        """
        with self._session() as cur:
            cur.execute(sql)
            return [self._row_to_movie(r) for r in cur.fetchall()]

    def one_movie(self, movie_id: int) -> Movie:
        """
        Fetch a single movie with its genres.

        Args:
            movie_id: Primary key.

        Returns:
            The Movie, its genres ordered by name.

        Raises:
            NotFoundError: If no movie has this id.
        """
        with self._session() as cur:
            movie = self._fetch_movie(cur, movie_id)
            movie.genres = self._fetch_movie_genres(cur, movie_id)
            return movie

    def one_movie_for_edit(self, movie_id: int) -> tuple[Movie, list[Genre]]:
        """
        Fetch a movie for the edit form.

        Besides the movie and its genres, fills ``genres_array`` with the
        ids of those genres (same order) and loads every genre so the form
        can offer the full list.

        Returns:
            Tuple of (movie, all genres ordered by name).

        Raises:
            NotFoundError: If no movie has this id.
        """
        sql = "SELECT id, genre FROM genres ORDER BY genre;"
        with self._session() as cur:
            movie = self._fetch_movie(cur, movie_id)
            movie.genres = self._fetch_movie_genres(cur, movie_id)
            movie.genres_array = [g.id for g in movie.genres]

            cur.execute(sql)
            all_genres = [self._row_to_genre(r) for r in cur.fetchall()]
            return movie, all_genres

    # ── USERS ─────────────────────────────────────────────

    def get_user_by_email(self, email: str) -> User:
        """
        Fetch a user by email. The match is exact and case-sensitive.

        Raises:
            NotFoundError: If no user has this email.
        """
        sql = """
            SELECT id, email, first_name, last_name, password, created_at, updated_at
            FROM users WHERE email = %s;
        """
        with self._session() as cur:
            cur.execute(sql, (email,))
            row = cur.fetchone()
        if row is None:
            raise NotFoundError(f"No user with email {email!r}")
        return self._row_to_user(row)

    def get_user_by_id(self, user_id: int) -> User:
        """
        Fetch a user by primary key.

        Raises:
            NotFoundError: If no user has this id.
        """
        sql = """
            SELECT id, email, first_name, last_name, password, created_at, updated_at
            FROM users WHERE id = %s;
        """
        with self._session() as cur:
            cur.execute(sql, (user_id,))
            row = cur.fetchone()
        if row is None:
            raise NotFoundError(f"No user with id {user_id}")
        return self._row_to_user(row)

    # ── HELPERS ───────────────────────────────────────────

    def _fetch_movie(self, cur: _TimedCursor, movie_id: int) -> Movie:
        sql = """
            SELECT id, title, release_date, runtime, mpaa_rating,
                   description, COALESCE(image, ''), created_at, updated_at
            FROM movies WHERE id = %s;
        """
        cur.execute(sql, (movie_id,))
        row = cur.fetchone()
        if row is None:
            raise NotFoundError(f"No movie with id {movie_id}")
        return self._row_to_movie(row)

    def _fetch_movie_genres(self, cur: _TimedCursor, movie_id: int) -> list[Genre]:
        sql = """
            SELECT g.id, g.genre
            FROM movies_genres mg
            LEFT JOIN genres g ON (mg.genre_id = g.id)
            WHERE mg.movie_id = %s
            ORDER BY g.genre;
        """
        cur.execute(sql, (movie_id,))
        return [self._row_to_genre(r) for r in cur.fetchall()]

    @staticmethod
    def _row_to_movie(row: tuple) -> Movie:
        """Convert a database row tuple to a Movie domain object."""
        try:
            (movie_id, title, release_date, runtime, mpaa_rating,
             description, image, created_at, updated_at) = row
        except (TypeError, ValueError) as e:
            raise ScanError(f"Malformed movie row: {e}") from e
        return Movie(
            id=_scan_int(movie_id, "id"),
            title=_scan_str(title, "title"),
            release_date=release_date,
            runtime=_scan_int(runtime, "runtime"),
            mpaa_rating=_scan_str(mpaa_rating, "mpaa_rating"),
            description=_scan_str(description, "description"),
            image=image or "",
            created_at=created_at,
            updated_at=updated_at,
        )

    @staticmethod
    def _row_to_genre(row: tuple) -> Genre:
        """Convert a database row tuple to a Genre domain object."""
        try:
            genre_id, name = row
        except (TypeError, ValueError) as e:
            raise ScanError(f"Malformed genre row: {e}") from e
        return Genre(id=_scan_int(genre_id, "id"), genre=_scan_str(name, "genre"))

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        """Convert a database row tuple to a User domain object."""
        try:
            user_id, email, first_name, last_name, password, created_at, updated_at = row
        except (TypeError, ValueError) as e:
            raise ScanError(f"Malformed user row: {e}") from e
        return User(
            id=_scan_int(user_id, "id"),
            email=_scan_str(email, "email"),
            first_name=_scan_str(first_name, "first_name"),
            last_name=_scan_str(last_name, "last_name"),
            password=_scan_str(password, "password"),
            created_at=created_at,
            updated_at=updated_at,
        )
