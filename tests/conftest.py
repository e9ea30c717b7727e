"""
tests/conftest.py
-----------------
Scripted stand-ins for a psycopg2 pool, connection and cursor.

A FakeCursor is given (fragment, result) pairs. When a statement is
executed, the first pair whose fragment appears in the whitespace-
normalized, lower-cased SQL decides the outcome: a list of rows to
return, or an exception instance to raise.
"""

from datetime import date, datetime

import pytest


def normalize(sql: str) -> str:
    return " ".join(sql.split()).lower()


class FakeCursor:
    def __init__(self, script):
        self.script = script
        self.executed: list[tuple[str, object]] = []
        self._rows: list = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        text = normalize(sql)
        self.executed.append((text, params))
        if "set_config('statement_timeout'" in text:
            self._rows = [(params[0],)]
            return
        for fragment, result in self.script:
            if fragment in text:
                if isinstance(result, Exception):
                    raise result
                self._rows = list(result)
                return
        raise AssertionError(f"Unscripted statement: {text}")

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    @property
    def queries(self) -> list[tuple[str, object]]:
        """Executed statements without the statement_timeout preambles."""
        return [q for q in self.executed if "set_config" not in q[0]]

    @property
    def timeouts(self) -> list[int]:
        return [int(p[0]) for q, p in self.executed if "set_config" in q]


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.closed = 0
        self.rollbacks = 0
        self.rollback_error = None

    def cursor(self):
        return self._cursor

    def rollback(self):
        self.rollbacks += 1
        if self.rollback_error is not None:
            raise self.rollback_error


class FakePool:
    def __init__(self, connection: FakeConnection, getconn_error=None):
        self.connection = connection
        self.getconn_error = getconn_error
        self.checked_out = 0
        self.returned: list[tuple[FakeConnection, bool]] = []

    def getconn(self):
        if self.getconn_error is not None:
            raise self.getconn_error
        self.checked_out += 1
        return self.connection

    def putconn(self, conn, close=False):
        self.returned.append((conn, close))

    def closeall(self):
        pass


@pytest.fixture
def make_pool():
    """Build a FakePool around a cursor scripted with (fragment, result) pairs."""
    def _make(*script, getconn_error=None):
        cursor = FakeCursor(list(script))
        return FakePool(FakeConnection(cursor), getconn_error=getconn_error)
    return _make


CREATED = datetime(2024, 1, 1, 12, 0, 0)


def movie_row(movie_id=1, title="Inception", image="/inception.jpg"):
    return (
        movie_id, title, date(2010, 7, 16), 148, "PG-13",
        "A thief who steals corporate secrets through dream-sharing.",
        image, CREATED, CREATED,
    )


def user_row(user_id=1, email="admin@example.com"):
    return (user_id, email, "Admin", "User", "$2a$12$hash", CREATED, CREATED)
