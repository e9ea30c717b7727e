"""
repositories/errors.py
----------------------
Exceptions raised by the data access layer.
Driver exceptions are translated into these so callers never need to
import psycopg2 to handle a failed lookup.
"""


class StorageError(Exception):
    """Base class for every data access failure."""


class QueryTimeoutError(StorageError, TimeoutError):
    """The call did not finish within its time budget."""


class NotFoundError(StorageError):
    """A single-row lookup matched no rows."""


class ScanError(StorageError):
    """A result row could not be decoded into a domain object."""


class DatabaseConnectionError(StorageError, ConnectionError):
    """The database could not be reached or the connection broke."""
