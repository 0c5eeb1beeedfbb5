from __future__ import annotations

from contextlib import contextmanager

from .connection import DatabaseConnection


class LockTimeout(RuntimeError):
    """Raised when a named lock could not be acquired in time."""


class MySQLAdvisoryLocks:
    """Named locks backed by MySQL GET_LOCK / RELEASE_LOCK.

    The lock lives on its own connection, so it serializes callers across
    processes without holding a transaction open.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, timeout_seconds: int = 5, prefix: str = "timeclock"):
        self._conn_factory = conn_factory
        self._timeout = int(timeout_seconds)
        self._prefix = prefix

    @contextmanager
    def hold(self, key: str):
        name = f"{self._prefix}:{key}"
        conn = self._conn_factory.connect()
        try:
            cur = conn.cursor()
            cur.execute("SELECT GET_LOCK(%s, %s)", (name, self._timeout))
            (acquired,) = cur.fetchone()
            if acquired != 1:
                raise LockTimeout(f"Could not acquire lock {name!r}")
            try:
                yield
            finally:
                cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                cur.fetchone()
                cur.close()
        finally:
            conn.close()


class NullLocks:
    """No-op lock provider for single-process use and tests."""

    @contextmanager
    def hold(self, key: str):
        yield
