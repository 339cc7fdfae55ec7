"""Connections that execute generated SQL statements.

tablewright only needs ``execute(sql)`` and ``close()`` from a connection.
Two backends ship with the package: SQLite through the standard library and
PostgreSQL through psycopg2 (optional, ``pip install tablewright[postgres]``).
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional, Protocol, runtime_checkable

from tablewright.errors import ConnectionFailedError
from tablewright.models.connection import ConnectionSettings

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"
DEFAULT_POSTGRES_PORT = 5432


@runtime_checkable
class Connection(Protocol):
    """Anything that can execute a SQL statement."""

    def execute(self, sql: str) -> Any:
        ...

    def close(self) -> None:
        ...


class SQLiteConnection:
    """SQLite connection with WAL mode; each statement is committed on its own."""

    def __init__(self, path: str = MEMORY_PATH):
        """Initialize database connection.

        Args:
            path: Path to SQLite database file, or ``:memory:``
        """
        self.path = str(path)
        self._conn: Optional[sqlite3.Connection] = None
        self._connect()

    @property
    def in_memory(self) -> bool:
        return self.path == MEMORY_PATH

    def _connect(self) -> None:
        """Establish database connection and configure WAL mode."""
        if not self.in_memory:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(self.path)

        try:
            if not self.in_memory:
                self._conn.execute("PRAGMA journal_mode = WAL")
                self._conn.execute("PRAGMA synchronous = NORMAL")
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._conn.commit()
        except sqlite3.Error:
            self._conn.close()
            raise

        logger.debug(f"Opened SQLite database at {self.path}")

    def execute(self, sql: str) -> int:
        """Execute and commit a single SQL statement.

        Args:
            sql: SQL statement to execute

        Returns:
            Number of rows affected (-1 for DDL)
        """
        if not self._conn:
            raise RuntimeError("Connection is closed")

        try:
            cursor = self._conn.execute(sql)
            self._conn.commit()
        except sqlite3.Error:
            self._conn.rollback()
            raise
        return cursor.rowcount

    def query(self, sql: str, params: Optional[tuple] = None) -> list:
        """Run a read-only query and return all rows."""
        if not self._conn:
            raise RuntimeError("Connection is closed")
        return self._conn.execute(sql, params or ()).fetchall()

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _ = (exc_type, exc_val, exc_tb)
        self.close()
        return False


class PostgresConnection:
    """PostgreSQL connection in autocommit mode, backed by psycopg2."""

    def __init__(
        self,
        address: str,
        database_name: Optional[str],
        user: Optional[str],
        password: Optional[str],
    ):
        """Initialize database connection.

        Args:
            address: Server as ``host`` or ``host:port``
            database_name: Database to connect to
            user: User name
            password: Password
        """
        self.address = address
        self.database_name = database_name
        self.user = user
        self._password = password
        self._conn = None
        self._connect()

    def _connect(self) -> None:
        try:
            import psycopg2
        except ImportError as e:
            raise ConnectionFailedError(
                "psycopg2 is required for the postgres backend. "
                "Install it with 'pip install tablewright[postgres]'."
            ) from e

        host, _, port = self.address.partition(":")
        self._conn = psycopg2.connect(
            host=host,
            port=int(port) if port else DEFAULT_POSTGRES_PORT,
            dbname=self.database_name,
            user=self.user,
            password=self._password,
        )
        self._conn.autocommit = True
        logger.debug(f"Opened PostgreSQL connection to {self.address}/{self.database_name}")

    def execute(self, sql: str) -> int:
        """Execute a single SQL statement.

        Returns:
            Number of rows affected
        """
        if self._conn is None:
            raise RuntimeError("Connection is closed")

        with self._conn.cursor() as cursor:
            cursor.execute(sql)
            return cursor.rowcount

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None


def open_connection(settings: ConnectionSettings) -> Connection:
    """Open a connection for the given settings.

    Args:
        settings: Connection settings

    Returns:
        A live connection

    Raises:
        ConnectionFailedError: If the connection cannot be established
    """
    try:
        if settings.backend == "postgres":
            return PostgresConnection(
                settings.address,
                settings.database_name,
                settings.user,
                settings.password,
            )
        return SQLiteConnection(settings.path)
    except ConnectionFailedError:
        raise
    except Exception as e:
        raise ConnectionFailedError(
            f"Could not connect to {settings.backend} database: {e}"
        ) from e
