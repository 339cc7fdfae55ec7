"""Core tablewright functionality."""

from tablewright.core.database import Database, connect
from tablewright.core.connection import (
    Connection,
    SQLiteConnection,
    PostgresConnection,
    open_connection,
)

__all__ = [
    "Database",
    "connect",
    "Connection",
    "SQLiteConnection",
    "PostgresConnection",
    "open_connection",
]
