"""tablewright - declarative table definitions materialized as SQL."""

from importlib.metadata import PackageNotFoundError, version

from tablewright.core.database import Database, connect
from tablewright.models import (
    Table,
    Column,
    ColumnType,
    ColumnConstraints,
    ValueKind,
    StringVal,
    IntVal,
    FloatVal,
    BoolVal,
    ConnectionSettings,
)

try:
    __version__ = version("tablewright")
except PackageNotFoundError:
    # Package metadata is not available when running from a source checkout
    __version__ = "0.1.0"

__all__ = [
    "Database",
    "connect",
    "Table",
    "Column",
    "ColumnType",
    "ColumnConstraints",
    "ValueKind",
    "StringVal",
    "IntVal",
    "FloatVal",
    "BoolVal",
    "ConnectionSettings",
]
