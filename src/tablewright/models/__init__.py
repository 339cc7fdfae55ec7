"""Schema and settings models for tablewright."""

from .base import TablewrightBaseModel, SchemaModel
from .table import Table, Column, ColumnType, ColumnConstraints, ValueKind
from .values import StringVal, IntVal, FloatVal, BoolVal, RowValue, to_value
from .connection import ConnectionSettings, Backend

__all__ = [
    "TablewrightBaseModel",
    "SchemaModel",
    "Table",
    "Column",
    "ColumnType",
    "ColumnConstraints",
    "ValueKind",
    "StringVal",
    "IntVal",
    "FloatVal",
    "BoolVal",
    "RowValue",
    "to_value",
    "ConnectionSettings",
    "Backend",
]
