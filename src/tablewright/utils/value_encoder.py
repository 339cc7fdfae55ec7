"""Validation of row values against a table and rendering as SQL literals."""

import math
from typing import Any, Dict, List, Mapping, Tuple

from tablewright.errors import (
    TypeMismatchError,
    UnknownColumnError,
    UnknownTableError,
    UnsupportedValueTypeError,
)
from tablewright.models.table import Column, Table
from tablewright.models.values import (
    BoolVal,
    FloatVal,
    IntVal,
    RowValue,
    StringVal,
    to_value,
)

# Digits after the decimal point; keeps float8 values lossless
FLOAT_PRECISION = 20


def quote_string(value: str) -> str:
    """Quote a string as a SQL literal, doubling embedded single quotes."""
    return "'" + value.replace("'", "''") + "'"


def render_literal(value: RowValue) -> str:
    """Render a row value as a SQL literal.

    Raises:
        UnsupportedValueTypeError: For non-finite floats or unknown objects
    """
    if isinstance(value, BoolVal):
        return "true" if value.value else "false"
    if isinstance(value, IntVal):
        return str(value.value)
    if isinstance(value, FloatVal):
        if not math.isfinite(value.value):
            raise UnsupportedValueTypeError(
                f"Non-finite float {value.value!r} has no SQL literal"
            )
        return format(value.value, f".{FLOAT_PRECISION}e")
    if isinstance(value, StringVal):
        return quote_string(value.value)
    raise UnsupportedValueTypeError(
        f"Value of type {type(value).__name__} cannot be inserted"
    )


def encode_value(column_name: str, column: Column, raw: Any) -> str:
    """Type-check one value against its column and render it.

    Args:
        column_name: Column name, for error messages
        column: The column definition
        raw: Raw Python value or row value variant

    Returns:
        SQL literal

    Raises:
        UnsupportedValueTypeError: If the value has no literal form
        TypeMismatchError: If the value kind differs from the column kind
    """
    value = to_value(raw)
    if value.kind != column.type.kind:
        raise TypeMismatchError(column_name, column.type.kind, value.kind)
    return render_literal(value)


def encode_row(
    tables: Mapping[str, Table], table_name: str, values: Dict[str, Any]
) -> Tuple[List[str], List[str]]:
    """Validate a row against a registered table and render its literals.

    Keys are processed in the order of ``values``; the returned lists are
    order-consistent with each other.

    Args:
        tables: Registered tables by name
        table_name: Table to insert into
        values: Column name to raw value

    Returns:
        Tuple of (column names, SQL literals)

    Raises:
        UnknownTableError: If the table is not registered
        UnknownColumnError: If a key is not a column of the table
        UnsupportedValueTypeError: If a value has no literal form
        TypeMismatchError: If a value kind differs from its column kind
    """
    table = tables.get(table_name)
    if table is None:
        raise UnknownTableError(table_name)

    keys = []
    literals = []
    for key, raw in values.items():
        column = table.get_column(key)
        if column is None:
            raise UnknownColumnError(table_name, key)
        literals.append(encode_value(key, column, raw))
        keys.append(key)

    return keys, literals
