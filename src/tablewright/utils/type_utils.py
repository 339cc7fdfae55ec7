"""Column type mapping from value kinds to database type keywords."""

from typing import Union

from tablewright.errors import UnsupportedTypeError
from tablewright.models.table import ValueKind

# Value kind tag -> PostgreSQL type keyword
TYPE_MAPPING = {
    ValueKind.STRING.value: "VARCHAR",
    ValueKind.INT8.value: "SMALLINT",
    ValueKind.INT16.value: "SMALLINT",
    ValueKind.INT32.value: "INTEGER",
    ValueKind.INT64.value: "BIGINT",
    "int": "BIGINT",
    ValueKind.FLOAT32.value: "FLOAT4",
    ValueKind.FLOAT64.value: "FLOAT8",
    ValueKind.BOOL.value: "BOOLEAN",
}

# Spellings accepted from config files and the command line
KIND_ALIASES = {
    "string": ValueKind.STRING.value,
    "str": ValueKind.STRING.value,
    "text": ValueKind.STRING.value,
    "varchar": ValueKind.STRING.value,
    "int8": ValueKind.INT8.value,
    "int16": ValueKind.INT16.value,
    "smallint": ValueKind.INT16.value,
    "int32": ValueKind.INT32.value,
    "integer": ValueKind.INT32.value,
    "int64": ValueKind.INT64.value,
    "int": ValueKind.INT64.value,
    "bigint": ValueKind.INT64.value,
    "float32": ValueKind.FLOAT32.value,
    "real": ValueKind.FLOAT32.value,
    "float64": ValueKind.FLOAT64.value,
    "float": ValueKind.FLOAT64.value,
    "double": ValueKind.FLOAT64.value,
    "bool": ValueKind.BOOL.value,
    "boolean": ValueKind.BOOL.value,
}


def map_type(kind: Union[str, ValueKind]) -> str:
    """Return the database type keyword for a value kind.

    Args:
        kind: Value kind tag

    Returns:
        Type keyword such as ``VARCHAR`` or ``BIGINT``

    Raises:
        UnsupportedTypeError: If the tag is not in the supported set
    """
    tag = kind.value if isinstance(kind, ValueKind) else kind
    try:
        return TYPE_MAPPING[tag]
    except (KeyError, TypeError):
        raise UnsupportedTypeError(kind) from None


def normalize_kind(name: str) -> str:
    """Normalize a user-supplied type name to a canonical value kind tag.

    Args:
        name: Type name in any case, e.g. ``"Text"`` or ``"BIGINT"``

    Returns:
        Canonical tag such as ``"string"`` or ``"int64"``

    Raises:
        UnsupportedTypeError: If the name is not recognized
    """
    if not name:
        raise UnsupportedTypeError(name)
    try:
        return KIND_ALIASES[name.strip().lower()]
    except KeyError:
        raise UnsupportedTypeError(name) from None


def is_supported_kind(kind: Union[str, ValueKind]) -> bool:
    """Check whether a value kind has a type mapping."""
    try:
        map_type(kind)
        return True
    except UnsupportedTypeError:
        return False
