"""Table, Column and column type models for tablewright."""

from enum import Enum
from typing import Dict, Optional, Union

from pydantic import Field, field_validator

from .base import SchemaModel
from tablewright.utils.name_validator import validate_name


class ValueKind(str, Enum):
    """Value kinds a column can be declared to hold."""

    STRING = "string"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"


class ColumnType(SchemaModel):
    """The kind of value a column holds plus its declared size.

    The kind is kept as a plain tag; whether the database supports it is
    decided when the table is registered. The generic ``int`` tag is an
    alias for ``int64``.
    """

    kind: str = Field(description="Value kind tag, e.g. 'string' or 'int32'")
    size: Optional[int] = Field(
        default=None, ge=0, description="String length or numeric precision"
    )

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, value: Union[str, ValueKind]) -> str:
        if isinstance(value, ValueKind):
            return value.value
        if not isinstance(value, str):
            raise ValueError(f"Column kind must be a string, got {type(value).__name__}")
        value = value.strip().lower()
        if value == "int":
            return ValueKind.INT64.value
        return value


class ColumnConstraints(SchemaModel):
    """Independent column constraint flags.

    Every combination is accepted; the database server enforces any
    interaction between them (e.g. primary keys being non-null).
    """

    not_null: bool = False
    unique: bool = False
    primary_key: bool = False
    check: bool = False
    foreign_key: bool = False


class Column(SchemaModel):
    """A column definition: its type and its constraints."""

    type: ColumnType
    constraints: ColumnConstraints = Field(default_factory=ColumnConstraints)

    @classmethod
    def of(
        cls,
        kind: Union[str, ValueKind],
        size: Optional[int] = None,
        **constraints: bool,
    ) -> "Column":
        """Shorthand constructor.

        Examples:
            Column.of("string", 255, primary_key=True)
            Column.of(ValueKind.INT32, not_null=True)
        """
        return cls(
            type=ColumnType(kind=kind, size=size),
            constraints=ColumnConstraints(**constraints),
        )

    def describe(self) -> str:
        """Human readable summary of the column type."""
        if self.type.size is None:
            return f"Column of type {self.type.kind}"
        return f"Column of type {self.type.kind} and size {self.type.size}"


class Table(SchemaModel):
    """A table definition: column name to column, in declaration order."""

    columns: Dict[str, Column] = Field(default_factory=dict)

    @field_validator("columns")
    @classmethod
    def _validate_column_names(cls, columns: Dict[str, Column]) -> Dict[str, Column]:
        for name in columns:
            validate_name(name, "column")
        return columns

    def get_column(self, name: str) -> Optional[Column]:
        """Return the column called ``name`` or None."""
        return self.columns.get(name)

    def column_names(self):
        return list(self.columns)
