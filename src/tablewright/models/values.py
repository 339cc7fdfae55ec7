"""Typed row values.

Raw Python values passed to an insert are wrapped into one of the variants
below before they are checked against a column. Plain ``int`` and ``float``
values are 64-bit; use ``IntVal``/``FloatVal`` directly to state a narrower
width.
"""

from dataclasses import dataclass, field
from typing import Any, Union

from .table import ValueKind
from tablewright.errors import UnsupportedValueTypeError

INT_KINDS = frozenset(
    {ValueKind.INT8.value, ValueKind.INT16.value, ValueKind.INT32.value, ValueKind.INT64.value}
)
FLOAT_KINDS = frozenset({ValueKind.FLOAT32.value, ValueKind.FLOAT64.value})

# Signed range (inclusive) of each integer kind
INT_RANGES = {
    ValueKind.INT8.value: (-(2**7), 2**7 - 1),
    ValueKind.INT16.value: (-(2**15), 2**15 - 1),
    ValueKind.INT32.value: (-(2**31), 2**31 - 1),
    ValueKind.INT64.value: (-(2**63), 2**63 - 1),
}


def _kind_tag(kind: Union[str, ValueKind]) -> str:
    if isinstance(kind, ValueKind):
        return kind.value
    # Generic int is 64-bit, as for column types
    if kind == "int":
        return ValueKind.INT64.value
    return kind


@dataclass(frozen=True)
class StringVal:
    value: str
    kind: str = field(default=ValueKind.STRING.value, init=False)

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise UnsupportedValueTypeError(
                f"StringVal expects str, got {type(self.value).__name__}"
            )


@dataclass(frozen=True)
class IntVal:
    value: int
    kind: str = ValueKind.INT64.value

    def __post_init__(self):
        # bool is a subclass of int and must not pass as one
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise UnsupportedValueTypeError(
                f"IntVal expects int, got {type(self.value).__name__}"
            )
        object.__setattr__(self, "kind", _kind_tag(self.kind))
        if self.kind not in INT_KINDS:
            raise UnsupportedValueTypeError(f"'{self.kind}' is not an integer kind")
        low, high = INT_RANGES[self.kind]
        if not low <= self.value <= high:
            raise UnsupportedValueTypeError(
                f"{self.value} does not fit in {self.kind} ({low} to {high})"
            )


@dataclass(frozen=True)
class FloatVal:
    value: float
    kind: str = ValueKind.FLOAT64.value

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise UnsupportedValueTypeError(
                f"FloatVal expects float, got {type(self.value).__name__}"
            )
        object.__setattr__(self, "value", float(self.value))
        object.__setattr__(self, "kind", _kind_tag(self.kind))
        if self.kind not in FLOAT_KINDS:
            raise UnsupportedValueTypeError(f"'{self.kind}' is not a floating-point kind")


@dataclass(frozen=True)
class BoolVal:
    value: bool
    kind: str = field(default=ValueKind.BOOL.value, init=False)

    def __post_init__(self):
        if not isinstance(self.value, bool):
            raise UnsupportedValueTypeError(
                f"BoolVal expects bool, got {type(self.value).__name__}"
            )


RowValue = Union[StringVal, IntVal, FloatVal, BoolVal]
ROW_VALUE_TYPES = (StringVal, IntVal, FloatVal, BoolVal)


def to_value(raw: Any) -> RowValue:
    """Wrap a raw Python value into its row value variant.

    Already-wrapped values are returned unchanged.

    Raises:
        UnsupportedValueTypeError: If the value has no SQL literal form
    """
    if isinstance(raw, ROW_VALUE_TYPES):
        return raw
    # bool before int: True is an int too
    if isinstance(raw, bool):
        return BoolVal(raw)
    if isinstance(raw, int):
        return IntVal(raw)
    if isinstance(raw, float):
        return FloatVal(raw)
    if isinstance(raw, str):
        return StringVal(raw)
    raise UnsupportedValueTypeError(
        f"Value of type {type(raw).__name__} cannot be inserted"
    )
