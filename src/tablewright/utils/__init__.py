"""Utility modules for tablewright."""

from tablewright.utils.name_validator import (
    validate_name,
    is_valid_name,
    InvalidNameError,
)

__all__ = [
    "validate_name",
    "is_valid_name",
    "InvalidNameError",
]
