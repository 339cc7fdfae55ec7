"""Identifier validation for table and column names.

Table and column names are interpolated into generated SQL unquoted, so
they are restricted to plain lowercase identifiers.
"""

import re

from tablewright.errors import TablewrightError


# Must start with a letter, no hyphens (to avoid SQL quoting)
VALID_IDENTIFIER_PATTERN = re.compile(r"^[a-z_][a-z0-9_]*$")

# PostgreSQL truncates identifiers longer than NAMEDATALEN - 1
MAX_IDENTIFIER_LENGTH = 63

# Keywords reserved by PostgreSQL or SQLite; non-reserved ones such as
# "key" are valid identifiers on both
RESERVED_NAMES = {
    "all",
    "and",
    "check",
    "column",
    "constraint",
    "create",
    "default",
    "drop",
    "foreign",
    "from",
    "insert",
    "into",
    "not",
    "null",
    "or",
    "primary",
    "references",
    "select",
    "table",
    "unique",
    "values",
    "where",
}


class InvalidNameError(TablewrightError, ValueError):
    """Raised when a name doesn't meet validation requirements."""

    pass


def validate_name(name: str, entity_type: str = "table") -> None:
    """Validate that a name can be used as an unquoted SQL identifier.

    Valid names must:
    - Contain only lowercase letters (a-z), numbers (0-9) and underscore (_)
    - Start with a letter or underscore
    - Not exceed 63 characters
    - Not be a reserved SQL keyword

    Args:
        name: The name to validate
        entity_type: Type of entity (table, column) for error messages

    Raises:
        InvalidNameError: If the name is invalid
    """
    if not name:
        raise InvalidNameError(f"{entity_type.capitalize()} name cannot be empty")

    if len(name) > MAX_IDENTIFIER_LENGTH:
        raise InvalidNameError(
            f"{entity_type.capitalize()} name cannot exceed {MAX_IDENTIFIER_LENGTH} characters"
        )

    # Check for null bytes and other control characters
    if any(ord(c) < 32 for c in name):
        raise InvalidNameError(
            f"Security violation: {entity_type} name contains invalid control characters"
        )

    if name != name.lower():
        raise InvalidNameError(
            f"{entity_type.capitalize()} name must be lowercase. "
            f"Use '{name.lower()}' instead of '{name}'"
        )

    if not VALID_IDENTIFIER_PATTERN.match(name):
        raise InvalidNameError(
            f"Invalid {entity_type} name '{name}'. "
            f"{entity_type.capitalize()} names must contain only lowercase letters (a-z), "
            f"numbers (0-9), and underscore (_), and must not start with a number."
        )

    if name in RESERVED_NAMES:
        raise InvalidNameError(
            f"'{name}' is a reserved SQL keyword and cannot be used as a {entity_type} name"
        )


def is_valid_name(name: str, entity_type: str = "table") -> bool:
    """Check if a name is valid without raising an exception.

    Args:
        name: The name to check
        entity_type: Type of entity (table, column)

    Returns:
        True if valid, False otherwise
    """
    try:
        validate_name(name, entity_type)
        return True
    except InvalidNameError:
        return False
