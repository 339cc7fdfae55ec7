"""Exception hierarchy for tablewright."""

from typing import Optional


class TablewrightError(Exception):
    """Base class for all errors raised by tablewright."""

    pass


class UnsupportedTypeError(TablewrightError, ValueError):
    """Raised when a column type tag has no database type mapping."""

    def __init__(self, kind: object, column: Optional[str] = None):
        self.kind = kind
        self.column = column
        if column:
            message = f"Column '{column}' has unsupported type '{kind}'"
        else:
            message = f"Unsupported column type '{kind}'"
        super().__init__(message)


class NotConnectedError(TablewrightError):
    """Raised when an operation needs a connection and none is open."""

    def __init__(self, message: str = "Database is not connected"):
        super().__init__(message)


class ConnectionFailedError(TablewrightError):
    """Raised when the connection factory cannot open a connection."""

    pass


class UnknownTableError(TablewrightError):
    """Raised when a table is not registered with the database."""

    def __init__(self, table: str):
        self.table = table
        super().__init__(
            f"Table '{table}' requested for insertion does not exist in the data model"
        )


class UnknownColumnError(TablewrightError):
    """Raised when a row refers to a column the table does not declare."""

    def __init__(self, table: str, column: str):
        self.table = table
        self.column = column
        super().__init__(
            f"Column '{column}' requested for insertion does not exist in table '{table}'"
        )


class TypeMismatchError(TablewrightError, TypeError):
    """Raised when a value's kind differs from its column's declared kind."""

    def __init__(self, column: str, expected: str, actual: str):
        self.column = column
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Tried to insert {actual} value into {expected} column '{column}'"
        )


class UnsupportedValueTypeError(TablewrightError, TypeError):
    """Raised when a value cannot be represented as a SQL literal."""

    pass


class EmptyInsertError(TablewrightError, ValueError):
    """Raised when an INSERT would name no columns."""

    def __init__(self, table: str):
        self.table = table
        super().__init__(f"Nothing to insert into table '{table}'")


class ExecutionError(TablewrightError):
    """Wraps an error reported by the connection while executing a statement.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, statement: str, error: BaseException):
        self.statement = statement
        self.error = error
        super().__init__(f"Failed to execute statement: {error}")
