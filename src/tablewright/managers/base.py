"""Base manager class shared by the table and data managers."""

import logging
from typing import TYPE_CHECKING, Any

from tablewright.errors import ExecutionError, NotConnectedError

if TYPE_CHECKING:
    from tablewright.core.connection import Connection
    from tablewright.core.database import Database

logger = logging.getLogger(__name__)


class BaseManager:
    """Base class for managers operating on a Database session.

    Provides connection checks and statement execution with error wrapping.
    """

    def __init__(self, db: "Database"):
        """Initialize base manager.

        Args:
            db: The Database session that owns the schema and connection
        """
        self.db = db

    def _require_connection(self) -> "Connection":
        """Return the active connection.

        Raises:
            NotConnectedError: If the session has no open connection
        """
        connection = self.db.connection
        if connection is None:
            raise NotConnectedError()
        return connection

    def _execute(self, statement: str) -> Any:
        """Execute a statement on the active connection.

        Args:
            statement: SQL statement

        Returns:
            Whatever the connection returns

        Raises:
            NotConnectedError: If the session has no open connection
            ExecutionError: If the connection reports an error
        """
        connection = self._require_connection()
        logger.debug(f"Executing: {statement}")
        try:
            return connection.execute(statement)
        except Exception as e:
            raise ExecutionError(statement, e) from e
