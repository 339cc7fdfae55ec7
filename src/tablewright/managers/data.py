"""Data management: INSERT generation and execution."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from tablewright.errors import EmptyInsertError, TablewrightError
from tablewright.managers.base import BaseManager
from tablewright.utils.value_encoder import encode_row

logger = logging.getLogger(__name__)


def build_insert_sql(table_name: str, keys: Sequence[str], literals: Sequence[str]) -> str:
    """Build an INSERT statement from column names and rendered literals.

    Raises:
        EmptyInsertError: If there is nothing to insert
        ValueError: If keys and literals differ in length
    """
    if not keys or not literals:
        raise EmptyInsertError(table_name)
    if len(keys) != len(literals):
        raise ValueError(
            f"Got {len(keys)} columns but {len(literals)} values for table '{table_name}'"
        )
    return f"INSERT INTO {table_name} ({','.join(keys)}) VALUES ({','.join(literals)});"


class DataManager(BaseManager):
    """Inserts rows into the registered tables of a Database session."""

    def insert_row(self, table_name: str, values: Dict[str, Any]) -> str:
        """Validate a row against its table, then insert it.

        Args:
            table_name: Registered table to insert into
            values: Column name to value

        Returns:
            The executed INSERT statement

        Raises:
            NotConnectedError: If the session has no open connection
            UnknownTableError: If the table is not registered
            UnknownColumnError: If a key is not a column of the table
            UnsupportedValueTypeError: If a value has no literal form
            TypeMismatchError: If a value kind differs from its column kind
            EmptyInsertError: If ``values`` is empty
            ExecutionError: If the server rejects the statement
        """
        self._require_connection()

        with self.db._lock:
            tables = dict(self.db._tables)

        keys, literals = encode_row(tables, table_name, values)
        insert_sql = build_insert_sql(table_name, keys, literals)
        self._execute(insert_sql)
        return insert_sql

    def insert_rows(
        self, table_name: str, rows: List[Dict[str, Any]]
    ) -> List[Optional[Exception]]:
        """Insert rows one at a time without a surrounding transaction.

        Every row is attempted; a failing row does not stop the others.

        Returns:
            One entry per row: the error it failed with, or None on success
        """
        self._require_connection()

        results: List[Optional[Exception]] = []
        for index, row in enumerate(rows):
            try:
                self.insert_row(table_name, row)
            except TablewrightError as e:
                logger.error(f"Failed to insert row {index} into '{table_name}': {e}")
                results.append(e)
            else:
                results.append(None)
        return results
