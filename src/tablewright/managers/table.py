"""Table management: CREATE TABLE / DROP TABLE generation and registration."""

import logging
from typing import Dict, Optional

from tablewright.errors import TablewrightError, UnsupportedTypeError
from tablewright.managers.base import BaseManager
from tablewright.models import Column, Table
from tablewright.utils.constraints import render_constraints
from tablewright.utils.name_validator import validate_name
from tablewright.utils.type_utils import map_type

logger = logging.getLogger(__name__)


def build_column_definition(name: str, column: Column, best_effort: bool = False) -> str:
    """Build the definition fragment of one column.

    Format: ``<name> <TYPE>(<size>) <constraints>``. The size suffix is only
    present when the column declares a size, the constraints only when any
    are active.

    Args:
        name: Column name
        column: Column definition
        best_effort: Embed an empty type instead of failing on an
            unsupported type

    Raises:
        UnsupportedTypeError: If the type has no mapping and best_effort is off
    """
    try:
        type_sql = map_type(column.type.kind)
    except UnsupportedTypeError:
        if not best_effort:
            raise UnsupportedTypeError(column.type.kind, column=name) from None
        logger.warning(
            f"Column '{name}' has unsupported type '{column.type.kind}', "
            f"generating it without a type"
        )
        type_sql = ""

    if column.type.size is not None:
        type_sql = f"{type_sql}({column.type.size})"

    col_def = f"{name} {type_sql}"
    constraints_sql = render_constraints(column.constraints)
    if constraints_sql:
        col_def += f" {constraints_sql}"
    return col_def


def build_create_table_sql(
    table_name: str,
    table: Table,
    best_effort: bool = False,
    sort_columns: bool = False,
) -> str:
    """Build the CREATE TABLE statement for a table.

    Columns appear in declaration order, or sorted by name when
    ``sort_columns`` is set.

    Raises:
        InvalidNameError: If the table name is not a valid identifier
        UnsupportedTypeError: If a column type has no mapping and
            best_effort is off
    """
    validate_name(table_name, "table")

    names = sorted(table.columns) if sort_columns else list(table.columns)
    sql_parts = [
        build_column_definition(name, table.columns[name], best_effort=best_effort)
        for name in names
    ]
    return f"CREATE TABLE IF NOT EXISTS {table_name} ({', '.join(sql_parts)});"


def build_drop_table_sql(table_name: str) -> str:
    """Build the DROP TABLE statement for a table."""
    validate_name(table_name, "table")
    return f"DROP TABLE {table_name};"


class TableManager(BaseManager):
    """Registers and drops tables of a Database session."""

    def create_table(self, table_name: str, table: Table, best_effort: bool = False) -> str:
        """Create a table on the server and register it.

        The table is stored in the session only after the statement succeeded;
        an existing registration under the same name is replaced.

        Args:
            table_name: Name of the table
            table: Table definition
            best_effort: Generate columns with unsupported types without a type

        Returns:
            The executed CREATE TABLE statement

        Raises:
            NotConnectedError: If the session has no open connection
            InvalidNameError: If the table name is invalid
            UnsupportedTypeError: If a column type has no mapping
            ExecutionError: If the server rejects the statement
        """
        self._require_connection()
        create_sql = build_create_table_sql(table_name, table, best_effort=best_effort)
        self._execute(create_sql)

        with self.db._lock:
            self.db._tables[table_name] = table
            if self.db._definitions.get(table_name) is table:
                del self.db._definitions[table_name]

        logger.info(f"Registered table '{table_name}' with {len(table.columns)} columns")
        return create_sql

    def create_all(self, best_effort: bool = False) -> Dict[str, Optional[Exception]]:
        """Register every table known to the session.

        Staged definitions and already registered tables are registered one by
        one, in name order; a staged definition wins over a registered table
        with the same name. A failure does not stop the remaining tables.

        Returns:
            Table name to the error it failed with, or None on success

        Raises:
            NotConnectedError: If the session has no open connection
        """
        self._require_connection()

        with self.db._lock:
            pending = dict(self.db._tables)
            pending.update(self.db._definitions)

        results: Dict[str, Optional[Exception]] = {}
        for table_name in sorted(pending):
            try:
                self.create_table(table_name, pending[table_name], best_effort=best_effort)
            except TablewrightError as e:
                logger.error(f"Failed to register table '{table_name}': {e}")
                results[table_name] = e
            else:
                results[table_name] = None

        failed = sum(1 for error in results.values() if error is not None)
        if failed:
            logger.info(f"Registered {len(results) - failed} of {len(results)} tables")
        return results

    def drop_table(self, table_name: str) -> str:
        """Drop a table on the server.

        The session's registered tables are left unchanged.

        Returns:
            The executed DROP TABLE statement

        Raises:
            NotConnectedError: If the session has no open connection
            InvalidNameError: If the table name is invalid
            ExecutionError: If the server rejects the statement, e.g. because
                the table does not exist
        """
        self._require_connection()
        drop_sql = build_drop_table_sql(table_name)
        self._execute(drop_sql)
        logger.info(f"Dropped table '{table_name}'")
        return drop_sql
