"""Database session: owns the schema and the connection it is applied to."""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from tablewright.core.connection import Connection, open_connection
from tablewright.errors import ConnectionFailedError
from tablewright.managers.data import DataManager
from tablewright.managers.table import TableManager, build_create_table_sql
from tablewright.models import ConnectionSettings, Table

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[ConnectionSettings], Connection]


class Database:
    """A schema plus the connection it is materialized on.

    A Database starts unconnected and with no tables. Tables become part of
    the schema only once their CREATE TABLE statement has succeeded.

    Examples:
        db = Database(backend="sqlite", path="app.db")
        db.connect()
        db.register_table("users", Table(columns={
            "id": Column.of("string", 255, primary_key=True),
            "username": Column.of("string", 255, not_null=True, unique=True),
        }))
        db.insert_row("users", {"id": "2n1kj", "username": "John"})
    """

    def __init__(
        self,
        settings: Optional[ConnectionSettings] = None,
        connection_factory: Optional[ConnectionFactory] = None,
        **settings_kwargs: Any,
    ):
        """Initialize an unconnected database session.

        Args:
            settings: Connection settings; built from ``settings_kwargs`` if None
            connection_factory: Opens a connection from settings
                (default: :func:`open_connection`)
            **settings_kwargs: Fields of :class:`ConnectionSettings`
                (backend, path, address, database_name, user, password)
        """
        if settings is None:
            settings = ConnectionSettings(**settings_kwargs)
        elif settings_kwargs:
            settings = settings.model_copy(update=settings_kwargs)

        self.settings = settings
        self._connection_factory = connection_factory or open_connection
        self._connection: Optional[Connection] = None

        # Guards _tables and _definitions; never held while executing SQL
        self._lock = threading.Lock()
        self._tables: Dict[str, Table] = {}
        self._definitions: Dict[str, Table] = {}

        self._table_manager = TableManager(self)
        self._data_manager = DataManager(self)

    @property
    def connection(self) -> Optional[Connection]:
        return self._connection

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    @property
    def tables(self) -> Dict[str, Table]:
        """Registered tables by name (a copy)."""
        with self._lock:
            return dict(self._tables)

    @property
    def definitions(self) -> Dict[str, Table]:
        """Tables staged with :meth:`define_table` and not yet registered (a copy)."""
        with self._lock:
            return dict(self._definitions)

    def connect(self) -> "Database":
        """Open a connection, replacing (and closing) any current one.

        Raises:
            ConnectionFailedError: If the connection cannot be established;
                the session keeps its previous state
        """
        try:
            connection = self._connection_factory(self.settings)
        except ConnectionFailedError:
            raise
        except Exception as e:
            raise ConnectionFailedError(f"Could not connect: {e}") from e

        previous, self._connection = self._connection, connection
        if previous is not None:
            previous.close()

        logger.info(f"Connected to {self.settings.backend} database")
        return self

    def close(self) -> None:
        """Close the connection. Registered tables are kept."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self):
        if not self.is_connected:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _ = (exc_type, exc_val, exc_tb)
        self.close()
        return False

    def get_table(self, table_name: str) -> Optional[Table]:
        """Return a registered table or None."""
        with self._lock:
            return self._tables.get(table_name)

    def define_table(self, table_name: str, table: Table) -> None:
        """Stage a table definition for :meth:`register_all` without executing anything."""
        with self._lock:
            self._definitions[table_name] = table

    def create_table_sql(self, table_name: str, table: Optional[Table] = None) -> str:
        """Return the CREATE TABLE statement for a table without executing it.

        Looks the table up among staged definitions, then registered tables,
        when ``table`` is not given.

        Raises:
            KeyError: If no table is given and none is known under that name
        """
        if table is None:
            with self._lock:
                table = self._definitions.get(table_name, self._tables.get(table_name))
            if table is None:
                raise KeyError(table_name)
        return build_create_table_sql(table_name, table)

    def register_table(self, table_name: str, table: Table, best_effort: bool = False) -> str:
        """Create a table on the server and add it to the schema.

        See :meth:`TableManager.create_table`.
        """
        return self._table_manager.create_table(table_name, table, best_effort=best_effort)

    def register_all(self, best_effort: bool = False) -> Dict[str, Optional[Exception]]:
        """Register every staged and registered table independently.

        See :meth:`TableManager.create_all`.
        """
        return self._table_manager.create_all(best_effort=best_effort)

    def drop_table(self, table_name: str) -> str:
        """Drop a table on the server.

        The schema is not updated: the table stays registered.
        """
        return self._table_manager.drop_table(table_name)

    def insert_row(self, table_name: str, values: Dict[str, Any]) -> str:
        """Type-check a row against its table and insert it.

        See :meth:`DataManager.insert_row`.
        """
        return self._data_manager.insert_row(table_name, values)

    def insert_rows(
        self, table_name: str, rows: List[Dict[str, Any]]
    ) -> List[Optional[Exception]]:
        """Insert rows one by one. See :meth:`DataManager.insert_rows`."""
        return self._data_manager.insert_rows(table_name, rows)


def connect(settings: Optional[ConnectionSettings] = None, **settings_kwargs: Any) -> Database:
    """Create a Database session and connect it.

    Args:
        settings: Connection settings
        **settings_kwargs: Fields of :class:`ConnectionSettings`

    Returns:
        Connected Database

    Examples:
        # In-memory SQLite
        db = connect()

        # SQLite file
        db = connect(path="app.db")

        # PostgreSQL
        db = connect(backend="postgres", address="localhost:5432",
                     database_name="test", user="test_admin", password="1234")
    """
    return Database(settings, **settings_kwargs).connect()
