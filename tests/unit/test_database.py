"""Tests for the Database session lifecycle."""

import threading

import pytest

from tablewright import connect
from tablewright.core.connection import SQLiteConnection
from tablewright.core.database import Database
from tablewright.errors import ConnectionFailedError, NotConnectedError
from tablewright.models import Column, ConnectionSettings, Table


class TestDatabaseLifecycle:
    """Test connecting, reconnecting and closing."""

    def test_starts_unconnected_and_empty(self):
        db = Database()
        assert not db.is_connected
        assert db.connection is None
        assert db.tables == {}
        assert db.definitions == {}

    def test_settings_from_keywords(self):
        db = Database(
            backend="postgres",
            address="localhost:5432",
            database_name="test",
            user="test_admin",
            password="1234",
        )
        assert db.settings == ConnectionSettings(
            backend="postgres",
            address="localhost:5432",
            database_name="test",
            user="test_admin",
            password="1234",
        )

    def test_settings_overrides(self):
        base = ConnectionSettings(path="a.db")
        db = Database(base, path="b.db")
        assert db.settings.path == "b.db"
        assert base.path == "a.db"

    def test_connect(self, recording_connection):
        db = Database(connection_factory=lambda settings: recording_connection)
        assert db.connect() is db
        assert db.is_connected
        assert db.connection is recording_connection

    def test_failed_connect_stays_unconnected(self):
        def refuse(settings):
            raise OSError("connection refused")

        db = Database(connection_factory=refuse)
        with pytest.raises(ConnectionFailedError) as exc:
            db.connect()
        assert "connection refused" in str(exc.value)
        assert isinstance(exc.value.__cause__, OSError)
        assert not db.is_connected

    def test_reconnect_replaces_connection(self, recording_connection):
        connections = []

        def factory(settings):
            connections.append(type(recording_connection)())
            return connections[-1]

        db = Database(connection_factory=factory)
        db.connect()
        db.connect()

        assert db.connection is connections[1]
        assert connections[0].closed
        assert not connections[1].closed

    def test_close_keeps_schema(self, db, users_table):
        db.register_table("users", users_table)
        db.close()

        assert not db.is_connected
        assert "users" in db.tables
        with pytest.raises(NotConnectedError):
            db.insert_row("users", {"id": "a"})

    def test_close_twice(self, db):
        db.close()
        db.close()
        assert not db.is_connected

    def test_context_manager(self, recording_connection):
        with Database(connection_factory=lambda settings: recording_connection) as db:
            assert db.is_connected
        assert recording_connection.closed
        assert not db.is_connected

    def test_connect_helper_uses_sqlite_memory(self):
        db = connect()
        try:
            assert isinstance(db.connection, SQLiteConnection)
            assert db.connection.in_memory
        finally:
            db.close()

    def test_sessions_are_independent(self, make_db, users_table):
        first, _ = make_db()
        second, _ = make_db()

        first.register_table("users", users_table)

        assert "users" in first.tables
        assert second.tables == {}


class TestSchemaAccess:
    """Test the schema views exposed by a session."""

    def test_tables_is_a_copy(self, db, users_table):
        db.register_table("users", users_table)
        db.tables.clear()
        assert "users" in db.tables

    def test_create_table_sql_preview(self, db, recording_connection, users_table):
        db.define_table("users", users_table)
        statement = db.create_table_sql("users")

        assert statement.startswith("CREATE TABLE IF NOT EXISTS users (")
        assert recording_connection.statements == []

    def test_create_table_sql_for_explicit_table(self, users_table):
        statement = Database().create_table_sql("accounts", users_table)
        assert statement.startswith("CREATE TABLE IF NOT EXISTS accounts (")

    def test_create_table_sql_unknown(self):
        with pytest.raises(KeyError):
            Database().create_table_sql("users")

    def test_concurrent_registration(self, db):
        tables = {
            f"t{i}": Table(columns={"id": Column.of("int64", primary_key=True)})
            for i in range(20)
        }
        threads = [
            threading.Thread(target=db.register_table, args=(name, table))
            for name, table in tables.items()
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert set(db.tables) == set(tables)
