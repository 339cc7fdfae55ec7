"""Pytest configuration and shared fixtures."""

import pytest

from tablewright.core.database import Database
from tablewright.models import Column, Table


class RecordingConnection:
    """Connection double that records statements instead of executing them.

    Statements containing any of ``fail_on`` raise RuntimeError, the way a
    server would reject them.
    """

    def __init__(self, fail_on=()):
        self.statements = []
        self.fail_on = list(fail_on)
        self.closed = False

    def execute(self, sql):
        if self.closed:
            raise RuntimeError("Connection is closed")
        if any(marker in sql for marker in self.fail_on):
            raise RuntimeError(f"rejected: {sql}")
        self.statements.append(sql)
        return 0

    def close(self):
        self.closed = True


@pytest.fixture
def recording_connection():
    """A fresh recording connection."""
    return RecordingConnection()


@pytest.fixture
def db(recording_connection):
    """A Database session connected to the recording connection."""
    database = Database(connection_factory=lambda settings: recording_connection)
    database.connect()
    yield database
    database.close()


@pytest.fixture
def users_table():
    """The users table: id, username, password in that order."""
    return Table(
        columns={
            "id": Column.of("string", 255, primary_key=True),
            "username": Column.of("string", 255, not_null=True, unique=True),
            "password": Column.of("string", 255, not_null=True),
        }
    )


@pytest.fixture
def make_db():
    """Factory for Database sessions on a recording connection.

    Returns a function ``make_db(fail_on=()) -> (database, connection)``.
    """
    sessions = []

    def factory(fail_on=()):
        connection = RecordingConnection(fail_on=fail_on)
        database = Database(connection_factory=lambda settings: connection)
        database.connect()
        sessions.append(database)
        return database, connection

    yield factory
    for database in sessions:
        database.close()
