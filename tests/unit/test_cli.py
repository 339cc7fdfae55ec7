"""CLI tests using CliRunner against a SQLite project."""

import json
import sqlite3

import pytest
from typer.testing import CliRunner

from tablewright.cli.main import app
from tablewright.config import Config, ProjectConfig
from tablewright.models import Column, ConnectionSettings, Table

runner = CliRunner()


@pytest.fixture
def project(tmp_path, monkeypatch):
    """A project with a users table and a measurements table."""
    monkeypatch.setenv("TABLEWRIGHT_PROJECT_DIR", str(tmp_path))
    for name in ("TABLEWRIGHT_BACKEND", "TABLEWRIGHT_SQLITE_PATH"):
        monkeypatch.delenv(name, raising=False)

    Config(tmp_path).save(
        ProjectConfig(
            connection=ConnectionSettings(path="app.db"),
            tables={
                "users": Table(
                    columns={
                        "id": Column.of("string", 255, primary_key=True),
                        "username": Column.of("string", 255, not_null=True, unique=True),
                        "password": Column.of("string", 255, not_null=True),
                    }
                ),
                "measurements": Table(
                    columns={
                        "id": Column.of("int32", primary_key=True),
                        "weight": Column.of("float32"),
                        "active": Column.of("bool"),
                    }
                ),
            },
        )
    )
    return tmp_path


def fetch(project, sql):
    conn = sqlite3.connect(project / "app.db")
    try:
        return conn.execute(sql).fetchall()
    finally:
        conn.close()


class TestProjectCommands:
    """Test init and version."""

    def test_init(self, tmp_path):
        result = runner.invoke(app, ["init", str(tmp_path)])
        assert result.exit_code == 0
        assert "Initialized tablewright project" in result.output
        assert (tmp_path / "tablewright.toml").exists()

    def test_init_twice(self, tmp_path):
        runner.invoke(app, ["init", str(tmp_path)])
        result = runner.invoke(app, ["init", str(tmp_path)])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "tablewright version" in result.output

    def test_missing_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TABLEWRIGHT_PROJECT_DIR", str(tmp_path))
        result = runner.invoke(app, ["table", "list"])
        assert result.exit_code == 1
        assert "tablewright init" in result.output


class TestTableCommands:
    """Test the table subcommands."""

    def test_list(self, project):
        result = runner.invoke(app, ["table", "list"])
        assert result.exit_code == 0
        assert "users" in result.output
        assert "measurements" in result.output

    def test_sql(self, project):
        result = runner.invoke(app, ["table", "sql", "users"])
        assert result.exit_code == 0
        assert result.output.strip() == (
            "CREATE TABLE IF NOT EXISTS users (id VARCHAR(255) PRIMARY KEY, "
            "username VARCHAR(255) NOT NULL UNIQUE, password VARCHAR(255) NOT NULL);"
        )
        assert not (project / "app.db").exists()

    def test_sql_undeclared_table(self, project):
        result = runner.invoke(app, ["table", "sql", "orders"])
        assert result.exit_code == 1
        assert "not defined" in result.output

    def test_create(self, project):
        result = runner.invoke(app, ["table", "create", "users"])
        assert result.exit_code == 0
        assert "Created table 'users'" in result.output
        assert fetch(project, "SELECT name FROM sqlite_master WHERE type='table'") == [
            ("users",)
        ]

    def test_create_requires_name_or_all(self, project):
        result = runner.invoke(app, ["table", "create"])
        assert result.exit_code == 1

    def test_create_all(self, project):
        result = runner.invoke(app, ["table", "create", "--all"])
        assert result.exit_code == 0
        tables = fetch(
            project, "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        )
        assert tables == [("measurements",), ("users",)]

    def test_drop(self, project):
        runner.invoke(app, ["table", "create", "users"])
        result = runner.invoke(app, ["table", "drop", "users", "--force"])
        assert result.exit_code == 0
        assert fetch(project, "SELECT name FROM sqlite_master WHERE type='table'") == []

    def test_drop_cancelled(self, project):
        runner.invoke(app, ["table", "create", "users"])
        result = runner.invoke(app, ["table", "drop", "users"], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert fetch(project, "SELECT name FROM sqlite_master WHERE type='table'") == [
            ("users",)
        ]

    def test_drop_missing_table(self, project):
        result = runner.invoke(app, ["table", "drop", "orders", "--force"])
        assert result.exit_code == 1


class TestDataCommands:
    """Test the data subcommands."""

    def test_insert(self, project):
        row = {"id": "2n1kj", "username": "John", "password": "1234"}
        result = runner.invoke(app, ["data", "insert", "users", "--data", json.dumps(row)])
        assert result.exit_code == 0
        assert fetch(project, "SELECT id, username, password FROM users") == [
            ("2n1kj", "John", "1234")
        ]

    def test_insert_narrow_numbers(self, project):
        row = {"id": 7, "weight": 2.5, "active": True}
        result = runner.invoke(
            app, ["data", "insert", "measurements", "--data", json.dumps(row)]
        )
        assert result.exit_code == 0
        assert fetch(project, "SELECT id, weight, active FROM measurements") == [(7, 2.5, 1)]

    def test_insert_type_mismatch(self, project):
        result = runner.invoke(
            app, ["data", "insert", "users", "--data", '{"id": 5}']
        )
        assert result.exit_code == 1
        assert "Failed to insert" in result.output

    def test_insert_out_of_range_number(self, project):
        row = {"id": 2**31, "weight": 1.0, "active": True}
        result = runner.invoke(
            app, ["data", "insert", "measurements", "--data", json.dumps(row)]
        )
        assert result.exit_code == 1
        assert "int32" in result.output
        assert fetch(project, "SELECT COUNT(*) FROM measurements") == [(0,)]

    def test_bulk_insert_out_of_range_row(self, project):
        rows = [{"id": 1}, {"id": 2**40}, {"id": 3}]
        result = runner.invoke(
            app, ["data", "bulk-insert", "measurements", "--data", json.dumps(rows)]
        )
        assert result.exit_code == 1
        assert "Row 1" in result.output
        assert fetch(project, "SELECT id FROM measurements ORDER BY id") == [(1,), (3,)]

    def test_insert_invalid_json(self, project):
        result = runner.invoke(app, ["data", "insert", "users", "--data", "{id"])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_insert_list_suggests_bulk(self, project):
        result = runner.invoke(app, ["data", "insert", "users", "--data", "[]"])
        assert result.exit_code == 1
        assert "bulk-insert" in result.output

    def test_bulk_insert(self, project):
        rows = [
            {"id": "a", "username": "ann", "password": "x"},
            {"id": "b", "username": "bob", "password": "y"},
        ]
        result = runner.invoke(
            app, ["data", "bulk-insert", "users", "--data", json.dumps(rows)]
        )
        assert result.exit_code == 0
        assert fetch(project, "SELECT id FROM users ORDER BY id") == [("a",), ("b",)]

    def test_bulk_insert_reports_failures(self, project):
        rows = [
            {"id": "a", "username": "ann", "password": "x"},
            {"id": "b", "nickname": "bob"},
            {"id": "c", "username": "cat", "password": "z"},
        ]
        result = runner.invoke(
            app, ["data", "bulk-insert", "users", "--data", json.dumps(rows)]
        )
        assert result.exit_code == 1
        assert "Row 1" in result.output
        assert fetch(project, "SELECT id FROM users ORDER BY id") == [("a",), ("c",)]
