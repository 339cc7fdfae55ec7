"""CLI command groups for tablewright."""

from tablewright.cli.commands import table, data

__all__ = ["table", "data"]
