"""Utility functions for CLI commands."""

from typing import Any, Dict, Optional, Tuple

import typer
from pydantic import ValidationError
from rich.console import Console

from tablewright.config import Config, ProjectConfig
from tablewright.core.database import Database
from tablewright.errors import ConnectionFailedError
from tablewright.models import FloatVal, IntVal, Table
from tablewright.models.values import FLOAT_KINDS, INT_KINDS

console = Console()


def get_config_with_data() -> Tuple[Config, ProjectConfig]:
    """Get config and load data from the project directory.

    Returns:
        tuple: (config, config_data)
    """
    config = Config()
    try:
        config_data = config.load()
    except FileNotFoundError:
        console.print("[red]❌ Config file not found. Run 'tablewright init' first.[/red]")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]❌ Invalid configuration in {config.config_path}:[/red]\n{e}")
        raise typer.Exit(1)

    return config, config_data


def validate_required_arg(
    value: Optional[str], arg_name: str, ctx: typer.Context
) -> str:
    """Validate a required argument and show help if missing.

    Raises:
        typer.Exit: If value is None
    """
    if value is None:
        console.print(ctx.get_help())
        console.print(f"\n[red]❌ Error: Missing argument '{arg_name.upper()}'.[/red]")
        raise typer.Exit(1)
    return value


def get_declared_table(config_data: ProjectConfig, table_name: str) -> Table:
    """Look up a table declared in the project config.

    Raises:
        typer.Exit: If no such table is declared
    """
    table = config_data.tables.get(table_name)
    if table is None:
        console.print(f"[red]❌ Table '{table_name}' is not defined in the config[/red]")
        raise typer.Exit(1)
    return table


def open_database(config: Config) -> Database:
    """Create a connected Database session for the project.

    Raises:
        typer.Exit: If the connection fails
    """
    db = Database(config.connection_settings())
    try:
        db.connect()
    except ConnectionFailedError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    return db


def coerce_row(table: Table, row: Dict[str, Any]) -> Dict[str, Any]:
    """Give JSON numbers the width of the column they are inserted into.

    JSON has a single integer and a single float type, which would always be
    64-bit. Other values are passed through unchanged and type-checked as usual.

    Raises:
        UnsupportedValueTypeError: If an integer is out of range for its column
    """
    coerced = {}
    for key, value in row.items():
        column = table.get_column(key)
        if column is not None and not isinstance(value, bool):
            kind = column.type.kind
            if kind in INT_KINDS and isinstance(value, int):
                value = IntVal(value, kind=kind)
            elif kind in FLOAT_KINDS and isinstance(value, (int, float)):
                value = FloatVal(value, kind=kind)
        coerced[key] = value
    return coerced
