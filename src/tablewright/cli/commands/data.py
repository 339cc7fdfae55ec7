"""Data manipulation commands for tablewright CLI."""

import json

import typer
from rich.console import Console

from tablewright.cli.utils import (
    coerce_row,
    get_config_with_data,
    get_declared_table,
    open_database,
)
from tablewright.errors import TablewrightError

app = typer.Typer(help="Data manipulation commands", invoke_without_command=True)
console = Console()


@app.callback()
def callback(ctx: typer.Context):
    """Show help when no subcommand is provided."""
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


def _parse_json(data: str):
    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        console.print(f"[red]❌ Invalid JSON format: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def insert(
    table_name: str = typer.Argument(..., help="Name of table to insert into"),
    data: str = typer.Option(..., "--data", "-d", help="JSON object to insert"),
):
    """Insert a single row into a table using JSON data.

    The table is created first if it does not exist yet.

    Examples:
        tablewright data insert users --data '{"id": "2n1kj", "username": "John"}'
    """
    config, config_data = get_config_with_data()
    definition = get_declared_table(config_data, table_name)

    row = _parse_json(data)
    if isinstance(row, list):
        console.print("[red]❌ For multiple rows, use 'tablewright data bulk-insert'[/red]")
        raise typer.Exit(1)
    if not isinstance(row, dict):
        console.print("[red]❌ Data must be a JSON object[/red]")
        raise typer.Exit(1)

    db = open_database(config)
    try:
        db.register_table(table_name, definition)
        db.insert_row(table_name, coerce_row(definition, row))
        console.print(f"[green]✅ Inserted row into '{table_name}'[/green]")
    except TablewrightError as e:
        console.print(f"[red]❌ Failed to insert: {e}[/red]")
        raise typer.Exit(1)
    finally:
        db.close()


@app.command(name="bulk-insert")
def bulk_insert(
    table_name: str = typer.Argument(..., help="Name of table to insert into"),
    data: str = typer.Option(..., "--data", "-d", help="JSON array of objects to insert"),
):
    """Insert several rows, one statement per row.

    Rows are independent: a failing row is reported and the rest are still
    inserted.

    Examples:
        tablewright data bulk-insert users --data '[{"id": "a"}, {"id": "b"}]'
    """
    config, config_data = get_config_with_data()
    definition = get_declared_table(config_data, table_name)

    rows = _parse_json(data)
    if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        console.print("[red]❌ Data must be a JSON array of objects[/red]")
        raise typer.Exit(1)

    db = open_database(config)
    try:
        db.register_table(table_name, definition)
        results = []
        for row in rows:
            # A number that does not fit its column fails only its own row
            try:
                coerced = coerce_row(definition, row)
            except TablewrightError as e:
                results.append(e)
                continue
            results.extend(db.insert_rows(table_name, [coerced]))
    except TablewrightError as e:
        console.print(f"[red]❌ Failed to insert: {e}[/red]")
        raise typer.Exit(1)
    finally:
        db.close()

    failed = [(index, error) for index, error in enumerate(results) if error is not None]
    console.print(
        f"[green]✅ Inserted {len(results) - len(failed)} of {len(results)} rows into '{table_name}'[/green]"
    )
    for index, error in failed:
        console.print(f"[red]❌ Row {index}: {error}[/red]")
    if failed:
        raise typer.Exit(1)
