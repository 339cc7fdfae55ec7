"""Table management commands for tablewright CLI."""

import typer
from typing import Optional
from rich.console import Console
from rich.table import Table as RichTable

from tablewright.cli.utils import (
    get_config_with_data,
    get_declared_table,
    open_database,
    validate_required_arg,
)
from tablewright.errors import TablewrightError
from tablewright.managers.table import build_create_table_sql
from tablewright.utils.constraints import render_constraints

app = typer.Typer(help="Table management commands", invoke_without_command=True)
console = Console()


@app.callback()
def callback(ctx: typer.Context):
    """Show help when no subcommand is provided."""
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


@app.command(name="list")
def list_tables():
    """List the tables defined in the project config."""
    config, config_data = get_config_with_data()

    if not config_data.tables:
        console.print("[yellow]No tables defined[/yellow]")
        return

    table = RichTable(title=f"Tables in {config.config_path.name}", title_justify="left")
    table.add_column("Table", style="cyan")
    table.add_column("Column", style="green")
    table.add_column("Type", style="yellow")
    table.add_column("Constraints")

    for table_name, definition in config_data.tables.items():
        for column_name, column in definition.columns.items():
            size = f"({column.type.size})" if column.type.size is not None else ""
            table.add_row(
                table_name,
                column_name,
                f"{column.type.kind}{size}",
                render_constraints(column.constraints),
            )
            table_name = ""

    console.print(table)


@app.command()
def sql(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Name of the table"),
    best_effort: bool = typer.Option(
        False, "--best-effort", help="Emit columns with unsupported types without a type"
    ),
):
    """Print the CREATE TABLE statement of a table without executing it."""
    name = validate_required_arg(name, "name", ctx)
    _, config_data = get_config_with_data()
    definition = get_declared_table(config_data, name)

    try:
        typer.echo(build_create_table_sql(name, definition, best_effort=best_effort))
    except TablewrightError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)


@app.command()
def create(
    name: Optional[str] = typer.Argument(None, help="Name of the table"),
    all_tables: bool = typer.Option(
        False, "--all", "-a", help="Create every table defined in the config"
    ),
    best_effort: bool = typer.Option(
        False, "--best-effort", help="Emit columns with unsupported types without a type"
    ),
):
    """Create a table (or all tables) defined in the project config.

    Examples:
        tablewright table create users
        tablewright table create --all
    """
    if not name and not all_tables:
        console.print("[red]❌ Give a table name or use --all[/red]")
        raise typer.Exit(1)

    config, config_data = get_config_with_data()

    if all_tables:
        db = open_database(config)
        try:
            for table_name, definition in config_data.tables.items():
                db.define_table(table_name, definition)
            results = db.register_all(best_effort=best_effort)
        finally:
            db.close()

        failed = 0
        for table_name, error in results.items():
            if error is None:
                console.print(f"[green]✅ Created table '{table_name}'[/green]")
            else:
                failed += 1
                console.print(f"[red]❌ {table_name}: {error}[/red]")
        if failed:
            raise typer.Exit(1)
        return

    definition = get_declared_table(config_data, name)
    db = open_database(config)
    try:
        db.register_table(name, definition, best_effort=best_effort)
        console.print(
            f"[green]✅ Created table '{name}' with {len(definition.columns)} columns[/green]"
        )
    except TablewrightError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    finally:
        db.close()


@app.command()
def drop(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Name of the table to drop"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Force deletion without confirmation"
    ),
):
    """Drop a table from the database."""
    name = validate_required_arg(name, "name", ctx)
    config, _ = get_config_with_data()

    if not force:
        confirm = typer.confirm(f"Are you sure you want to drop table '{name}'?")
        if not confirm:
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    db = open_database(config)
    try:
        db.drop_table(name)
        console.print(f"[green]✅ Dropped table '{name}'[/green]")
    except TablewrightError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    finally:
        db.close()
