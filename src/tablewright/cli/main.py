"""Main CLI entry point for tablewright."""

import logging
from pathlib import Path
from typing import Optional

import typer

from tablewright.cli.commands import data, table

app = typer.Typer(
    name="tablewright",
    help="tablewright - declarative tables materialized as SQL",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every executed statement"
    ),
):
    """
    tablewright - declarative tables materialized as SQL
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        # No subcommand was invoked, show help
        print(ctx.get_help())
        raise typer.Exit(0)


app.add_typer(table.app, name="table", help="Table management commands")
app.add_typer(data.app, name="data", help="Data manipulation commands")


@app.command()
def init(
    path: Optional[Path] = typer.Argument(
        None, help="Directory to initialize project in (default: current directory)"
    ),
    sqlite_path: str = typer.Option(
        "tablewright.db", "--sqlite-path", help="SQLite database file"
    ),
):
    """Initialize a new tablewright project."""
    from tablewright.config import Config

    project_path = path or Path.cwd()

    try:
        Config(project_path).init_project(sqlite_path=sqlite_path)
        typer.secho(
            f"✅ Initialized tablewright project in {project_path}", fg=typer.colors.GREEN
        )
    except FileExistsError:
        typer.secho(f"❌ Project already exists in {project_path}", fg=typer.colors.RED)
        raise typer.Exit(1)


@app.command()
def version():
    """Show tablewright version."""
    from tablewright import __version__

    typer.echo(f"tablewright version {__version__}")


if __name__ == "__main__":
    app()
