"""CLI entry point for dbcrawler."""

import logging
import re
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from dbcrawler.crawl import CrawlError, OutputOptions, SqliteMetadataSession, crawl_catalog
from dbcrawler.tools import (
    ExecutionError,
    get_command_provider,
    list_commands,
    new_executable,
    read_help,
)
from dbcrawler.utils.config import load_config
from dbcrawler.utils.logging import setup_logging

app = typer.Typer(
    name="dbcrawler",
    help="Crawl database metadata into a catalog and render it.",
    invoke_without_command=False,
)
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main():
    """dbcrawler - database metadata crawler."""
    pass


@app.command()
def commands() -> None:
    """List the available output commands."""
    names = list_commands()
    if not names:
        console.print("[yellow]No commands available[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Available commands", title_style="bold")
    table.add_column("Command", style="cyan")
    table.add_column("Provider", style="green")
    for name in names:
        provider = get_command_provider(name)
        table.add_row(name, type(provider).__name__)
    console.print(table)


@app.command(name="help")
def help_command(
    command: str = typer.Argument(..., help="Command to show help for"),
) -> None:
    """Show the help text of an output command."""
    try:
        provider = get_command_provider(command)
        console.print(read_help(provider), markup=False, highlight=False)
    except ExecutionError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def crawl(
    database: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Path to the SQLite database to crawl",
    ),
    command: Optional[str] = typer.Option(
        None,
        "--command",
        "-c",
        help="Output command (default: list, or from config)",
    ),
    template: Optional[Path] = typer.Option(
        None,
        "--template",
        help="Jinja2 template for the template command",
    ),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output-file",
        "-o",
        help="Write output to file instead of stdout",
    ),
    schemas: Optional[str] = typer.Option(
        None,
        "--schemas",
        help="Regular expression for schemas to include",
    ),
    tables: Optional[str] = typer.Option(
        None,
        "--tables",
        help="Regular expression for tables to include, matched on schema.table",
    ),
    routines: Optional[str] = typer.Option(
        None,
        "--routines",
        help="Regular expression for routines to include",
    ),
    title: Optional[str] = typer.Option(
        None,
        "--title",
        help="Title for the output (default: database file name)",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to dbcrawler.toml (default: ./dbcrawler.toml)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log details of unsupported metadata calls",
    ),
) -> None:
    """
    Crawl a database and render the catalog with an output command.

    Examples:

        # Summarize all tables
        dbcrawler crawl shop.db

        # Only tables whose names start with "order"
        dbcrawler crawl shop.db --tables "main\\.order.*"

        # Render with a template into a file
        dbcrawler crawl shop.db -c template --template docs.md.j2 -o docs.md
    """
    config = load_config(config_file)

    setup_logging(verbose or bool(config.verbose), console=err_console)
    diagnostics = logging.getLogger("dbcrawler.crawl.diagnostics")

    command = command or config.command or "list"
    template = template or (Path(config.template) if config.template else None)
    output_file = output_file or (
        Path(config.output_file) if config.output_file else None
    )

    try:
        crawler_options = config.crawler_options(
            schemas=schemas, tables=tables, routines=routines
        )
    except re.error as e:
        err_console.print(f"[red]Error:[/red] Invalid pattern: {e}")
        raise typer.Exit(1)

    output_options = OutputOptions(
        output_file=output_file,
        template=template,
        title=title or config.title or database.name,
    )

    try:
        executable = new_executable(command, crawler_options, output_options)

        capabilities = config.capabilities
        with SqliteMetadataSession(database) as session:
            catalog = crawl_catalog(
                session,
                crawler_options,
                catalog_name=database.stem,
                supports_catalogs=capabilities.supports_catalogs if capabilities else None,
                supports_schemas=capabilities.supports_schemas if capabilities else None,
                diagnostics=diagnostics,
            )

        executable.execute(catalog, console)

        if output_file:
            console.print(
                f"[green]Success:[/green] Output written to {output_file}"
            )

    except ExecutionError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except CrawlError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except Exception as e:
        err_console.print(f"[red]Error:[/red] Unexpected error: {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
