"""The `list` command: a terminal summary of the crawled catalog."""

from io import StringIO
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dbcrawler.catalog import Catalog
from dbcrawler.tools.base import Executable, SingleCommandProvider


class ListExecutable(Executable):
    """Prints the tables and routines in the catalog as Rich tables."""

    COMMAND = "list"

    def execute(self, catalog: Catalog, console: Optional[Console] = None) -> None:
        if self.output_options.output_file:
            # Render to a plain string for file output
            buffer = StringIO()
            self._print(catalog, Console(file=buffer, force_terminal=False, width=120))
            self.write_output(buffer.getvalue(), console)
            return
        self._print(catalog, console or Console())

    def _print(self, catalog: Catalog, console: Console) -> None:
        title = self.output_options.title or catalog.name or "Catalog"
        if not catalog.tables and not catalog.routines:
            console.print(
                f"[yellow]No tables or routines found in {escape(title)}.[/yellow]"
            )
            return

        tables = Table(title=escape(title), title_style="bold")
        tables.add_column("Table", style="cyan")
        tables.add_column("Type", style="green")
        tables.add_column("Columns", justify="right")
        for schema_ref in catalog.schemas:
            for table in catalog.tables_in(schema_ref):
                tables.add_row(
                    escape(table.full_name),
                    table.table_type,
                    str(len(table.columns)),
                )
        console.print(tables)

        if catalog.routines:
            console.print()
            routines = Table(title="Routines", title_style="bold")
            routines.add_column("Routine", style="cyan")
            routines.add_column("Specific Name")
            routines.add_column("Type", style="green")
            for schema_ref in catalog.schemas:
                for routine in catalog.routines_in(schema_ref):
                    routines.add_row(
                        escape(routine.full_name),
                        escape(routine.specific_name or ""),
                        routine.routine_type.value,
                    )
            console.print(routines)

        console.print(
            f"\nTotal: {len(catalog.tables)} table(s), "
            f"{len(catalog.routines)} routine(s), "
            f"{len(catalog.column_data_types)} user-defined data type(s)"
        )


class ListCommandProvider(SingleCommandProvider):
    """Provides the `list` command."""

    COMMAND = ListExecutable.COMMAND
    EXECUTABLE_CLASS = ListExecutable
    HELP_RESOURCE = "help/list.txt"
