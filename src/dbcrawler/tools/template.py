"""The `template` command: render the catalog with a Jinja2 template.

The template gets the catalog and its contents as variables, and supports
the full Jinja2 syntax, including includes relative to the template file.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    BaseLoader,
    Environment,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    UndefinedError,
)
from rich.console import Console

from dbcrawler.catalog import Catalog
from dbcrawler.tools.base import Executable, ExecutionError, SingleCommandProvider
from dbcrawler.utils.file_utils import read_text_file


class RelativeFileSystemLoader(BaseLoader):
    """A Jinja2 loader that resolves paths relative to the template file.

    This loader allows templates to include other templates using paths
    relative to the including file's location.
    """

    def __init__(self, base_path: Optional[Path] = None):
        """Initialize the loader.

        Args:
            base_path: The base path for resolving relative includes.
                      If None, includes will not work.
        """
        self.base_path = base_path

    def get_source(self, environment, template):
        """Load a template from the file system.

        Raises:
            TemplateNotFound: If the template cannot be found.
        """
        if self.base_path is None:
            raise TemplateNotFound(template)

        template_path = self.base_path / template

        if not template_path.exists():
            raise TemplateNotFound(template)

        try:
            source = template_path.read_text(encoding="utf-8")
            return source, str(template_path), lambda: True
        except (OSError, IOError) as e:
            raise TemplateNotFound(template) from e


def template_variables(catalog: Catalog, title: Optional[str] = None) -> Dict[str, Any]:
    """Variables made available to catalog templates."""
    return {
        "title": title or catalog.name or "Catalog",
        "catalog": catalog,
        "schemas": catalog.schemas,
        "tables": catalog.tables,
        "routines": catalog.routines,
        "column_data_types": catalog.column_data_types,
        "system_column_data_types": catalog.system_column_data_types,
    }


def render_template(
    source: str,
    catalog: Catalog,
    title: Optional[str] = None,
    source_path: Optional[Path] = None,
) -> str:
    """Render a Jinja2 template string against a catalog.

    Args:
        source: The template text.
        catalog: The crawled catalog.
        title: Title exposed to the template. Defaults to the catalog name.
        source_path: Path of the template file, enabling relative includes.

    Returns:
        The rendered text.

    Raises:
        ExecutionError: If the template has syntax errors or references
                        undefined variables.
    """
    base_path = None
    if source_path is not None:
        base_path = source_path.parent if source_path.is_file() else source_path
    loader = RelativeFileSystemLoader(base_path)

    env = Environment(
        loader=loader,
        trim_blocks=False,
        lstrip_blocks=False,
        autoescape=False,
        undefined=StrictUndefined,
    )

    try:
        template = env.from_string(source)
        return template.render(**template_variables(catalog, title))

    except UndefinedError as e:
        raise ExecutionError(f"Undefined variable in template: {e}") from e

    except TemplateNotFound as e:
        raise ExecutionError(f"Template include not found: {e}") from e

    except TemplateError as e:
        raise ExecutionError(f"Template error: {e}") from e


class TemplateExecutable(Executable):
    """Renders the catalog with the template given in the output options."""

    COMMAND = "template"

    def execute(self, catalog: Catalog, console: Optional[Console] = None) -> None:
        template_path = self.output_options.template
        if template_path is None:
            raise ExecutionError("The template command needs a template file")
        try:
            source = read_text_file(template_path)
        except (OSError, ValueError) as e:
            raise ExecutionError(str(e)) from e

        output = render_template(
            source,
            catalog,
            title=self.output_options.title,
            source_path=template_path,
        )
        self.write_output(output, console)


class TemplateCommandProvider(SingleCommandProvider):
    """Provides the `template` command."""

    COMMAND = TemplateExecutable.COMMAND
    EXECUTABLE_CLASS = TemplateExecutable
    HELP_RESOURCE = "help/template.txt"

    @property
    def help_additional_text(self) -> str:
        return "Template variables: " + ", ".join(
            sorted(template_variables(Catalog()).keys())
        )
