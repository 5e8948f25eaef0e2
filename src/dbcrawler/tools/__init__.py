"""Output commands for dbcrawler.

This package provides a plugin system for commands that render a crawled
catalog. Command providers are discovered through the `dbcrawler.commands`
entry point group.

Built-in commands:
- `list`: Rich table summary of tables and routines
- `template`: Render the catalog with a Jinja2 template

Example:
    >>> from dbcrawler.tools import new_executable
    >>> from dbcrawler.crawl import CrawlerOptions, OutputOptions
    >>> executable = new_executable("list", CrawlerOptions(), OutputOptions())
    >>> executable.execute(catalog)
"""

from dbcrawler.tools.base import (
    CommandProvider,
    DeprecatedAccessError,
    Executable,
    ExecutionError,
    SingleCommandProvider,
    read_help,
)
from dbcrawler.tools.listing import ListCommandProvider, ListExecutable
from dbcrawler.tools.registry import (
    clear_registry,
    get_command_provider,
    list_commands,
    new_executable,
    register_command_provider,
)
from dbcrawler.tools.template import TemplateCommandProvider, TemplateExecutable

__all__ = [
    # Base classes
    "Executable",
    "CommandProvider",
    "SingleCommandProvider",
    "ExecutionError",
    "DeprecatedAccessError",
    "read_help",
    # Built-in commands
    "ListCommandProvider",
    "ListExecutable",
    "TemplateCommandProvider",
    "TemplateExecutable",
    # Registry functions
    "get_command_provider",
    "list_commands",
    "new_executable",
    "register_command_provider",
    "clear_registry",
]
