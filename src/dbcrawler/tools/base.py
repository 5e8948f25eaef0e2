"""Base classes for output commands.

This module defines the executable interface that renders a crawled
catalog, and the command provider interface that plugins implement to
make executables available under a command name.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Set, Type

from rich.console import Console

from dbcrawler.catalog import Catalog
from dbcrawler.crawl.options import CrawlerOptions, OutputOptions


class ExecutionError(Exception):
    """Exception raised when a command cannot be found or executed."""

    pass


class DeprecatedAccessError(RuntimeError):
    """Raised when a caller uses an entry point that is no longer supported."""

    pass


class Executable(ABC):
    """Abstract base class for commands that render a catalog.

    Example:
        >>> class CountExecutable(Executable):
        ...     def execute(self, catalog, console=None):
        ...         self.write_output(f"{len(catalog.tables)} tables", console)
    """

    def __init__(self, command: str):
        self.command = command
        self.crawler_options = CrawlerOptions()
        self.output_options = OutputOptions()

    @abstractmethod
    def execute(self, catalog: Catalog, console: Optional[Console] = None) -> None:
        """Render the catalog.

        Args:
            catalog: The crawled catalog.
            console: Rich console for terminal output. Uses stdout if not provided.

        Raises:
            ExecutionError: If the output cannot be produced.
        """
        pass

    def write_output(self, content: str, console: Optional[Console] = None) -> None:
        """Write content to the output file, or print it to the console."""
        output_file = self.output_options.output_file
        if output_file:
            try:
                output_file.write_text(content, encoding="utf-8")
            except OSError as e:
                raise ExecutionError(f"Cannot write {output_file}: {e}") from e
            return
        if console is None:
            console = Console()
        console.print(content, markup=False, highlight=False, soft_wrap=True)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(command={self.command!r})"


class CommandProvider(ABC):
    """Abstract base class for command provider plugins.

    Providers are discovered via entry points. Each provider advertises the
    commands it supports and builds a configured executable for them.
    """

    @abstractmethod
    def supported_commands(self) -> Set[str]:
        """Return the command names this provider handles."""
        pass

    def supports_command(self, command: str) -> bool:
        return command in self.supported_commands()

    @abstractmethod
    def configure_new_executable(
        self,
        command: str,
        crawler_options: CrawlerOptions,
        output_options: OutputOptions,
    ) -> Executable:
        """Create an executable for a command, configured with the options.

        Args:
            command: One of the supported command names.
            crawler_options: Options the catalog was crawled with.
            output_options: Where and how to write the output.

        Returns:
            A new executable.
        """
        pass

    @property
    @abstractmethod
    def help_resource(self) -> str:
        """Path of the help text, relative to the dbcrawler.tools package."""
        pass

    @property
    def help_additional_text(self) -> str:
        return ""

    def get_command(self) -> str:
        """Not supported. Use supported_commands() instead."""
        raise DeprecatedAccessError(
            f"{type(self).__name__}.get_command() is no longer supported; "
            "use supported_commands()"
        )

    def new_executable(
        self, crawler_options: CrawlerOptions, output_options: OutputOptions
    ) -> Executable:
        """Not supported. Use configure_new_executable() with a command name."""
        raise DeprecatedAccessError(
            f"{type(self).__name__}.new_executable() is no longer supported; "
            "use configure_new_executable(command, ...)"
        )


class SingleCommandProvider(CommandProvider):
    """A provider that binds one command name to one executable class.

    Subclasses set COMMAND, EXECUTABLE_CLASS and HELP_RESOURCE.
    """

    COMMAND: str = ""
    EXECUTABLE_CLASS: Type[Executable]
    HELP_RESOURCE: str = ""

    def supported_commands(self) -> Set[str]:
        return {self.COMMAND}

    def configure_new_executable(
        self,
        command: str,
        crawler_options: CrawlerOptions,
        output_options: OutputOptions,
    ) -> Executable:
        if not self.supports_command(command):
            raise ExecutionError(
                f"{type(self).__name__} does not support command '{command}'"
            )
        executable = self.EXECUTABLE_CLASS(self.COMMAND)
        executable.crawler_options = crawler_options
        executable.output_options = output_options
        return executable

    @property
    def help_resource(self) -> str:
        return self.HELP_RESOURCE


def help_resource_path(provider: CommandProvider) -> Path:
    return Path(__file__).parent / provider.help_resource


def read_help(provider: CommandProvider) -> str:
    """Read a provider's help text, followed by its additional text.

    Raises:
        ExecutionError: If the help resource cannot be read.
    """
    path = help_resource_path(provider)
    try:
        text = path.read_text(encoding="utf-8").rstrip()
    except OSError as e:
        raise ExecutionError(f"Help not found for {type(provider).__name__}: {path}") from e
    additional = provider.help_additional_text
    if additional:
        text = f"{text}\n\n{additional}"
    return text
