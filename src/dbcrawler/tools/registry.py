"""Command provider registry with plugin discovery via entry points.

This module handles discovering command providers from Python entry points,
allowing third-party packages to register custom output commands.
"""

import logging
from importlib.metadata import entry_points
from typing import Dict, List, Type

from dbcrawler.crawl.options import CrawlerOptions, OutputOptions
from dbcrawler.tools.base import CommandProvider, Executable, ExecutionError

logger = logging.getLogger(__name__)

# Cache for discovered command providers
_provider_cache: Dict[str, Type[CommandProvider]] = {}
_discovery_done: bool = False


def _discover_command_providers() -> None:
    """Discover command providers from entry points.

    Uses importlib.metadata to find all registered providers
    in the 'dbcrawler.commands' entry point group.
    """
    global _discovery_done, _provider_cache

    if _discovery_done:
        return

    for ep in entry_points(group="dbcrawler.commands"):
        try:
            provider_class = ep.load()
        except Exception as e:
            # Skip providers that fail to load, such as ones with
            # missing optional dependencies
            logger.debug("Skipping command provider %s: %s", ep.name, e)
            continue
        if isinstance(provider_class, type) and issubclass(provider_class, CommandProvider):
            _provider_cache.setdefault(ep.name, provider_class)

    _discovery_done = True


def get_command_provider(command: str) -> CommandProvider:
    """Get an instance of the provider that supports a command.

    Args:
        command: The command name (e.g., "list", "template").

    Returns:
        A new instance of the first provider, by registration name, that
        supports the command.

    Raises:
        ExecutionError: If no provider supports the command.

    Example:
        >>> provider = get_command_provider("list")
        >>> provider.supports_command("list")
        True
    """
    _discover_command_providers()

    for name in sorted(_provider_cache):
        provider = _provider_cache[name]()
        if provider.supports_command(command):
            return provider

    available = ", ".join(list_commands())
    raise ExecutionError(
        f"Unknown command '{command}'. Available commands: {available or 'none'}"
    )


def list_commands() -> List[str]:
    """List all available command names.

    Returns:
        A sorted list of the commands supported by registered providers.
    """
    _discover_command_providers()
    commands = set()
    for provider_class in _provider_cache.values():
        commands.update(provider_class().supported_commands())
    return sorted(commands)


def new_executable(
    command: str, crawler_options: CrawlerOptions, output_options: OutputOptions
) -> Executable:
    """Create a configured executable for a command.

    Raises:
        ExecutionError: If no provider supports the command.
    """
    provider = get_command_provider(command)
    return provider.configure_new_executable(command, crawler_options, output_options)


def register_command_provider(name: str, provider_class: Type[CommandProvider]) -> None:
    """Register a command provider programmatically.

    This is primarily useful for testing or for registering providers
    that aren't installed via entry points.

    Args:
        name: The name to register the provider under.
        provider_class: The provider class to register.

    Raises:
        ValueError: If provider_class is not a subclass of CommandProvider.
    """
    if not isinstance(provider_class, type) or not issubclass(
        provider_class, CommandProvider
    ):
        raise ValueError(f"{provider_class} must be a subclass of CommandProvider")

    _provider_cache[name] = provider_class


def clear_registry() -> None:
    """Clear the command provider registry.

    This is primarily useful for testing.
    """
    global _discovery_done, _provider_cache
    _provider_cache.clear()
    _discovery_done = False
