"""Configuration management for dbcrawler.

Loads configuration from dbcrawler.toml in the current working directory.
"""

import tomllib
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.markup import escape

from dbcrawler.crawl.options import CrawlerOptions
from dbcrawler.inclusion.rules import rule_from_patterns

console = Console(stderr=True)


class FiltersConfig(BaseModel):
    """Regular expressions for the inclusion rules.

    Patterns are matched against the full dotted name of an object, such
    as "main.orders". All fields are optional.
    """

    schema_include: Optional[str] = None
    schema_exclude: Optional[str] = None
    table_include: Optional[str] = None
    table_exclude: Optional[str] = None
    routine_include: Optional[str] = None
    routine_exclude: Optional[str] = None


class CapabilitiesConfig(BaseModel):
    """Overrides for capabilities a driver reports wrongly."""

    supports_catalogs: Optional[bool] = None
    supports_schemas: Optional[bool] = None


class ConfigSettings(BaseModel):
    """Configuration settings for dbcrawler.

    All fields are optional. None values indicate the setting was not
    specified in the config file.
    """

    command: Optional[str] = None
    template: Optional[str] = None
    output_file: Optional[str] = None
    title: Optional[str] = None
    verbose: Optional[bool] = None
    retrieve_columns: Optional[bool] = None
    retrieve_routines: Optional[bool] = None
    filters: Optional[FiltersConfig] = None
    type_map: Optional[Dict[str, str]] = None
    capabilities: Optional[CapabilitiesConfig] = None

    def crawler_options(
        self,
        schemas: Optional[str] = None,
        tables: Optional[str] = None,
        routines: Optional[str] = None,
    ) -> CrawlerOptions:
        """Build crawler options, with explicit include patterns taking
        priority over the configured ones."""
        filters = self.filters or FiltersConfig()
        return CrawlerOptions(
            schema_inclusion_rule=rule_from_patterns(
                schemas or filters.schema_include, filters.schema_exclude
            ),
            table_inclusion_rule=rule_from_patterns(
                tables or filters.table_include, filters.table_exclude
            ),
            routine_inclusion_rule=rule_from_patterns(
                routines or filters.routine_include, filters.routine_exclude
            ),
            retrieve_columns=(
                True if self.retrieve_columns is None else self.retrieve_columns
            ),
            retrieve_routines=(
                True if self.retrieve_routines is None else self.retrieve_routines
            ),
            type_map_overrides=self.type_map or {},
        )


CONFIG_FILE_NAME = "dbcrawler.toml"


def find_config_file(start_path: Optional[Path] = None) -> Optional[Path]:
    """Return the dbcrawler.toml in `start_path` (default: cwd), if there is one."""
    config_path = (start_path or Path.cwd()) / CONFIG_FILE_NAME
    return config_path if config_path.is_file() else None


def _fall_back(message: str) -> ConfigSettings:
    console.print(f"[yellow]Warning:[/yellow] {message}")
    console.print("[yellow]Using default settings[/yellow]")
    return ConfigSettings()


def load_config(config_path: Optional[Path] = None) -> ConfigSettings:
    """Load the [dbcrawler] section of a config file.

    Uses `config_path` when given, else dbcrawler.toml in the working
    directory. No file means default settings. A file that cannot be read,
    parsed or validated is reported on stderr and gives defaults. Unknown
    keys are ignored.
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            return ConfigSettings()

    where = escape(str(config_path))
    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        return _fall_back(f"Failed to parse {where}: {escape(str(e))}")
    except OSError as e:
        return _fall_back(f"Could not read {where}: {escape(str(e))}")

    try:
        return ConfigSettings.model_validate(toml_data.get("dbcrawler", {}))
    except ValidationError as e:
        return _fall_back(f"Invalid configuration in {where}: {escape(str(e))}")
