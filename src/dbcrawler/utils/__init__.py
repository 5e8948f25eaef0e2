"""Utility functions for dbcrawler."""

from dbcrawler.utils.config import ConfigSettings, find_config_file, load_config
from dbcrawler.utils.file_utils import read_text_file
from dbcrawler.utils.logging import setup_logging

__all__ = [
    "ConfigSettings",
    "find_config_file",
    "load_config",
    "read_text_file",
    "setup_logging",
]
