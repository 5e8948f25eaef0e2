"""Logging setup for the dbcrawler command line."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Configure logging with a Rich handler on stderr.

    Args:
        verbose: Log at DEBUG instead of INFO, which includes the full
                 details of metadata calls the database does not support.
        console: Console for the handler. Defaults to a stderr console.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(console=console or Console(stderr=True), rich_tracebacks=True)
        ],
        force=True,
    )
