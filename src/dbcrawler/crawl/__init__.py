"""Metadata retrieval for dbcrawler.

This package holds the connection context, the retrieval context shared by
all retrieval functions, and the crawl orchestrator.

Example:
    >>> from dbcrawler.crawl import SqliteMetadataSession, crawl_catalog
    >>> with SqliteMetadataSession("shop.db") as session:
    ...     catalog = crawl_catalog(session)
    >>> [table.full_name for table in catalog.tables]
    ['main.customers', 'main.orders']
"""

from dbcrawler.crawl.base import ConfigurationError, CrawlError
from dbcrawler.crawl.connection import RetrieverConnection
from dbcrawler.crawl.crawler import crawl_catalog
from dbcrawler.crawl.options import CrawlerOptions, OutputOptions
from dbcrawler.crawl.retriever import RetrieverContext
from dbcrawler.crawl.session import MetadataSession, SqliteMetadataSession
from dbcrawler.crawl.sql_state import (
    MetadataFailure,
    MetadataFailureKind,
    SqlState,
    classify_sql_state,
)

__all__ = [
    # Errors
    "CrawlError",
    "ConfigurationError",
    # Context
    "RetrieverConnection",
    "RetrieverContext",
    "CrawlerOptions",
    "OutputOptions",
    # Sessions
    "MetadataSession",
    "SqliteMetadataSession",
    # Failure classification
    "SqlState",
    "MetadataFailure",
    "MetadataFailureKind",
    "classify_sql_state",
    # Orchestration
    "crawl_catalog",
]
