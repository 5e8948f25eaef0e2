"""Crawl orchestration: run the retrieval functions in order."""

import logging
from typing import Optional

from dbcrawler.catalog import Catalog
from dbcrawler.crawl.connection import RetrieverConnection
from dbcrawler.crawl.options import CrawlerOptions
from dbcrawler.crawl.retriever import RetrieverContext
from dbcrawler.crawl.retrievers import (
    retrieve_columns,
    retrieve_routines,
    retrieve_schemas,
    retrieve_system_column_data_types,
    retrieve_tables,
)
from dbcrawler.crawl.session import MetadataSession

logger = logging.getLogger(__name__)


def crawl_catalog(
    session: MetadataSession,
    options: Optional[CrawlerOptions] = None,
    catalog_name: str = "",
    supports_catalogs: Optional[bool] = None,
    supports_schemas: Optional[bool] = None,
    diagnostics: Optional[logging.Logger] = None,
) -> Catalog:
    """Crawl a database and return a new catalog.

    System data types are retrieved first, so that columns using them
    share the system entries. Then schemas, and for each schema its tables
    (with columns) and routines.

    Args:
        session: Metadata session for the database.
        options: Crawler options. Defaults to retrieving everything.
        catalog_name: Name given to the catalog.
        supports_catalogs: Override for the session's catalog support.
        supports_schemas: Override for the session's schema support.
        diagnostics: Logger for retrieval diagnostics.

    Returns:
        The filled catalog.

    Raises:
        ConfigurationError: If no session is given.
    """
    if options is None:
        options = CrawlerOptions()
    connection = RetrieverConnection.from_session(
        session,
        type_map_overrides=options.type_map_overrides,
        supports_catalogs=supports_catalogs,
        supports_schemas=supports_schemas,
    )
    context = RetrieverContext(connection, Catalog(catalog_name), options, diagnostics)

    retrieve_system_column_data_types(context)
    for schema_ref in retrieve_schemas(context):
        for table in retrieve_tables(context, schema_ref):
            if options.retrieve_columns:
                retrieve_columns(context, table)
        if options.retrieve_routines:
            retrieve_routines(context, schema_ref)

    catalog = context.catalog
    logger.info(
        "Crawled %d schema(s), %d table(s), %d routine(s)",
        len(catalog.schemas),
        len(catalog.tables),
        len(catalog.routines),
    )
    return catalog
