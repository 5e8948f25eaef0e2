"""Catalog store for crawled database metadata.

The catalog is the aggregate that holds every schema, table, routine and
column data type discovered during a crawl, indexed by qualified name.

Example:
    >>> from dbcrawler.catalog import Catalog
    >>> from dbcrawler.schema import SchemaReference, Table
    >>> catalog = Catalog()
    >>> schema = catalog.add_schema(SchemaReference(schema_name="main"))
    >>> table = catalog.add_table(Table(schema_ref=schema, name="orders"))
    >>> catalog.lookup_table((None, "main", "orders")).name
    'orders'
"""

from dbcrawler.catalog.base import CatalogError, ColumnDataTypeKey
from dbcrawler.catalog.catalog import Catalog

__all__ = [
    "Catalog",
    "CatalogError",
    "ColumnDataTypeKey",
]
