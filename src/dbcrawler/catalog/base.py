"""Base types for the catalog store.

This module defines the exception raised for catalog misuse and the
composite key used to cache column data types.
"""

from typing import NamedTuple

from dbcrawler.schema.models import SchemaReference


class CatalogError(Exception):
    """Exception raised when catalog operations fail."""

    pass


class ColumnDataTypeKey(NamedTuple):
    """Identity of a column data type within a catalog."""

    schema_ref: SchemaReference
    type_name: str
