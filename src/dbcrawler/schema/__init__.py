"""Schema object models and SQL type tables for dbcrawler."""

from dbcrawler.schema.models import (
    Column,
    ColumnDataType,
    DatabaseObject,
    Routine,
    SchemaReference,
    SqlType,
    Table,
)
from dbcrawler.schema.sql_types import UNKNOWN_SQL_TYPE, SqlTypes, TypeMap

__all__ = [
    # Models
    "SchemaReference",
    "DatabaseObject",
    "Table",
    "Column",
    "Routine",
    "SqlType",
    "ColumnDataType",
    # Type tables
    "SqlTypes",
    "TypeMap",
    "UNKNOWN_SQL_TYPE",
]
