"""Metadata sessions over live database connections.

A metadata session answers the handful of metadata queries a crawl needs.
Rows are returned as dictionaries with snake_case keys, whatever the
underlying driver returns.
"""

import logging
import re
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Union

from sqlglot import exp

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class MetadataSession(Protocol):
    """Blocking metadata queries against one database connection.

    Implementations are not expected to be thread-safe.
    """

    @property
    def supports_catalogs(self) -> bool: ...

    @property
    def supports_schemas(self) -> bool: ...

    def get_schemas(self) -> Iterable[Row]:
        """Rows with table_catalog and table_schema."""
        ...

    def get_tables(
        self, catalog_name: Optional[str], schema_name: Optional[str]
    ) -> Iterable[Row]:
        """Rows with table_name, table_type and remarks."""
        ...

    def get_columns(
        self, catalog_name: Optional[str], schema_name: Optional[str], table_name: str
    ) -> Iterable[Row]:
        """Rows with column_name, data_type, type_name, ordinal_position,
        is_nullable, column_default and part_of_primary_key."""
        ...

    def get_routines(
        self, catalog_name: Optional[str], schema_name: Optional[str]
    ) -> Iterable[Row]:
        """Rows with routine_name, specific_name, routine_type and remarks."""
        ...

    def get_type_info(self) -> Iterable[Row]:
        """Rows with type_name, data_type and precision."""
        ...


# Standard SQL type codes for the SQLite type affinities
_SQLITE_INTEGER = 4
_SQLITE_TEXT = 12
_SQLITE_BLOB = 2004
_SQLITE_REAL = 8
_SQLITE_NUMERIC = 2
_SQLITE_NULL = 0

_TYPE_SIZE_PATTERN = re.compile(r"\s*\(.*$")


def sqlite_type_code(declared_type: Optional[str]) -> int:
    """Map a declared SQLite column type to a standard SQL type code.

    Follows the SQLite rules for determining column affinity.
    """
    declared = (declared_type or "").upper()
    if "INT" in declared:
        return _SQLITE_INTEGER
    if any(marker in declared for marker in ("CHAR", "CLOB", "TEXT")):
        return _SQLITE_TEXT
    if not declared or "BLOB" in declared:
        return _SQLITE_BLOB
    if any(marker in declared for marker in ("REAL", "FLOA", "DOUB")):
        return _SQLITE_REAL
    return _SQLITE_NUMERIC


def _quote(identifier: str) -> str:
    return exp.to_identifier(identifier, quoted=True).sql(dialect="sqlite")


class SqliteMetadataSession:
    """Metadata session for a SQLite database.

    Attached databases (main, temp, and any others) are reported as
    schemas; SQLite has no catalogs and no stored routines.

    Args:
        database: Path to a database file, opened read-only, or an
                  existing sqlite3 connection, which is left open on close.

    Example:
        >>> with SqliteMetadataSession("shop.db") as session:
        ...     tables = list(session.get_tables(None, "main"))
    """

    supports_catalogs = False
    supports_schemas = True

    def __init__(self, database: Union[str, Path, sqlite3.Connection]):
        if isinstance(database, sqlite3.Connection):
            self._connection = database
            self._owns_connection = False
        else:
            path = Path(database)
            if not path.is_file():
                raise FileNotFoundError(f"Database file not found: {path}")
            uri = f"{path.resolve().as_uri()}?mode=ro"
            logger.debug("Opening SQLite database %s", uri)
            self._connection = sqlite3.connect(uri, uri=True)
            self._owns_connection = True

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection

    def get_schemas(self) -> List[Row]:
        rows = self._connection.execute("PRAGMA database_list").fetchall()
        return [{"table_catalog": None, "table_schema": name} for _, name, _ in rows]

    def get_tables(
        self, catalog_name: Optional[str], schema_name: Optional[str]
    ) -> List[Row]:
        schema = schema_name or "main"
        rows = self._connection.execute(
            f"SELECT name, type FROM {_quote(schema)}.sqlite_master "
            "WHERE type IN ('table', 'view') AND name NOT LIKE 'sqlite_%' "
            "ORDER BY name"
        ).fetchall()
        return [
            {"table_name": name, "table_type": table_type.upper(), "remarks": ""}
            for name, table_type in rows
        ]

    def get_columns(
        self, catalog_name: Optional[str], schema_name: Optional[str], table_name: str
    ) -> List[Row]:
        schema = schema_name or "main"
        rows = self._connection.execute(
            f"PRAGMA {_quote(schema)}.table_info({_quote(table_name)})"
        ).fetchall()
        columns = []
        for cid, name, declared_type, notnull, default_value, pk in rows:
            type_name = _TYPE_SIZE_PATTERN.sub("", declared_type or "").upper()
            columns.append(
                {
                    "column_name": name,
                    "data_type": sqlite_type_code(declared_type),
                    "type_name": type_name or "BLOB",
                    "ordinal_position": cid + 1,
                    "is_nullable": not notnull,
                    "column_default": default_value,
                    "part_of_primary_key": pk > 0,
                }
            )
        return columns

    def get_routines(
        self, catalog_name: Optional[str], schema_name: Optional[str]
    ) -> List[Row]:
        return []

    def get_type_info(self) -> List[Row]:
        return [
            {"type_name": "NULL", "data_type": _SQLITE_NULL, "precision": None},
            {"type_name": "INTEGER", "data_type": _SQLITE_INTEGER, "precision": 64},
            {"type_name": "REAL", "data_type": _SQLITE_REAL, "precision": 53},
            {"type_name": "TEXT", "data_type": _SQLITE_TEXT, "precision": None},
            {"type_name": "BLOB", "data_type": _SQLITE_BLOB, "precision": None},
        ]

    def close(self) -> None:
        if self._owns_connection:
            self._connection.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
