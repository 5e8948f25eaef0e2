"""In-memory catalog of crawled database metadata."""

from typing import Dict, List, Optional, Sequence

from dbcrawler.catalog.base import CatalogError, ColumnDataTypeKey
from dbcrawler.schema.models import (
    ColumnDataType,
    NameKey,
    Routine,
    SchemaReference,
    Table,
)


class Catalog:
    """Aggregate of all schemas and schema objects found in one crawl.

    Objects are indexed by their qualified name tuple. Column data types
    live in two spaces: user-defined types keyed by (schema, type name),
    and system types keyed by type name alone. Registration is idempotent:
    adding an object whose key is already present keeps the existing entry
    and returns it.

    The catalog does no locking and is meant to be filled by a single crawl.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._schemas: Dict[NameKey, SchemaReference] = {}
        self._tables: Dict[NameKey, Table] = {}
        self._routines: Dict[NameKey, Routine] = {}
        self._column_data_types: Dict[ColumnDataTypeKey, ColumnDataType] = {}
        self._system_column_data_types: Dict[str, ColumnDataType] = {}

    def add_schema(self, schema_ref: SchemaReference) -> SchemaReference:
        return self._schemas.setdefault(schema_ref.key(), schema_ref)

    def add_table(self, table: Table) -> Table:
        """Add a table to the catalog.

        Raises:
            CatalogError: If the table's schema has not been added.
        """
        self._check_schema(table.schema_ref)
        return self._tables.setdefault(table.key(), table)

    def add_routine(self, routine: Routine) -> Routine:
        """Add a routine to the catalog.

        Raises:
            CatalogError: If the routine's schema has not been added.
        """
        self._check_schema(routine.schema_ref)
        return self._routines.setdefault(routine.key(), routine)

    def add_column_data_type(self, column_data_type: ColumnDataType) -> ColumnDataType:
        """Register a user-defined column data type."""
        key = ColumnDataTypeKey(column_data_type.schema_ref, column_data_type.name)
        return self._column_data_types.setdefault(key, column_data_type)

    def add_system_column_data_type(
        self, column_data_type: ColumnDataType
    ) -> ColumnDataType:
        """Register a column data type reported by the database itself."""
        return self._system_column_data_types.setdefault(
            column_data_type.name, column_data_type
        )

    def lookup_schema(self, name_key: Sequence[Optional[str]]) -> Optional[SchemaReference]:
        return self._schemas.get(tuple(name_key))

    def lookup_table(self, name_key: Sequence[Optional[str]]) -> Optional[Table]:
        """Find a table by (catalog, schema, table) name tuple."""
        return self._tables.get(tuple(name_key))

    def lookup_routine(self, name_key: Sequence[Optional[str]]) -> Optional[Routine]:
        """Find a routine by (catalog, schema, routine, specific name) tuple."""
        return self._routines.get(tuple(name_key))

    def lookup_column_data_type(
        self, schema_ref: SchemaReference, type_name: str
    ) -> Optional[ColumnDataType]:
        return self._column_data_types.get(ColumnDataTypeKey(schema_ref, type_name))

    def lookup_system_column_data_type(self, type_name: str) -> Optional[ColumnDataType]:
        return self._system_column_data_types.get(type_name)

    @property
    def schemas(self) -> List[SchemaReference]:
        return sorted(self._schemas.values(), key=lambda s: s.full_name)

    @property
    def tables(self) -> List[Table]:
        return sorted(self._tables.values(), key=lambda t: t.full_name)

    @property
    def routines(self) -> List[Routine]:
        return sorted(
            self._routines.values(), key=lambda r: (r.full_name, r.specific_name or "")
        )

    @property
    def column_data_types(self) -> List[ColumnDataType]:
        """User-defined column data types."""
        return sorted(self._column_data_types.values(), key=lambda t: t.full_name)

    @property
    def system_column_data_types(self) -> List[ColumnDataType]:
        return sorted(self._system_column_data_types.values(), key=lambda t: t.name)

    def tables_in(self, schema_ref: SchemaReference) -> List[Table]:
        return [table for table in self.tables if table.schema_ref == schema_ref]

    def routines_in(self, schema_ref: SchemaReference) -> List[Routine]:
        return [routine for routine in self.routines if routine.schema_ref == schema_ref]

    def _check_schema(self, schema_ref: SchemaReference) -> None:
        if schema_ref.key() not in self._schemas:
            raise CatalogError(f"Schema '{schema_ref.full_name}' is not in the catalog")
