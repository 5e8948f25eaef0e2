"""Pydantic models for crawled database objects."""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from dbcrawler.global_models import RoutineType, SqlTypeGroup

NameKey = Tuple[Optional[str], ...]


def _join_name(*parts: Optional[str]) -> str:
    return ".".join(part for part in parts if part)


class SchemaReference(BaseModel):
    """A (catalog, schema) scoping unit for database objects.

    Either component may be None when the database does not support
    catalogs or schemas.
    """

    model_config = ConfigDict(frozen=True)

    catalog_name: Optional[str] = Field(None, description="Catalog name")
    schema_name: Optional[str] = Field(None, description="Schema name")

    @property
    def full_name(self) -> str:
        """Dotted name made of the present components."""
        return _join_name(self.catalog_name, self.schema_name)

    def key(self) -> NameKey:
        """Return the qualified name tuple for this schema."""
        return (self.catalog_name, self.schema_name)


class DatabaseObject(BaseModel):
    """Any object owned by a schema."""

    schema_ref: SchemaReference = Field(..., description="Owning schema")
    name: str = Field(..., description="Object name")
    remarks: str = Field("", description="Remarks reported by the database")

    @property
    def catalog_name(self) -> Optional[str]:
        return self.schema_ref.catalog_name

    @property
    def schema_name(self) -> Optional[str]:
        return self.schema_ref.schema_name

    @property
    def full_name(self) -> str:
        """Dotted name made of the present components."""
        return _join_name(self.catalog_name, self.schema_name, self.name)

    def key(self) -> NameKey:
        """Return the qualified name tuple (catalog, schema, name)."""
        return (self.catalog_name, self.schema_name, self.name)


class SqlType(BaseModel):
    """Descriptor for a standard SQL type code."""

    model_config = ConfigDict(frozen=True)

    code: int = Field(..., description="Standard SQL type code")
    name: str = Field(..., description="Standard SQL type name")
    group: SqlTypeGroup = Field(SqlTypeGroup.UNKNOWN, description="Type family")


class ColumnDataType(DatabaseObject):
    """A vendor-specific data type, resolved against the standard SQL types.

    Identified by (schema_ref, name). The SQL type and the mapped class are
    set once, when the type is first registered in a catalog.
    """

    sql_type: Optional[SqlType] = Field(None, description="Resolved SQL type")
    mapped_class_name: Optional[str] = Field(
        None, description="Python class that values of this type map to"
    )
    precision: Optional[int] = Field(None, description="Maximum precision")
    user_defined: bool = Field(True, description="Whether the type is user-defined")

    @property
    def standard_type_name(self) -> Optional[str]:
        return self.sql_type.name if self.sql_type else None


class Column(BaseModel):
    """A table column."""

    name: str
    ordinal_position: int = 0
    column_data_type: Optional[ColumnDataType] = None
    nullable: bool = True
    default_value: Optional[str] = None
    part_of_primary_key: bool = False

    @property
    def type_name(self) -> str:
        return self.column_data_type.name if self.column_data_type else ""


class Table(DatabaseObject):
    """A table or view."""

    table_type: str = Field("TABLE", description="Table type, such as TABLE or VIEW")
    columns: List[Column] = Field(default_factory=list)

    def lookup_column(self, name: str) -> Optional[Column]:
        """Find a column by name.

        Args:
            name: Column name, compared exactly.

        Returns:
            The column, or None if the table has no such column.
        """
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def add_column(self, column: Column) -> None:
        """Add a column, keeping columns in ordinal order."""
        self.columns.append(column)
        self.columns.sort(key=lambda c: c.ordinal_position)


class Routine(DatabaseObject):
    """A stored procedure or function."""

    specific_name: Optional[str] = Field(
        None, description="Name that distinguishes overloaded routines"
    )
    routine_type: RoutineType = Field(RoutineType.UNKNOWN)

    def key(self) -> NameKey:
        """Return the qualified name tuple (catalog, schema, name, specific name)."""
        return (self.catalog_name, self.schema_name, self.name, self.specific_name)
