"""Standard SQL type codes and the mapping of type names to Python classes.

`SqlTypes` is the code-to-descriptor table used to resolve the SQL type
code reported with a column into a `SqlType`. `TypeMap` maps a type name,
either vendor-specific or standard, to the name of the Python class that
values of that type are returned as.
"""

from typing import Dict, Iterator, Mapping, Optional

from dbcrawler.global_models import SqlTypeGroup
from dbcrawler.schema.models import SqlType

UNKNOWN_SQL_TYPE = SqlType(code=2147483647, name="<unknown>", group=SqlTypeGroup.UNKNOWN)

# Standard SQL type codes, as reported by ODBC/JDBC style metadata
_STANDARD_SQL_TYPES = [
    SqlType(code=2003, name="ARRAY", group=SqlTypeGroup.OBJECT),
    SqlType(code=-5, name="BIGINT", group=SqlTypeGroup.INTEGER),
    SqlType(code=-2, name="BINARY", group=SqlTypeGroup.BINARY),
    SqlType(code=-7, name="BIT", group=SqlTypeGroup.BINARY),
    SqlType(code=2004, name="BLOB", group=SqlTypeGroup.LARGE_OBJECT),
    SqlType(code=16, name="BOOLEAN", group=SqlTypeGroup.INTEGER),
    SqlType(code=1, name="CHAR", group=SqlTypeGroup.CHARACTER),
    SqlType(code=2005, name="CLOB", group=SqlTypeGroup.LARGE_OBJECT),
    SqlType(code=70, name="DATALINK", group=SqlTypeGroup.URL),
    SqlType(code=91, name="DATE", group=SqlTypeGroup.TEMPORAL),
    SqlType(code=3, name="DECIMAL", group=SqlTypeGroup.REAL),
    SqlType(code=2001, name="DISTINCT", group=SqlTypeGroup.OBJECT),
    SqlType(code=8, name="DOUBLE", group=SqlTypeGroup.REAL),
    SqlType(code=6, name="FLOAT", group=SqlTypeGroup.REAL),
    SqlType(code=4, name="INTEGER", group=SqlTypeGroup.INTEGER),
    SqlType(code=2000, name="JAVA_OBJECT", group=SqlTypeGroup.OBJECT),
    SqlType(code=-16, name="LONGNVARCHAR", group=SqlTypeGroup.CHARACTER),
    SqlType(code=-4, name="LONGVARBINARY", group=SqlTypeGroup.BINARY),
    SqlType(code=-1, name="LONGVARCHAR", group=SqlTypeGroup.CHARACTER),
    SqlType(code=-15, name="NCHAR", group=SqlTypeGroup.CHARACTER),
    SqlType(code=2011, name="NCLOB", group=SqlTypeGroup.LARGE_OBJECT),
    SqlType(code=0, name="NULL", group=SqlTypeGroup.UNKNOWN),
    SqlType(code=2, name="NUMERIC", group=SqlTypeGroup.REAL),
    SqlType(code=-9, name="NVARCHAR", group=SqlTypeGroup.CHARACTER),
    SqlType(code=1111, name="OTHER", group=SqlTypeGroup.UNKNOWN),
    SqlType(code=7, name="REAL", group=SqlTypeGroup.REAL),
    SqlType(code=2006, name="REF", group=SqlTypeGroup.REFERENCE),
    SqlType(code=2012, name="REF_CURSOR", group=SqlTypeGroup.REFERENCE),
    SqlType(code=-8, name="ROWID", group=SqlTypeGroup.ID),
    SqlType(code=5, name="SMALLINT", group=SqlTypeGroup.INTEGER),
    SqlType(code=2009, name="SQLXML", group=SqlTypeGroup.XML),
    SqlType(code=2002, name="STRUCT", group=SqlTypeGroup.OBJECT),
    SqlType(code=92, name="TIME", group=SqlTypeGroup.TEMPORAL),
    SqlType(code=2013, name="TIME_WITH_TIMEZONE", group=SqlTypeGroup.TEMPORAL),
    SqlType(code=93, name="TIMESTAMP", group=SqlTypeGroup.TEMPORAL),
    SqlType(code=2014, name="TIMESTAMP_WITH_TIMEZONE", group=SqlTypeGroup.TEMPORAL),
    SqlType(code=-6, name="TINYINT", group=SqlTypeGroup.INTEGER),
    SqlType(code=-3, name="VARBINARY", group=SqlTypeGroup.BINARY),
    SqlType(code=12, name="VARCHAR", group=SqlTypeGroup.CHARACTER),
]

_DEFAULT_TYPE_MAP: Dict[str, str] = {
    "ARRAY": "list",
    "BIGINT": "int",
    "BINARY": "bytes",
    "BIT": "bool",
    "BLOB": "bytes",
    "BOOLEAN": "bool",
    "CHAR": "str",
    "CLOB": "str",
    "DATALINK": "str",
    "DATE": "datetime.date",
    "DECIMAL": "decimal.Decimal",
    "DOUBLE": "float",
    "FLOAT": "float",
    "INTEGER": "int",
    "LONGNVARCHAR": "str",
    "LONGVARBINARY": "bytes",
    "LONGVARCHAR": "str",
    "NCHAR": "str",
    "NCLOB": "str",
    "NUMERIC": "decimal.Decimal",
    "NVARCHAR": "str",
    "REAL": "float",
    "SMALLINT": "int",
    "SQLXML": "str",
    "STRUCT": "tuple",
    "TIME": "datetime.time",
    "TIME_WITH_TIMEZONE": "datetime.time",
    "TIMESTAMP": "datetime.datetime",
    "TIMESTAMP_WITH_TIMEZONE": "datetime.datetime",
    "TINYINT": "int",
    "VARBINARY": "bytes",
    "VARCHAR": "str",
}

DEFAULT_MAPPED_CLASS = "object"


class SqlTypes:
    """Lookup table from standard SQL type code to `SqlType`.

    Codes that are not in the table resolve to `UNKNOWN_SQL_TYPE`, so a
    lookup never fails.
    """

    def __init__(self, sql_types: Optional[Mapping[int, SqlType]] = None):
        if sql_types is None:
            sql_types = {sql_type.code: sql_type for sql_type in _STANDARD_SQL_TYPES}
        self._sql_types: Dict[int, SqlType] = dict(sql_types)

    def get(self, code: int) -> SqlType:
        return self._sql_types.get(code, UNKNOWN_SQL_TYPE)

    def __contains__(self, code: object) -> bool:
        return code in self._sql_types

    def __iter__(self) -> Iterator[SqlType]:
        return iter(sorted(self._sql_types.values(), key=lambda t: t.name))

    def __len__(self) -> int:
        return len(self._sql_types)


class TypeMap:
    """Mapping of type names to Python class names.

    Starts from the standard SQL type names. Entries for vendor-specific
    type names can be added on top, and take priority when resolving a
    column data type.
    """

    def __init__(self, overrides: Optional[Mapping[str, str]] = None):
        self._type_map: Dict[str, str] = dict(_DEFAULT_TYPE_MAP)
        if overrides:
            self._type_map.update(overrides)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._type_map

    def __getitem__(self, type_name: str) -> str:
        return self._type_map[type_name]

    def __len__(self) -> int:
        return len(self._type_map)

    def get(self, type_name: Optional[str]) -> str:
        """Return the mapped class name, or `object` for unmapped names."""
        if type_name is None:
            return DEFAULT_MAPPED_CLASS
        return self._type_map.get(type_name, DEFAULT_MAPPED_CLASS)
