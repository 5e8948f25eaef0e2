"""Shared models and enums used across dbcrawler modules."""

from enum import Enum


class SqlTypeGroup(str, Enum):
    """Broad family of a standard SQL data type."""

    BINARY = "binary"
    CHARACTER = "character"
    ID = "id"
    INTEGER = "integer"
    LARGE_OBJECT = "large_object"
    OBJECT = "object"
    REAL = "real"
    REFERENCE = "reference"
    TEMPORAL = "temporal"
    URL = "url"
    XML = "xml"
    UNKNOWN = "unknown"


class RoutineType(str, Enum):
    """Kind of stored routine."""

    PROCEDURE = "procedure"
    FUNCTION = "function"
    UNKNOWN = "unknown"
