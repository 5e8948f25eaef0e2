"""Connection context shared by everything that retrieves metadata."""

from typing import Mapping, Optional

from dbcrawler.crawl.base import ConfigurationError
from dbcrawler.crawl.session import MetadataSession
from dbcrawler.schema.sql_types import SqlTypes, TypeMap


class RetrieverConnection:
    """A metadata session together with what is known about the database.

    Holds the capability flags that decide how names are compared, the
    code-to-descriptor table for standard SQL types, and the type map used
    to find the Python class for a data type.

    Args:
        session: The live metadata session.
        supports_catalogs: Whether the database has catalogs.
        supports_schemas: Whether the database has schemas.
        sql_types: Table of standard SQL types. Defaults to the standard codes.
        type_map: Type name to Python class map. Defaults to standard names.

    Raises:
        ConfigurationError: If no session is given.
    """

    def __init__(
        self,
        session: MetadataSession,
        supports_catalogs: bool = True,
        supports_schemas: bool = True,
        sql_types: Optional[SqlTypes] = None,
        type_map: Optional[TypeMap] = None,
    ):
        if session is None:
            raise ConfigurationError("No database session provided")
        self.session = session
        self.supports_catalogs = supports_catalogs
        self.supports_schemas = supports_schemas
        self.sql_types = sql_types if sql_types is not None else SqlTypes()
        self.type_map = type_map if type_map is not None else TypeMap()

    @classmethod
    def from_session(
        cls,
        session: MetadataSession,
        type_map_overrides: Optional[Mapping[str, str]] = None,
        supports_catalogs: Optional[bool] = None,
        supports_schemas: Optional[bool] = None,
    ) -> "RetrieverConnection":
        """Create a connection context, reading capabilities from the session.

        Explicit capability arguments override what the session reports,
        for drivers that report them wrongly.
        """
        if session is None:
            raise ConfigurationError("No database session provided")
        if supports_catalogs is None:
            supports_catalogs = bool(session.supports_catalogs)
        if supports_schemas is None:
            supports_schemas = bool(session.supports_schemas)
        return cls(
            session,
            supports_catalogs=supports_catalogs,
            supports_schemas=supports_schemas,
            type_map=TypeMap(type_map_overrides),
        )

    def __repr__(self) -> str:
        return (
            f"RetrieverConnection(supports_catalogs={self.supports_catalogs}, "
            f"supports_schemas={self.supports_schemas})"
        )
