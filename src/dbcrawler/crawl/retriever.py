"""Shared retrieval context that mediates between metadata and the catalog.

Every retrieval function receives a `RetrieverContext`. The context smooths
over differences between databases (whether they have catalogs or schemas),
creates each column data type once, looks up objects already in the
catalog, and decides how loudly a failed metadata call is reported.
"""

import logging
from typing import Any, List, Optional

from dbcrawler.catalog import Catalog
from dbcrawler.crawl.base import ConfigurationError
from dbcrawler.crawl.connection import RetrieverConnection
from dbcrawler.crawl.options import CrawlerOptions
from dbcrawler.crawl.session import MetadataSession
from dbcrawler.crawl.sql_state import MetadataFailure, MetadataFailureKind
from dbcrawler.inclusion.rules import InclusionRule
from dbcrawler.schema.models import (
    ColumnDataType,
    DatabaseObject,
    Routine,
    SchemaReference,
    Table,
)

_default_logger = logging.getLogger(__name__)


class RetrieverContext:
    """Connection, catalog, and options for one crawl.

    Not safe for concurrent use: crawl independent connections with
    independent contexts and catalogs.

    Args:
        connection: The connection context for the database being crawled.
        catalog: The catalog to fill. A new catalog is created if None.
        options: Crawler options.
        logger: Where diagnostics go. Defaults to this module's logger.

    Raises:
        ConfigurationError: If the connection or the options are missing.
    """

    def __init__(
        self,
        connection: RetrieverConnection,
        catalog: Optional[Catalog],
        options: CrawlerOptions,
        logger: Optional[logging.Logger] = None,
    ):
        if connection is None:
            raise ConfigurationError("No retriever connection provided")
        if options is None:
            raise ConfigurationError("No crawler options provided")
        self.connection = connection
        self.catalog = catalog if catalog is not None else Catalog()
        self.options = options
        self.logger = logger if logger is not None else _default_logger

    @property
    def session(self) -> MetadataSession:
        return self.connection.session

    @property
    def schema_inclusion_rule(self) -> InclusionRule:
        return self.options.schema_inclusion_rule

    def all_schemas(self) -> List[SchemaReference]:
        return self.catalog.schemas

    def belongs_to_schema(
        self,
        database_object: Optional[DatabaseObject],
        catalog_name: Optional[str],
        schema_name: Optional[str],
    ) -> bool:
        """Check whether a database object belongs to the given schema.

        A requested name of None matches any name. The catalog name is only
        compared when the database supports catalogs.

        Args:
            database_object: Object to check.
            catalog_name: Catalog to check against.
            schema_name: Schema to check against.

        Returns:
            Whether the object belongs to the schema. False if there is no
            object.
        """
        if database_object is None:
            return False

        belongs_to_catalog = True
        if self.connection.supports_catalogs:
            if catalog_name is not None and catalog_name != database_object.catalog_name:
                belongs_to_catalog = False

        belongs_to_schema = True
        if schema_name is not None and schema_name != database_object.schema_name:
            belongs_to_schema = False

        return belongs_to_catalog and belongs_to_schema

    def lookup_or_create_column_data_type(
        self,
        schema_ref: SchemaReference,
        sql_type_code: int,
        type_name: str,
        mapped_class_name: Optional[str] = None,
    ) -> ColumnDataType:
        """Find a column data type in the catalog, or create and register it.

        User-defined types in the schema are checked first, then system
        types. An existing type is returned as it is. A new type gets its
        SQL type from `sql_type_code`, and its mapped class from
        `mapped_class_name` when given, otherwise from the type map entry for
        the vendor type name, falling back to the entry for the standard SQL
        type name.

        Args:
            schema_ref: Schema that owns the type.
            sql_type_code: Standard SQL type code reported for the type.
            type_name: Database specific type name.
            mapped_class_name: Python class name to use instead of the type map.

        Returns:
            The column data type registered in the catalog.
        """
        column_data_type = self.catalog.lookup_column_data_type(schema_ref, type_name)
        if column_data_type is None:
            column_data_type = self.catalog.lookup_system_column_data_type(type_name)
        if column_data_type is not None:
            return column_data_type

        column_data_type = self.new_column_data_type(
            schema_ref, sql_type_code, type_name, mapped_class_name
        )
        return self.catalog.add_column_data_type(column_data_type)

    def new_column_data_type(
        self,
        schema_ref: SchemaReference,
        sql_type_code: int,
        type_name: str,
        mapped_class_name: Optional[str] = None,
        user_defined: bool = True,
    ) -> ColumnDataType:
        """Create a resolved column data type without registering it."""
        column_data_type = ColumnDataType(
            schema_ref=schema_ref, name=type_name, user_defined=user_defined
        )
        sql_type = self.connection.sql_types.get(sql_type_code)
        column_data_type.sql_type = sql_type
        if mapped_class_name and mapped_class_name.strip():
            column_data_type.mapped_class_name = mapped_class_name
        else:
            type_map = self.connection.type_map
            if type_name in type_map:
                column_data_type.mapped_class_name = type_map[type_name]
            else:
                column_data_type.mapped_class_name = type_map.get(sql_type.name)
        return column_data_type

    def lookup_routine(
        self,
        catalog_name: Optional[str],
        schema_name: Optional[str],
        routine_name: str,
        specific_name: Optional[str],
    ) -> Optional[Routine]:
        return self.catalog.lookup_routine(
            (catalog_name, schema_name, routine_name, specific_name)
        )

    def lookup_table(
        self,
        catalog_name: Optional[str],
        schema_name: Optional[str],
        table_name: str,
    ) -> Optional[Table]:
        return self.catalog.lookup_table((catalog_name, schema_name, table_name))

    def normalize_catalog_name(self, name: Optional[str]) -> Optional[str]:
        """Return the name, or None if the database has no catalogs."""
        if self.connection.supports_catalogs:
            return name
        return None

    def normalize_schema_name(self, name: Optional[str]) -> Optional[str]:
        """Return the name, or None if the database has no schemas."""
        if self.connection.supports_schemas:
            return name
        return None

    def log_possibly_unsupported_sql_feature(
        self, message: str, error: BaseException, *args: Any
    ) -> MetadataFailureKind:
        """Report a failed metadata call without raising.

        Drivers that do not implement a call report SQLSTATE HYC00, and some
        report HY000 instead. Those failures are logged quietly. Any other
        failure is logged as a warning with the full error.

        Args:
            message: Log message, with %-style placeholders for args.
            error: The exception raised by the metadata call.
            *args: Arguments for the message.

        Returns:
            How the failure was classified.
        """
        failure = MetadataFailure.from_exception(error)
        if failure.is_unsupported_feature:
            self.log_sql_feature_not_supported(message, error, *args)
        else:
            self.logger.warning(message, *args, exc_info=error)
        return failure.kind

    def log_sql_feature_not_supported(
        self, message: str, error: BaseException, *args: Any
    ) -> None:
        self.logger.info(message, *args)
        self.logger.debug(message, *args, exc_info=error)
