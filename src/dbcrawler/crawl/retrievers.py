"""Retrieval functions that fill the catalog from a metadata session.

Each function takes the shared `RetrieverContext`. A failed metadata call
is reported through the context and the function carries on with what it
has, so one unsupported query never aborts a crawl.
"""

from typing import Any, List, Optional

from dbcrawler.crawl.retriever import RetrieverContext
from dbcrawler.global_models import RoutineType
from dbcrawler.inclusion.base import filter_for
from dbcrawler.schema.models import Column, Routine, SchemaReference, Table
from dbcrawler.schema.sql_types import UNKNOWN_SQL_TYPE

SYSTEM_SCHEMA = SchemaReference()


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_bool(value: Any, default: bool = True) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().upper() in ("YES", "Y", "TRUE", "1")
    return bool(value)


def _routine_type(value: Any) -> RoutineType:
    try:
        return RoutineType(str(value).lower())
    except ValueError:
        return RoutineType.UNKNOWN


def retrieve_system_column_data_types(context: RetrieverContext) -> int:
    """Register the data types the database reports about itself.

    Returns:
        The number of system data types registered.
    """
    try:
        rows = list(context.session.get_type_info())
    except Exception as e:
        context.log_possibly_unsupported_sql_feature(
            "Could not retrieve system data types", e
        )
        return 0

    count = 0
    for row in rows:
        type_name = row.get("type_name")
        if not type_name:
            continue
        column_data_type = context.new_column_data_type(
            SYSTEM_SCHEMA,
            _as_int(row.get("data_type"), UNKNOWN_SQL_TYPE.code),
            type_name,
            user_defined=False,
        )
        column_data_type.precision = row.get("precision")
        context.catalog.add_system_column_data_type(column_data_type)
        count += 1
    context.logger.debug("Retrieved %d system data types", count)
    return count


def retrieve_schemas(context: RetrieverContext) -> List[SchemaReference]:
    """Add the schemas allowed by the schema inclusion rule to the catalog.

    Catalog and schema names are normalized, so a database without catalogs
    or schemas ends up with one schema that has no name.

    Returns:
        All schemas in the catalog.
    """
    try:
        rows = list(context.session.get_schemas())
    except Exception as e:
        context.log_possibly_unsupported_sql_feature("Could not retrieve schemas", e)
        rows = []

    schema_refs = [
        SchemaReference(
            catalog_name=context.normalize_catalog_name(row.get("table_catalog")),
            schema_name=context.normalize_schema_name(row.get("table_schema")),
        )
        for row in rows
    ]
    if not schema_refs and not context.connection.supports_schemas:
        schema_refs = [SchemaReference()]

    rule = context.schema_inclusion_rule
    for schema_ref in schema_refs:
        if rule.test(schema_ref.full_name):
            context.catalog.add_schema(schema_ref)
        else:
            context.logger.debug("Excluding schema %s", schema_ref.full_name)
    return context.all_schemas()


def retrieve_tables(context: RetrieverContext, schema_ref: SchemaReference) -> List[Table]:
    """Add the tables in a schema to the catalog.

    Drivers sometimes return tables from other schemas; those are skipped.

    Returns:
        The tables added for this schema.
    """
    try:
        rows = list(
            context.session.get_tables(schema_ref.catalog_name, schema_ref.schema_name)
        )
    except Exception as e:
        context.log_possibly_unsupported_sql_feature(
            "Could not retrieve tables for schema %s", e, schema_ref.full_name
        )
        return []

    table_filter = filter_for(context.options.table_inclusion_rule)
    tables = []
    for row in rows:
        table_name = row.get("table_name")
        if not table_name:
            continue
        catalog_name = context.normalize_catalog_name(
            row.get("table_catalog", schema_ref.catalog_name)
        )
        schema_name = context.normalize_schema_name(
            row.get("table_schema", schema_ref.schema_name)
        )
        existing = context.lookup_table(catalog_name, schema_name, table_name)
        if existing is not None:
            tables.append(existing)
            continue

        table_schema = context.catalog.lookup_schema((catalog_name, schema_name))
        if table_schema is None:
            context.logger.debug(
                "Skipping table %s in a schema that is not crawled", table_name
            )
            continue
        table = Table(
            schema_ref=table_schema,
            name=table_name,
            table_type=(row.get("table_type") or "TABLE").upper(),
            remarks=row.get("remarks") or "",
        )
        if not context.belongs_to_schema(
            table, schema_ref.catalog_name, schema_ref.schema_name
        ):
            continue
        if not table_filter.include(table):
            context.logger.debug("Excluding table %s", table.full_name)
            continue
        tables.append(context.catalog.add_table(table))
    return tables


def retrieve_columns(context: RetrieverContext, table: Table) -> List[Column]:
    """Add columns to a table, resolving each column's data type.

    Returns:
        The columns of the table.
    """
    try:
        rows = list(
            context.session.get_columns(table.catalog_name, table.schema_name, table.name)
        )
    except Exception as e:
        context.log_possibly_unsupported_sql_feature(
            "Could not retrieve columns for table %s", e, table.full_name
        )
        return table.columns

    for row in rows:
        column_name = row.get("column_name")
        if not column_name or table.lookup_column(column_name) is not None:
            continue
        column_data_type = context.lookup_or_create_column_data_type(
            table.schema_ref,
            _as_int(row.get("data_type"), UNKNOWN_SQL_TYPE.code),
            row.get("type_name") or "",
            row.get("mapped_class_name"),
        )
        default_value = row.get("column_default")
        table.add_column(
            Column(
                name=column_name,
                ordinal_position=_as_int(row.get("ordinal_position"), 0),
                column_data_type=column_data_type,
                nullable=_as_bool(row.get("is_nullable")),
                default_value=None if default_value is None else str(default_value),
                part_of_primary_key=_as_bool(row.get("part_of_primary_key"), False),
            )
        )
    return table.columns


def retrieve_routines(
    context: RetrieverContext, schema_ref: SchemaReference
) -> List[Routine]:
    """Add the routines in a schema to the catalog.

    Returns:
        The routines added for this schema.
    """
    try:
        rows = list(
            context.session.get_routines(schema_ref.catalog_name, schema_ref.schema_name)
        )
    except Exception as e:
        context.log_possibly_unsupported_sql_feature(
            "Could not retrieve routines for schema %s", e, schema_ref.full_name
        )
        return []

    routine_filter = filter_for(context.options.routine_inclusion_rule)
    routines = []
    for row in rows:
        routine_name: Optional[str] = row.get("routine_name")
        if not routine_name:
            continue
        specific_name = row.get("specific_name") or routine_name
        existing = context.lookup_routine(
            schema_ref.catalog_name, schema_ref.schema_name, routine_name, specific_name
        )
        if existing is not None:
            routines.append(existing)
            continue
        routine = Routine(
            schema_ref=schema_ref,
            name=routine_name,
            specific_name=specific_name,
            routine_type=_routine_type(row.get("routine_type")),
            remarks=row.get("remarks") or "",
        )
        if not routine_filter.include(routine):
            context.logger.debug("Excluding routine %s", routine.full_name)
            continue
        routines.append(context.catalog.add_routine(routine))
    return routines
