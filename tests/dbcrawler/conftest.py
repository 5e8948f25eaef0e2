"""Shared fixtures for dbcrawler tests."""

import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest


class DriverError(Exception):
    """A driver exception that carries a SQLSTATE code."""

    def __init__(self, message: str, sqlstate: Optional[str] = None):
        super().__init__(message)
        self.sqlstate = sqlstate


class FakeMetadataSession:
    """In-memory metadata session with canned rows and failures."""

    def __init__(
        self,
        supports_catalogs: bool = True,
        supports_schemas: bool = True,
        schemas: Optional[List[Dict[str, Any]]] = None,
        tables: Optional[Dict[tuple, List[Dict[str, Any]]]] = None,
        columns: Optional[Dict[tuple, List[Dict[str, Any]]]] = None,
        routines: Optional[Dict[tuple, List[Dict[str, Any]]]] = None,
        type_info: Optional[List[Dict[str, Any]]] = None,
        errors: Optional[Dict[str, Exception]] = None,
    ):
        self.supports_catalogs = supports_catalogs
        self.supports_schemas = supports_schemas
        self.schemas = schemas or []
        self.tables = tables or {}
        self.columns = columns or {}
        self.routines = routines or {}
        self.type_info = type_info or []
        self.errors = errors or {}
        self.calls: List[str] = []

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if name in self.errors:
            raise self.errors[name]

    def get_schemas(self):
        self._call("get_schemas")
        return list(self.schemas)

    def get_tables(self, catalog_name, schema_name):
        self._call("get_tables")
        return list(self.tables.get((catalog_name, schema_name), []))

    def get_columns(self, catalog_name, schema_name, table_name):
        self._call("get_columns")
        return list(self.columns.get((catalog_name, schema_name, table_name), []))

    def get_routines(self, catalog_name, schema_name):
        self._call("get_routines")
        return list(self.routines.get((catalog_name, schema_name), []))

    def get_type_info(self):
        self._call("get_type_info")
        return list(self.type_info)


@pytest.fixture
def driver_error():
    """The DriverError class, for raising failures with a SQLSTATE."""
    return DriverError


@pytest.fixture
def make_session():
    """Factory for fake metadata sessions."""
    return FakeMetadataSession


@pytest.fixture
def sqlite_database(tmp_path: Path) -> Path:
    """Create a small SQLite database file."""
    path = tmp_path / "shop.db"
    connection = sqlite3.connect(path)
    try:
        connection.executescript(
            """
            CREATE TABLE customers (
                customer_id INTEGER PRIMARY KEY,
                name VARCHAR(100) NOT NULL,
                email TEXT,
                notes
            );
            CREATE TABLE orders (
                order_id INTEGER PRIMARY KEY,
                customer_id INTEGER NOT NULL REFERENCES customers (customer_id),
                total NUMERIC(10, 2) DEFAULT 0,
                weight REAL
            );
            CREATE TABLE orders_backup (order_id INTEGER, total NUMERIC(10, 2));
            CREATE VIEW big_orders AS SELECT * FROM orders WHERE total > 100;
            """
        )
        connection.commit()
    finally:
        connection.close()
    return path


@pytest.fixture
def sample_catalog():
    """A small catalog with two tables, one routine and one user type."""
    from dbcrawler.catalog import Catalog
    from dbcrawler.global_models import RoutineType
    from dbcrawler.schema.models import (
        Column,
        ColumnDataType,
        Routine,
        SchemaReference,
        Table,
    )

    catalog = Catalog("shop")
    main = catalog.add_schema(SchemaReference(schema_name="main"))
    money = catalog.add_column_data_type(
        ColumnDataType(schema_ref=main, name="MONEY", mapped_class_name="decimal.Decimal")
    )
    integer = catalog.add_system_column_data_type(
        ColumnDataType(
            schema_ref=SchemaReference(),
            name="INTEGER",
            mapped_class_name="int",
            user_defined=False,
        )
    )

    orders = catalog.add_table(Table(schema_ref=main, name="orders"))
    orders.add_column(
        Column(name="total", ordinal_position=2, column_data_type=money)
    )
    orders.add_column(
        Column(
            name="order_id",
            ordinal_position=1,
            column_data_type=integer,
            nullable=False,
            part_of_primary_key=True,
        )
    )
    catalog.add_table(Table(schema_ref=main, name="big_orders", table_type="VIEW"))
    catalog.add_routine(
        Routine(
            schema_ref=main,
            name="order_total",
            specific_name="order_total",
            routine_type=RoutineType.FUNCTION,
        )
    )
    return catalog
