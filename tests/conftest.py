from typing import Dict, List, Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from tabledoc.database.adapters import CatalogReader
from tabledoc.database.factory import DatabaseFactory
from tabledoc.database.models import (
    ForeignKeyFact,
    RawColumnFact,
    RoutineReference,
    TableIdentity,
    TableReference,
)
from tabledoc.documentation.exporter import ExportPathResolver
from tabledoc.documentation.pipeline import DocumentationPipeline

SQLITE_SCHEMA = [
    """CREATE TABLE customers (
        id INTEGER NOT NULL PRIMARY KEY,
        name VARCHAR(100) NOT NULL
    )""",
    """CREATE TABLE orders (
        id INTEGER NOT NULL PRIMARY KEY,
        customer_id INTEGER,
        note TEXT,
        CONSTRAINT fk_orders_customer FOREIGN KEY (customer_id) REFERENCES customers (id)
    )""",
    "CREATE INDEX ix_orders_customer ON orders (customer_id)",
    """CREATE TABLE order_lines (
        id INTEGER NOT NULL PRIMARY KEY,
        order_id INTEGER NOT NULL,
        CONSTRAINT fk_lines_order FOREIGN KEY (order_id) REFERENCES orders (id)
    )""",
    """CREATE TABLE widgets (
        id INTEGER NOT NULL PRIMARY KEY,
        label VARCHAR(20)
    )""",
    """CREATE TABLE orders_archive (
        id INTEGER NOT NULL,
        archived_at TEXT
    )""",
    """CREATE TRIGGER archive_orders AFTER INSERT ON orders_archive
    BEGIN
        DELETE FROM orders WHERE id = NEW.id;
    END""",
]


@pytest.fixture
def sqlite_engine():
    """In-memory catalog shared by every connection of the engine"""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    with engine.begin() as conn:
        for statement in SQLITE_SCHEMA:
            conn.exec_driver_sql(statement)
    yield engine
    engine.dispose()


@pytest.fixture
def sqlite_connector(sqlite_engine):
    return DatabaseFactory.create_connector_for_engine(sqlite_engine)


@pytest.fixture
def sqlite_pipeline(sqlite_connector, tmp_path):
    return DocumentationPipeline(
        sqlite_connector,
        path_resolver=ExportPathResolver(export_dir=str(tmp_path / "docs"))
    )


class FakeCatalogReader(CatalogReader):
    """Canned catalog facts keyed by qualified table name"""

    def __init__(self):
        self.descriptions: Dict[str, Optional[str]] = {}
        self.columns: Dict[str, List[RawColumnFact]] = {}
        self.outgoing: Dict[str, List[TableReference]] = {}
        self.incoming: Dict[str, List[TableReference]] = {}
        self.routines: Dict[str, List[RoutineReference]] = {}

    def fetch_table_description(self, identity):
        return self.descriptions.get(identity.qualified_name)

    def fetch_columns(self, identity):
        return list(self.columns.get(identity.qualified_name, []))

    def fetch_outgoing_foreign_keys(self, identity):
        return list(self.outgoing.get(identity.qualified_name, []))

    def fetch_incoming_foreign_keys(self, identity):
        return list(self.incoming.get(identity.qualified_name, []))

    def fetch_routines_referencing(self, identity):
        return list(self.routines.get(identity.qualified_name, []))


@pytest.fixture
def orders_reader():
    """Catalog with the customer orders example"""
    reader = FakeCatalogReader()
    reader.descriptions['orders'] = "Customer orders"
    reader.columns['orders'] = [
        RawColumnFact(name='id', type_name='int', nullable=False, index_names=('PK_orders',)),
        RawColumnFact(
            name='customer_id',
            type_name='int',
            nullable=True,
            foreign_key=ForeignKeyFact('customers', 'id', 'fk_orders_customers')
        ),
    ]
    reader.outgoing['orders'] = [TableReference('customers', 'fk_orders_customers')]
    return reader


@pytest.fixture
def orders_identity():
    return TableIdentity('orders')
