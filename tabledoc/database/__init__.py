"""
Catalog readers and connection management
"""

from .models import (
    TableIdentity,
    RawColumnFact,
    ForeignKeyFact,
    TableReference,
    RoutineSource,
    RoutineReference,
    DependencyKind,
    DependencyDirection,
)
from .adapters import (
    CatalogReader,
    InspectorCatalogReader,
    PostgreSQLCatalogReader,
    MySQLCatalogReader,
    MSSQLCatalogReader,
    SQLiteCatalogReader,
)
from .connector import CatalogConnector
from .factory import DatabaseFactory

__all__ = [
    'TableIdentity',
    'RawColumnFact',
    'ForeignKeyFact',
    'TableReference',
    'RoutineSource',
    'RoutineReference',
    'DependencyKind',
    'DependencyDirection',
    'CatalogReader',
    'InspectorCatalogReader',
    'PostgreSQLCatalogReader',
    'MySQLCatalogReader',
    'MSSQLCatalogReader',
    'SQLiteCatalogReader',
    'CatalogConnector',
    'DatabaseFactory'
]
