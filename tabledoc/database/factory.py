"""
Database factory for creating catalog connectors
"""

from typing import Dict, Any, Optional, Type
from sqlalchemy.engine import Engine, URL, make_url

from .adapters import (
    InspectorCatalogReader,
    PostgreSQLCatalogReader,
    MySQLCatalogReader,
    MSSQLCatalogReader,
    SQLiteCatalogReader,
)
from .connector import CatalogConnector


class DatabaseFactory:
    """Factory class to create the catalog connector for a database type"""

    READERS: Dict[str, Type[InspectorCatalogReader]] = {
        'postgresql': PostgreSQLCatalogReader,
        'mysql': MySQLCatalogReader,
        'mssql': MSSQLCatalogReader,
        'sqlite': SQLiteCatalogReader
    }

    DRIVERS = {
        'postgresql': 'postgresql+psycopg2',
        'mysql': 'mysql+pymysql',
        'mssql': 'mssql+pyodbc',
        'sqlite': 'sqlite'
    }

    @staticmethod
    def normalize_type(db_type: str) -> str:
        """Canonical database type name"""
        db_type = db_type.lower()
        if db_type == 'postgres':
            return 'postgresql'
        if db_type == 'sqlserver':
            return 'mssql'
        return db_type

    @staticmethod
    def get_reader_class(db_type: str) -> Type[InspectorCatalogReader]:
        """Catalog reader implementation for a database type"""
        db_type = DatabaseFactory.normalize_type(db_type)
        if db_type not in DatabaseFactory.READERS:
            raise ValueError(f"Unsupported database type: {db_type}")
        return DatabaseFactory.READERS[db_type]

    @staticmethod
    def create_connector(db_type: str, config: Dict[str, Any]) -> CatalogConnector:
        """Create catalog connector from per-engine settings"""
        db_type = DatabaseFactory.normalize_type(db_type)
        reader_class = DatabaseFactory.get_reader_class(db_type)

        missing = [key for key in DatabaseFactory.get_required_config(db_type) if not config.get(key)]
        if missing:
            raise ValueError(f"Missing configuration for {db_type}: {', '.join(missing)}")

        return CatalogConnector(db_type, reader_class, url=DatabaseFactory.build_url(db_type, config))

    @staticmethod
    def create_connector_from_url(url: str) -> CatalogConnector:
        """Create catalog connector from a full SQLAlchemy URL"""
        db_type = DatabaseFactory.normalize_type(make_url(url).get_backend_name())
        return CatalogConnector(db_type, DatabaseFactory.get_reader_class(db_type), url=url)

    @staticmethod
    def create_connector_for_engine(engine: Engine, db_type: Optional[str] = None) -> CatalogConnector:
        """Wrap an existing engine"""
        db_type = DatabaseFactory.normalize_type(db_type or engine.dialect.name)
        return CatalogConnector(db_type, DatabaseFactory.get_reader_class(db_type), engine=engine)

    @staticmethod
    def build_url(db_type: str, config: Dict[str, Any]) -> URL:
        """SQLAlchemy URL for per-engine settings"""
        db_type = DatabaseFactory.normalize_type(db_type)
        if db_type == 'sqlite':
            return URL.create('sqlite', database=config['database'])

        query = {}
        if db_type == 'mssql' and config.get('driver'):
            query['driver'] = config['driver']

        return URL.create(
            DatabaseFactory.DRIVERS[db_type],
            username=config['user'],
            password=config['password'],
            host=config['host'],
            port=int(config['port']) if config.get('port') else None,
            database=config['database'],
            query=query
        )

    @staticmethod
    def get_supported_types() -> list:
        """Get list of supported database types"""
        return list(DatabaseFactory.READERS)

    @staticmethod
    def get_required_config(db_type: str) -> list:
        """Get required configuration keys for database type"""
        configs = {
            'postgresql': ['host', 'port', 'user', 'password', 'database'],
            'mysql': ['host', 'user', 'password', 'database'],
            'mssql': ['host', 'user', 'password', 'database'],
            'sqlite': ['database']
        }
        return configs.get(DatabaseFactory.normalize_type(db_type), [])
