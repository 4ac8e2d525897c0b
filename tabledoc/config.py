"""
Environment configuration for database connections and export
"""

import os
from typing import Dict, Any, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def get_db_type() -> str:
    """Database type selected for documentation runs"""
    return os.getenv('TABLEDOC_DB_TYPE', 'postgresql').lower()


def get_database_url() -> Optional[str]:
    """Full SQLAlchemy URL, overriding the per-engine settings when present"""
    return os.getenv('TABLEDOC_DATABASE_URL') or None


def get_db_configs() -> Dict[str, Dict[str, Any]]:
    """Connection settings for every supported database type"""
    return {
        'postgresql': {
            'host': os.getenv('POSTGRES_HOST'),
            'port': os.getenv('POSTGRES_PORT', 5432),
            'user': os.getenv('POSTGRES_USER'),
            'password': os.getenv('POSTGRES_PASSWORD'),
            'database': os.getenv('POSTGRES_DB')
        },
        'mysql': {
            'host': os.getenv('MYSQL_HOST'),
            'port': int(os.getenv('MYSQL_PORT', 3306)),
            'user': os.getenv('MYSQL_USER'),
            'password': os.getenv('MYSQL_PASSWORD'),
            'database': os.getenv('MYSQL_DB')
        },
        'mssql': {
            'host': os.getenv('MSSQL_HOST'),
            'port': int(os.getenv('MSSQL_PORT', 1433)),
            'user': os.getenv('MSSQL_USER'),
            'password': os.getenv('MSSQL_PASSWORD'),
            'database': os.getenv('MSSQL_DB'),
            'driver': os.getenv('MSSQL_DRIVER', 'ODBC Driver 18 for SQL Server')
        },
        'sqlite': {
            'database': os.getenv('SQLITE_PATH')
        }
    }


def get_db_config(db_type: str) -> Dict[str, Any]:
    """Connection settings for a single database type"""
    configs = get_db_configs()
    if db_type.lower() not in configs:
        raise ValueError(f"Unsupported database type: {db_type}")
    return configs[db_type.lower()]


def get_export_settings() -> Dict[str, Optional[str]]:
    """Where rendered documents go"""
    return {
        'export_dir': os.getenv('TABLEDOC_EXPORT_DIR', 'docs'),
        'settings_table': os.getenv('TABLEDOC_SETTINGS_TABLE') or None,
        'settings_key': os.getenv('TABLEDOC_SETTINGS_KEY', 'PathToDocumentationExport')
    }
