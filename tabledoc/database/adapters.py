"""
Catalog readers for different database types
"""

from abc import ABC, abstractmethod
from functools import wraps
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import CompileError, SQLAlchemyError

from ..exceptions import CatalogUnavailable
from ..utils.logger import get_logger
from .models import (
    ForeignKeyFact,
    RawColumnFact,
    RoutineReference,
    RoutineSource,
    TableIdentity,
    TableReference,
)

logger = get_logger(__name__)


def catalog_query(stage: str) -> Callable:
    """Decorator turning driver errors raised by a fetch into CatalogUnavailable"""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self, identity: TableIdentity, *args, **kwargs):
            try:
                return func(self, identity, *args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(f"Catalog query '{stage}' failed for {identity}: {e}")
                raise CatalogUnavailable(
                    f"Catalog query failed: {e}",
                    table=identity.qualified_name,
                    stage=stage
                ) from e
        return wrapper
    return decorator


def mentions_table(definition: Optional[str], table_name: str) -> bool:
    """Case-insensitive substring test of a routine body against a table name.

    This is a textual heuristic: names inside string literals or comments
    match, and references made through views or dynamic SQL do not.
    """
    if not definition or not table_name:
        return False
    return table_name.lower() in definition.lower()


class CatalogReader(ABC):
    """Read-only access to the catalog facts describing one table.

    Every fetch returns an empty result when the table does not exist.
    """

    @abstractmethod
    def fetch_table_description(self, identity: TableIdentity) -> Optional[str]:
        """Table-level comment"""
        pass

    @abstractmethod
    def fetch_columns(self, identity: TableIdentity) -> List[RawColumnFact]:
        """Columns in native ordinal order"""
        pass

    @abstractmethod
    def fetch_outgoing_foreign_keys(self, identity: TableIdentity) -> List[TableReference]:
        """Tables referenced by the subject's foreign keys"""
        pass

    @abstractmethod
    def fetch_incoming_foreign_keys(self, identity: TableIdentity) -> List[TableReference]:
        """Tables whose foreign keys reference the subject"""
        pass

    @abstractmethod
    def fetch_routines_referencing(self, identity: TableIdentity) -> List[RoutineReference]:
        """Stored routines whose definition mentions the subject"""
        pass


class InspectorCatalogReader(CatalogReader):
    """Catalog reader built on SQLAlchemy's runtime inspector.

    Columns, constraints, indexes and comments come from the inspector, which
    already hides dialect differences. Engines only differ in where routine
    source text lives and in any extra per-column description properties, so
    subclasses override `fetch_routine_sources` and `fetch_extra_descriptions`.
    """

    def __init__(self, connection: Connection):
        self.connection = connection
        self.inspector = inspect(connection)

    @catalog_query('table lookup')
    def table_exists(self, identity: TableIdentity) -> bool:
        return self.inspector.has_table(identity.name, schema=identity.schema)

    @catalog_query('table description')
    def fetch_table_description(self, identity: TableIdentity) -> Optional[str]:
        if not self.table_exists(identity):
            return None

        try:
            comment = self.inspector.get_table_comment(identity.name, schema=identity.schema)
        except NotImplementedError:
            logger.debug(f"{self.connection.dialect.name} does not expose table comments")
            return None

        return comment.get('text') or None

    @catalog_query('columns')
    def fetch_columns(self, identity: TableIdentity) -> List[RawColumnFact]:
        if not self.table_exists(identity):
            return []

        foreign_keys = self._column_foreign_keys(identity)
        indexes = self._column_indexes(identity)
        extra_descriptions = self.fetch_extra_descriptions(identity)

        facts = []
        for col in self.inspector.get_columns(identity.name, schema=identity.schema):
            name = col['name']
            type_name, length = self._split_type(col['type'])
            facts.append(RawColumnFact(
                name=name,
                type_name=type_name,
                length=length,
                nullable=bool(col.get('nullable', True)),
                descriptions=(col.get('comment'),) + extra_descriptions.get(name, ()),
                index_names=indexes.get(name, ()),
                foreign_key=foreign_keys.get(name)
            ))

        return facts

    @catalog_query('outgoing foreign keys')
    def fetch_outgoing_foreign_keys(self, identity: TableIdentity) -> List[TableReference]:
        if not self.table_exists(identity):
            return []

        return [
            TableReference(
                table=self._table_label(fk['referred_table'], fk.get('referred_schema'), identity),
                constraint_name=fk.get('name')
            )
            for fk in self.inspector.get_foreign_keys(identity.name, schema=identity.schema)
        ]

    @catalog_query('incoming foreign keys')
    def fetch_incoming_foreign_keys(self, identity: TableIdentity) -> List[TableReference]:
        if not self.table_exists(identity):
            return []

        default_schema = self.inspector.default_schema_name
        subject_schema = identity.schema or default_schema

        references = []
        for table_name in self.inspector.get_table_names(schema=identity.schema):
            for fk in self.inspector.get_foreign_keys(table_name, schema=identity.schema):
                referred_schema = fk.get('referred_schema') or default_schema
                if fk['referred_table'] == identity.name and referred_schema == subject_schema:
                    references.append(TableReference(table=table_name, constraint_name=fk.get('name')))

        return references

    @catalog_query('routines')
    def fetch_routines_referencing(self, identity: TableIdentity) -> List[RoutineReference]:
        if not self.table_exists(identity):
            return []

        references = []
        for routine in self.fetch_routine_sources(identity):
            if mentions_table(routine.definition, identity.name):
                logger.debug(f"Routine {routine.name} mentions {identity.name}")
                references.append(RoutineReference(
                    routine_name=routine.name,
                    routine_description=routine.description or None
                ))

        return references

    def fetch_routine_sources(self, identity: TableIdentity) -> List[RoutineSource]:
        """All stored routines visible to the table's database"""
        return []

    def fetch_extra_descriptions(self, identity: TableIdentity) -> Dict[str, Tuple[Optional[str], ...]]:
        """Description sources beyond the column comment, keyed by column name"""
        return {}

    def _routine_rows(self, query, **params) -> List[RoutineSource]:
        result = self.connection.execute(query, params).mappings()
        return [
            RoutineSource(
                name=row['name'],
                definition=row['definition'],
                description=row['description'] or None
            )
            for row in result
        ]

    def _split_type(self, column_type) -> Tuple[str, Optional[int]]:
        """Base type name plus length (or precision) of a reflected column type"""
        try:
            compiled = column_type.compile(dialect=self.connection.dialect)
        except CompileError:
            compiled = type(column_type).__name__

        base = compiled.split('(')[0].split(' COLLATE ')[0].strip()
        length = getattr(column_type, 'length', None)
        if length is None:
            length = getattr(column_type, 'precision', None)

        return base, length

    def _column_foreign_keys(self, identity: TableIdentity) -> Dict[str, ForeignKeyFact]:
        foreign_keys = {}
        fks = self.inspector.get_foreign_keys(identity.name, schema=identity.schema)

        # A column owned by several constraints keeps the first by name
        for fk in sorted(fks, key=lambda fk: fk.get('name') or ''):
            referenced_table = self._table_label(fk['referred_table'], fk.get('referred_schema'), identity)
            for column, referenced_column in zip(fk['constrained_columns'], fk['referred_columns']):
                foreign_keys.setdefault(column, ForeignKeyFact(
                    referenced_table=referenced_table,
                    referenced_column=referenced_column,
                    constraint_name=fk.get('name')
                ))

        return foreign_keys

    def _column_indexes(self, identity: TableIdentity) -> Dict[str, Tuple[str, ...]]:
        membership: Dict[str, set] = {}

        def add(name, columns):
            if not name:
                return
            for column in columns:
                if column:
                    membership.setdefault(column, set()).add(name)

        pk = self.inspector.get_pk_constraint(identity.name, schema=identity.schema) or {}
        add(pk.get('name'), pk.get('constrained_columns') or [])

        try:
            for uc in self.inspector.get_unique_constraints(identity.name, schema=identity.schema):
                add(uc.get('name'), uc.get('column_names') or [])
        except NotImplementedError:
            logger.debug(f"{self.connection.dialect.name} does not expose unique constraints")

        for idx in self.inspector.get_indexes(identity.name, schema=identity.schema):
            add(idx.get('name'), idx.get('column_names') or [])

        return {column: tuple(sorted(names)) for column, names in membership.items()}

    def _table_label(self, table: str, schema: Optional[str], identity: TableIdentity) -> str:
        if schema and schema != (identity.schema or self.inspector.default_schema_name):
            return f"{schema}.{table}"
        return table


class PostgreSQLCatalogReader(InspectorCatalogReader):
    """PostgreSQL catalog reader"""

    ROUTINES_QUERY = text("""
        SELECT p.proname AS name,
               pg_get_functiondef(p.oid) AS definition,
               obj_description(p.oid, 'pg_proc') AS description
        FROM pg_proc p
        JOIN pg_namespace n ON n.oid = p.pronamespace
        WHERE n.nspname NOT IN ('pg_catalog', 'information_schema')
          AND n.nspname NOT LIKE 'pg_toast%'
          AND p.prokind IN ('f', 'p')
        ORDER BY n.nspname, p.proname
    """)

    def fetch_routine_sources(self, identity: TableIdentity) -> List[RoutineSource]:
        return self._routine_rows(self.ROUTINES_QUERY)


class MySQLCatalogReader(InspectorCatalogReader):
    """MySQL catalog reader"""

    ROUTINES_QUERY = text("""
        SELECT ROUTINE_NAME AS name,
               ROUTINE_DEFINITION AS definition,
               ROUTINE_COMMENT AS description
        FROM INFORMATION_SCHEMA.ROUTINES
        WHERE ROUTINE_SCHEMA = COALESCE(:schema, DATABASE())
        ORDER BY ROUTINE_NAME
    """)

    def fetch_routine_sources(self, identity: TableIdentity) -> List[RoutineSource]:
        return self._routine_rows(self.ROUTINES_QUERY, schema=identity.schema)


class MSSQLCatalogReader(InspectorCatalogReader):
    """SQL Server catalog reader.

    The column comment reflected by SQLAlchemy is the MS_Description extended
    property; SQ_Description and SR_Description follow it in that order.
    """

    EXTRA_DESCRIPTION_PROPERTIES = ('SQ_Description', 'SR_Description')

    ROUTINES_QUERY = text("""
        SELECT o.name AS name,
               m.definition AS definition,
               CONVERT(NVARCHAR(4000), ep.value) AS description
        FROM sys.sql_modules m
        JOIN sys.objects o ON o.object_id = m.object_id
        LEFT JOIN sys.extended_properties ep ON ep.class = 1
            AND ep.major_id = o.object_id
            AND ep.minor_id = 0
            AND ep.name = 'MS_Description'
        WHERE o.type IN ('P', 'FN', 'IF', 'TF')
        ORDER BY o.name
    """)

    EXTRA_DESCRIPTIONS_QUERY = text("""
        SELECT c.name AS column_name,
               ep.name AS property_name,
               CONVERT(NVARCHAR(4000), ep.value) AS value
        FROM sys.columns c
        JOIN sys.extended_properties ep ON ep.class = 1
            AND ep.major_id = c.object_id
            AND ep.minor_id = c.column_id
        WHERE c.object_id = OBJECT_ID(:table)
          AND ep.name IN ('SQ_Description', 'SR_Description')
    """)

    def fetch_routine_sources(self, identity: TableIdentity) -> List[RoutineSource]:
        return self._routine_rows(self.ROUTINES_QUERY)

    def fetch_extra_descriptions(self, identity: TableIdentity) -> Dict[str, Tuple[Optional[str], ...]]:
        properties: Dict[str, Dict[str, str]] = {}
        rows = self.connection.execute(self.EXTRA_DESCRIPTIONS_QUERY, {'table': identity.qualified_name}).mappings()
        for row in rows:
            properties.setdefault(row['column_name'], {})[row['property_name']] = row['value']

        return {
            column: tuple(values.get(prop) for prop in self.EXTRA_DESCRIPTION_PROPERTIES)
            for column, values in properties.items()
        }


class SQLiteCatalogReader(InspectorCatalogReader):
    """SQLite catalog reader; triggers stand in for stored routines"""

    ROUTINES_QUERY = text("""
        SELECT name AS name,
               sql AS definition,
               NULL AS description
        FROM sqlite_master
        WHERE type = 'trigger'
        ORDER BY name
    """)

    def fetch_routine_sources(self, identity: TableIdentity) -> List[RoutineSource]:
        return self._routine_rows(self.ROUTINES_QUERY)
