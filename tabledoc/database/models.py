"""
Data models for raw catalog facts
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Optional


class DependencyKind(Enum):
    """Kind of schema object linked to the subject table"""
    TABLE = "Table"
    ROUTINE = "Routine"


class DependencyDirection(Enum):
    """Parent: the subject references the object. Child: the object references the subject."""
    PARENT = "Parent"
    CHILD = "Child"


@dataclass(frozen=True)
class TableIdentity:
    """Schema-qualified table name used as the lookup key for every catalog query"""
    name: str
    schema: Optional[str] = None

    @classmethod
    def parse(cls, value: str) -> 'TableIdentity':
        """Build an identity from 'schema.table' or 'table'"""
        value = value.strip()
        if not value:
            raise ValueError("Table name must not be empty")
        schema, _, name = value.rpartition('.')
        return cls(name=name, schema=schema or None)

    @property
    def qualified_name(self) -> str:
        return f"{self.schema}.{self.name}" if self.schema else self.name

    def __str__(self) -> str:
        return self.qualified_name


@dataclass(frozen=True)
class ForeignKeyFact:
    """Foreign key constraint owning a column"""
    referenced_table: str
    referenced_column: str
    constraint_name: Optional[str] = None


@dataclass(frozen=True)
class RawColumnFact:
    """Column metadata as read from the catalog, before normalization"""
    name: str
    type_name: str
    length: Optional[int] = None
    nullable: bool = True
    descriptions: Tuple[Optional[str], ...] = ()
    index_names: Tuple[str, ...] = ()
    foreign_key: Optional[ForeignKeyFact] = None


@dataclass(frozen=True)
class TableReference:
    """Another table linked to the subject through a foreign key"""
    table: str
    constraint_name: Optional[str] = None


@dataclass(frozen=True)
class RoutineSource:
    """Stored routine name, definition text and catalog comment"""
    name: str
    definition: Optional[str]
    description: Optional[str] = None


@dataclass(frozen=True)
class RoutineReference:
    """Routine whose definition mentions the subject table"""
    routine_name: str
    routine_description: Optional[str]
    direction: DependencyDirection = DependencyDirection.CHILD
