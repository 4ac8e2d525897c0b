"""
Data models for the rendered table document
"""

from dataclasses import dataclass
from typing import Tuple, Optional

from ..database.models import TableIdentity, DependencyKind, DependencyDirection


@dataclass(frozen=True)
class ForeignKeyTarget:
    """Column referenced through a foreign key"""
    referenced_table: str
    referenced_column: str
    constraint_name: Optional[str] = None


@dataclass(frozen=True)
class ColumnDescriptor:
    """Normalized column definition"""
    name: str
    declared_type: str
    is_nullable: bool
    foreign_key: Optional[ForeignKeyTarget] = None
    index_name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Dependency:
    """Link between the subject table and another table or routine"""
    sequence_id: int
    subject_table: TableIdentity
    kind: DependencyKind
    object_name: str
    direction: DependencyDirection
    description: Optional[str] = None

    @property
    def key(self) -> Tuple[DependencyKind, str, DependencyDirection]:
        return (self.kind, self.object_name, self.direction)


@dataclass(frozen=True)
class DocumentModel:
    """Everything the renderer needs, built once per table"""
    title: str
    description: Optional[str]
    columns: Tuple[ColumnDescriptor, ...]
    dependencies: Tuple[Dependency, ...]

    @property
    def is_empty(self) -> bool:
        return not self.description and not self.columns and not self.dependencies
