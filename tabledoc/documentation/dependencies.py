"""
Dependency discovery between a table and other schema objects
"""

from typing import Dict, List, Optional, Tuple

from ..database.adapters import CatalogReader
from ..database.models import DependencyDirection, DependencyKind, TableIdentity
from ..utils.logger import get_logger
from .models import Dependency
from .normalizer import SchemaNormalizer

logger = get_logger(__name__)


class DependencyRegistry:
    """Ordered dependency list with global sequence ids and duplicate suppression"""

    def __init__(self, subject: TableIdentity):
        self.subject = subject
        self._dependencies: List[Dependency] = []
        self._keys: Dict[Tuple[DependencyKind, str, DependencyDirection], int] = {}

    def add(self, kind: DependencyKind, object_name: str, direction: DependencyDirection,
            description: Optional[str] = None) -> bool:
        """Append a dependency unless the same (kind, object, direction) is already present"""
        dependency = Dependency(
            sequence_id=len(self._dependencies) + 1,
            subject_table=self.subject,
            kind=kind,
            object_name=object_name,
            direction=direction,
            description=description
        )
        if dependency.key in self._keys:
            return False

        self._keys[dependency.key] = dependency.sequence_id
        self._dependencies.append(dependency)
        return True

    @property
    def dependencies(self) -> List[Dependency]:
        return list(self._dependencies)


class DependencyResolver:
    """Find the tables and routines linked to a table.

    Three passes run in a fixed order: tables the subject references, tables
    referencing the subject, then routines whose source mentions the subject.
    The routine pass is a substring search, so its results are advisory.
    """

    def __init__(self, reader: CatalogReader):
        self.reader = reader

    def resolve(self, identity: TableIdentity) -> List[Dependency]:
        registry = DependencyRegistry(identity)

        for reference in self.reader.fetch_outgoing_foreign_keys(identity):
            registry.add(DependencyKind.TABLE, reference.table, DependencyDirection.PARENT)

        for reference in self.reader.fetch_incoming_foreign_keys(identity):
            registry.add(DependencyKind.TABLE, reference.table, DependencyDirection.CHILD)

        for routine in self.reader.fetch_routines_referencing(identity):
            registry.add(
                DependencyKind.ROUTINE,
                routine.routine_name,
                routine.direction,
                SchemaNormalizer.pick_description((routine.routine_description,))
            )

        dependencies = registry.dependencies
        logger.debug(f"Resolved {len(dependencies)} dependencies for {identity}")
        return dependencies
