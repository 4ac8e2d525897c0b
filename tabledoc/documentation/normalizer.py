"""
Normalization of raw column facts into column descriptors
"""

from typing import Iterable, List, Optional

from ..database.models import RawColumnFact
from ..exceptions import RenderingFailure
from .models import ColumnDescriptor, ForeignKeyTarget


class SchemaNormalizer:
    """Convert catalog column facts into the canonical descriptor list.

    Descriptions are taken from the first non-blank candidate in the order the
    reader supplies them. When a column belongs to several indexes the
    alphabetically first index name is used.
    """

    def normalize(self, facts: Iterable[RawColumnFact]) -> List[ColumnDescriptor]:
        descriptors = []
        seen = set()

        for fact in facts:
            if fact.name in seen:
                raise RenderingFailure(f"Duplicate column '{fact.name}'", stage='normalize')
            seen.add(fact.name)

            descriptors.append(ColumnDescriptor(
                name=fact.name,
                declared_type=self.render_type(fact.type_name, fact.length),
                is_nullable=fact.nullable,
                foreign_key=self._foreign_key(fact),
                index_name=min(fact.index_names) if fact.index_names else None,
                description=self.pick_description(fact.descriptions)
            ))

        return descriptors

    @staticmethod
    def render_type(type_name: str, length: Optional[int] = None) -> str:
        """Base type name with a (N) suffix when a length or precision is known"""
        if length is None:
            return type_name
        return f"{type_name}({length})"

    @staticmethod
    def pick_description(candidates: Iterable[Optional[str]]) -> Optional[str]:
        for candidate in candidates:
            if candidate and candidate.strip():
                return candidate
        return None

    @staticmethod
    def _foreign_key(fact: RawColumnFact) -> Optional[ForeignKeyTarget]:
        if fact.foreign_key is None:
            return None
        return ForeignKeyTarget(
            referenced_table=fact.foreign_key.referenced_table,
            referenced_column=fact.foreign_key.referenced_column,
            constraint_name=fact.foreign_key.constraint_name
        )
