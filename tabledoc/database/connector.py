"""
Engine ownership and per-invocation catalog sessions
"""

from contextlib import contextmanager
from typing import Iterator, Optional, Type

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import CatalogUnavailable
from ..utils.logger import get_logger
from .adapters import InspectorCatalogReader

logger = get_logger(__name__)


class CatalogConnector:
    """Owns the engine (connection pool) for one database.

    The engine may be shared between invocations; each invocation gets its
    own connection through `session()`, which is closed on every exit path.
    """

    def __init__(self, db_type: str, reader_class: Type[InspectorCatalogReader],
                 url: Optional[str] = None, engine: Optional[Engine] = None):
        if url is None and engine is None:
            raise ValueError("Either a database URL or an engine is required")
        self.db_type = db_type
        self.reader_class = reader_class
        self.url = url
        self.engine = engine

    def connect(self) -> Engine:
        """Create the engine on first use"""
        if self.engine is None:
            try:
                self.engine = create_engine(self.url, pool_pre_ping=True)
            except SQLAlchemyError as e:
                raise CatalogUnavailable(f"{self.db_type} engine creation failed: {e}", stage='connect') from e
        return self.engine

    @contextmanager
    def session(self) -> Iterator[InspectorCatalogReader]:
        """Scoped catalog reader bound to a dedicated connection"""
        engine = self.connect()
        try:
            connection = engine.connect()
        except SQLAlchemyError as e:
            logger.error(f"Connection to {self.db_type} catalog failed: {e}")
            raise CatalogUnavailable(f"{self.db_type} connection failed: {e}", stage='connect') from e

        try:
            yield self.reader_class(connection)
        finally:
            connection.close()

    def dispose(self):
        """Release pooled connections"""
        if self.engine is not None:
            self.engine.dispose()
