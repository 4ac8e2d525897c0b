"""
Export of rendered documents and export directory lookup
"""

import os
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy import column, select, table
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import ExportFailure
from ..utils.logger import get_logger

logger = get_logger(__name__)


class Exporter(ABC):
    """Sink for finished documents"""

    @abstractmethod
    def export(self, document_text: str, target_path: str) -> None:
        pass


class FileExporter(Exporter):
    """Write documents to the local file system with Unix line endings"""

    def export(self, document_text: str, target_path: str) -> None:
        try:
            directory = os.path.dirname(target_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            content = document_text.replace('\r\n', '\n')
            with open(target_path, 'w', encoding='utf-8', newline='\n') as f:
                f.write(content)
        except OSError as e:
            raise ExportFailure(f"Could not write {target_path}: {e}", stage='export') from e

        logger.info(f"Wrote {target_path}")


class ExportPathResolver:
    """Decide where a table's document is written.

    The directory comes from a key/value settings table when one is
    configured, falling back to a fixed directory. The file name is always
    `<table name>.html`.
    """

    def __init__(self, export_dir: str = 'docs', settings_table: Optional[str] = None,
                 settings_key: str = 'PathToDocumentationExport'):
        self.export_dir = export_dir
        self.settings_table = settings_table
        self.settings_key = settings_key

    def resolve_directory(self, connection: Optional[Connection] = None) -> str:
        if self.settings_table and connection is not None:
            try:
                value = connection.execute(self._settings_query()).scalar()
            except SQLAlchemyError as e:
                raise ExportFailure(
                    f"Could not read export directory from {self.settings_table}: {e}",
                    stage='export path'
                ) from e
            if value:
                return value
            logger.warning(f"No '{self.settings_key}' setting in {self.settings_table}, using {self.export_dir}")
        return self.export_dir

    def resolve(self, table_name: str, connection: Optional[Connection] = None) -> str:
        return os.path.join(self.resolve_directory(connection), f"{table_name}.html")

    def _settings_query(self):
        schema, _, name = self.settings_table.rpartition('.')
        settings = table(name, column('key'), column('value'), schema=schema or None)
        return select(settings.c.value).where(settings.c.key == self.settings_key)
