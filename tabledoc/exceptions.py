"""
Error types raised while documenting a table
"""

from typing import Optional


class TableDocError(Exception):
    """Base class for documentation pipeline errors"""

    def __init__(self, message: str, table: Optional[str] = None, stage: Optional[str] = None):
        self.message = message
        self.table = table
        self.stage = stage
        context = ", ".join(
            part for part in (
                f"table={table}" if table else "",
                f"stage={stage}" if stage else ""
            ) if part
        )
        super().__init__(f"{message} [{context}]" if context else message)


class TableNotFound(TableDocError):
    """The requested table does not resolve in the catalog"""


class CatalogUnavailable(TableDocError, ConnectionError):
    """Catalog metadata could not be read"""


class RenderingFailure(TableDocError):
    """Internal invariant violated while assembling the document"""


class ExportFailure(TableDocError):
    """The rendered document could not be written"""
