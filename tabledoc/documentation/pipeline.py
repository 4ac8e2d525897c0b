"""
Request-to-document pipeline for a single table
"""

from dataclasses import dataclass
from typing import Optional, Union

from .. import config
from ..database.adapters import CatalogReader
from ..database.connector import CatalogConnector
from ..database.factory import DatabaseFactory
from ..database.models import TableIdentity
from ..exceptions import TableDocError, TableNotFound
from ..utils.logger import get_logger
from .dependencies import DependencyResolver
from .exporter import Exporter, ExportPathResolver, FileExporter
from .models import DocumentModel
from .normalizer import SchemaNormalizer
from .renderer import DocumentRenderer

logger = get_logger(__name__)


@dataclass(frozen=True)
class DocumentResult:
    """Outcome of one pipeline run"""
    identity: TableIdentity
    model: DocumentModel
    html: str
    path: Optional[str] = None


def build_document_model(reader: CatalogReader, identity: TableIdentity) -> DocumentModel:
    """Read the catalog once and fold the results into a DocumentModel"""
    description = SchemaNormalizer.pick_description((reader.fetch_table_description(identity),))
    columns = SchemaNormalizer().normalize(reader.fetch_columns(identity))
    dependencies = DependencyResolver(reader).resolve(identity)

    model = DocumentModel(
        title=identity.qualified_name,
        description=description,
        columns=tuple(columns),
        dependencies=tuple(dependencies)
    )

    if model.is_empty:
        raise TableNotFound(
            f"Table '{identity.qualified_name}' was not found in the catalog",
            table=identity.qualified_name,
            stage='catalog'
        )

    return model


class DocumentationPipeline:
    """Document tables from one database.

    Each call opens its own catalog session, so a pipeline may be shared by
    concurrent callers as long as the connector's engine is.
    """

    def __init__(self, connector: CatalogConnector,
                 renderer: Optional[DocumentRenderer] = None,
                 exporter: Optional[Exporter] = None,
                 path_resolver: Optional[ExportPathResolver] = None):
        self.connector = connector
        self.renderer = renderer or DocumentRenderer()
        self.exporter = exporter or FileExporter()
        self.path_resolver = path_resolver or ExportPathResolver()

    def document(self, table: Union[str, TableIdentity], export: bool = False) -> DocumentResult:
        """Render the document for a table, optionally exporting it"""
        identity = table if isinstance(table, TableIdentity) else TableIdentity.parse(table)
        logger.info(f"Documenting {identity} ({self.connector.db_type})")

        path = None
        try:
            with self.connector.session() as reader:
                model = build_document_model(reader, identity)
                if export:
                    path = self.path_resolver.resolve(identity.name, reader.connection)

            logger.info(
                f"{identity}: {len(model.columns)} columns, {len(model.dependencies)} dependencies"
            )
            html = self.renderer.render(model)

            if export:
                self.exporter.export(html, path)
        except TableDocError as e:
            if e.table is not None:
                logger.error(f"Documentation of {identity} failed: {e}")
                raise
            # Lower layers do not know the table; attach it before it leaves the pipeline
            error = type(e)(e.message, table=identity.qualified_name, stage=e.stage)
            logger.error(f"Documentation of {identity} failed: {error}")
            raise error from e

        return DocumentResult(identity=identity, model=model, html=html, path=path)

    def export(self, table: Union[str, TableIdentity]) -> str:
        """Render and write the document, returning the written path"""
        return self.document(table, export=True).path


def create_pipeline_from_env(db_type: Optional[str] = None) -> DocumentationPipeline:
    """Pipeline wired from environment settings"""
    url = config.get_database_url()
    if url:
        connector = DatabaseFactory.create_connector_from_url(url)
    else:
        db_type = DatabaseFactory.normalize_type(db_type or config.get_db_type())
        connector = DatabaseFactory.create_connector(db_type, config.get_db_config(db_type))

    export_settings = config.get_export_settings()
    path_resolver = ExportPathResolver(
        export_dir=export_settings['export_dir'],
        settings_table=export_settings['settings_table'],
        settings_key=export_settings['settings_key']
    )

    return DocumentationPipeline(connector, path_resolver=path_resolver)
