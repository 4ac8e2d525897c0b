"""
Normalization, dependency discovery and rendering of table documents
"""

from .models import ForeignKeyTarget, ColumnDescriptor, Dependency, DocumentModel
from .normalizer import SchemaNormalizer
from .dependencies import DependencyRegistry, DependencyResolver
from .renderer import DocumentRenderer
from .exporter import Exporter, FileExporter, ExportPathResolver
from .pipeline import DocumentResult, DocumentationPipeline, build_document_model, create_pipeline_from_env

__all__ = [
    'ForeignKeyTarget',
    'ColumnDescriptor',
    'Dependency',
    'DocumentModel',
    'SchemaNormalizer',
    'DependencyRegistry',
    'DependencyResolver',
    'DocumentRenderer',
    'Exporter',
    'FileExporter',
    'ExportPathResolver',
    'DocumentResult',
    'DocumentationPipeline',
    'build_document_model',
    'create_pipeline_from_env'
]
