"""
Command line interface for the table documentation generator
"""

import sys
from typing import List, Optional

from ..documentation.pipeline import DocumentationPipeline, create_pipeline_from_env
from ..exceptions import TableDocError


def document_tables(pipeline: DocumentationPipeline, tables: List[str]) -> int:
    """Export each table's document, returning the number of failures"""
    failures = 0
    for table in tables:
        try:
            path = pipeline.export(table)
            print(f"✅ {table} -> {path}")
        except TableDocError as e:
            failures += 1
            print(f"❌ {table}: {e}")
    return failures


def interactive(pipeline: DocumentationPipeline) -> int:
    """Prompt for table names until EXIT"""
    print("\n" + "="*60)
    print("💡 Commands:")
    print("  - Type a table name (optionally schema.table) to document it")
    print("  - 'EXIT' - Exit")
    print("="*60)

    failures = 0
    while True:
        try:
            table = input("\n📋 Table: ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\n\n👋 Goodbye!")
            break

        if not table:
            continue
        if table.upper() == 'EXIT':
            print("\n👋 Goodbye!")
            break

        failures += document_tables(pipeline, [table])

    return failures


def main(argv: Optional[List[str]] = None) -> int:
    """Document the tables named on the command line, or prompt for them"""
    tables = sys.argv[1:] if argv is None else argv

    try:
        pipeline = create_pipeline_from_env()
    except ValueError as e:
        print(f"❌ {e}. Please check your .env file.")
        return 2

    print(f"\n🔌 Using {pipeline.connector.db_type} catalog")
    try:
        if tables:
            failures = document_tables(pipeline, tables)
        else:
            failures = interactive(pipeline)
    finally:
        pipeline.connector.dispose()

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
