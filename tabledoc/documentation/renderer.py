"""
HTML rendering of table documents
"""

import html
from typing import Iterable, List, Optional

from ..exceptions import RenderingFailure
from .models import ColumnDescriptor, Dependency, DocumentModel

PLACEHOLDER = '-'

STYLE = """body {font-family: 'Segoe UI';}
table {border-collapse: collapse; width: 100%; font-size: 10pt;}
th {background-color: darkgrey; color: white; font-weight: bold; border: 1px solid black; padding: 2px;}
td {border: 1px solid black; padding: 2px;}
tbody tr:nth-child(even) {background-color: lightgrey;}
tbody tr:nth-child(odd) {background-color: white;}
h1 {font-size: 13pt; font-weight: bold; color: #091961;}
h2 {font-size: 12pt; font-weight: bold; color: #3399ff;}
p.description {font-size: 11pt;}"""

COLUMN_HEADERS = [
    'Column Name',
    'Data Type',
    'Is Nullable',
    'Foreign Key Reference',
    'Foreign Key Column',
    'Foreign Key Name',
    'Index Name',
    'Description'
]

DEPENDENCY_HEADERS = [
    'ID',
    'Table Name',
    'Type Of Dependency',
    'Object Name',
    'Dependency Type',
    'Description'
]


def escape(value: Optional[object], default: str = '') -> str:
    """HTML-escape a value, substituting `default` when it is missing"""
    if value is None or value == '':
        return html.escape(default)
    return html.escape(str(value), quote=True)


class DocumentRenderer:
    """Render a DocumentModel as a self-contained HTML page.

    Output depends only on the model, so identical models render to
    identical text.
    """

    def render(self, model: DocumentModel) -> str:
        self._validate(model)

        lines = [
            '<!DOCTYPE html>',
            '<html><head>',
            '<meta charset="utf-8">',
            f'<title>{escape(model.title)}</title>',
            '<style>',
            STYLE,
            '</style>',
            '</head><body>',
            f'<h1>{escape(model.title)}</h1>',
            f'<p class="description">{escape(model.description, PLACEHOLDER)}</p>',
            '<h2>1. Column Definitions</h2>'
        ]
        lines.extend(self._table(COLUMN_HEADERS, (self._column_cells(c) for c in model.columns)))
        lines.append('<h2>2. Dependencies</h2>')
        lines.extend(self._table(DEPENDENCY_HEADERS, (self._dependency_cells(d) for d in model.dependencies)))
        lines.append('</body></html>')

        return '\n'.join(lines) + '\n'

    def _table(self, headers: List[str], rows: Iterable[List[str]]) -> List[str]:
        lines = [
            '<table>',
            '<thead><tr>' + ''.join(f'<th>{escape(h)}</th>' for h in headers) + '</tr></thead>',
            '<tbody>'
        ]
        for cells in rows:
            lines.append('<tr>' + ''.join(f'<td>{cell}</td>' for cell in cells) + '</tr>')
        lines.extend(['</tbody>', '</table>'])
        return lines

    @staticmethod
    def _column_cells(column: ColumnDescriptor) -> List[str]:
        fk = column.foreign_key
        return [
            escape(column.name),
            escape(column.declared_type),
            'YES' if column.is_nullable else 'NO',
            escape(fk.referenced_table if fk else None),
            escape(fk.referenced_column if fk else None),
            escape(fk.constraint_name if fk else None),
            escape(column.index_name),
            escape(column.description, PLACEHOLDER)
        ]

    @staticmethod
    def _dependency_cells(dependency: Dependency) -> List[str]:
        return [
            escape(dependency.sequence_id),
            escape(dependency.subject_table.qualified_name),
            escape(dependency.kind.value),
            escape(dependency.object_name),
            escape(dependency.direction.value),
            escape(dependency.description, PLACEHOLDER)
        ]

    @staticmethod
    def _validate(model: DocumentModel):
        names = [column.name for column in model.columns]
        if len(names) != len(set(names)):
            raise RenderingFailure("Column names are not unique", table=model.title, stage='render')

        previous = 0
        for dependency in model.dependencies:
            if dependency.sequence_id <= previous:
                raise RenderingFailure(
                    f"Dependency sequence ids out of order at {dependency.sequence_id}",
                    table=model.title,
                    stage='render'
                )
            previous = dependency.sequence_id
