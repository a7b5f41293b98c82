"""Extract structured tables, with formatted cell text and section context, from HTML."""

from html_tables.context.extractor import SectionContextExtractor
from html_tables.context.schema import ContentHierarchy
from html_tables.errors import InvalidCellSpanError, InvalidURLError, OverlapSpanError, TableExtractorError
from html_tables.tables.extractor import TableExtractor, extract_tables
from html_tables.tables.grid import pad, span
from html_tables.tables.schema import Cell, Row, Table
from html_tables.text.extract import RichTextExtractor
from html_tables.text.schema import FormattingElement, RichText
from html_tables.tree import IndexedTree

__all__ = [
    "Cell",
    "ContentHierarchy",
    "FormattingElement",
    "IndexedTree",
    "InvalidCellSpanError",
    "InvalidURLError",
    "OverlapSpanError",
    "RichText",
    "RichTextExtractor",
    "Row",
    "SectionContextExtractor",
    "Table",
    "TableExtractor",
    "TableExtractorError",
    "extract_tables",
    "pad",
    "span",
]
