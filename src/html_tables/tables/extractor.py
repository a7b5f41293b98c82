"""Table extraction from raw HTML documents.

Orchestrates the full pass over one document:

  1. Find every ``<table>`` that has no nested table (outer layout tables are
     skipped, their inner tables are picked up on their own).
  2. Parse caption, rows and cells; cell values go through RichTextExtractor.
  3. Expand colspan/rowspan (``grid.span``) and pad ragged rows (``grid.pad``).
  4. Attach the section context of each table.
  5. Assign ids (document URL + ``table_no``) and make cell/context links absolute.

A table with bad span markup is dropped with a warning; the rest of the
document is still extracted.  Extraction is a pure function of (url, html).
"""

import logging
from collections.abc import Iterable, Iterator

from bs4 import BeautifulSoup
from bs4.element import Tag

from html_tables.config import DEFAULT_DISCARD_TAGS, DEFAULT_IGNORED_TAGS, HTML_PARSER
from html_tables.context.extractor import SectionContextExtractor
from html_tables.errors import InvalidCellSpanError, OverlapSpanError
from html_tables.tables.grid import pad, span
from html_tables.tables.schema import Cell, Row, Table
from html_tables.tables.urls import URLConverter, table_id
from html_tables.text.extract import RichTextExtractor, convert_attrs, get_text

logger = logging.getLogger(__name__)

_ROW_GROUP_TAGS = ("thead", "tbody", "tfoot")


def parse_span(raw: str | None) -> int:
    """Parse a colspan/rowspan attribute.  Missing or blank means 1, and so does 0 (as in browsers)."""
    if raw is None:
        return 1
    value = str(raw).strip()
    if not value:
        return 1
    if not (value.isascii() and value.isdigit()):
        raise InvalidCellSpanError(f"Invalid span value {raw!r}", value=raw)
    return max(int(value), 1)


class TableExtractor:
    """Extract tables, with their context, from HTML documents."""

    def __init__(
        self,
        context_extractor: SectionContextExtractor | None = None,
        ignored_tags: Iterable[str] | None = None,
        discard_tags: Iterable[str] | None = None,
        keep_tags: Iterable[str] | None = None,
        only_keep_inline_tags: bool = True,
        parser: str = HTML_PARSER,
    ):
        self.text_extractor = RichTextExtractor(
            ignored_tags=DEFAULT_IGNORED_TAGS if ignored_tags is None else ignored_tags,
            discard_tags=DEFAULT_DISCARD_TAGS if discard_tags is None else discard_tags,
            keep_tags=keep_tags or (),
            only_inline=only_keep_inline_tags,
        )
        self.context_extractor = context_extractor or SectionContextExtractor()
        self.parser = parser

    def extract(
        self,
        url: str,
        html: str,
        auto_span: bool = True,
        auto_pad: bool = True,
        extract_context: bool = True,
    ) -> list[Table]:
        """Return the tables of the document at *url*, in document order.

        Raises InvalidURLError if *url* is not absolute.
        """
        url_converter = URLConverter(url)
        soup = BeautifulSoup(html, self.parser)

        tables: list[Table] = []
        elements: list[Tag] = []
        n_skipped = 0
        for table_el in soup.find_all("table"):
            if table_el.find("table") is not None:
                continue
            table = self._extract_one(table_el, auto_span)
            if table is None:
                n_skipped += 1
                continue
            tables.append(table)
            elements.append(table_el)

        if auto_pad:
            tables = [pad(table) or table for table in tables]

        if extract_context:
            for table, table_el in zip(tables, elements):
                table.context = self.context_extractor.extract_context(table_el)

        for i, table in enumerate(tables):
            table.id = table_id(url, i)
            table.url = url
            self._normalize_urls(table, url_converter)

        logger.info("Extracted %d table(s) from %s (%d dropped for invalid spans)", len(tables), url, n_skipped)
        return tables

    def _extract_one(self, table_el: Tag, auto_span: bool) -> Table | None:
        """Parse (and span) one table; None if its span markup is unusable."""
        try:
            table = self.extract_non_nested_table(table_el)
            if auto_span:
                table = span(table)
        except (InvalidCellSpanError, OverlapSpanError) as exc:
            logger.warning("Dropping table: %s", exc)
            return None
        return table

    # ─── Parsing ─────────────────────────────────────────────────────────────

    def extract_non_nested_table(self, table_el: Tag) -> Table:
        """Parse a ``<table>`` element that contains no other table."""
        caption_el = table_el.find("caption", recursive=False)
        caption = get_text(caption_el) if caption_el is not None else ""

        rows = [
            Row(cells=[self.extract_cell(cell_el) for cell_el in _iter_cells(row_el)], attrs=convert_attrs(row_el))
            for row_el in _iter_rows(table_el)
        ]
        logger.debug("Parsed table with %d row(s), caption=%r", len(rows), caption)
        return Table(caption=caption, attrs=convert_attrs(table_el), rows=rows)

    def extract_cell(self, cell_el: Tag) -> Cell:
        """Parse a ``td``/``th`` element.  Raises InvalidCellSpanError on non-numeric spans."""
        return Cell(
            is_header=cell_el.name == "th",
            rowspan=parse_span(cell_el.get("rowspan")),
            colspan=parse_span(cell_el.get("colspan")),
            attrs=convert_attrs(cell_el),
            value=self.text_extractor.extract(cell_el),
            html=str(cell_el),
        )

    # ─── URL Normalisation ───────────────────────────────────────────────────

    @staticmethod
    def _normalize_urls(table: Table, url_converter: URLConverter) -> None:
        for row in table.rows:
            for cell in row.cells:
                url_converter.normalize_rich_text(cell.value)
        for level in table.context:
            url_converter.normalize_rich_text(level.heading)
            for block in level.content_before + level.content_after:
                url_converter.normalize_rich_text(block)


def _iter_rows(table_el: Tag) -> Iterator[Tag]:
    """``tr`` elements of a table, directly or inside thead/tbody/tfoot, in document order."""
    for child in table_el.children:
        if not isinstance(child, Tag):
            continue
        if child.name == "tr":
            yield child
        elif child.name in _ROW_GROUP_TAGS:
            yield from (row for row in child.children if isinstance(row, Tag) and row.name == "tr")


def _iter_cells(row_el: Tag) -> Iterator[Tag]:
    return (cell for cell in row_el.children if isinstance(cell, Tag) and cell.name in ("td", "th"))


def extract_tables(
    url: str,
    html: str,
    auto_span: bool = True,
    auto_pad: bool = True,
    extract_context: bool = True,
) -> list[Table]:
    """Extract tables from *html* with the default extractor settings."""
    return TableExtractor().extract(url, html, auto_span=auto_span, auto_pad=auto_pad, extract_context=extract_context)
