"""Tests for the TableExtractor orchestrator and URL normalisation.

Orchestrator tests run with both the default lxml parser and html.parser;
their assertions do not depend on whitespace-only text nodes.
"""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest
from bs4 import BeautifulSoup

from conftest import read_resource
from html_tables.errors import InvalidCellSpanError, InvalidURLError
from html_tables.tables.extractor import TableExtractor, extract_tables, parse_span
from html_tables.tables.urls import URLConverter, table_id
from html_tables.text.extract import RichTextExtractor
from html_tables.text.render import to_html

DOC_URL = "https://example.org/wiki/Countries?lang=en"

PARSERS = ["lxml", "html.parser"]


@pytest.fixture(params=PARSERS)
def tables(request):
    return TableExtractor(parser=request.param).extract(DOC_URL, read_resource("tables.html"))


# ===========================================================================
# parse_span tests
# ===========================================================================


class TestParseSpan:

    def test_missing_and_blank(self):
        assert parse_span(None) == 1
        assert parse_span("") == 1
        assert parse_span("  ") == 1

    def test_numeric(self):
        assert parse_span("3") == 3
        assert parse_span(" 2 ") == 2

    def test_zero_means_one(self):
        assert parse_span("0") == 1

    @pytest.mark.parametrize("raw", ["two", "1.5", "-1", "²"])
    def test_invalid(self, raw):
        with pytest.raises(InvalidCellSpanError) as excinfo:
            parse_span(raw)
        assert excinfo.value.value == raw


# ===========================================================================
# Orchestrator tests
# ===========================================================================


class TestExtractTables:

    def test_only_valid_non_nested_tables(self, tables):
        """The overlapping table, the layout table and the bad-attribute table are dropped."""
        assert len(tables) == 2
        assert tables[0].attrs == {"class": "wikitable"}
        assert tables[1].attrs == {"id": "inner"}

    def test_ids_are_sequential(self, tables):
        assert [t.id for t in tables] == [f"{DOC_URL}&table_no=0", f"{DOC_URL}&table_no=1"]
        assert all(t.url == DOC_URL for t in tables)

    def test_caption(self, tables):
        assert tables[0].caption == " Population by country "
        assert tables[1].caption == ""

    def test_grid_is_spanned_and_padded(self, tables):
        assert tables[0].to_list() == [
            ["Country", "Population", "Population"],
            ["Country", "2010", "2020"],
            ["France", "65.0", "67.4"],
            ["Spain", "46.6", ""],
        ]
        assert all(c.colspan == 1 and c.rowspan == 1 for row in tables[0].rows for c in row.cells)
        assert [c.is_header for c in tables[0].rows[1].cells] == [True, True, True]
        assert [c.is_header for c in tables[0].rows[3].cells] == [False, False, False]

    def test_cell_html_is_original_markup(self, tables):
        assert tables[0].rows[0].cells[0].html == '<th rowspan="2">Country</th>'

    def test_relative_links_made_absolute(self, tables):
        france = tables[0].rows[2].cells[0].value
        assert to_html(france) == '<a href="https://example.org/wiki/France">France</a>'
        spain = tables[0].rows[3].cells[0].value
        assert to_html(spain) == '<a href="https://example.org/wiki/Spain">Spain</a>'

    def test_image_source_and_link_text(self, tables):
        flag, notes = tables[1].rows[0].cells
        assert [e.attrs.get("src") for e in flag.value.iter_elements() if e.tag == "img"] == ["https://example.org/wiki/flag.png"]
        assert notes.value.get_text() == "https://example.org/wiki/notes.html"
        assert to_html(notes.value) == '<a href="https://example.org/wiki/notes.html">https://example.org/wiki/notes.html</a>'

    def test_context_attached(self, tables):
        context = tables[0].context
        assert [(level.level, level.heading.get_text()) for level in context] == [(0, ""), (1, "Countries")]
        assert [to_html(block) for block in context[1].content_before] == [
            'Figures below come from the <a href="https://example.org/census/2020">census</a>.'
        ]
        assert context[1].content_after == []

    def test_context_of_inner_table(self, tables):
        context = tables[1].context
        assert [(level.level, level.heading.get_text()) for level in context] == [(0, ""), (1, "Countries"), (2, "Layout")]


class TestExtractorOptions:

    def test_without_span_keeps_markup_spans(self):
        tables = TableExtractor(parser="html.parser").extract(DOC_URL, read_resource("tables.html"), auto_span=False)
        # the overlapping table survives, the unparsable span does not
        assert len(tables) == 3
        assert tables[0].rows[0].cells[0].rowspan == 2
        assert tables[0].rows[0].cells[1].colspan == 2

    def test_without_pad(self):
        tables = TableExtractor(parser="html.parser").extract(DOC_URL, read_resource("tables.html"), auto_pad=False)
        assert [len(row.cells) for row in tables[0].rows] == [3, 3, 3, 2]

    def test_without_context(self):
        tables = TableExtractor(parser="html.parser").extract(DOC_URL, read_resource("tables.html"), extract_context=False)
        assert all(t.context == [] for t in tables)

    def test_custom_cell_filters(self):
        html = "<table><tr><td><div><p>One</p><script>x()</script></div></td></tr></table>"
        tables = TableExtractor(ignored_tags=[], discard_tags=["script"], only_keep_inline_tags=False, parser="html.parser").extract(
            "https://example.org/", html, extract_context=False
        )
        assert to_html(tables[0].rows[0].cells[0].value) == "<td><div><p>One</p></div></td>"

    def test_module_level_helper(self):
        tables = extract_tables(DOC_URL, read_resource("tables.html"))
        assert len(tables) == 2

    def test_no_tables(self):
        assert not TableExtractor().extract(DOC_URL, "<p>nothing here</p>")

    def test_empty_table(self):
        tables = TableExtractor().extract(DOC_URL, "<table></table>")
        assert len(tables) == 1
        assert tables[0].rows == []

    @pytest.mark.parametrize("url", ["/relative/page", "not a url", ""])
    def test_relative_document_url_is_fatal(self, url):
        with pytest.raises(InvalidURLError):
            TableExtractor().extract(url, read_resource("tables.html"))


# ===========================================================================
# URL tests
# ===========================================================================


def rich(html: str):
    return RichTextExtractor(only_inline=True).extract(BeautifulSoup(html, "html.parser").contents[0])


class TestTableId:

    def test_without_query(self):
        assert table_id("https://example.org/page", 3) == "https://example.org/page?table_no=3"

    def test_empty_path_becomes_slash(self):
        assert table_id("https://example.org", 0) == "https://example.org/?table_no=0"
        assert table_id("https://example.org?a=1", 2) == "https://example.org/?a=1&table_no=2"

    def test_with_query_and_fragment(self):
        assert table_id("https://example.org/page?a=1#top", 0) == "https://example.org/page?a=1&table_no=0#top"


class TestURLConverter:

    def test_relative_href(self):
        text = rich('<td>see <a href="../b/c.html">here</a></td>')
        URLConverter("https://example.org/a/x/page.html").normalize_rich_text(text)
        assert to_html(text) == 'see <a href="https://example.org/a/b/c.html">here</a>'

    def test_absolute_href_unchanged(self):
        text = rich('<td><a href="http://other.org/p">p</a></td>')
        URLConverter("https://example.org/").normalize_rich_text(text)
        assert to_html(text) == '<a href="http://other.org/p">p</a>'

    def test_link_text_rewrite_shifts_following_spans(self):
        text = rich('<td><b>x</b><a href="/doc">/doc</a> and <i>more</i></td>')
        URLConverter("https://example.org/a/").normalize_rich_text(text)

        assert text.text == "xhttps://example.org/doc and more"
        assert to_html(text) == '<b>x</b><a href="https://example.org/doc">https://example.org/doc</a> and <i>more</i>'
        assert text.formatting.get_root().end == len(text.text)

    def test_link_with_children_keeps_text(self):
        text = rich('<td><a href="/doc"><b>/doc</b></a></td>')
        URLConverter("https://example.org/").normalize_rich_text(text)
        assert text.text == "/doc"
        assert to_html(text) == '<a href="https://example.org/doc"><b>/doc</b></a>'

    def test_mailto_and_fragment(self):
        converter = URLConverter("https://example.org/page")
        assert converter.resolve("mailto:a@b.org") == "mailto:a@b.org"
        assert converter.resolve("#sec") == "https://example.org/page#sec"

    def test_rejects_relative_base(self):
        with pytest.raises(InvalidURLError) as excinfo:
            URLConverter("/page")
        assert excinfo.value.value == "/page"
