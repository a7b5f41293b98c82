"""Command-line entry point: extract the tables of a saved HTML page.

Usage:
  html-tables page.html --url https://example.org/page
  html-tables page.html --url https://example.org/page --format text --no-context
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from html_tables.config import LOG_LEVEL
from html_tables.errors import InvalidURLError
from html_tables.tables.extractor import TableExtractor
from html_tables.tables.schema import Table

logger = logging.getLogger(__name__)


def format_table_text(table: Table) -> str:
    """Plain-text rendering: id, caption, then one ``|``-separated line per row."""
    lines = [f"# {table.id}"]
    if table.caption.strip():
        lines.append(f"Caption: {table.caption.strip()}")
    for level in table.context:
        heading = level.heading.get_text()
        if heading:
            lines.append(f"{'  ' * level.level}[h{level.level}] {heading}")
    for row in table.to_list():
        lines.append(" | ".join(cell.strip() for cell in row))
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Extract tables from an HTML file and print them."""
    parser = argparse.ArgumentParser(description="Extract tables from an HTML document")
    parser.add_argument("html_file", type=Path, help="Path to the HTML file")
    parser.add_argument("--url", required=True, help="Absolute URL of the document (used for ids and link resolution)")
    parser.add_argument("--no-span", action="store_true", help="Keep colspan/rowspan as found in the markup")
    parser.add_argument("--no-pad", action="store_true", help="Do not pad ragged rows")
    parser.add_argument("--no-context", action="store_true", help="Skip section-context extraction")
    parser.add_argument("--format", choices=["json", "text"], default="json", help="Output format (default: json)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s")

    with open(args.html_file, "r", encoding="utf-8", errors="replace") as fopen:
        html = fopen.read()

    try:
        tables = TableExtractor().extract(
            args.url,
            html,
            auto_span=not args.no_span,
            auto_pad=not args.no_pad,
            extract_context=not args.no_context,
        )
    except InvalidURLError as exc:
        logger.error("%s", exc)
        return 2

    if args.format == "json":
        json.dump([table.to_dict() for table in tables], sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
    else:
        print("\n\n".join(format_table_text(table) for table in tables))
    return 0


if __name__ == "__main__":
    sys.exit(main())
