"""Relative-to-absolute URL normalisation for extracted rich text, and table ids."""

import logging
from urllib.parse import urljoin, urlsplit, urlunsplit

from html_tables.config import URL_ATTRIBUTES
from html_tables.errors import InvalidURLError
from html_tables.text.schema import RichText

logger = logging.getLogger(__name__)


def table_id(url: str, index: int) -> str:
    """Return *url* with ``table_no=<index>`` appended to its query string."""
    parts = urlsplit(url)
    query = f"{parts.query}&table_no={index}" if parts.query else f"table_no={index}"
    return urlunsplit(parts._replace(path=parts.path or "/", query=query))


class URLConverter:
    """Resolve links found in rich text against a document URL."""

    def __init__(self, base_url: str):
        try:
            parts = urlsplit(base_url)
        except ValueError as exc:
            raise InvalidURLError(f"Cannot parse document URL {base_url!r}: {exc}", value=base_url) from exc
        if not parts.scheme or not parts.netloc:
            raise InvalidURLError(f"Document URL must be absolute, got {base_url!r}", value=base_url)
        self.base_url = base_url

    def resolve(self, url: str) -> str:
        """Absolute form of *url*; absolute URLs and unparsable values come back unchanged."""
        try:
            return urljoin(self.base_url, url.strip())
        except ValueError:
            logger.debug("Leaving unparsable URL as is: %r", url)
            return url

    def normalize_rich_text(self, rich_text: RichText) -> None:
        """Rewrite URL attributes of *rich_text* in place.

        When the text of a leaf ``<a>`` is its own relative href, the text is
        rewritten as well and every span after it is shifted accordingly.
        """
        tree = rich_text.formatting
        for uid, elem in enumerate(tree.nodes):
            for attr in URL_ATTRIBUTES:
                raw = elem.attrs.get(attr)
                if raw is None:
                    continue
                resolved = self.resolve(raw)
                if resolved == raw:
                    continue
                elem.attrs[attr] = resolved
                if (
                    attr == "href"
                    and elem.tag == "a"
                    and not tree.get_child_ids(uid)
                    and raw.strip()
                    and rich_text.text[elem.start : elem.end] == raw
                ):
                    _replace_range(rich_text, elem.start, elem.end, resolved)


def _replace_range(rich_text: RichText, start: int, end: int, replacement: str) -> None:
    """Replace ``text[start:end]`` in place, keeping every span aligned with its text."""
    delta = len(replacement) - (end - start)
    rich_text.text = rich_text.text[:start] + replacement + rich_text.text[end:]
    for elem in rich_text.formatting.nodes:
        if elem.start >= end and elem.start > start:
            elem.start += delta
            elem.end += delta
        elif elem.end >= end:
            elem.end += delta
