"""Shared configuration for HTML table extraction.

Tag sets used by the rich-text and context extractors, plus the HTML parser
backend.  A ``.env`` file at the project root may override the parser and log
level via ``HTML_TABLES_PARSER`` and ``HTML_TABLES_LOG_LEVEL``.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")


# ─── Parser & Logging ─────────────────────────────────────────────────────────

# BeautifulSoup tree builder; lxml always produces <html>/<body> wrappers
HTML_PARSER = os.getenv("HTML_TABLES_PARSER", "lxml")

LOG_LEVEL = os.getenv("HTML_TABLES_LOG_LEVEL", "INFO")


# ─── Tag Sets ────────────────────────────────────────────────────────────────

# Wrappers dropped from cell rich text (children are kept)
DEFAULT_IGNORED_TAGS = frozenset({"div"})

# Elements removed together with their whole subtree
DEFAULT_DISCARD_TAGS = frozenset({"script", "style", "noscript", "table"})

# Phrasing elements that flow inside a line of text
INLINE_TAGS = frozenset(
    {
        "a",
        "abbr",
        "acronym",
        "b",
        "bdi",
        "bdo",
        "big",
        "br",
        "button",
        "cite",
        "code",
        "data",
        "del",
        "dfn",
        "em",
        "font",
        "i",
        "img",
        "input",
        "ins",
        "kbd",
        "label",
        "map",
        "mark",
        "meter",
        "object",
        "output",
        "q",
        "s",
        "samp",
        "script",
        "select",
        "small",
        "span",
        "strike",
        "strong",
        "sub",
        "sup",
        "textarea",
        "time",
        "tt",
        "u",
        "var",
        "wbr",
    }
)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

# Content never reported as section context (other tables included)
CONTEXT_DISCARD_TAGS = frozenset({"script", "style", "noscript", "template", "head", "meta", "link", "title", "table"})

# Attributes holding a URL that should be made absolute
URL_ATTRIBUTES = ("href", "src")
