"""Rich-text extraction and rendering.

Submodules:
  schema   -- FormattingElement / RichText Pydantic models
  extract  -- RichTextExtractor (tag classification, both traversal strategies)
  render   -- RichText -> HTML-like string
"""

from html_tables.text.extract import RichTextExtractor, TagAction, get_text
from html_tables.text.render import to_html
from html_tables.text.schema import FormattingElement, RichText

__all__ = ["FormattingElement", "RichText", "RichTextExtractor", "TagAction", "get_text", "to_html"]
