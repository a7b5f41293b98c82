"""Rich-text extraction: DOM subtree -> flat text plus formatting skeleton.

Every descendant element is classified against the configured tag sets:

  DISCARD       -- the element and its subtree contribute nothing
  ALWAYS_KEEP   -- kept as a span even when only inline tags are wanted
  DROP_WRAPPER  -- no span for the element, its children move up one level
  KEEP          -- kept as a span

Text is copied verbatim (no whitespace normalisation).  Two traversal
strategies are provided, an explicit stack (``extract``) and plain recursion
(``extract_recursive``); both produce identical output.
"""

import enum
import logging
from collections.abc import Iterable

from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from html_tables.config import INLINE_TAGS
from html_tables.text.schema import FormattingElement, RichText
from html_tables.tree import IndexedTree

logger = logging.getLogger(__name__)


class TagAction(enum.Enum):
    DISCARD = "discard"
    ALWAYS_KEEP = "always_keep"
    DROP_WRAPPER = "drop_wrapper"
    KEEP = "keep"


# ─── DOM Helpers ─────────────────────────────────────────────────────────────


def is_text_node(node: PageElement) -> bool:
    """True for character data; comments, doctypes, CDATA and PIs don't count."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def convert_attrs(tag: Tag) -> dict[str, str]:
    """Flatten bs4 attributes to plain strings (multi-valued ``class`` is space-joined)."""
    return {name: " ".join(value) if isinstance(value, list) else str(value) for name, value in tag.attrs.items()}


def get_text(node: PageElement) -> str:
    """Concatenate every text node under *node*, no filtering, no normalisation."""
    if is_text_node(node):
        return str(node)
    if not isinstance(node, Tag):
        return ""
    return "".join(str(desc) for desc in node.descendants if is_text_node(desc))


# ─── Extractor ───────────────────────────────────────────────────────────────


class RichTextExtractor:
    """Extract ``RichText`` from a bs4 node using fixed tag filters."""

    def __init__(
        self,
        ignored_tags: Iterable[str] = (),
        discard_tags: Iterable[str] = (),
        keep_tags: Iterable[str] = (),
        only_inline: bool = False,
        inline_tags: Iterable[str] = INLINE_TAGS,
    ):
        self.ignored_tags = frozenset(ignored_tags)
        self.discard_tags = frozenset(discard_tags)
        self.keep_tags = frozenset(keep_tags)
        self.only_inline = only_inline
        self.inline_tags = frozenset(inline_tags)

    def classify(self, tag: str) -> TagAction:
        if tag in self.discard_tags:
            return TagAction.DISCARD
        if tag in self.keep_tags:
            return TagAction.ALWAYS_KEEP
        if tag in self.ignored_tags or (self.only_inline and tag not in self.inline_tags):
            return TagAction.DROP_WRAPPER
        return TagAction.KEEP

    def _make_root(self, node: Tag, action: TagAction) -> IndexedTree[FormattingElement]:
        if action is TagAction.DROP_WRAPPER:
            return IndexedTree(FormattingElement(tag="", start=0, end=0))
        return IndexedTree(FormattingElement(tag=node.name, start=0, end=0, attrs=convert_attrs(node)))

    def extract(self, node: PageElement) -> RichText:
        """Extract *node* with an explicit stack."""
        if not isinstance(node, Tag):
            return RichText.from_text(str(node) if is_text_node(node) else "")
        action = self.classify(node.name)
        if action is TagAction.DISCARD:
            return RichText.empty()

        tree = self._make_root(node, action)
        parts: list[str] = []
        offset = 0

        # Entries are (node, parent span id) to enter, or (None, span id) to close a span
        stack: list[tuple[PageElement | None, int]] = [(child, 0) for child in reversed(node.contents)]
        while stack:
            current, parent_id = stack.pop()
            if current is None:
                tree.get_node(parent_id).end = offset
                continue
            if is_text_node(current):
                parts.append(str(current))
                offset += len(current)
                continue
            if not isinstance(current, Tag):
                continue

            child_action = self.classify(current.name)
            if child_action is TagAction.DISCARD:
                continue
            if child_action is TagAction.DROP_WRAPPER:
                stack.extend((child, parent_id) for child in reversed(current.contents))
                continue

            uid = tree.add_node(FormattingElement(tag=current.name, start=offset, end=offset, attrs=convert_attrs(current)))
            tree.add_child(parent_id, uid)
            stack.append((None, uid))
            stack.extend((child, uid) for child in reversed(current.contents))

        tree.get_root().end = offset
        return RichText(text="".join(parts), formatting=tree)

    def extract_recursive(self, node: PageElement) -> RichText:
        """Extract *node* by direct recursion.  Same output as ``extract``."""
        if not isinstance(node, Tag):
            return RichText.from_text(str(node) if is_text_node(node) else "")
        action = self.classify(node.name)
        if action is TagAction.DISCARD:
            return RichText.empty()

        tree = self._make_root(node, action)
        parts: list[str] = []

        def visit(current: PageElement, parent_id: int, offset: int) -> int:
            if is_text_node(current):
                parts.append(str(current))
                return offset + len(current)
            if not isinstance(current, Tag):
                return offset

            child_action = self.classify(current.name)
            if child_action is TagAction.DISCARD:
                return offset
            if child_action is TagAction.DROP_WRAPPER:
                for child in current.contents:
                    offset = visit(child, parent_id, offset)
                return offset

            elem = FormattingElement(tag=current.name, start=offset, end=offset, attrs=convert_attrs(current))
            uid = tree.add_node(elem)
            tree.add_child(parent_id, uid)
            for child in current.contents:
                offset = visit(child, uid, offset)
            elem.end = offset
            return offset

        end = 0
        for child in node.contents:
            end = visit(child, 0, end)
        tree.get_root().end = end
        return RichText(text="".join(parts), formatting=tree)
