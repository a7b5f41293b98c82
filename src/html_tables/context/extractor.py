"""Section-context extraction: the heading breadcrumb around a target element.

The extractor walks up from the target to ``<body>``, collecting the sibling
content found before and after the path at every level into two scratch trees.
Each tree is then flattened into an ordered list of text blocks: runs of
adjacent inline/text nodes become one block, block-level elements are
flattened on their own, and headings stay single blocks that keep their tag.

Finally the "before" blocks are cut at every heading into ``ContentHierarchy``
entries, and only the chain of headings that actually leads to the target
(strictly decreasing level, walking backwards) is kept.
"""

import logging
import re
from collections.abc import Iterable
from typing import NamedTuple

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag

from html_tables.config import CONTEXT_DISCARD_TAGS, HEADING_TAGS, INLINE_TAGS
from html_tables.context.schema import ContentHierarchy
from html_tables.text.extract import RichTextExtractor, is_text_node
from html_tables.text.schema import RichText
from html_tables.tree import IndexedTree

logger = logging.getLogger(__name__)

_TRAILING_DIGIT_RE = re.compile(r"(\d+)$")


def _split_siblings(parent: Tag, child: PageElement) -> tuple[list[PageElement], list[PageElement]]:
    """Children of *parent* before and after *child*.  Compared by identity: bs4 ``==`` is structural."""
    for idx, sibling in enumerate(parent.contents):
        if sibling is child:
            return parent.contents[:idx], parent.contents[idx + 1 :]
    return list(parent.contents), []


class ScratchNode(NamedTuple):
    """A node of the before/after scratch trees.

    ``on_path`` marks ancestors of the target; their tree children are the
    siblings collected at that level.  Other nodes stand for their whole DOM
    subtree.
    """

    element: PageElement
    on_path: bool


class SectionContextExtractor:
    """Locate the headings and nearby content of an element."""

    def __init__(
        self,
        heading_tags: Iterable[str] = HEADING_TAGS,
        discard_tags: Iterable[str] = CONTEXT_DISCARD_TAGS,
        inline_tags: Iterable[str] = INLINE_TAGS,
        ignored_tags: Iterable[str] = (),
    ):
        self.heading_tags = frozenset(heading_tags)
        self.discard_tags = frozenset(discard_tags)
        self.inline_tags = frozenset(inline_tags)
        self.text_extractor = RichTextExtractor(
            ignored_tags=ignored_tags,
            discard_tags=self.discard_tags,
            keep_tags=self.heading_tags,
            only_inline=True,
            inline_tags=self.inline_tags,
        )

    @staticmethod
    def heading_level(tag: str) -> int:
        """Level of a heading tag: its trailing number (``h3`` -> 3), or 1 if it has none."""
        match = _TRAILING_DIGIT_RE.search(tag)
        return int(match.group(1)) if match else 1

    # ─── Hierarchy ───────────────────────────────────────────────────────────

    def extract_context(self, target: PageElement) -> list[ContentHierarchy]:
        """Return the breadcrumb of *target*, root (level 0) first."""
        tree_before, tree_after = self.locate_content_before_and_after(target)
        blocks_before = self.flatten_tree(tree_before)
        blocks_after = self.flatten_tree(tree_after)

        context = [ContentHierarchy(level=0)]
        for block in blocks_before:
            tag = block.get_tag()
            if tag in self.heading_tags:
                context.append(ContentHierarchy(level=self.heading_level(tag), heading=block))
            else:
                context[-1].content_before.append(block)

        # Keep only headings leading to the target: walking back, levels must strictly decrease
        chain: list[ContentHierarchy] = []
        for entry in reversed(context):
            if not chain or entry.level < chain[-1].level:
                chain.append(entry)
        chain.reverse()

        for block in blocks_after:
            if block.get_tag() in self.heading_tags:
                break
            chain[-1].content_after.append(block)

        logger.debug("Extracted %d context level(s) from %d/%d blocks", len(chain), len(blocks_before), len(blocks_after))
        return chain

    # ─── Scratch Trees ───────────────────────────────────────────────────────

    def locate_content_before_and_after(
        self, target: PageElement
    ) -> tuple[IndexedTree[ScratchNode], IndexedTree[ScratchNode]]:
        """Collect the siblings before/after the path from ``<body>`` down to *target*.

        Both trees are built bottom-up: each ancestor is added after its
        collected siblings and becomes the new root when linked to the
        previous ancestor.
        """
        tree_before: IndexedTree[ScratchNode] = IndexedTree()
        tree_after: IndexedTree[ScratchNode] = IndexedTree()
        path_before: int | None = None
        path_after: int | None = None

        child = target
        parent = target.parent
        while isinstance(parent, Tag) and not isinstance(parent, BeautifulSoup):
            before, after = _split_siblings(parent, child)

            before_id = tree_before.add_node(ScratchNode(parent, True))
            for sibling in before:
                tree_before.add_child(before_id, tree_before.add_node(ScratchNode(sibling, False)))
            if path_before is not None:
                tree_before.add_child(before_id, path_before)
            path_before = before_id

            after_id = tree_after.add_node(ScratchNode(parent, True))
            if path_after is not None:
                tree_after.add_child(after_id, path_after)
            for sibling in after:
                tree_after.add_child(after_id, tree_after.add_node(ScratchNode(sibling, False)))
            path_after = after_id

            if parent.name == "body":
                break
            child, parent = parent, parent.parent

        return tree_before, tree_after

    def flatten_tree(self, tree: IndexedTree[ScratchNode]) -> list[RichText]:
        """Flatten a scratch tree into its ordered blocks."""
        output: list[RichText] = []
        if tree.is_empty():
            return output

        def visit(uid: int) -> None:
            run: list[PageElement] = []
            for cid in tree.get_child_ids(uid):
                node = tree.get_node(cid)
                if node.on_path:
                    self._flush(run, output)
                    visit(cid)
                else:
                    self._visit_recursive(node.element, run, output)
            self._flush(run, output)

        visit(tree.get_root_id())
        return output

    # ─── Flattening ──────────────────────────────────────────────────────────

    def _is_inline(self, node: PageElement) -> bool:
        return is_text_node(node) or (isinstance(node, Tag) and node.name in self.inline_tags)

    def _flush(self, run: list[PageElement], output: list[RichText]) -> None:
        """Turn the pending inline run into one block."""
        if not run:
            return
        block = RichText.concat([self.text_extractor.extract(node) for node in run]).strip()
        run.clear()
        if not block.is_blank():
            output.append(block)

    def _heading_block(self, node: Tag, output: list[RichText]) -> None:
        block = self.text_extractor.extract(node).strip()
        if not block.is_blank():
            output.append(block)

    def flatten_node(self, node: PageElement) -> list[RichText]:
        """Flatten a container into its ordered blocks with an explicit stack."""
        output: list[RichText] = []
        run: list[PageElement] = []
        # None marks the end of a block element's children
        stack: list[PageElement | None] = [node]
        while stack:
            current = stack.pop()
            if current is None:
                self._flush(run, output)
                continue
            if not is_text_node(current) and not isinstance(current, Tag):
                continue
            if isinstance(current, Tag) and current.name in self.discard_tags:
                continue
            if self._is_inline(current):
                run.append(current)
                continue

            self._flush(run, output)
            if current.name in self.heading_tags:
                self._heading_block(current, output)
                continue
            stack.append(None)
            stack.extend(reversed(current.contents))

        self._flush(run, output)
        return output

    def flatten_node_recursive(self, node: PageElement) -> list[RichText]:
        """Flatten a container into its ordered blocks by recursion.  Same output as ``flatten_node``."""
        output: list[RichText] = []
        run: list[PageElement] = []
        self._visit_recursive(node, run, output)
        self._flush(run, output)
        return output

    def _visit_recursive(self, node: PageElement, run: list[PageElement], output: list[RichText]) -> None:
        if not is_text_node(node) and not isinstance(node, Tag):
            return
        if isinstance(node, Tag) and node.name in self.discard_tags:
            return
        if self._is_inline(node):
            run.append(node)
            return

        self._flush(run, output)
        if node.name in self.heading_tags:
            self._heading_block(node, output)
            return
        for child in node.contents:
            self._visit_recursive(child, run, output)
        self._flush(run, output)
