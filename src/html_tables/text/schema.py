"""Pydantic models for formatted text.

A ``RichText`` is a flat string plus a tree of ``FormattingElement`` spans that
records which substrings came from which surviving markup element.  The root
span always covers the whole text; a root with the empty tag ``""`` stands for
an element that was filtered out of the skeleton.
"""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from html_tables.tree import IndexedTree


class FormattingElement(BaseModel):
    """Text range ``[start, end)`` that originated inside markup element *tag*."""

    tag: str
    start: int
    end: int
    attrs: dict[str, str] = Field(default_factory=dict)


class RichText(BaseModel):
    """Flat text plus its formatting skeleton."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    text: str
    formatting: IndexedTree

    @classmethod
    def empty(cls) -> "RichText":
        return cls.from_text("")

    @classmethod
    def from_text(cls, text: str, tag: str = "") -> "RichText":
        """Wrap plain *text* in a single root span."""
        return cls(text=text, formatting=IndexedTree(FormattingElement(tag=tag, start=0, end=len(text))))

    @classmethod
    def concat(cls, pieces: list["RichText"]) -> "RichText":
        """Join *pieces* under a single untagged root.

        A piece whose root is untagged contributes its root's children directly,
        so concatenating never adds an extra nesting level.
        """
        formatting = IndexedTree(FormattingElement(tag="", start=0, end=0))
        texts: list[str] = []
        offset = 0
        for piece in pieces:
            shifted = piece.shift(offset).formatting
            if piece.get_tag() == "":
                formatting.merge_subtree_no_root(0, shifted)
            else:
                formatting.merge_subtree(0, shifted)
            texts.append(piece.text)
            offset += len(piece.text)
        formatting.get_root().end = offset
        return cls(text="".join(texts), formatting=formatting)

    @field_serializer("formatting")
    def _serialize_formatting(self, formatting: IndexedTree[FormattingElement]) -> list[dict]:
        # flat list in id order; children are referenced by id
        return [
            {**elem.model_dump(), "children": list(formatting.get_child_ids(uid))}
            for uid, elem in enumerate(formatting.nodes)
        ]

    def __str__(self) -> str:
        return self.to_html()

    # ─── Accessors ───────────────────────────────────────────────────────────

    def get_text(self) -> str:
        """Return the retained text with all formatting ignored."""
        return self.text

    def get_tag(self) -> str:
        """Tag of the root span ("" when the source element was dropped)."""
        if self.formatting.is_empty():
            return ""
        return self.formatting.get_root().tag

    def iter_elements(self) -> Iterator[FormattingElement]:
        """Yield formatting spans in document (pre)order, root first."""
        return self.formatting.iter_node_preorder()

    def is_blank(self) -> bool:
        return not self.text.strip()

    def to_html(self) -> str:
        from html_tables.text.render import to_html  # pylint: disable=import-outside-toplevel

        return to_html(self)

    # ─── Transformations ─────────────────────────────────────────────────────

    def _remap(self, text: str, delta: int, limit: int) -> "RichText":
        """Copy holding *text* with every span moved by *delta* and clamped to ``[0, limit]``."""
        formatting: IndexedTree[FormattingElement] = IndexedTree()
        for uid, elem in enumerate(self.formatting.nodes):
            formatting.add_node(
                FormattingElement(
                    tag=elem.tag,
                    start=min(max(elem.start + delta, 0), limit),
                    end=min(max(elem.end + delta, 0), limit),
                    attrs=dict(elem.attrs),
                )
            )
            formatting.node2children[uid] = list(self.formatting.get_child_ids(uid))
        formatting.root = self.formatting.root
        return RichText(text=text, formatting=formatting)

    def shift(self, offset: int) -> "RichText":
        """Copy whose spans start *offset* characters later (the text is unchanged).

        Only meaningful as an intermediate step of ``concat``; the result does
        not satisfy the span/text-length invariant on its own.
        """
        return self._remap(self.text, offset, len(self.text) + offset)

    def strip(self) -> "RichText":
        """Return a copy without leading/trailing whitespace; spans are shifted and clamped."""
        stripped = self.text.strip()
        lead = len(self.text) - len(self.text.lstrip())
        return self._remap(stripped, -lead, len(stripped))
