"""Render a RichText back into an HTML-like string.

Tags are nested around their text ranges following the formatting tree.  The
output keeps every retained tag, attribute and character, but it is not the
source markup: filtered elements are gone and text is re-escaped.
"""

import html

from html_tables.text.schema import FormattingElement, RichText

# Elements that never carry content
VOID_TAGS = frozenset({"area", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"})


def _open_tag(elem: FormattingElement) -> str:
    attrs = "".join(f' {name}="{html.escape(value, quote=True)}"' for name, value in elem.attrs.items())
    return f"<{elem.tag}{attrs}>"


def to_html(rich_text: RichText) -> str:
    """Return *rich_text* as markup.  A root with an empty tag renders only its content."""
    tree = rich_text.formatting
    text = rich_text.text
    if tree.is_empty():
        return html.escape(text, quote=False)

    def render(uid: int) -> str:
        elem = tree.get_node(uid)
        parts: list[str] = []
        cursor = elem.start
        for cid in tree.get_child_ids(uid):
            child = tree.get_node(cid)
            parts.append(html.escape(text[cursor : child.start], quote=False))
            parts.append(render(cid))
            cursor = child.end
        parts.append(html.escape(text[cursor : elem.end], quote=False))
        inner = "".join(parts)

        if elem.tag == "":
            return inner
        if elem.tag in VOID_TAGS and not inner:
            return _open_tag(elem)
        return f"{_open_tag(elem)}{inner}</{elem.tag}>"

    return render(tree.get_root_id())
