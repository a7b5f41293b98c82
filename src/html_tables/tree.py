"""Insertion-ordered arena tree.

Nodes live in a flat list and edges in a parallel list of child-index lists,
so a whole subtree can be spliced into another tree by offsetting its ids.
Used for the formatting skeleton of ``RichText`` and for the scratch trees of
the section-context extractor.

Indices are never user supplied: an out-of-range id is a bug and surfaces as a
plain ``IndexError``.
"""

from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

N = TypeVar("N")

_NO_NODE = object()


class IndexedTree(Generic[N]):
    """A tree whose nodes are addressed by their insertion index."""

    def __init__(self, node=_NO_NODE):
        self.root: int = 0
        self.nodes: list[N] = []
        self.node2children: list[list[int]] = []
        if node is not _NO_NODE:
            self.add_node(node)

    def __len__(self) -> int:
        return len(self.nodes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, IndexedTree):
            return NotImplemented
        return self.root == other.root and self.nodes == other.nodes and self.node2children == other.node2children

    def __repr__(self) -> str:
        return f"IndexedTree(root={self.root}, nodes={self.nodes!r}, children={self.node2children!r})"

    # ─── Access ──────────────────────────────────────────────────────────────

    def is_empty(self) -> bool:
        return not self.nodes

    def get_root_id(self) -> int:
        return self.root

    def get_root(self) -> N:
        return self.nodes[self.root]

    def get_node(self, uid: int) -> N:
        return self.nodes[uid]

    def set_node(self, uid: int, node: N) -> None:
        self.nodes[uid] = node

    def get_child_ids(self, uid: int) -> list[int]:
        return self.node2children[uid]

    # ─── Construction ────────────────────────────────────────────────────────

    def add_node(self, node: N) -> int:
        """Append a detached node and return its id."""
        uid = len(self.nodes)
        self.nodes.append(node)
        self.node2children.append([])
        return uid

    def add_child(self, parent_id: int, child_id: int) -> None:
        """Attach *child_id* under *parent_id*.

        When the child is the current root the parent takes its place, which
        lets callers build a tree bottom-up (leaf first, ancestors later).
        """
        if child_id == self.root:
            self.root = parent_id
        self.node2children[parent_id].append(child_id)

    def merge_subtree(self, parent_id: int, subtree: "IndexedTree[N]") -> None:
        """Splice *subtree* in, attaching its root as the last child of *parent_id*."""
        if subtree.is_empty():
            return
        offset = len(self.nodes)
        self.nodes.extend(subtree.nodes)
        self.node2children.extend([cid + offset for cid in children] for children in subtree.node2children)
        self.node2children[parent_id].append(subtree.root + offset)

    def merge_subtree_no_root(self, parent_id: int, subtree: "IndexedTree[N]") -> None:
        """Splice *subtree* in without its root; the root's children go under *parent_id*."""
        if subtree.is_empty():
            return
        offset = len(self.nodes)
        sub_root = subtree.root

        def remap(cid: int) -> int:
            # ids after the dropped root shift down by one
            return cid + offset - 1 if cid > sub_root else cid + offset

        for uid, node in enumerate(subtree.nodes):
            if uid != sub_root:
                self.nodes.append(node)
        for uid, children in enumerate(subtree.node2children):
            if uid != sub_root:
                self.node2children.append([remap(cid) for cid in children])
        self.node2children[parent_id].extend(remap(cid) for cid in subtree.node2children[sub_root])

    # ─── Traversal ───────────────────────────────────────────────────────────

    def iter_id_preorder(self) -> Iterator[int]:
        """Yield node ids in preorder.  Each call starts a fresh traversal."""
        if self.is_empty():
            return
        stack = [self.root]
        while stack:
            uid = stack.pop()
            yield uid
            stack.extend(reversed(self.node2children[uid]))

    def iter_node_preorder(self) -> Iterator[N]:
        for uid in self.iter_id_preorder():
            yield self.nodes[uid]

    # ─── Debugging ───────────────────────────────────────────────────────────

    def validate(self) -> bool:
        """Return True if every non-root node has exactly one parent and the root has none."""
        if self.is_empty():
            return True
        n_parents = [0] * len(self.nodes)
        for children in self.node2children:
            for cid in children:
                n_parents[cid] += 1
        return all(count == (0 if uid == self.root else 1) for uid, count in enumerate(n_parents))

    def to_string(self, key: Callable[[int], str]) -> str:
        """Render the tree as nested ``name -> { ... }`` blocks, one node per line."""
        if self.is_empty():
            return ""
        lines: list[str] = []

        def render(uid: int, depth: int) -> None:
            indent = "    " * depth
            children = self.node2children[uid]
            if not children:
                lines.append(f"{indent}{key(uid)}")
                return
            lines.append(f"{indent}{key(uid)} -> {{")
            for cid in children:
                render(cid, depth + 1)
            lines.append(f"{indent}}}")

        render(self.root, 0)
        return "\n".join(lines)
