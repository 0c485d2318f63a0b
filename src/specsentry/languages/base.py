from __future__ import annotations

from abc import ABC, abstractmethod

from specsentry.public_api.tree import NodeKind, TreeNode


class LanguageFrontEnd(ABC):
    """Base class for converting a tree-sitter parse into TreeNodes."""

    @abstractmethod
    def build_tree(self, tree, source: bytes) -> TreeNode:
        """Convert a parsed tree-sitter tree into a TreeNode root.

        The root must be a class/module node or a ``Sequence`` of top-level
        statements.
        """
        ...

    def node_text(self, node, source: bytes) -> str:
        if node is None:
            return ""
        return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def line_of(self, node) -> int:
        return node.start_point[0] + 1

    def _make_node(
        self,
        kind: NodeKind,
        ts_node,
        *,
        name: str | None = None,
        children: list[TreeNode] | tuple[TreeNode, ...] = (),
    ) -> TreeNode:
        return TreeNode(
            kind=kind,
            children=tuple(children),
            name=name,
            source_line=self.line_of(ts_node) if ts_node is not None else None,
        )

    def _other(self, ts_node) -> TreeNode:
        return self._make_node(NodeKind.OTHER, ts_node)
