from __future__ import annotations

from specsentry.public_api.tree import NodeKind, TreeNode

from .base import LanguageFrontEnd


class RubyFrontEnd(LanguageFrontEnd):
    """Ruby front-end over the tree-sitter Ruby grammar.

    Maps modules, classes, ``class << self`` blocks, ``def`` / ``def self.``
    and receiver-less calls (``private``, ``private_class_method :name``) to
    TreeNodes.  Everything else becomes ``Other``; comments are dropped.
    """

    def build_tree(self, tree, source: bytes) -> TreeNode:
        root = tree.root_node
        statements = [self._convert(child, source) for child in self._statements(root)]
        return self._make_node(NodeKind.SEQUENCE, root, children=statements)

    # ---- Statement conversion ----

    def _statements(self, node) -> list:
        return [child for child in node.named_children if child.type != "comment"]

    def _convert(self, node, source: bytes) -> TreeNode:
        ntype = node.type
        if ntype == "class":
            return self._convert_scope(node, source, NodeKind.CLASS_DEF)
        if ntype == "module":
            return self._convert_scope(node, source, NodeKind.MODULE_DEF)
        if ntype == "singleton_class":
            return self._convert_singleton_class(node, source)
        if ntype == "method":
            return self._convert_def(node, source, NodeKind.METHOD_DEF)
        if ntype == "singleton_method":
            return self._convert_def(node, source, NodeKind.SINGLETON_METHOD_DEF)
        if ntype == "identifier":
            # A bare identifier statement is a call without receiver or args.
            return self._make_node(NodeKind.CALL, node, name=self.node_text(node, source))
        if ntype == "call":
            return self._convert_call(node, source)
        return self._other(node)

    def _convert_scope(self, node, source: bytes, kind: NodeKind) -> TreeNode:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return self._other(node)
        return self._make_node(
            kind,
            node,
            name=self.node_text(name_node, source),
            children=self._body(node, source),
        )

    def _convert_singleton_class(self, node, source: bytes) -> TreeNode:
        value = node.child_by_field_name("value")
        if value is None or value.type != "self":
            # class << some_object
            return self._other(node)
        return self._make_node(
            NodeKind.SINGLETON_CLASS_BLOCK,
            node,
            children=self._body(node, source),
        )

    def _convert_def(self, node, source: bytes, kind: NodeKind) -> TreeNode:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return self._other(node)
        return self._make_node(kind, node, name=self.node_text(name_node, source))

    def _convert_call(self, node, source: bytes) -> TreeNode:
        if node.child_by_field_name("receiver") is not None:
            return self._other(node)
        method_node = node.child_by_field_name("method")
        if method_node is None:
            return self._other(node)
        args = []
        args_node = node.child_by_field_name("arguments")
        if args_node is not None:
            for arg in self._statements(args_node):
                if arg.type == "simple_symbol":
                    sym = self.node_text(arg, source).lstrip(":")
                    args.append(self._make_node(NodeKind.SYMBOL, arg, name=sym))
                else:
                    args.append(self._convert(arg, source))
        return self._make_node(
            NodeKind.CALL,
            node,
            name=self.node_text(method_node, source),
            children=args,
        )

    # ---- Body normalization ----

    def _body_node(self, node):
        body = node.child_by_field_name("body")
        if body is not None:
            return body
        # Older grammars expose the body as an unnamed-field child.
        for child in node.named_children:
            if child.type == "body_statement":
                return child
        return None

    def _body(self, node, source: bytes) -> list[TreeNode]:
        """Body as TreeNode children: none, one statement or one Sequence."""
        body = self._body_node(node)
        if body is None:
            return []
        statements = [self._convert(child, source) for child in self._statements(body)]
        if not statements:
            return []
        if len(statements) == 1:
            return statements
        return [self._make_node(NodeKind.SEQUENCE, body, children=statements)]
