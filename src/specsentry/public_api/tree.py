"""Generic syntax tree consumed by the public API extractor.

A language front-end (see :mod:`specsentry.languages`) turns its parser's
output into these nodes.  The extractor never looks at anything but
``kind``, ``children``, ``name`` and ``source_line``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NodeKind(Enum):
    CLASS_DEF = "ClassDef"
    MODULE_DEF = "ModuleDef"
    SINGLETON_CLASS_BLOCK = "SingletonClassBlock"
    METHOD_DEF = "MethodDef"
    SINGLETON_METHOD_DEF = "SingletonMethodDef"
    SEQUENCE = "Sequence"
    CALL = "Call"
    SYMBOL = "Symbol"
    OTHER = "Other"


SCOPE_KINDS = frozenset({NodeKind.CLASS_DEF, NodeKind.MODULE_DEF})


@dataclass(frozen=True)
class TreeNode:
    """A node in the parsed structure.

    ``children`` order is document order.  For a ``Call`` the children are
    its arguments; ``name`` is the invoked method.  For a ``Symbol`` the name
    is the symbol without its leading colon.
    """

    kind: NodeKind
    children: tuple[TreeNode, ...] = ()
    name: str | None = None
    source_line: int | None = None


def body_statements(node: TreeNode) -> list[TreeNode]:
    """Return the statements of a class, module or singleton block body.

    The body is the node's last child: a ``Sequence`` holding several
    statements, a lone statement, or nothing at all for an empty body.
    """
    if not node.children:
        return []
    body = node.children[-1]
    if body.kind is NodeKind.SEQUENCE:
        return list(body.children)
    return [body]


def is_bare_private(node: TreeNode) -> bool:
    """True for a receiver-less, argument-less ``private`` call."""
    return node.kind is NodeKind.CALL and node.name == "private" and not node.children


def retracted_symbol(node: TreeNode) -> str | None:
    """Return ``foo`` for ``private_class_method :foo``, else None.

    Only a single symbol literal argument is recognised; computed arguments
    are left alone.
    """
    if node.kind is not NodeKind.CALL or node.name != "private_class_method":
        return None
    if len(node.children) != 1:
        return None
    arg = node.children[0]
    if arg.kind is not NodeKind.SYMBOL:
        return None
    return arg.name
