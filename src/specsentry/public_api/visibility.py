"""Visibility tracking over class, module and ``class << self`` bodies.

Each body is walked once, left to right.  ``private`` flips the body's own
flag; nested scopes and singleton blocks start again from public and hand
back a fresh registry that the caller merges.

Recursion depth follows source nesting depth.  A tree nested deeper than the
interpreter's recursion limit raises ``RecursionError``.
"""

from __future__ import annotations

import logging

from specsentry.public_api.errors import InvalidRootKind
from specsentry.public_api.registry import MethodEntry, MethodRegistry, class_method_key
from specsentry.public_api.scope import ROOT, ScopePath, extend, qualified_name
from specsentry.public_api.tree import (
    SCOPE_KINDS,
    NodeKind,
    TreeNode,
    body_statements,
    is_bare_private,
    retracted_symbol,
)

log = logging.getLogger(__name__)


def public_methods_for_scope(node: TreeNode, parents: ScopePath = ROOT) -> MethodRegistry:
    """Collect the public methods declared in a class or module body.

    *parents* is the path of the enclosing scopes; the node's own name is
    appended to it.  Rules, in document order:

    - bare ``private``: later ``def``s in this body are skipped
    - ``def name``: registered as ``Scope#name`` while still public
    - ``def self.name``: always registered as ``Scope.name``, even after
      ``private``
    - ``private_class_method :name``: removes ``Scope.name`` if present
    - nested class/module: own scope, own visibility
    - ``class << self``: see :func:`singleton_block_methods`
    - anything else (nested sequences, literals, other calls) is skipped
    """
    if node.kind not in SCOPE_KINDS:
        raise InvalidRootKind(node.kind, node.source_line)

    path = extend(parents, node.name or "")
    scope_name = qualified_name(path)
    methods = MethodRegistry()
    is_public = True

    for stmt in body_statements(node):
        kind = stmt.kind
        if kind in SCOPE_KINDS:
            methods.merge(public_methods_for_scope(stmt, path))
        elif kind is NodeKind.SINGLETON_CLASS_BLOCK:
            methods.merge(singleton_block_methods(stmt, scope_name))
        elif kind is NodeKind.CALL:
            retracted = retracted_symbol(stmt)
            if is_bare_private(stmt):
                is_public = False
            elif retracted is not None:
                methods.remove(class_method_key(scope_name, retracted))
        elif kind is NodeKind.METHOD_DEF:
            if is_public:
                methods.add(_entry(stmt, scope_name, is_instance=True))
        elif kind is NodeKind.SINGLETON_METHOD_DEF:
            methods.add(_entry(stmt, scope_name, is_instance=False))

    return methods


def singleton_block_methods(node: TreeNode, scope_name: str) -> MethodRegistry:
    """Collect the class methods a ``class << self`` block makes public.

    Plain ``def``s inside the block are class methods of *scope_name*.  The
    block keeps its own visibility flag, so a ``private`` before the block
    does not hide them and a ``private`` inside it does not leak out.
    ``def self.x`` and nested ``class << self`` inside the block are not
    handled.
    """
    methods = MethodRegistry()
    is_public = True

    for stmt in body_statements(node):
        if is_bare_private(stmt):
            is_public = False
        elif stmt.kind is NodeKind.METHOD_DEF:
            if is_public:
                methods.add(_entry(stmt, scope_name, is_instance=False))
        elif stmt.kind in (NodeKind.SINGLETON_METHOD_DEF, NodeKind.SINGLETON_CLASS_BLOCK):
            log.debug(
                "ignoring %s inside class << self of %s (line %s)",
                stmt.kind.value,
                scope_name,
                stmt.source_line,
            )

    return methods


def _entry(node: TreeNode, scope_name: str, *, is_instance: bool) -> MethodEntry:
    return MethodEntry(
        scope_name=scope_name,
        method_name=node.name or "",
        is_instance_method=is_instance,
        source_line=node.source_line,
    )
