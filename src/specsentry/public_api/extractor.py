"""Entry point: whole-file tree -> public method inventory."""

from __future__ import annotations

from pathlib import Path

from specsentry.public_api.errors import InvalidRootKind
from specsentry.public_api.registry import MethodEntry
from specsentry.public_api.scope import ROOT
from specsentry.public_api.tree import SCOPE_KINDS, NodeKind, TreeNode
from specsentry.public_api.visibility import public_methods_for_scope


def extract_public_methods(root: TreeNode) -> list[MethodEntry]:
    """Return the public methods declared by the classes/modules in *root*.

    *root* is either a single class/module or a sequence of top-level
    statements.  In a sequence only direct class/module children count:
    code without a class or module wrapper yields nothing.

    Raises:
        InvalidRootKind: *root* is any other kind of node.
    """
    if root.kind in SCOPE_KINDS:
        return public_methods_for_scope(root, ROOT).values()
    if root.kind is NodeKind.SEQUENCE:
        entries: list[MethodEntry] = []
        for child in root.children:
            if child.kind in SCOPE_KINDS:
                entries.extend(public_methods_for_scope(child, ROOT).values())
        return entries
    raise InvalidRootKind(root.kind, root.source_line)


def public_methods_for_source(source: str | bytes, language: str = "ruby") -> list[MethodEntry]:
    """Parse *source* with the front-end for *language* and extract."""
    from specsentry.languages.registry import parse_source

    return extract_public_methods(parse_source(source, language))


def public_methods_for_file(path: str | Path) -> list[MethodEntry]:
    """Parse the file at *path* (language picked by extension) and extract."""
    from specsentry.languages.registry import parse_file

    return extract_public_methods(parse_file(path))
