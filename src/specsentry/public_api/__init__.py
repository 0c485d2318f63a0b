"""Static extraction of the public methods of Ruby classes and modules."""

from specsentry.public_api.errors import InvalidRootKind
from specsentry.public_api.extractor import (
    extract_public_methods,
    public_methods_for_file,
    public_methods_for_source,
)
from specsentry.public_api.registry import MethodEntry, MethodRegistry, sorted_entries
from specsentry.public_api.scope import ROOT, ScopePath, extend, qualified_name
from specsentry.public_api.tree import NodeKind, TreeNode, body_statements
from specsentry.public_api.visibility import public_methods_for_scope, singleton_block_methods

__all__ = [
    "InvalidRootKind",
    "MethodEntry",
    "MethodRegistry",
    "NodeKind",
    "ROOT",
    "ScopePath",
    "TreeNode",
    "body_statements",
    "extend",
    "extract_public_methods",
    "public_methods_for_file",
    "public_methods_for_scope",
    "public_methods_for_source",
    "qualified_name",
    "singleton_block_methods",
    "sorted_entries",
]
