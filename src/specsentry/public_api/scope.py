"""Scope paths: the enclosing class/module names of a definition."""

from __future__ import annotations

ScopePath = tuple[str, ...]

ROOT: ScopePath = ()

SEPARATOR = "::"


def extend(path: ScopePath, name: str) -> ScopePath:
    """Return a new path with *name* appended; *path* is left untouched."""
    return (*path, name)


def qualified_name(path: ScopePath) -> str:
    return SEPARATOR.join(path)
