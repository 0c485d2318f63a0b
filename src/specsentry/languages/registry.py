"""Language detection, grammar loading, and front-end registry."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from specsentry.public_api.tree import TreeNode

    from .base import LanguageFrontEnd

log = logging.getLogger(__name__)

# Single source of truth for extension -> language.
EXTENSION_MAP: dict[str, str] = {
    ".rb": "ruby",
    ".rake": "ruby",
}

_SUPPORTED_LANGUAGES = frozenset({"ruby"})


class FrontEndError(Exception):
    """A file could not be turned into a syntax tree."""


class UnsupportedLanguageError(FrontEndError):
    pass


class ParserUnavailableError(FrontEndError):
    pass


def get_language_for_file(path: str) -> str | None:
    """Determine the language for a file based on its extension.

    Returns the language name string, or None if unsupported.
    """
    _, ext = os.path.splitext(path)
    return EXTENSION_MAP.get(ext.lower())


@lru_cache(maxsize=None)
def get_frontend(language: str) -> LanguageFrontEnd:
    if language == "ruby":
        from .ruby_lang import RubyFrontEnd

        return RubyFrontEnd()
    raise UnsupportedLanguageError(f"no front-end for language {language!r}")


@lru_cache(maxsize=None)
def get_parser(language: str):
    """Get a tree-sitter parser from tree_sitter_language_pack.

    Raises:
        ParserUnavailableError: the grammar cannot be loaded.
    """
    if language not in _SUPPORTED_LANGUAGES:
        raise UnsupportedLanguageError(f"no grammar for language {language!r}")
    from tree_sitter_language_pack import get_parser as _ts_get_parser

    try:
        return _ts_get_parser(language)
    except (LookupError, ValueError, OSError) as exc:
        raise ParserUnavailableError(f"tree-sitter grammar for {language} unavailable: {exc}") from exc


def parse_source(source: str | bytes, language: str = "ruby") -> TreeNode:
    """Parse *source* and convert it to a TreeNode root."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    frontend = get_frontend(language)
    tree = get_parser(language).parse(source)
    if tree.root_node.has_error:
        log.debug("%s source contains syntax errors; extracting what parsed", language)
    return frontend.build_tree(tree, source)


def parse_file(path: str | Path) -> TreeNode:
    """Read and parse the file at *path*, picking the language by extension."""
    path = Path(path)
    language = get_language_for_file(str(path))
    if language is None:
        raise UnsupportedLanguageError(f"unsupported file type: {path}")
    log.debug("parsing %s as %s", path, language)
    return parse_source(path.read_bytes(), language)
