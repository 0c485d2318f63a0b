from __future__ import annotations


class InvalidRootKind(ValueError):
    """The tree handed to the extractor is not a class, module or sequence."""

    def __init__(self, kind, source_line: int | None = None):
        self.kind = kind
        self.source_line = source_line
        where = f" at line {source_line}" if source_line is not None else ""
        super().__init__(f"cannot extract public methods from a {kind.value} node{where}")
