"""Method entries and the keyed registry that collects them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

INSTANCE_PREFIX = "#"
CLASS_PREFIX = "."


@dataclass(frozen=True)
class MethodEntry:
    """A public method found in a class or module body."""

    scope_name: str
    method_name: str
    is_instance_method: bool
    source_line: int | None = None

    @property
    def name_with_prefix(self) -> str:
        prefix = INSTANCE_PREFIX if self.is_instance_method else CLASS_PREFIX
        return f"{prefix}{self.method_name}"

    @property
    def display(self) -> str:
        """Fully-qualified key, e.g. ``Foo::Bar#baz`` or ``Foo.create``."""
        return f"{self.scope_name}{self.name_with_prefix}"

    def __str__(self) -> str:
        return self.display

    def to_dict(self) -> dict:
        return {
            "scope": self.scope_name,
            "method": self.method_name,
            "instance_method": self.is_instance_method,
            "line": self.source_line,
            "display": self.display,
        }


def class_method_key(scope_name: str, method_name: str) -> str:
    return f"{scope_name}{CLASS_PREFIX}{method_name}"


class MethodRegistry:
    """Display key -> MethodEntry.

    A later entry with the same key replaces the earlier one; removing an
    unknown key is a no-op.
    """

    def __init__(self, entries: Iterable[MethodEntry] = ()):
        self._entries: dict[str, MethodEntry] = {}
        for entry in entries:
            self.add(entry)

    def add(self, entry: MethodEntry) -> None:
        self._entries[entry.display] = entry

    def remove(self, key: str) -> None:
        self._entries.pop(key, None)

    def merge(self, other: MethodRegistry) -> None:
        self._entries.update(other._entries)

    def values(self) -> list[MethodEntry]:
        return list(self._entries.values())

    def __repr__(self) -> str:
        return f"MethodRegistry({sorted(self._entries)!r})"


def sorted_entries(entries: Iterable[MethodEntry]) -> list[MethodEntry]:
    """Deterministic order: scope name, then method name, instance first."""
    return sorted(entries, key=lambda e: (e.scope_name, e.method_name, not e.is_instance_method))
