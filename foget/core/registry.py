"""Command registry view over a loaded descriptions document.

The document is a table of tables::

    [ls]
    tags = ["list directory contents", "show hidden with -a"]

Nested values are reached through explicit key paths; :meth:`Registry.lookup`
returns a :class:`Lookup` instead of raising, and the mutating helpers
re-resolve the path on every call rather than holding references into the tree.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.items import Array

from .errors import CommandNotFound, InternalError

TAGS_KEY = "tags"


@dataclass(frozen=True)
class Lookup:
    found: bool
    value: Any = None


MISSING = Lookup(found=False)


class Registry:
    """Ordered mapping of command name -> list of tags."""

    def __init__(self, document: TOMLDocument) -> None:
        self._doc = document

    @property
    def document(self) -> TOMLDocument:
        return self._doc

    # --- read access ---------------------------------------------------
    def lookup(self, path: Sequence[str]) -> Lookup:
        node: Any = self._doc
        for key in path:
            if not isinstance(node, Mapping) or key not in node:
                return MISSING
            node = node[key]
        return Lookup(found=True, value=node)

    def __contains__(self, command: object) -> bool:
        return isinstance(command, str) and self.lookup((command,)).found

    def commands(self) -> Iterator[str]:
        yield from self._doc.keys()

    def tags(self, command: str) -> list[str]:
        """Plain copy of *command*'s tags; raises if absent or malformed."""
        return [str(t) for t in self._tags_array(command)]

    def has_tag(self, command: str, tag: str) -> bool:
        """Exact match against the string tags of *command*."""
        return any(isinstance(t, str) and str(t) == tag for t in self._tags_array(command))

    def entries(self) -> Iterator[tuple[str, list[str]]]:
        """Yield ``(command, tags)`` in document order.

        Entries without a ``tags`` array are skipped, as are non-string tags.
        """
        for command in self.commands():
            found = self.lookup((command, TAGS_KEY))
            if not found.found or not isinstance(found.value, list):
                continue
            yield command, [str(t) for t in found.value if isinstance(t, str)]

    # --- mutation ------------------------------------------------------
    def create(self, command: str, tag: str) -> None:
        table = tomlkit.table()
        table.add(TAGS_KEY, [tag])
        self._doc.add(command, table)

    def append_tag(self, command: str, tag: str) -> None:
        self._tags_array(command).append(tag)

    def remove_tag(self, command: str, tag: str) -> int:
        """Remove every occurrence of *tag*; return how many were removed."""
        arr = self._tags_array(command)
        hits = [i for i, t in enumerate(arr) if isinstance(t, str) and str(t) == tag]
        for i in reversed(hits):
            del arr[i]
        return len(hits)

    def remove(self, command: str) -> bool:
        if command not in self:
            return False
        del self._doc[command]
        return True

    # --- helpers -------------------------------------------------------
    def _tags_array(self, command: str) -> Array:
        if command not in self:
            raise CommandNotFound(command)
        found = self.lookup((command, TAGS_KEY))
        if not found.found:
            raise InternalError(f'command "{command}" has no "{TAGS_KEY}" field')
        if not isinstance(found.value, list):
            raise InternalError(f'"{TAGS_KEY}" of command "{command}" is not an array')
        return found.value
