"""Registry operations.

Mutations (add/modify/delete) change the registry in memory and return a
:class:`MutationResult`; persisting is left to the caller.  Queries
(show/search) never touch the document.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union

from .errors import DuplicateTag, TagNotFound
from .logging import get_logger
from .registry import Registry

log = get_logger(__name__)


class Action(enum.Enum):
    ADD = "add"
    MODIFY = "modify"
    DELETE = "delete"
    SHOW = "show"
    SEARCH = "search"

    @property
    def mutates(self) -> bool:
        return self in (Action.ADD, Action.MODIFY, Action.DELETE)


@dataclass(frozen=True)
class Request:
    action: Action
    command: str | None = None
    tag: str | None = None
    query: str | None = None


@dataclass(frozen=True)
class MutationResult:
    action: Action
    command: str
    tag: str | None
    # None once the whole entry is gone
    tags: list[str] | None
    removed: int = 0


@dataclass(frozen=True)
class ShowResult:
    command: str
    tags: list[str] | None

    @property
    def found(self) -> bool:
        return self.tags is not None


@dataclass(frozen=True)
class SearchResult:
    query: str
    matches: list[tuple[str, list[str]]] = field(default_factory=list)

    @property
    def commands(self) -> list[str]:
        return [name for name, _ in self.matches]


Result = Union[MutationResult, ShowResult, SearchResult]


def add(registry: Registry, command: str, tag: str) -> MutationResult:
    if command in registry:
        if registry.has_tag(command, tag):
            raise DuplicateTag(command, tag)
        registry.append_tag(command, tag)
    else:
        log.debug("creating entry for %s", command)
        registry.create(command, tag)
    return MutationResult(Action.ADD, command, tag, registry.tags(command))


def modify(registry: Registry, command: str, tag: str) -> MutationResult:
    # No duplicate check here, unlike add(); raises CommandNotFound when absent.
    registry.append_tag(command, tag)
    return MutationResult(Action.MODIFY, command, tag, registry.tags(command))


def delete(registry: Registry, command: str, tag: str | None = None) -> MutationResult:
    if tag is None:
        removed = registry.remove(command)
        if not removed:
            log.debug("delete: %s not present, nothing to remove", command)
        return MutationResult(Action.DELETE, command, None, None, removed=int(removed))
    removed = registry.remove_tag(command, tag)
    return MutationResult(Action.DELETE, command, tag, registry.tags(command), removed=removed)


def show(registry: Registry, command: str) -> ShowResult:
    if command not in registry:
        log.debug("show: %s not present", command)
        return ShowResult(command, None)
    return ShowResult(command, registry.tags(command))


def search(registry: Registry, query: str) -> SearchResult:
    matches = [(name, tags) for name, tags in registry.entries() if any(query in t for t in tags)]
    if not matches:
        raise TagNotFound(query)
    return SearchResult(query, matches)
