from __future__ import annotations

from pathlib import Path

from . import operations, store
from .config import Settings
from .errors import FogetError, StoreAccessError
from .logging import get_logger
from .operations import Action, Request, Result
from .paths import resolve_descriptions_path
from .registry import Registry

log = get_logger(__name__)


def execute(request: Request, registry: Registry) -> Result:
    """Dispatch *request* to its operation against *registry*."""
    if request.action is Action.ADD:
        return operations.add(registry, request.command, request.tag)
    if request.action is Action.MODIFY:
        return operations.modify(registry, request.command, request.tag)
    if request.action is Action.DELETE:
        return operations.delete(registry, request.command, request.tag)
    if request.action is Action.SHOW:
        return operations.show(registry, request.command)
    if request.action is Action.SEARCH:
        return operations.search(registry, request.query)
    raise FogetError(f"unsupported action {request.action!r}")


def run(request: Request, *, settings: Settings, descriptions: str | Path | None = None) -> Result:
    """Resolve, load, execute and (for mutations) save.

    Nothing is written unless the operation succeeds.
    """
    path = resolve_descriptions_path(descriptions, env_path=settings.descriptions)
    registry = Registry(store.load(path))
    result = execute(request, registry)
    if request.action.mutates:
        try:
            store.save(path, registry.document, atomic=settings.atomic_save)
        except StoreAccessError:
            log.error("%s succeeded in memory but %s was not updated", request.action.value, path)
            raise
    return result
