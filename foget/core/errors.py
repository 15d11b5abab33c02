"""Error taxonomy.

Every failure raised below the CLI is a :class:`FogetError`.  The CLI entry
point is the only place that turns one into a message and an exit code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class FogetError(RuntimeError):
    """Base error for foget failures."""

    category = "error"
    exit_code = 1


# ---------------------------------------------------------------------------
# Argument errors
# ---------------------------------------------------------------------------


class ArgumentError(FogetError):
    category = "argument"


class NotEnoughArguments(ArgumentError):
    def __init__(self, detail: str = "") -> None:
        msg = "Incorrect amount of arguments! You should use foget [action] [action parameters]"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class UnknownAction(ArgumentError):
    def __init__(self, detail: str = "") -> None:
        msg = "Could not understand action. Please specify one from the list [ add, modify, delete, show, search ]"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class EmptyArgument(ArgumentError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"The {name} must be a non-empty string")


class ConfigError(FogetError):
    category = "config"

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid configuration: {detail}")


# ---------------------------------------------------------------------------
# Store access errors
# ---------------------------------------------------------------------------


class StoreAccessError(FogetError):
    category = "store"


class StoreNotFound(StoreAccessError):
    def __init__(self, candidates: Iterable[Path]) -> None:
        self.candidates = list(candidates)
        checked = ", ".join(str(p) for p in self.candidates) or "none"
        super().__init__(
            "Could not find a descriptions database. Pass --descriptions <path>, "
            f"create ~/unix.toml or ~/.config/foget/unix.toml, or set FOGET_DESCRIPTIONS (checked: {checked})"
        )


class CouldNotOpenFile(StoreAccessError):
    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        msg = f'Could not open database file located in "{path}"'
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ParseError(StoreAccessError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        super().__init__(f'Database file "{path}" is not valid TOML: {detail}')


class WriteError(StoreAccessError):
    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        msg = f'Could not write database file "{path}"'
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


# ---------------------------------------------------------------------------
# Entity errors
# ---------------------------------------------------------------------------


class EntityError(FogetError):
    category = "entity"


class CommandNotFound(EntityError):
    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f'Command "{command}" is not in the database')


class TagNotFound(EntityError):
    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__("No commands match the searched functionality.")


class DuplicateTag(EntityError):
    def __init__(self, command: str, tag: str) -> None:
        self.command = command
        self.tag = tag
        super().__init__(f'Command "{command}" already has the tag "{tag}"')


class AlreadyInDatabase(EntityError):
    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f'Command "{command}" is already in the database')


# ---------------------------------------------------------------------------
# Internal invariant errors
# ---------------------------------------------------------------------------


class InternalError(FogetError):
    category = "internal"

    def __init__(self, detail: str) -> None:
        super().__init__(f"Unexpected internal error: {detail}")
