"""Locate the descriptions database.

Preference order:
1. Explicit ``--descriptions`` argument (no existence check here).
2. ``$HOME/unix.toml``
3. ``$HOME/.config/foget/unix.toml``
4. ``$FOGET_DESCRIPTIONS``

Sources 2-4 are only accepted when the file exists.
"""

from __future__ import annotations

import os
from pathlib import Path

from .errors import StoreNotFound
from .fs_utils import auto_config
from .logging import get_logger

log = get_logger(__name__)

DB_FILENAME = "unix.toml"
ENV_VAR = "FOGET_DESCRIPTIONS"


def candidate_paths(home: str | None = None, env_path: str | None = None) -> list[Path]:
    """Return the default candidates in precedence order."""
    home = os.getenv("HOME") if home is None else home
    env_path = os.getenv(ENV_VAR) if env_path is None else env_path
    out: list[Path] = []
    if home:
        base = Path(home)
        out.append(base / DB_FILENAME)
        out.append(base / ".config" / "foget" / DB_FILENAME)
    if env_path:
        out.append(Path(env_path).expanduser())
    return out


def resolve_descriptions_path(
    override: str | Path | None,
    *,
    home: str | None = None,
    env_path: str | None = None,
) -> Path:
    """Return the database path to use, or raise :class:`StoreNotFound`."""
    if override:
        path = Path(override).expanduser().resolve()
        log.debug("using --descriptions override %s", path)
        return path

    candidates = candidate_paths(home, env_path)
    hit = auto_config(candidates)
    if hit is None:
        raise StoreNotFound(candidates)
    hit = hit.resolve()
    log.debug("resolved descriptions database %s", hit)
    return hit
