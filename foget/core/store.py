"""Load and persist the descriptions document.

The document is parsed with :mod:`tomlkit`, which keeps comments, ordering
and whitespace, so saving an untouched document reproduces the original
bytes and a targeted edit only changes its own region.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import TOMLKitError

from .errors import CouldNotOpenFile, ParseError, WriteError
from .logging import get_logger

log = get_logger(__name__)


def parse_document(text: str, path: Path) -> TOMLDocument:
    try:
        return tomlkit.parse(text)
    except TOMLKitError as exc:
        raise ParseError(path, str(exc)) from exc


def load(path: Path) -> TOMLDocument:
    """Read *path* and parse it into an edit-preserving document."""
    try:
        # newline="" keeps CRLF files byte-identical on save
        with open(path, "r", encoding="utf-8", newline="") as fh:
            content = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise CouldNotOpenFile(path, str(exc)) from exc
    document = parse_document(content, path)
    log.debug("loaded %s (%d commands)", path, len(document))
    return document


def dumps(document: TOMLDocument) -> str:
    return document.as_string()


def save(path: Path, document: TOMLDocument, *, atomic: bool = True) -> None:
    """Serialize *document* over *path*.

    With ``atomic=False`` the file is truncated and rewritten in place; a
    failure part-way can leave it empty or partial.  The default writes a
    sibling temporary file and renames it over the target.
    """
    text = dumps(document)
    if atomic:
        _atomic_write(path, text)
    else:
        _truncate_write(path, text)
    log.info("saved %s", path)


def _truncate_write(path: Path, text: str) -> None:
    try:
        fh = open(path, "w", encoding="utf-8", newline="")
    except OSError as exc:
        raise CouldNotOpenFile(path, str(exc)) from exc
    try:
        with fh:
            fh.write(text)
            fh.flush()
    except OSError as exc:
        raise WriteError(path, str(exc)) from exc


def _atomic_write(path: Path, text: str) -> None:
    if not path.exists():
        raise CouldNotOpenFile(path, "file does not exist")
    try:
        handle = tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", newline="", dir=str(path.parent), prefix=f".{path.name}.", delete=False
        )
    except OSError as exc:
        raise CouldNotOpenFile(path, str(exc)) from exc
    tmp_name = handle.name
    try:
        with handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        _copy_mode(path, Path(tmp_name))
        os.replace(tmp_name, path)
    except OSError as exc:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise WriteError(path, str(exc)) from exc


def _copy_mode(src: Path, dst: Path) -> None:
    # NamedTemporaryFile creates 0600 files; keep the database's permissions.
    os.chmod(dst, src.stat().st_mode & 0o7777)
