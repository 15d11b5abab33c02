"""Logging helpers using Rich."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED = False


def configure(level: int | str = logging.WARNING) -> None:
    """Install the Rich stderr handler once and set the package log level."""
    global _CONFIGURED
    if not _CONFIGURED:
        handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root = logging.getLogger("foget")
        root.addHandler(handler)
        root.propagate = False
        _CONFIGURED = True
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.getLogger("foget").setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``foget`` hierarchy."""
    if not name.startswith("foget"):
        name = f"foget.{name}"
    return logging.getLogger(name)
