from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional


def auto_config(candidates: Iterable[str | Path | None]) -> Optional[Path]:
    """
    Return the first candidate that exists on disk, else None.
    Empty and None candidates are skipped; ``~`` is expanded.
    """
    for c in candidates:
        if not c:
            continue
        p = Path(c).expanduser()
        if p.exists():
            return p
    return None
