"""File IO helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List


def append_line(path: Path, line: str) -> None:
    """Append one newline-terminated line, holding the handle only for this call."""

    with path.open("a", encoding="utf-8") as fh:
        fh.write(line + "\n")


def touch(path: Path) -> None:
    """Create ``path`` if it does not exist, leaving existing content alone."""

    path.touch(exist_ok=True)


def is_read_writable(path: Path) -> bool:
    return os.access(path, os.R_OK | os.W_OK)


def list_names(directory: Path) -> List[str]:
    """Names of the regular files directly inside ``directory``."""

    return [entry.name for entry in directory.iterdir() if entry.is_file()]


__all__ = ["append_line", "touch", "is_read_writable", "list_names"]
