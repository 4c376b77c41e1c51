"""Finding source images on disk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

from ..core.errors import ConfigurationError

SUPPORTED_EXTENSIONS = (".png", ".gif", ".jpg", ".jpeg", ".bmp")


def _normalise(extensions: Iterable[str]) -> set[str]:
    result = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        result.add(ext if ext.startswith(".") else f".{ext}")
    return result


def find_images(directory, extensions: Iterable[str] = SUPPORTED_EXTENSIONS) -> List[Path]:
    """Return every image below ``directory``, recursively.

    Extensions match case-insensitively. The list is sorted by the path
    relative to ``directory`` (``/`` separated) so the sprite order does not
    depend on how the filesystem happens to enumerate entries.
    """

    root = Path(directory)
    if not root.exists():
        raise ConfigurationError(f"Directory {root} not found.")
    if not root.is_dir():
        raise ConfigurationError(f"{root} is not a directory.")

    wanted = _normalise(extensions)
    found: List[Path] = []
    for dirpath, _dirnames, filenames in os.walk(root):
        for filename in filenames:
            if os.path.splitext(filename)[1].lower() in wanted:
                found.append(Path(dirpath) / filename)
    found.sort(key=lambda p: p.relative_to(root).as_posix())
    return found


__all__ = ["SUPPORTED_EXTENSIONS", "find_images"]
