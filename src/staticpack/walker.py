"""Directory walking for asset generation.

Enumerates every file below a root directory in a stable order and derives
the URL-style path each file is served under.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from staticpack.errors import GenerationError


@dataclass(frozen=True)
class WalkEntry:
    """A file found under the input root."""

    absolute_path: Path
    relative_path: str


def relative_url_path(root: Path, path: Path) -> str:
    """Return the root-relative POSIX path of a file with a leading slash.

    Args:
        root: Input root directory
        path: File below the root

    Returns:
        Path like "/css/app.css"
    """
    return "/" + path.relative_to(root).as_posix()


def walk(root: Path) -> list[WalkEntry]:
    """Walk a directory tree depth-first in lexicographic order.

    Args:
        root: Directory to walk

    Returns:
        Files below root, each with its absolute and root-relative path

    Raises:
        GenerationError: If root is not a directory or any directory
            below it cannot be listed
    """
    if not root.is_dir():
        raise GenerationError(f"Input directory not found: {root}")

    entries: list[WalkEntry] = []
    _walk_dir(root, root, entries)
    return entries


def _walk_dir(root: Path, directory: Path, entries: list[WalkEntry]) -> None:
    try:
        with os.scandir(directory) as it:
            children = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise GenerationError(f"Failed to list directory {directory}: {e}") from e

    for child in children:
        child_path = directory / child.name
        if child.is_dir():
            _walk_dir(root, child_path, entries)
        else:
            entries.append(
                WalkEntry(
                    absolute_path=child_path,
                    relative_path=relative_url_path(root, child_path),
                )
            )
