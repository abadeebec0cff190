"""Recursive directory tree for configuration listings.

The serialized form maps every subdirectory name to its own tree and lists
the plain files of a level under ``FILES_KEY``. The key is left out when a
level has no files, so an empty directory serializes to ``{}``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import PathNotDirectoryError, UnreadableError

FILES_KEY = '_files'


@dataclass(frozen=True)
class Tree:
    directories: tuple[tuple[str, 'Tree'], ...] = field(default_factory=tuple)
    files: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        out: dict = {name: child.to_dict() for name, child in self.directories}
        if self.files:
            out[FILES_KEY] = list(self.files)
        return out


def build_tree(directory: Path) -> Tree:
    # Symbolic links are never descended into, so the walk cannot cycle.
    if not directory.is_dir():
        raise PathNotDirectoryError(f'Path [{directory.name}] is not a directory', directory.name)

    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise UnreadableError(f'Unable to list directory [{directory.name}]', directory.name) from exc

    directories: list[tuple[str, Tree]] = []
    files: list[str] = []
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            directories.append((entry.name, build_tree(Path(entry.path))))
        else:
            files.append(entry.name)
    return Tree(directories=tuple(directories), files=tuple(files))
