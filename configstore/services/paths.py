from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .errors import InvalidPathError, NotFoundError, PathEscapeError, PathNotDirectoryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Root:
    name: str
    path: Path

    def __post_init__(self):
        object.__setattr__(self, 'path', Path(os.path.normpath(os.path.abspath(self.path))))


def validate_path(requested_path: Optional[str], root: Root) -> Path:
    """Resolve ``requested_path`` below ``root`` and reject anything that escapes it.

    Normalization is purely lexical: ``.`` and ``..`` segments are collapsed,
    symbolic links are not followed. The returned path is the root itself or
    one of its descendants.
    """
    if requested_path is None or requested_path == '':
        raise InvalidPathError('No (valid) path specified', requested_path)
    if '\x00' in requested_path:
        raise InvalidPathError('Path contains a NUL byte', requested_path)
    if os.path.isabs(requested_path) or requested_path.startswith(('/', '\\')):
        logger.warning('rejected absolute path [%s] for configuration [%s]', requested_path, root.name)
        raise PathEscapeError(f'Inaccessible path [{requested_path}]', requested_path)

    base = str(root.path)
    candidate = os.path.normpath(os.path.join(base, requested_path))
    if candidate != base and not candidate.startswith(base.rstrip(os.sep) + os.sep):
        logger.warning('rejected path [%s] escaping configuration [%s]', requested_path, root.name)
        raise PathEscapeError(f'Inaccessible path [{requested_path}]', requested_path)
    return Path(candidate)


def relative_to_root(path: Path, root: Root) -> str:
    rel = path.relative_to(root.path).as_posix()
    return '' if rel == '.' else rel


class RootRegistry:
    """The configuration roots found directly below one configurations directory."""

    def __init__(self, directory: str, hidden_prefixes: Iterable[str] = ()):
        self.directory = Path(directory).resolve()
        self.hidden_prefixes = tuple(p for p in hidden_prefixes if p)

    def check(self) -> None:
        if not self.directory.exists():
            raise RuntimeError(f'Configurations directory [{self.directory}] does not exist')
        if not self.directory.is_dir():
            raise RuntimeError(f'Configurations directory [{self.directory}] is not a directory')

    def _visible(self, name: str) -> bool:
        return not name.startswith(self.hidden_prefixes)

    def names(self) -> list[str]:
        self.check()
        return sorted(
            entry.name
            for entry in self.directory.iterdir()
            if entry.is_dir() and self._visible(entry.name)
        )

    def get(self, name: str) -> Root:
        if not name or name in ('.', '..') or '/' in name or '\\' in name or not self._visible(name):
            raise NotFoundError(f'Configuration [{name}] not found', name)

        path = self.directory / name
        if not path.exists():
            raise NotFoundError(f'Configuration [{name}] not found', name)
        if not path.is_dir():
            raise PathNotDirectoryError(f'Configuration [{name}] is not a directory', name)
        return Root(name=name, path=path)
