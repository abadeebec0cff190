from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import (
    AlreadyExistsError,
    CreateFailedError,
    DeleteFailedError,
    DirectoryNotEmptyError,
    InvalidPathError,
    NotFoundError,
    PathIsDirectoryError,
    PathNotDirectoryError,
    RenameFailedError,
    UnreadableError,
    VersionMismatchError,
)
from .media_types import media_type_for
from .paths import Root, RootRegistry, relative_to_root, validate_path
from .rename import compute_destination
from .tree import Tree, build_tree
from .versioning import ensure_new_tag, matches_any, tag_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileContent:
    path: str
    media_type: str
    version: str
    content: Optional[bytes] = None
    unchanged: bool = False


def _atomic_write_bytes(path: Path, content: bytes, exclusive: bool = False) -> None:
    fd, tmp_path = tempfile.mkstemp(prefix=f'.{path.name}.', suffix='.tmp', dir=str(path.parent))
    try:
        with os.fdopen(fd, 'wb') as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        if exclusive:
            # link fails with FileExistsError instead of overwriting
            os.link(tmp_path, path)
        else:
            os.replace(tmp_path, path)
        dir_fd = os.open(str(path.parent), os.O_RDONLY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)
    finally:
        Path(tmp_path).unlink(missing_ok=True)


def _check_version(target: Path, rel: str, if_match: Optional[list[str]]) -> None:
    if not if_match:
        return
    current = tag_for(target)
    if not matches_any(if_match, current):
        raise VersionMismatchError(
            f'File [{rel}] was modified, expected version [{", ".join(if_match)}] but found [{current}]',
            rel,
            current=current,
        )


def _check_parent(target: Path, rel: str) -> None:
    parent = target.parent
    if not parent.exists():
        raise NotFoundError(f'Parent directory of [{rel}] does not exist', rel)
    if not parent.is_dir():
        raise PathNotDirectoryError(f'Parent of [{rel}] is not a directory', rel)


def _has_entries(directory: Path) -> bool:
    try:
        with os.scandir(directory) as it:
            return any(True for _ in it)
    except OSError:
        return False


def _rename(root: Root, path: str, new_name: Optional[str], want_dir: bool) -> str:
    source = validate_path(path, root)
    if source == root.path:
        raise InvalidPathError('The configuration root cannot be renamed', path)
    if not source.exists():
        raise NotFoundError(f'Path [{path}] does not exist', path)
    if want_dir and not source.is_dir():
        raise PathNotDirectoryError(f'Path [{path}] is not a directory', path)
    if not want_dir and source.is_dir():
        raise PathIsDirectoryError(f'Path [{path}] is a directory', path)

    destination_rel = compute_destination(relative_to_root(source, root), new_name)
    destination = validate_path(destination_rel, root)
    if destination.exists():
        raise AlreadyExistsError(f'Path [{destination_rel}] already exists', destination_rel)

    kind = 'directory' if want_dir else 'file'
    try:
        if want_dir:
            source.rename(destination)
        else:
            # link refuses an existing destination, rename would replace it
            os.link(source, destination)
            try:
                source.unlink()
            except OSError:
                destination.unlink(missing_ok=True)
                raise
    except FileExistsError as exc:
        raise AlreadyExistsError(f'Path [{destination_rel}] already exists', destination_rel) from exc
    except OSError as exc:
        raise RenameFailedError(f'Unable to rename {kind} [{path}] to [{destination_rel}]', path) from exc

    logger.info('renamed [%s] to [%s] in configuration [%s]', path, destination_rel, root.name)
    return relative_to_root(destination, root)


class FileStore:
    """File operations on one configuration root at a time."""

    def __init__(self, replace_creates_missing: bool = True):
        self.replace_creates_missing = replace_creates_missing

    def get_file(self, root: Root, path: str, if_none_match: Optional[list[str]] = None) -> FileContent:
        target = validate_path(path, root)
        if not target.exists():
            raise NotFoundError(f'File [{path}] does not exist', path)
        if target.is_dir():
            raise PathIsDirectoryError(f'Path [{path}] is a directory', path)

        version = tag_for(target)
        media_type = media_type_for(target.name)
        if if_none_match and matches_any(if_none_match, version):
            return FileContent(path=path, media_type=media_type, version=version, unchanged=True)

        try:
            content = target.read_bytes()
        except OSError as exc:
            raise UnreadableError(f'Unable to read file [{path}]', path) from exc
        return FileContent(path=path, media_type=media_type, version=version, content=content)

    def create_file(self, root: Root, path: str, content: bytes) -> str:
        target = validate_path(path, root)
        if target.exists():
            raise AlreadyExistsError(f'File [{path}] already exists', path)
        _check_parent(target, path)

        try:
            _atomic_write_bytes(target, content, exclusive=True)
        except FileExistsError as exc:
            raise AlreadyExistsError(f'File [{path}] already exists', path) from exc
        except OSError as exc:
            raise CreateFailedError(f'An error occurred while creating file [{path}]', path) from exc
        if not target.exists():
            raise CreateFailedError(f'File [{path}] does not exist after writing', path)

        logger.info('created file [%s] in configuration [%s]', path, root.name)
        return tag_for(target)

    def replace_file(self, root: Root, path: str, content: bytes, if_match: Optional[list[str]] = None) -> str:
        target = validate_path(path, root)
        previous = None
        if target.exists():
            if target.is_dir():
                raise PathIsDirectoryError(f'Path [{path}] is a directory', path)
            _check_version(target, path, if_match)
            previous = tag_for(target)
        else:
            if if_match:
                raise VersionMismatchError(f'File [{path}] does not exist, expected version [{", ".join(if_match)}]', path)
            if not self.replace_creates_missing:
                raise NotFoundError(f'File [{path}] does not exist', path)
            _check_parent(target, path)

        try:
            _atomic_write_bytes(target, content)
        except OSError as exc:
            raise CreateFailedError(f'An error occurred while saving file [{path}]', path) from exc

        logger.info('saved file [%s] in configuration [%s]', path, root.name)
        return ensure_new_tag(target, previous)

    def delete_file(self, root: Root, path: str, if_match: Optional[list[str]] = None) -> None:
        target = validate_path(path, root)
        if not target.exists():
            raise NotFoundError(f'File [{path}] does not exist', path)
        if target.is_dir():
            raise PathIsDirectoryError(f'Path [{path}] is a directory', path)
        _check_version(target, path, if_match)

        try:
            target.unlink()
        except OSError as exc:
            raise DeleteFailedError(f'Unable to remove file [{path}]', path) from exc
        logger.info('deleted file [%s] in configuration [%s]', path, root.name)

    def rename_file(self, root: Root, path: str, new_name: Optional[str]) -> str:
        return _rename(root, path, new_name, want_dir=False)


class DirectoryStore:
    def __init__(self, registry: RootRegistry):
        self.registry = registry

    def list_roots(self) -> list[str]:
        return self.registry.names()

    def list_tree(self, root: Root, path: Optional[str] = None) -> Tree:
        target = validate_path(path or '.', root)
        if not target.exists():
            raise NotFoundError(f'Directory [{path}] does not exist', path)
        return build_tree(target)

    def create_directory(self, root: Root, path: str) -> None:
        target = validate_path(path, root)
        if target.exists():
            raise AlreadyExistsError(f'Directory [{path}] already exists', path)

        try:
            target.mkdir(parents=True)
        except FileExistsError as exc:
            raise AlreadyExistsError(f'Directory [{path}] already exists', path) from exc
        except OSError as exc:
            raise CreateFailedError(f'Could not create directory [{path}]', path) from exc
        logger.info('created directory [%s] in configuration [%s]', path, root.name)

    def rename_directory(self, root: Root, path: str, new_name: Optional[str]) -> str:
        return _rename(root, path, new_name, want_dir=True)

    def delete_directory(self, root: Root, path: str) -> None:
        target = validate_path(path, root)
        if target == root.path:
            raise InvalidPathError('The configuration root cannot be deleted', path)
        if not target.exists():
            raise NotFoundError(f'Directory [{path}] does not exist', path)
        if not target.is_dir():
            raise PathNotDirectoryError(f'Path [{path}] is not a directory', path)

        try:
            target.rmdir()
        except OSError as exc:
            if _has_entries(target):
                raise DirectoryNotEmptyError(
                    f"Can't delete directory [{path}] with content. Please remove the content first.", path
                ) from exc
            raise DeleteFailedError(f'Unable to remove directory [{path}]', path) from exc
        logger.info('deleted directory [%s] in configuration [%s]', path, root.name)
