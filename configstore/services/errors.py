"""Error hierarchy for file store operations.

Every error carries a ``kind`` (the stable, machine readable name surfaced to
API clients) and the relative path it concerns.
"""

from __future__ import annotations

from typing import Optional


class FileStoreError(Exception):
    kind = 'Error'

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(message)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.message!r}, path={self.path!r})'


class InvalidPathError(FileStoreError):
    kind = 'InvalidPath'


class PathEscapeError(FileStoreError):
    kind = 'PathEscape'


class NotFoundError(FileStoreError):
    kind = 'NotFound'


class PathIsDirectoryError(FileStoreError):
    kind = 'IsADirectory'


class PathNotDirectoryError(FileStoreError):
    kind = 'NotADirectory'


class AlreadyExistsError(FileStoreError):
    kind = 'AlreadyExists'


class DirectoryNotEmptyError(FileStoreError):
    kind = 'DirectoryNotEmpty'


class InvalidNameError(FileStoreError):
    kind = 'InvalidName'


class VersionMismatchError(FileStoreError):
    """The presented version tag no longer matches the file on disk."""

    kind = 'VersionMismatch'

    def __init__(self, message: str, path: Optional[str] = None, current: Optional[str] = None):
        super().__init__(message, path)
        self.current = current


class CreateFailedError(FileStoreError):
    kind = 'CreateFailed'


class DeleteFailedError(FileStoreError):
    kind = 'DeleteFailed'


class RenameFailedError(FileStoreError):
    kind = 'RenameFailed'


class UnreadableError(FileStoreError):
    kind = 'Unreadable'
