from __future__ import annotations

from typing import Optional

from .errors import InvalidNameError


def validate_name(new_name: Optional[str]) -> str:
    if new_name is None or new_name == '':
        raise InvalidNameError('Property [newName] does not exist or is empty', new_name)
    if '/' in new_name or '\\' in new_name or '\x00' in new_name or new_name in ('.', '..'):
        raise InvalidNameError(f'Name [{new_name}] must be a single path segment', new_name)
    return new_name


def compute_destination(relative_path: str, new_name: Optional[str]) -> str:
    """Replace the last segment of ``relative_path`` with ``new_name``.

    >>> compute_destination('foo/bar.xml', 'baz.xml')
    'foo/baz.xml'
    >>> compute_destination('bar.xml', 'baz.xml')
    'baz.xml'
    """
    name = validate_name(new_name)
    trimmed = relative_path.rstrip('/')
    if '/' in trimmed:
        parent, _, _ = trimmed.rpartition('/')
        return f'{parent}/{name}'
    return name
