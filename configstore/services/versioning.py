"""Modification-time based version tags used for conditional requests.

A tag is ``"lm"`` followed by the file's last-modified time in milliseconds.
Two writes within the same millisecond may share a tag, so the check is
best-effort: it detects lost updates, it does not prevent them.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional

TAG_PREFIX = 'lm'
WILDCARD = '*'


class Outcome(Enum):
    MATCH = 'match'
    MISMATCH = 'mismatch'


def mtime_millis(path: Path) -> int:
    return path.stat().st_mtime_ns // 1_000_000


def tag_for(path: Path) -> str:
    return f'{TAG_PREFIX}{mtime_millis(path)}'


def validate(presented: str, current: str) -> Outcome:
    if presented == WILDCARD or presented == current:
        return Outcome.MATCH
    return Outcome.MISMATCH


def matches_any(presented: list[str], current: str) -> bool:
    return any(validate(tag, current) is Outcome.MATCH for tag in presented)


def canonicalize_etag(value: str) -> str:
    token = value.strip()
    if token.startswith('W/'):
        token = token[2:].strip()
    if len(token) >= 2 and token[0] == token[-1] == '"':
        token = token[1:-1]
    return token


def parse_entity_tags(header: Optional[str]) -> list[str]:
    """Parse an ``If-Match`` / ``If-None-Match`` header into bare tags."""
    if not header:
        return []
    return [tag for tag in (canonicalize_etag(part) for part in header.split(',')) if tag]


def format_etag(tag: str) -> str:
    return f'"{tag}"'


def ensure_new_tag(path: Path, previous: Optional[str]) -> str:
    """Return the tag of ``path``, nudging its mtime forward if it still equals ``previous``."""
    current = tag_for(path)
    if previous is None or current != previous:
        return current

    stat = path.stat()
    bumped = (mtime_millis(path) + 1) * 1_000_000
    os.utime(path, ns=(stat.st_atime_ns, bumped))
    return tag_for(path)
