"""Separator normalization for path prefix comparison and delimiter substitution.

These helpers never touch the filesystem and do not collapse '.', '..' or
empty segments; they only rewrite separators so that paths coming from
different platforms compare and compose consistently.
"""

import os
import re


SEPARATORS_RE = re.compile(r'[/\\:]')


def normalize(path: str, separator: str = os.sep) -> str:
    """Rejoin path on separator, treating '/', '\\' and ':' alike; strip one trailing separator.

    normalize('') == '', normalize('/') == '', normalize('C:') == 'C'.
    """
    joined = separator.join(SEPARATORS_RE.split(path))
    if joined.endswith(separator):
        joined = joined[:-len(separator)]
    return joined


def parent_dir(path: str) -> str | None:
    """Return the '/'-normalized containing directory of path, or None if it has none.

    A bare file name has the empty directory; an empty path or a bare root has none.
    """
    normalized = normalize(path, '/')
    if not normalized.strip('/'):
        return None
    head, sep, _ = normalized.rpartition('/')
    return head if sep else ''


def _segments(path: str) -> list[str]:
    return path.rstrip('/').split('/')


def _common_prefix(path: str, directory: str) -> int | None:
    """Number of leading segments of path matched by directory (case-insensitive), or None."""
    parts, prefix = _segments(path), _segments(directory)
    if len(prefix) > len(parts):
        return None
    if any(a.casefold() != b.casefold() for a, b in zip(parts, prefix)):
        return None
    return len(prefix)


def is_within(path: str, directory: str) -> bool:
    """Case-insensitive, segment-aware prefix test on '/'-normalized paths."""
    return not directory or _common_prefix(path, directory) is not None


def relative_to(path: str, root: str) -> str:
    """Return path relative to root (both '/'-normalized) without leading separators.

    Paths outside root are returned whole, minus leading separators.
    """
    matched = _common_prefix(path, root) if root else None
    if matched is not None:
        path = '/'.join(path.split('/')[matched:])
    return path.lstrip('/')


def base_name(path: str) -> str:
    """Return the final segment of path with its last extension removed."""
    name = normalize(path, '/').rpartition('/')[2]
    stem, dot, _ = name.rpartition('.')
    return stem if dot else name
