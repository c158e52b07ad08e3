"""SHA-256 hashing for document, import, and config change detection"""

import hashlib
from typing import Iterable


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 of content (64 chars, matches the cache_key column)."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def sha256_parts(parts: Iterable[str]) -> str:
    """Hash an ordered sequence of strings; NUL-separated so ('ab', 'c') != ('a', 'bc')."""
    h = hashlib.sha256()
    for part in parts:
        h.update(part.encode("utf-8"))
        h.update(b"\x00")
    return h.hexdigest()
