"""Cascading resolution of ambient import files"""

from typing import Iterable, Sequence

from mdgen.core.errors import InvalidInputError
from mdgen.core.models import ImportEntry
from mdgen.core.utils.paths import is_within, parent_dir


def applicable(entries: Iterable[ImportEntry], document_path: str) -> list[ImportEntry]:
    """Return every entry whose directory contains the document's directory.

    Entries at all ancestor levels apply at once; a nearer entry never hides a
    higher one. Comparison is case-insensitive and respects segment boundaries.
    Raises InvalidInputError when document_path has no containing directory.
    """
    directory = parent_dir(document_path)
    if directory is None:
        raise InvalidInputError("Document path has no containing directory", document_path)
    return [e for e in entries if is_within(directory, e.directory)]


def import_names(entries: Sequence[ImportEntry], extra: Iterable[str] = ()) -> list[str]:
    """Sorted, de-duplicated union of the entries' declared names and extra names."""
    names = {n for e in entries for n in e.names}
    names.update(n.strip() for n in extra if n.strip())
    return sorted(names)
