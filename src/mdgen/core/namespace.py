"""Namespace resolution from document location and project settings"""

from typing import Optional

from mdgen.core.utils.identifiers import sanitize
from mdgen.core.utils.paths import normalize, parent_dir, relative_to


def namespace_suffix(document_path: str, project_root: str) -> str:
    """Dot-joined, sanitized segments of the document directory relative to project_root."""
    directory = parent_dir(document_path) or ""
    relative = relative_to(directory, normalize(project_root, "/"))
    return ".".join(sanitize(seg) for seg in relative.split("/") if seg)


def resolve(
    document_path: str,
    project_root: str,
    root_namespace: str,
    override: Optional[str] = None,
    ) -> str:
    """Return the namespace for a document; '' means no namespace wrapper.

    An override from the document header wins verbatim. Otherwise the root
    namespace is joined with the relative directory segments.
    """
    if override is not None:
        return override
    suffix = namespace_suffix(document_path, project_root)
    return ".".join(part for part in (root_namespace, suffix) if part)
