"""File discovery and front matter extraction"""

import re
from pathlib import Path
from typing import Optional

import yaml

from mdgen.core.errors import MalformedMetadataError
from mdgen.core.models import Diagnostic, Document, FrontMatter
from mdgen.logging import get_logger


FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)
MD_EXTENSIONS = {'.md'}

logger = get_logger("parse")


def split_frontmatter(text: str) -> tuple[Optional[str], str]:
    """Return (raw_header, body). raw_header is None when there is no closed '---' block."""
    m = FRONTMATTER_RE.match(text)
    if m:
        return m.group(1), text[m.end():]
    return None, text


def parse_frontmatter(header: Optional[str]) -> FrontMatter:
    """Parse a raw YAML header into FrontMatter.

    Raises yaml.YAMLError on syntax errors and MalformedMetadataError when the
    header is not a mapping or a field holds nested structures.
    """
    if header is None:
        return FrontMatter()
    data = yaml.safe_load(header)
    if data is None:
        return FrontMatter()
    if not isinstance(data, dict):
        raise MalformedMetadataError(f"expected a mapping, got {type(data).__name__}")
    return FrontMatter.from_mapping(data)


def extract_metadata(document: Document) -> tuple[FrontMatter, str, list[Diagnostic]]:
    """Return (metadata, body, diagnostics) for a document.

    A malformed header degrades to the default FrontMatter with a warning
    diagnostic instead of failing the document.
    """
    header, body = split_frontmatter(document.text)
    try:
        return parse_frontmatter(header), body, []
    except (yaml.YAMLError, MalformedMetadataError) as e:
        message = f"Invalid YAML front matter, using defaults: {e}"
        logger.warning("%s: %s", document.path, message)
        return FrontMatter(), body, [Diagnostic(path=document.path, message=message)]


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md files under path, or [path] if a single markdown file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS and p.is_file())


def discover_imports(path: Path, imports_file: str) -> list[Path]:
    """Return sorted ambient import files named imports_file under path (or its directory)."""
    root = path if path.is_dir() else path.parent
    return sorted(p for p in root.rglob(imports_file) if p.is_file())
