"""Value types shared by the metadata, import, namespace and generation steps"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from mdgen.core.errors import MalformedMetadataError
from mdgen.core.utils.hashing import sha256, sha256_parts
from mdgen.core.utils.paths import normalize, parent_dir


DEFAULT_BASE_TYPE = "Microsoft.AspNetCore.Components.ComponentBase"

IMPORT_DIRECTIVE_RE = re.compile(r'^\s*@using\s+(static\s+)?([^\s;]+)')

# FrontMatter field -> accepted header keys, in merge order
FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "routes":     ("route", "routes"),
    "title":      ("title",),
    "imports":    ("using", "usings"),
    "namespace":  ("namespace",),
    "attributes": ("attribute", "attributes"),
    "layout":     ("layout",),
    "base_type":  ("inherits",),
}


class GenerationMode(str, Enum):
    """What the generator emits for a document"""
    full = "full"
    declaration = "declaration"


class DiagnosticSeverity(str, Enum):
    info = "info"
    warning = "warning"


class Diagnostic(BaseModel):
    """A non-fatal message attached to a generated unit."""
    model_config = ConfigDict(frozen=True)
    severity: DiagnosticSeverity = DiagnosticSeverity.warning
    path: str
    message: str


def _as_list(key: str, value: Any) -> list[str]:
    """Coerce a header value to a list of strings; scalars become one-element lists."""
    if value is None:
        return []
    if isinstance(value, Mapping):
        raise MalformedMetadataError(f"'{key}' must be a scalar or a list, got a mapping")
    items = value if isinstance(value, (list, tuple)) else [value]
    result = []
    for item in items:
        if item is None:
            continue
        if isinstance(item, (Mapping, list, tuple)):
            raise MalformedMetadataError(f"'{key}' entries must be scalars")
        result.append(str(item))
    return result


def _first(values: list[str]) -> Optional[str]:
    """Scalar view over a list-shaped field: first element or None."""
    return values[0] if values else None


class FrontMatter(BaseModel):
    """Typed, immutable view over a document's YAML header.

    Every field is parsed as a list; scalar fields keep only the first value.
    The default instance stands for "no header".
    """
    model_config = ConfigDict(frozen=True)
    routes:     tuple[str, ...] = ()
    title:      Optional[str] = None
    imports:    tuple[str, ...] = ()
    namespace:  Optional[str] = None
    attributes: tuple[str, ...] = ()
    layout:     Optional[str] = None
    base_type:  Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FrontMatter":
        """Build from a parsed header mapping. Raises MalformedMetadataError on nested values."""
        lists = {
            name: [v for key in keys for v in _as_list(key, data.get(key))]
            for name, keys in FIELD_KEYS.items()
        }
        return cls(
            routes=tuple(lists["routes"]),
            title=_first(lists["title"]),
            imports=tuple(lists["imports"]),
            namespace=_first(lists["namespace"]),
            attributes=tuple(lists["attributes"]),
            layout=_first(lists["layout"]),
            base_type=_first(lists["base_type"]),
        )


class ProjectConfig(BaseModel):
    """Build-wide settings; compared by value to detect a full-regeneration change."""
    model_config = ConfigDict(frozen=True)
    root_namespace:    str = ""
    project_root:      str = ""
    default_base_type: str = DEFAULT_BASE_TYPE

    @field_validator("root_namespace", "project_root", mode="before")
    @classmethod
    def _unset_is_empty(cls, v):
        return "" if v is None else v

    @field_validator("default_base_type", mode="before")
    @classmethod
    def _blank_base_type(cls, v):
        if v is None or not str(v).strip():
            return DEFAULT_BASE_TYPE
        return v

    def fingerprint(self) -> str:
        """Content hash of all three fields; any config change changes every cache key."""
        return sha256_parts([self.root_namespace, self.project_root, self.default_base_type])


def scan_imports(text: str) -> tuple[str, ...]:
    """Return the names declared by '@using' lines, in file order, without duplicates.

    A 'static' qualifier is kept as part of the name ('static System.Math').
    """
    names: dict[str, None] = {}
    for line in text.splitlines():
        m = IMPORT_DIRECTIVE_RE.match(line)
        if m:
            names["static " + m.group(2) if m.group(1) else m.group(2)] = None
    return tuple(names)


@dataclass(frozen=True)
class ImportEntry:
    """An ambient import file; governs its own directory and every descendant.

    Equality covers path and text only. Declared names are scanned once, at
    construction, and stored on the instance.
    """
    path: str
    text: str
    names: tuple[str, ...] = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "names", scan_imports(self.text))

    @property
    def directory(self) -> str:
        return parent_dir(self.path) or ""

    @property
    def fingerprint(self) -> str:
        return sha256_parts([normalize(self.path, "/"), self.text])


@dataclass(frozen=True)
class Document:
    """A markdown source as supplied by the build: absolute path plus full text."""
    path: str
    text: str

    @property
    def content_hash(self) -> str:
        return sha256(self.text)


class GeneratedUnit(BaseModel):
    """One generated source file: flat unit name, text, and non-fatal diagnostics."""
    model_config = ConfigDict(frozen=True)
    name: str
    text: str
    diagnostics: tuple[Diagnostic, ...] = ()
