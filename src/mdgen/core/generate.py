"""C# component source generation from document metadata and rendered markup"""

from typing import Iterable, Optional, Sequence

from mdgen.core.errors import InvalidInputError
from mdgen.core.imports import applicable, import_names
from mdgen.core.models import (
    Diagnostic, Document, FrontMatter, GeneratedUnit, GenerationMode, ImportEntry, ProjectConfig,
)
from mdgen.core.namespace import resolve
from mdgen.core.parse import extract_metadata, split_frontmatter
from mdgen.core.render import Renderer, augment_external_links, make_renderer
from mdgen.core.utils.identifiers import sanitize
from mdgen.core.utils.paths import base_name, normalize, relative_to


HEADER = "// <auto-generated/>"
INDENT = "    "
UNIT_DELIMITER = "_"
UNIT_SUFFIX = ".g.cs"
COMPONENTS = "global::Microsoft.AspNetCore.Components"
DEFAULT_USINGS = (
    "System",
    "System.Collections.Generic",
    "System.Linq",
    "System.Threading.Tasks",
    "Microsoft.AspNetCore.Components",
)


def verbatim(text: str) -> str:
    """Return text as a C# verbatim string literal."""
    return '@"' + text.replace('"', '""') + '"'


def unit_name(document_path: str, project_root: str) -> str:
    """Flat generated file name: root-relative path with '/' -> '_', plus '.g.cs'."""
    relative = relative_to(normalize(document_path, "/"), normalize(project_root, "/"))
    return relative.replace("/", UNIT_DELIMITER) + UNIT_SUFFIX


def type_name(document_path: str) -> str:
    """Sanitized class name from the document's file name without extension."""
    name = sanitize(base_name(document_path))
    if not name:
        raise InvalidInputError("Cannot derive a type name from document path", document_path)
    return name


def build_attributes(metadata: FrontMatter) -> list[str]:
    """Route attributes (order and duplicates kept), then layout, then extra attributes."""
    attrs = [f"[{COMPONENTS}.RouteAttribute({verbatim(route)})]" for route in metadata.routes]
    if metadata.layout:
        attrs.append(f"[{COMPONENTS}.LayoutAttribute(typeof({metadata.layout}))]")
    for attr in metadata.attributes:
        attr = attr.strip()
        attrs.append(attr if attr.startswith("[") else f"[{attr}]")
    return attrs


def build_render_method(markup: str, title: Optional[str] = None) -> list[str]:
    """BuildRenderTree override embedding markup as one verbatim block.

    Entries may span several physical lines (multi-line string literals); callers
    indent entries, never the text inside them.
    """
    lines = [
        f"protected override void BuildRenderTree({COMPONENTS}.Rendering.RenderTreeBuilder __builder)",
        "{",
    ]
    if title is not None:
        lines += [
            f"{INDENT}__builder.OpenComponent<{COMPONENTS}.Web.PageTitle>(0);",
            f'{INDENT}__builder.AddAttribute(1, "ChildContent", ({COMPONENTS}.RenderFragment)((__builder2) => {{',
            f"{INDENT * 2}__builder2.AddContent(2, {verbatim(title)});",
            f"{INDENT}}}));",
            f"{INDENT}__builder.CloseComponent();",
        ]
    lines.append(f"{INDENT}__builder.AddMarkupContent(3, {verbatim(markup)});")
    lines.append("}")
    return lines


def build_class(name: str, base_type: str, attributes: Sequence[str], members: Sequence[str]) -> list[str]:
    return [
        *attributes,
        f"public partial class {name} : {base_type}",
        "{",
        *_indent(members),
        "}",
    ]


def _import_name(value: str) -> str:
    """Header 'using' value with surrounding whitespace and a trailing ';' removed."""
    return value.strip().rstrip(";").rstrip()


def _indent(lines: Iterable[str]) -> list[str]:
    return [INDENT + line if line else line for line in lines]


def generate(
    document: Document,
    metadata: FrontMatter,
    imports: Sequence[ImportEntry],
    config: ProjectConfig,
    mode: GenerationMode = GenerationMode.full,
    render: Optional[Renderer] = None,
    diagnostics: Sequence[Diagnostic] = (),
    ) -> GeneratedUnit:
    """Generate the component source for one document.

    imports are the already-applicable import entries. Output depends only on
    the arguments; nothing time- or environment-dependent is emitted.
    """
    header_imports = [name for name in (_import_name(value) for value in metadata.imports) if name]
    usings = [f"using {name};" for name in import_names(imports, (*DEFAULT_USINGS, *header_imports))]
    namespace = resolve(document.path, config.project_root, config.root_namespace, metadata.namespace)
    name = type_name(document.path)
    base_type = metadata.base_type or config.default_base_type

    members: list[str] = []
    if mode == GenerationMode.full:
        _, body = split_frontmatter(document.text)
        markup = augment_external_links((render or make_renderer())(body))
        members = build_render_method(markup, metadata.title)
    declaration = build_class(name, base_type, build_attributes(metadata), members)

    lines = [HEADER, "#pragma warning disable 1591"]
    if namespace:
        lines += [f"namespace {namespace}", "{", *_indent(usings), "", *_indent(declaration), "}"]
    else:
        lines += [*usings, "", *declaration]
    lines.append("#pragma warning restore 1591")

    return GeneratedUnit(
        name=unit_name(document.path, config.project_root),
        text="\n".join(lines) + "\n",
        diagnostics=tuple(diagnostics),
    )


def transform(
    document: Document,
    entries: Iterable[ImportEntry],
    config: ProjectConfig,
    mode: GenerationMode = GenerationMode.full,
    render: Optional[Renderer] = None,
    ) -> GeneratedUnit:
    """Extract metadata, select cascading imports and generate, for one document."""
    metadata, _, diagnostics = extract_metadata(document)
    return generate(
        document, metadata, applicable(entries, document.path), config, mode, render, diagnostics,
    )
