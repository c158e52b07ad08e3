"""Incremental build: discover sources, regenerate stale documents, write and record outputs"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import Session

from mdgen.config import Settings
from mdgen.core.cache import cache_key
from mdgen.core.errors import InvalidInputError
from mdgen.core.generate import transform, unit_name
from mdgen.core.imports import applicable
from mdgen.core.models import Document, GeneratedUnit, GenerationMode, ImportEntry, ProjectConfig
from mdgen.core.parse import discover_files, discover_imports
from mdgen.core.render import Renderer, make_renderer
from mdgen.core.utils.paths import is_within, normalize
from mdgen.crud.units import commit_unit, get_all_units, get_by_path, is_current, remove_unit
from mdgen.logging import get_logger


logger = get_logger("pipeline")


def load_documents(path: Path) -> list[Document]:
    """Read every markdown document under path (file or directory)."""
    return [
        Document(path=str(p.resolve()), text=p.read_text(encoding='utf-8'))
        for p in discover_files(path)
    ]


def load_imports(path: Path, imports_file: str) -> list[ImportEntry]:
    """Read every ambient import file under path."""
    return [
        ImportEntry(path=str(p.resolve()), text=p.read_text(encoding='utf-8'))
        for p in discover_imports(path, imports_file)
    ]


def _generate_one(
    document: Document,
    entries: list[ImportEntry],
    config: ProjectConfig,
    mode: GenerationMode,
    render: Renderer,
    ) -> GeneratedUnit:
    try:
        return transform(document, entries, config, mode, render)
    except InvalidInputError as e:
        raise RuntimeError(f"Failed to generate {document.path}: {e}") from e


def _write(output_dir: Path, name: str, text: str) -> Path:
    out_file = output_dir / name
    out_file.write_text(text, encoding='utf-8')
    return out_file


def _check_unit_names(documents: list[Document], project_root: str) -> dict[str, str]:
    """Map document path -> unit name; raise when two documents flatten to the same name."""
    names: dict[str, str] = {}
    owners: dict[str, str] = {}
    for doc in documents:
        name = unit_name(doc.path, project_root)
        key = name.casefold()
        if key in owners:
            raise RuntimeError(f"Unit name collision: {owners[key]} and {doc.path} both generate {name}")
        owners[key] = doc.path
        names[doc.path] = name
    return names


def run_build(engine: Engine, path: Path, settings: Settings) -> tuple[dict[str, int], list[tuple[str, str]]]:
    """Generate components for every document under path, skipping cache hits.

    Returns (counts, changes): counts per status ('created', 'updated',
    'unchanged', 'removed') and (status, unit_name) pairs for every document
    that was not unchanged. Records and outputs of documents that disappeared
    from a built directory are removed, as are outputs left under a unit name
    a document no longer generates.
    """
    root = path if path.is_dir() else path.parent
    config = settings.project_config(root)
    mode = GenerationMode(settings.mode)
    render = make_renderer(settings.parser_config)
    scope = normalize(str(root.resolve()), '/')
    # imports cascade from the project root, which may sit above the build path
    in_project = is_within(scope, normalize(config.project_root, '/'))
    entries = load_imports(Path(config.project_root) if in_project else root, settings.imports_file)
    documents = load_documents(path)
    names = _check_unit_names(documents, config.project_root)
    output_dir = Path(settings.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Building %d document(s) with %d import file(s)", len(documents), len(entries))

    counts = {"created": 0, "updated": 0, "unchanged": 0, "removed": 0}
    changes: list[tuple[str, str]] = []
    committed_at = datetime.now()
    current_names = set(names.values())

    with Session(engine) as session:
        keys: dict[str, str] = {}
        stale: list[Document] = []
        for doc in documents:
            try:
                key = cache_key(doc, config, applicable(entries, doc.path), mode, settings.parser_config)
            except InvalidInputError as e:
                raise RuntimeError(f"Failed to generate {doc.path}: {e}") from e
            keys[doc.path] = key.digest
            record = get_by_path(session, doc.path)
            if is_current(record, keys[doc.path]):
                counts["unchanged"] += 1
                if not (output_dir / record.unit_name).exists():
                    _write(output_dir, record.unit_name, record.text)
                logger.debug("unchanged: %s", doc.path)
                continue
            stale.append(doc)
            if record is not None and record.unit_name not in current_names:
                (output_dir / record.unit_name).unlink(missing_ok=True)
                logger.debug("renamed: %s -> %s", record.unit_name, names[doc.path])

        with ThreadPoolExecutor(max_workers=settings.max_workers) as pool:
            units = list(pool.map(lambda d: _generate_one(d, entries, config, mode, render), stale))

        for doc, unit in zip(stale, units):
            _, status = commit_unit(session, doc.path, keys[doc.path], mode.value, unit, committed_at)
            _write(output_dir, unit.name, unit.text)
            counts[status] += 1
            changes.append((status, unit.name))
            logger.debug("%s: %s -> %s", status, doc.path, unit.name)

        if path.is_dir():
            present = set(keys)
            for record in get_all_units(session):
                if record.path in present or not is_within(normalize(record.path, '/'), scope):
                    continue
                if record.unit_name not in current_names:
                    (output_dir / record.unit_name).unlink(missing_ok=True)
                remove_unit(session, record)
                counts["removed"] += 1
                changes.append(("removed", record.unit_name))
                logger.debug("removed: %s", record.path)

        session.commit()

    logger.info(
        "Build complete - %d created, %d updated, %d unchanged, %d removed",
        counts["created"], counts["updated"], counts["unchanged"], counts["removed"],
    )
    return counts, changes
