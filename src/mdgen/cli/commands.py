"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session, SQLModel

from mdgen.config import Settings, load_config
from mdgen.core.errors import InvalidInputError
from mdgen.core.generate import transform
from mdgen.core.models import Document, GenerationMode
from mdgen.core.pipeline import load_imports, run_build
from mdgen.core.render import make_renderer
from mdgen.crud.database import init_db, make_engine
from mdgen.crud.units import get_all_units
from mdgen.logging import configure_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def build_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file or directory to generate from")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    namespace: Annotated[Optional[str], typer.Option("--namespace", help="Root namespace")] = None,
    root: Annotated[Optional[str], typer.Option("--project-root", help="Project root for namespaces and unit names")] = None,
    base_type: Annotated[Optional[str], typer.Option("--base-type", help="Default component base class")] = None,
    declarations: Annotated[bool, typer.Option("--declarations", help="Emit declarations only, no render body")] = False,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Parallel generation threads")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log per-document status")] = False,
    ):
    """Generate component sources for changed documents."""
    configure_logging(verbose=verbose)
    settings = _settings(overrides={
        "output_dir": out, "root_namespace": namespace, "project_root": root,
        "default_base_type": base_type, "max_workers": workers,
        "mode": GenerationMode.declaration.value if declarations else None,
    })
    source = Path(path)
    if not source.exists():
        _fail(f"Path not found: {path}")

    engine = make_engine(settings.db_url)
    init_db(engine)
    try:
        counts, changes = run_build(engine, source, settings)
    except RuntimeError as e:
        _fail(str(e))

    for status, name in changes:
        typer.echo(f"  {status}: {name}")
    typer.echo(
        f"Build complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged, "
        f"{counts['removed']} removed"
    )


def generate_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to generate")],
    namespace: Annotated[Optional[str], typer.Option("--namespace", help="Root namespace")] = None,
    root: Annotated[Optional[str], typer.Option("--project-root", help="Project root for namespaces and imports")] = None,
    declarations: Annotated[bool, typer.Option("--declarations", help="Emit declarations only, no render body")] = False,
    ):
    """Print the generated source for one document without touching the cache."""
    settings = _settings(overrides={"root_namespace": namespace, "project_root": root})
    source = Path(path)
    if not source.is_file():
        _fail(f"File not found: {path}")

    config = settings.project_config(source.parent)
    mode = GenerationMode.declaration if declarations else GenerationMode(settings.mode)
    document = Document(path=str(source.resolve()), text=source.read_text(encoding='utf-8'))
    entries = load_imports(Path(config.project_root), settings.imports_file)
    try:
        unit = transform(document, entries, config, mode, make_renderer(settings.parser_config))
    except InvalidInputError as e:
        _fail(f"Cannot generate {path}", e)

    for diag in unit.diagnostics:
        typer.echo(f"{diag.severity.value}: {diag.path}: {diag.message}", err=True)
    typer.echo(unit.text, nl=False)


def list_cmd():
    """List generated units recorded in the cache."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        records = get_all_units(session)
    if not records:
        typer.echo("No generated units found in database.")
        raise typer.Exit(1)
    for r in records:
        typer.echo(f"{r.unit_name}  ({r.mode})  {r.path}")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize the cache database. Use --reset to force full regeneration."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        SQLModel.metadata.drop_all(engine)
        typer.echo("Existing cache cleared.")
    init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")
