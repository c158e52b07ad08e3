"""Unit tests for crud/units.py"""

from datetime import datetime

from mdgen.core.models import Diagnostic, GeneratedUnit
from mdgen.crud.database import init_db, make_engine
from mdgen.crud.units import commit_unit, get_all_units, get_by_path, is_current, remove_unit


# --- lookup ---

def test_get_by_path_found(session, record):
    """Returns the record when the path exists."""
    assert get_by_path(session, record.path).id == record.id


def test_get_by_path_missing(session):
    """Returns None when the path was never generated."""
    assert get_by_path(session, "/no/such.md") is None


def test_get_all_units_sorted(session, record, unit):
    """Records come back ordered by unit name."""
    commit_unit(session, "/proj/A.md", "b" * 64, "full", GeneratedUnit(name="A.md.g.cs", text=""))
    assert [r.unit_name for r in get_all_units(session)] == ["A.md.g.cs", "Pages_Post.md.g.cs"]


def test_is_current(record):
    """A record is current only for the exact key it was built from."""
    assert is_current(record, "a" * 64)
    assert not is_current(record, "b" * 64)
    assert not is_current(None, "a" * 64)


# --- commit_unit ---

def test_commit_unit_created(session, unit):
    """A new path creates a record."""
    ts = datetime(2026, 1, 1)
    record, status = commit_unit(session, "/proj/Pages/Post.md", "c" * 64, "full", unit, ts)
    assert status == "created"
    assert record.text == unit.text
    assert record.committed_at == ts
    assert record.diagnostics is None


def test_commit_unit_unchanged(session, record, unit):
    """The same cache key leaves the record untouched."""
    _, status = commit_unit(session, record.path, record.cache_key, "full", unit)
    assert status == "unchanged"
    assert record.text == "// old\n"


def test_commit_unit_updated(session, record, unit):
    """A new cache key replaces text, key and mode."""
    diag = Diagnostic(path=record.path, message="bad header")
    changed = GeneratedUnit(name=unit.name, text="// new\n", diagnostics=(diag,))
    updated, status = commit_unit(session, record.path, "d" * 64, "declaration", changed)
    assert status == "updated"
    assert updated.id == record.id
    assert updated.text == "// new\n"
    assert updated.mode == "declaration"
    assert updated.diagnostics == [{"severity": "warning", "path": record.path, "message": "bad header"}]


def test_remove_unit(session, record):
    """remove_unit deletes the record."""
    remove_unit(session, record)
    assert get_by_path(session, record.path) is None


# --- database ---

def test_make_engine_and_init_db(tmp_path):
    """init_db creates the schema on a file-backed SQLite engine."""
    engine = make_engine(f"sqlite:///{tmp_path}/cache.db")
    init_db(engine)
    assert (tmp_path / "cache.db").exists()
