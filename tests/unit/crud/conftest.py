"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from mdgen.core.models import GeneratedUnit
from mdgen.crud.models import GeneratedFile


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="unit")
def unit_fixture():
    return GeneratedUnit(name="Pages_Post.md.g.cs", text="// <auto-generated/>\n")


@pytest.fixture(name="record")
def record_fixture(session):
    """A minimal GeneratedFile persisted to the session."""
    r = GeneratedFile(path="/proj/Pages/Post.md", unit_name="Pages_Post.md.g.cs",
                      cache_key="a" * 64, mode="full", text="// old\n")
    session.add(r)
    session.flush()
    return r
