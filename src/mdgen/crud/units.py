"""Generated-file persistence: lookup, upsert by cache key, and removal"""

from datetime import datetime
from typing import Optional

from sqlmodel import Session, select

from mdgen.core.models import GeneratedUnit
from mdgen.crud.models import GeneratedFile


def get_by_path(session: Session, path: str) -> GeneratedFile | None:
    """Return the record for a source path, or None if it was never generated."""
    return session.exec(select(GeneratedFile).where(GeneratedFile.path == path)).one_or_none()


def get_all_units(session: Session) -> list[GeneratedFile]:
    """Return all records ordered by unit name."""
    return list(session.exec(select(GeneratedFile).order_by(GeneratedFile.unit_name)).all())


def is_current(record: Optional[GeneratedFile], cache_key: str) -> bool:
    """True when a stored record was built from exactly this cache key."""
    return record is not None and record.cache_key == cache_key


def commit_unit(
    session: Session,
    path: str,
    cache_key: str,
    mode: str,
    unit: GeneratedUnit,
    committed_at: datetime | None = None,
    ) -> tuple[GeneratedFile, str]:
    """Upsert the generated unit for path.

    Returns (record, status) where status is 'created', 'updated', or 'unchanged'.
    Flushes but does not commit; caller controls the transaction.
    """
    record = get_by_path(session, path)
    diagnostics = [d.model_dump(mode="json") for d in unit.diagnostics] or None

    if record:
        if record.cache_key == cache_key:
            return record, 'unchanged'
        record.unit_name = unit.name
        record.cache_key = cache_key
        record.mode = mode
        record.text = unit.text
        record.diagnostics = diagnostics
        record.updated_at = datetime.now()
        record.committed_at = committed_at
        session.add(record)
        session.flush()
        return record, 'updated'

    record = GeneratedFile(
        path=path,
        unit_name=unit.name,
        cache_key=cache_key,
        mode=mode,
        text=unit.text,
        diagnostics=diagnostics,
        committed_at=committed_at,
    )
    session.add(record)
    session.flush()
    return record, 'created'


def remove_unit(session: Session, record: GeneratedFile) -> None:
    """Delete a record whose source document no longer exists."""
    session.delete(record)
    session.flush()
