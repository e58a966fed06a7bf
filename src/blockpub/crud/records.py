"""Render record persistence: upsert by render name with change detection"""

import hashlib
from datetime import datetime
from pathlib import Path
from typing import Optional

from sqlmodel import Session, select

from blockpub.core.render import RenderExport
from blockpub.crud.tables import RenderRecord


def _digest(output: str) -> str:
    return hashlib.sha256(output.encode("utf-8")).hexdigest()


def get_by_name(session: Session, name: str) -> RenderRecord | None:
    """Return the RenderRecord for a render name, or None if not found."""
    return session.exec(select(RenderRecord).where(RenderRecord.name == name)).one_or_none()


def get_all_records(session: Session) -> list[RenderRecord]:
    return list(session.exec(select(RenderRecord).order_by(RenderRecord.name)).all())


def record_render(
    session: Session,
    export: RenderExport,
    permalink: Optional[Path] = None,
    ) -> tuple[RenderRecord, str]:
    """Upsert the record for an export.

    Returns (record, status) where status is 'created', 'updated', or 'unchanged'.
    Flushes but does not commit; the caller controls the transaction.
    """
    digest = _digest(export.output)
    permalink_str = str(permalink) if permalink else None
    record = get_by_name(session, export.render_name)

    if record:
        if record.hash == digest and record.path == str(export.path):
            return record, 'unchanged'
        record.path = str(export.path)
        record.hash = digest
        record.permalink = permalink_str
        record.updated_at = datetime.now()
        session.add(record)
        session.flush()
        return record, 'updated'

    record = RenderRecord(
        name=export.render_name,
        path=str(export.path),
        hash=digest,
        permalink=permalink_str,
    )
    session.add(record)
    session.flush()
    return record, 'created'
