"""Ledger coordinates shared by fields, templates and annotations."""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from annos.domain.annotation.model.value import PublishedRecordId
from annos.infrastructure.persistence.mappers.annotation import row_to_published_record_id
from annos.infrastructure.persistence.tables import published_records_table


async def ensure_published_record(
    session: AsyncSession, record_id: PublishedRecordId | None
) -> str | None:
    """Return the row id for (uri, cid), inserting it if new."""
    if record_id is None:
        return None

    stmt = select(published_records_table.c.id).where(
        published_records_table.c.uri == record_id.uri,
        published_records_table.c.cid == record_id.cid,
    )
    existing = (await session.execute(stmt)).scalar_one_or_none()
    if existing is not None:
        return existing

    pk = str(uuid4())
    await session.execute(
        insert(published_records_table).values(
            id=pk, uri=record_id.uri, cid=record_id.cid, recorded_at=datetime.now(UTC)
        )
    )
    return pk


async def find_published_record_pk(session: AsyncSession, record_id: PublishedRecordId) -> str | None:
    stmt = select(published_records_table.c.id).where(
        published_records_table.c.uri == record_id.uri,
        published_records_table.c.cid == record_id.cid,
    )
    return (await session.execute(stmt)).scalar_one_or_none()


async def load_published_record(session: AsyncSession, pk: str | None) -> PublishedRecordId | None:
    if pk is None:
        return None
    stmt = select(published_records_table).where(published_records_table.c.id == pk)
    row = (await session.execute(stmt)).mappings().first()
    return row_to_published_record_id(dict(row)) if row else None
