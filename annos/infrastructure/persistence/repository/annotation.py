from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from annos.domain.annotation.model.annotation import Annotation
from annos.domain.annotation.model.value import AnnotationFieldId, AnnotationId, PublishedRecordId
from annos.domain.annotation.port.repository import AnnotationRepository
from annos.infrastructure.persistence.mappers.annotation import annotation_to_dict, row_to_annotation
from annos.infrastructure.persistence.repository.field import SQLAlchemyAnnotationFieldRepository
from annos.infrastructure.persistence.repository.published_record import (
    ensure_published_record,
    find_published_record_pk,
    load_published_record,
)
from annos.infrastructure.persistence.tables import annotations_table


class SQLAlchemyAnnotationRepository(AnnotationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._fields = SQLAlchemyAnnotationFieldRepository(session)

    async def get(self, annotation_id: AnnotationId) -> Annotation | None:
        stmt = select(annotations_table).where(annotations_table.c.id == str(annotation_id))
        row = (await self.session.execute(stmt)).mappings().first()
        return await self._hydrate(dict(row)) if row else None

    async def get_by_published_record_id(
        self, published_record_id: PublishedRecordId
    ) -> Annotation | None:
        pk = await find_published_record_pk(self.session, published_record_id)
        if pk is None:
            return None
        stmt = select(annotations_table).where(annotations_table.c.published_record_id == pk)
        row = (await self.session.execute(stmt)).mappings().first()
        return await self._hydrate(dict(row)) if row else None

    async def save(self, annotation: Annotation) -> None:
        published_pk = await ensure_published_record(self.session, annotation.published_record_id)
        row = annotation_to_dict(annotation, published_pk)

        stmt = select(annotations_table.c.id).where(annotations_table.c.id == row["id"])
        if (await self.session.execute(stmt)).first() is not None:
            await self.session.execute(
                update(annotations_table).where(annotations_table.c.id == row["id"]).values(**row)
            )
        else:
            await self.session.execute(insert(annotations_table).values(**row))
        await self.session.flush()

    async def delete(self, annotation_id: AnnotationId) -> None:
        await self.session.execute(
            delete(annotations_table).where(annotations_table.c.id == str(annotation_id))
        )
        await self.session.flush()

    async def _hydrate(self, row: dict) -> Annotation:
        field = await self._fields.get(AnnotationFieldId(row["annotation_field_id"]))
        if field is None:
            raise LookupError(
                f"Annotation {row['id']} references missing field {row['annotation_field_id']}"
            )
        published = await load_published_record(self.session, row["published_record_id"])
        return row_to_annotation(row, field, published)
