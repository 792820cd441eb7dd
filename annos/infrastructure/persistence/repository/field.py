from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from annos.domain.annotation.model.field import AnnotationField
from annos.domain.annotation.model.value import AnnotationFieldId
from annos.domain.annotation.port.repository import AnnotationFieldRepository
from annos.infrastructure.persistence.mappers.annotation import field_to_dict, row_to_field
from annos.infrastructure.persistence.repository.published_record import (
    ensure_published_record,
    load_published_record,
)
from annos.infrastructure.persistence.tables import annotation_fields_table


class SQLAlchemyAnnotationFieldRepository(AnnotationFieldRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, field_id: AnnotationFieldId) -> AnnotationField | None:
        stmt = select(annotation_fields_table).where(annotation_fields_table.c.id == str(field_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row is None:
            return None
        published = await load_published_record(self.session, row["published_record_id"])
        return row_to_field(dict(row), published)

    async def save(self, field: AnnotationField) -> None:
        published_pk = await ensure_published_record(self.session, field.published_record_id)
        row = field_to_dict(field, published_pk)

        stmt = select(annotation_fields_table.c.id).where(annotation_fields_table.c.id == row["id"])
        exists = (await self.session.execute(stmt)).first() is not None
        if exists:
            await self.session.execute(
                update(annotation_fields_table)
                .where(annotation_fields_table.c.id == row["id"])
                .values(**row)
            )
        else:
            await self.session.execute(insert(annotation_fields_table).values(**row))
        await self.session.flush()
