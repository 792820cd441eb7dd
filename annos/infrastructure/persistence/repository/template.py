from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from annos.domain.annotation.model.template import AnnotationTemplate, TemplateField
from annos.domain.annotation.model.value import AnnotationFieldId, AnnotationTemplateId, CuratorId
from annos.domain.annotation.port.repository import AnnotationTemplateRepository
from annos.infrastructure.persistence.mappers.annotation import as_utc_datetime
from annos.infrastructure.persistence.repository.field import SQLAlchemyAnnotationFieldRepository
from annos.infrastructure.persistence.repository.published_record import (
    ensure_published_record,
    load_published_record,
)
from annos.infrastructure.persistence.tables import (
    annotation_template_fields_table,
    annotation_templates_table,
)


class SQLAlchemyAnnotationTemplateRepository(AnnotationTemplateRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._fields = SQLAlchemyAnnotationFieldRepository(session)

    async def get(self, template_id: AnnotationTemplateId) -> AnnotationTemplate | None:
        stmt = select(annotation_templates_table).where(
            annotation_templates_table.c.id == str(template_id)
        )
        row = (await self.session.execute(stmt)).mappings().first()
        if row is None:
            return None

        links = await self.session.execute(
            select(annotation_template_fields_table)
            .where(annotation_template_fields_table.c.template_id == str(template_id))
            .order_by(annotation_template_fields_table.c.position)
        )
        template_fields: list[TemplateField] = []
        for link in links.mappings().all():
            field = await self._fields.get(AnnotationFieldId(link["field_id"]))
            if field is None:
                raise LookupError(
                    f"Template {template_id} references missing field {link['field_id']}"
                )
            template_fields.append(TemplateField(field=field, required=link["required"]))

        return AnnotationTemplate(
            id=AnnotationTemplateId(row["id"]),
            curator_id=CuratorId(row["curator_id"]),
            name=row["name"],
            description=row["description"],
            template_fields=tuple(template_fields),
            created_at=as_utc_datetime(row["created_at"]),
            published_record_id=await load_published_record(
                self.session, row["published_record_id"]
            ),
        )

    async def save(self, template: AnnotationTemplate) -> None:
        for tf in template.template_fields:
            await self._fields.save(tf.field)

        published_pk = await ensure_published_record(self.session, template.published_record_id)
        row = {
            "id": str(template.id),
            "curator_id": str(template.curator_id),
            "name": template.name,
            "description": template.description,
            "published_record_id": published_pk,
            "created_at": template.created_at,
        }

        stmt = select(annotation_templates_table.c.id).where(
            annotation_templates_table.c.id == row["id"]
        )
        if (await self.session.execute(stmt)).first() is not None:
            await self.session.execute(
                update(annotation_templates_table)
                .where(annotation_templates_table.c.id == row["id"])
                .values(**row)
            )
        else:
            await self.session.execute(insert(annotation_templates_table).values(**row))

        await self.session.execute(
            delete(annotation_template_fields_table).where(
                annotation_template_fields_table.c.template_id == row["id"]
            )
        )
        await self.session.execute(
            insert(annotation_template_fields_table),
            [
                {
                    "template_id": row["id"],
                    "field_id": str(tf.field.id),
                    "required": tf.required,
                    "position": position,
                }
                for position, tf in enumerate(template.template_fields)
            ],
        )
        await self.session.flush()
