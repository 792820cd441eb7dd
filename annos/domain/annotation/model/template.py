from __future__ import annotations

from datetime import UTC, datetime

from annos.domain.annotation.model.field import AnnotationField
from annos.domain.annotation.model.value import (
    AnnotationFieldId,
    AnnotationTemplateId,
    CuratorId,
    PublishedRecordId,
)
from annos.domain.shared.error import ValidationError
from annos.domain.shared.model.aggregate import Aggregate
from annos.domain.shared.model.value import ValueObject
from annos.domain.shared.result import Err, Ok, Result


class TemplateField(ValueObject):
    """A field's membership in a template. Frozen: required flags never change."""

    field: AnnotationField
    required: bool = False


class AnnotationTemplate(Aggregate):
    """A named, ordered collection of fields with required/optional flags."""

    id: AnnotationTemplateId
    curator_id: CuratorId
    name: str
    description: str
    template_fields: tuple[TemplateField, ...]
    created_at: datetime
    published_record_id: PublishedRecordId | None = None

    @classmethod
    def create(
        cls,
        curator_id: CuratorId,
        name: str,
        description: str,
        template_fields: list[TemplateField],
        *,
        id: AnnotationTemplateId | None = None,
        created_at: datetime | None = None,
        published_record_id: PublishedRecordId | None = None,
    ) -> Result[AnnotationTemplate, ValidationError]:
        if not name or not name.strip():
            return Err(ValidationError("Template name must not be empty", field="name"))
        if not template_fields:
            return Err(ValidationError("Template must have at least one field", field="fields"))

        ids = [tf.field.id for tf in template_fields]
        if len(ids) != len(set(ids)):
            return Err(ValidationError("Duplicate fields within template", field="fields"))

        return Ok(
            cls(
                id=id or AnnotationTemplateId.generate(),
                curator_id=curator_id,
                name=name.strip(),
                description=description,
                template_fields=tuple(template_fields),
                created_at=created_at or datetime.now(UTC),
                published_record_id=published_record_id,
            )
        )

    @property
    def template_id(self) -> AnnotationTemplateId:
        return self.id

    def get_annotation_fields(self) -> list[AnnotationField]:
        return [tf.field for tf in self.template_fields]

    def get_required_fields(self) -> list[AnnotationField]:
        return [tf.field for tf in self.template_fields if tf.required]

    def has_field(self, field_id: AnnotationFieldId) -> bool:
        return any(tf.field.id == field_id for tf in self.template_fields)

    def mark_as_published(self, published_record_id: PublishedRecordId) -> None:
        self.published_record_id = published_record_id
