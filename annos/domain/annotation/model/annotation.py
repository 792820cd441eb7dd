from __future__ import annotations

from datetime import UTC, datetime

from annos.domain.annotation.model.field import AnnotationField
from annos.domain.annotation.model.types import AnnotationValue
from annos.domain.annotation.model.value import (
    URI,
    AnnotationFieldId,
    AnnotationId,
    AnnotationNote,
    AnnotationTemplateId,
    CuratorId,
    PublishedRecordId,
)
from annos.domain.shared.error import (
    InvalidValueTypeError,
    TypeMismatchError,
    ValidationError,
)
from annos.domain.shared.model.aggregate import Aggregate
from annos.domain.shared.result import Err, Ok, Result


class Annotation(Aggregate):
    """One typed value bound to a field, a URL and a curator.

    ``published_record_id`` stays None until the ledger confirms the write.
    """

    id: AnnotationId
    curator_id: CuratorId
    url: URI
    annotation_field: AnnotationField
    value: AnnotationValue
    note: AnnotationNote | None = None
    annotation_template_ids: list[AnnotationTemplateId] = []
    created_at: datetime
    published_record_id: PublishedRecordId | None = None

    @classmethod
    def create(
        cls,
        curator_id: CuratorId | None,
        url: URI | None,
        annotation_field: AnnotationField | None,
        value: AnnotationValue | None,
        note: AnnotationNote | None = None,
        annotation_template_ids: list[AnnotationTemplateId] | None = None,
        created_at: datetime | None = None,
        published_record_id: PublishedRecordId | None = None,
        id: AnnotationId | None = None,
    ) -> Result[Annotation, ValidationError | TypeMismatchError]:
        required = (
            ("curator_id", curator_id),
            ("url", url),
            ("annotation_field", annotation_field),
            ("value", value),
        )
        for name, arg in required:
            if arg is None:
                return Err(ValidationError(f"Missing required argument: {name}", field=name))

        if not annotation_field.accepts(value):
            return Err(
                TypeMismatchError(
                    f"Value does not match field type: field {annotation_field.id} "
                    f"expects {annotation_field.definition.type} but got {value.type}"
                )
            )

        return Ok(
            cls(
                id=id or AnnotationId.generate(),
                curator_id=curator_id,
                url=url,
                annotation_field=annotation_field,
                value=value,
                note=note,
                annotation_template_ids=list(annotation_template_ids or []),
                created_at=created_at or datetime.now(UTC),
                published_record_id=published_record_id,
            )
        )

    @property
    def annotation_id(self) -> AnnotationId:
        return self.id

    @property
    def annotation_field_id(self) -> AnnotationFieldId:
        return self.annotation_field.id

    @property
    def is_published(self) -> bool:
        return self.published_record_id is not None

    def update_value(self, value: AnnotationValue) -> Result[None, InvalidValueTypeError]:
        if value.type != self.value.type:
            return Err(InvalidValueTypeError())
        self.value = value
        return Ok(None)

    def mark_as_published(self, published_record_id: PublishedRecordId) -> None:
        self.published_record_id = published_record_id
