from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from annos.domain.annotation.model.types import (
    AnnotationFieldDefinition,
    AnnotationType,
    AnnotationValue,
    parse_definition,
    value_matches_definition,
)
from annos.domain.annotation.model.value import AnnotationFieldId, CuratorId, PublishedRecordId
from annos.domain.shared.error import ValidationError
from annos.domain.shared.model.aggregate import Aggregate
from annos.domain.shared.result import Err, Ok, Result


class AnnotationField(Aggregate):
    """A reusable, typed field definition owned by a curator."""

    id: AnnotationFieldId
    curator_id: CuratorId
    name: str
    description: str
    definition: AnnotationFieldDefinition
    created_at: datetime
    published_record_id: PublishedRecordId | None = None

    @classmethod
    def create(
        cls,
        curator_id: CuratorId,
        name: str,
        description: str,
        type: str,
        definition: dict[str, Any],
        *,
        id: AnnotationFieldId | None = None,
        created_at: datetime | None = None,
        published_record_id: PublishedRecordId | None = None,
    ) -> Result[AnnotationField, ValidationError]:
        if not name or not name.strip():
            return Err(ValidationError("Field name must not be empty", field="name"))

        definition_or_err = parse_definition(type, definition)
        if isinstance(definition_or_err, Err):
            return definition_or_err

        return Ok(
            cls(
                id=id or AnnotationFieldId.generate(),
                curator_id=curator_id,
                name=name.strip(),
                description=description,
                definition=definition_or_err.value,
                created_at=created_at or datetime.now(UTC),
                published_record_id=published_record_id,
            )
        )

    @property
    def field_id(self) -> AnnotationFieldId:
        return self.id

    @property
    def type(self) -> AnnotationType:
        return AnnotationType(self.definition.type)

    def accepts(self, value: AnnotationValue) -> bool:
        return value_matches_definition(value, self.definition)

    def mark_as_published(self, published_record_id: PublishedRecordId) -> None:
        self.published_record_id = published_record_id
