"""Annotation mappers - convert between domain and persistence."""

from datetime import UTC, datetime
from typing import Any

from annos.domain.annotation.model.annotation import Annotation
from annos.domain.annotation.model.field import AnnotationField
from annos.domain.annotation.model.types import parse_definition, parse_value
from annos.domain.annotation.model.value import (
    URI,
    AnnotationFieldId,
    AnnotationId,
    AnnotationNote,
    AnnotationTemplateId,
    CuratorId,
    PublishedRecordId,
)


def as_utc_datetime(value: datetime | str) -> datetime:
    """SQLite hands back naive datetimes; stored values are always UTC."""
    dt = datetime.fromisoformat(value) if isinstance(value, str) else value
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=UTC)


def row_to_published_record_id(row: dict[str, Any] | None) -> PublishedRecordId | None:
    if row is None:
        return None
    return PublishedRecordId(uri=row["uri"], cid=row["cid"])


def field_to_dict(field: AnnotationField, published_record_pk: str | None) -> dict[str, Any]:
    """Convert AnnotationField aggregate to database dict."""
    return {
        "id": str(field.id),
        "curator_id": str(field.curator_id),
        "name": field.name,
        "description": field.description,
        "definition_type": field.definition.type,
        "definition": field.definition.model_dump(mode="json", by_alias=True, exclude={"type"}),
        "published_record_id": published_record_pk,
        "created_at": field.created_at,
    }


def row_to_field(
    row: dict[str, Any], published_record_id: PublishedRecordId | None = None
) -> AnnotationField:
    """Convert database row to AnnotationField aggregate."""
    definition = parse_definition(row["definition_type"], row["definition"]).unwrap()
    return AnnotationField(
        id=AnnotationFieldId(row["id"]),
        curator_id=CuratorId(row["curator_id"]),
        name=row["name"],
        description=row["description"],
        definition=definition,
        created_at=as_utc_datetime(row["created_at"]),
        published_record_id=published_record_id,
    )


def annotation_to_dict(annotation: Annotation, published_record_pk: str | None) -> dict[str, Any]:
    """Convert Annotation aggregate to database dict."""
    return {
        "id": str(annotation.id),
        "curator_id": str(annotation.curator_id),
        "url": str(annotation.url),
        "annotation_field_id": str(annotation.annotation_field_id),
        "value_type": annotation.value.type,
        "value": annotation.value.model_dump(mode="json", by_alias=True),
        "note": str(annotation.note) if annotation.note is not None else None,
        "template_ids": [str(t) for t in annotation.annotation_template_ids],
        "published_record_id": published_record_pk,
        "created_at": annotation.created_at,
    }


def row_to_annotation(
    row: dict[str, Any],
    field: AnnotationField,
    published_record_id: PublishedRecordId | None,
) -> Annotation:
    """Convert database row to Annotation aggregate."""
    return Annotation(
        id=AnnotationId(row["id"]),
        curator_id=CuratorId(row["curator_id"]),
        url=URI(row["url"]),
        annotation_field=field,
        value=parse_value(row["value"]),
        note=AnnotationNote(row["note"]) if row.get("note") else None,
        annotation_template_ids=[AnnotationTemplateId(t) for t in row.get("template_ids") or []],
        created_at=as_utc_datetime(row["created_at"]),
        published_record_id=published_record_id,
    )
