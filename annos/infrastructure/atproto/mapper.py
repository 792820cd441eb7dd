"""Annotation -> ``app.annos.annotation`` record."""

from typing import Any

from annos.domain.annotation.model.annotation import Annotation
from annos.domain.annotation.model.batch import AnnotationsFromTemplate
from annos.domain.annotation.model.template import AnnotationTemplate
from annos.domain.atproto.model.value import TID, StrongRef
from annos.infrastructure.atproto.client import CREATE


def annotation_to_record(
    annotation: Annotation,
    collection: str,
    template: AnnotationTemplate | None = None,
) -> dict[str, Any]:
    value = annotation.value.model_dump(mode="json", by_alias=True, exclude={"type"})
    record: dict[str, Any] = {
        "$type": collection,
        "url": str(annotation.url),
        "value": {"$type": f"{collection}#{annotation.value.type}Value", **value},
        "createdAt": annotation.created_at.isoformat(),
    }

    field_ref = annotation.annotation_field.published_record_id
    if field_ref is not None:
        record["field"] = StrongRef(uri=field_ref.uri, cid=field_ref.cid).to_record()

    if annotation.note is not None:
        record["note"] = str(annotation.note)

    if template is not None and template.published_record_id is not None:
        ref = template.published_record_id
        record["fromTemplates"] = [StrongRef(uri=ref.uri, cid=ref.cid).to_record()]

    return record


def to_create_operations(batch: AnnotationsFromTemplate, collection: str) -> list[dict[str, Any]]:
    """One create write per annotation, in batch order, each with a fresh TID key."""
    return [
        {
            "$type": CREATE,
            "collection": collection,
            "rkey": str(TID.next()),
            "value": annotation_to_record(annotation, collection, batch.template),
        }
        for annotation in batch.annotations
    ]
