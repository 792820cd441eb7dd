from datetime import datetime
from typing import Any

from annos.domain.annotation.model.value import PublishedRecordId
from annos.domain.annotation.port.repository import AnnotationRepository
from annos.domain.shared.error import AnnosError, NotFoundError
from annos.domain.shared.query import Query, QueryHandler, QueryResult
from annos.domain.shared.result import Err, Ok, Result


class GetAnnotationByPublishedRecord(Query):
    uri: str
    cid: str


class AnnotationDetail(QueryResult):
    id: str
    curator_id: str
    url: str
    annotation_field_id: str
    type: str
    value: dict[str, Any]
    note: str | None
    annotation_template_ids: list[str]
    created_at: datetime
    published_uri: str
    published_cid: str


class GetAnnotationByPublishedRecordHandler(
    QueryHandler[GetAnnotationByPublishedRecord, AnnotationDetail]
):
    annotation_repo: AnnotationRepository

    async def run(self, query: GetAnnotationByPublishedRecord) -> Result[AnnotationDetail, AnnosError]:
        record_id = PublishedRecordId.create(query.uri, query.cid)
        if isinstance(record_id, Err):
            return record_id

        annotation = await self.annotation_repo.get_by_published_record_id(record_id.value)
        if annotation is None:
            return Err(NotFoundError(f"Annotation published at {query.uri} not found"))

        return Ok(
            AnnotationDetail(
                id=str(annotation.id),
                curator_id=str(annotation.curator_id),
                url=str(annotation.url),
                annotation_field_id=str(annotation.annotation_field_id),
                type=annotation.value.type,
                value=annotation.value.model_dump(mode="json", by_alias=True, exclude={"type"}),
                note=str(annotation.note) if annotation.note else None,
                annotation_template_ids=[str(t) for t in annotation.annotation_template_ids],
                created_at=annotation.created_at,
                published_uri=record_id.value.uri,
                published_cid=record_id.value.cid,
            )
        )
