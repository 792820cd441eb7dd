"""Unit tests for GetAnnotationByPublishedRecordHandler."""

from unittest.mock import AsyncMock

import pytest

from annos.domain.annotation.model.annotation import Annotation
from annos.domain.annotation.model.field import AnnotationField
from annos.domain.annotation.model.types import RatingValue
from annos.domain.annotation.model.value import (
    URI,
    AnnotationNote,
    AnnotationTemplateId,
    CuratorId,
    PublishedRecordId,
)
from annos.domain.annotation.query.get_annotation import (
    GetAnnotationByPublishedRecord,
    GetAnnotationByPublishedRecordHandler,
)
from annos.domain.shared.error import NotFoundError, ValidationError
from annos.domain.shared.result import Err, Ok

URI_ = "at://did:plc:curator123/app.annos.annotation/3kx"


class TestGetAnnotationByPublishedRecord:
    @pytest.mark.asyncio
    async def test_returns_detail(
        self, curator_id: CuratorId, url: URI, rating_field: AnnotationField
    ):
        template_id = AnnotationTemplateId.generate()
        annotation = Annotation.create(
            curator_id=curator_id,
            url=url,
            annotation_field=rating_field,
            value=RatingValue(rating=4),
            note=AnnotationNote.create("good").unwrap(),
            annotation_template_ids=[template_id],
        ).unwrap()
        annotation.mark_as_published(PublishedRecordId(uri=URI_, cid="bafy1"))
        repo = AsyncMock()
        repo.get_by_published_record_id.return_value = annotation

        handler = GetAnnotationByPublishedRecordHandler(annotation_repo=repo)
        result = await handler.run(GetAnnotationByPublishedRecord(uri=URI_, cid="bafy1"))

        assert isinstance(result, Ok)
        detail = result.value
        assert detail.id == str(annotation.id)
        assert detail.curator_id == "did:plc:curator123"
        assert detail.url == "https://example.com/article/1"
        assert detail.type == "rating"
        assert detail.value == {"rating": 4}
        assert detail.note == "good"
        assert detail.annotation_template_ids == [str(template_id)]
        assert detail.published_uri == URI_
        repo.get_by_published_record_id.assert_awaited_once_with(
            PublishedRecordId(uri=URI_, cid="bafy1")
        )

    @pytest.mark.asyncio
    async def test_not_found(self):
        repo = AsyncMock()
        repo.get_by_published_record_id.return_value = None

        handler = GetAnnotationByPublishedRecordHandler(annotation_repo=repo)
        result = await handler.run(GetAnnotationByPublishedRecord(uri=URI_, cid="bafy1"))

        assert isinstance(result, Err)
        assert isinstance(result.error, NotFoundError)

    @pytest.mark.asyncio
    async def test_rejects_malformed_uri(self):
        repo = AsyncMock()

        handler = GetAnnotationByPublishedRecordHandler(annotation_repo=repo)
        result = await handler.run(GetAnnotationByPublishedRecord(uri="https://x.org", cid="bafy1"))

        assert isinstance(result, Err)
        assert isinstance(result.error, ValidationError)
        repo.get_by_published_record_id.assert_not_awaited()
