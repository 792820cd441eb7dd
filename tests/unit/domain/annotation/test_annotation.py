"""Unit tests for the Annotation aggregate."""

from annos.domain.annotation.model.annotation import Annotation
from annos.domain.annotation.model.field import AnnotationField
from annos.domain.annotation.model.types import DyadValue, RatingValue
from annos.domain.annotation.model.value import URI, AnnotationTemplateId, CuratorId, PublishedRecordId
from annos.domain.shared.error import InvalidValueTypeError, TypeMismatchError, ValidationError
from annos.domain.shared.result import Err, Ok


class TestAnnotationCreate:
    def test_create_defaults(self, curator_id: CuratorId, url: URI, rating_field: AnnotationField):
        annotation = Annotation.create(
            curator_id=curator_id, url=url, annotation_field=rating_field, value=RatingValue(rating=3)
        ).unwrap()

        assert annotation.annotation_field_id == rating_field.id
        assert annotation.annotation_template_ids == []
        assert annotation.note is None
        assert annotation.published_record_id is None
        assert not annotation.is_published
        assert annotation.created_at.tzinfo is not None

    def test_missing_argument(self, url: URI, rating_field: AnnotationField):
        result = Annotation.create(
            curator_id=None, url=url, annotation_field=rating_field, value=RatingValue(rating=3)
        )
        assert isinstance(result, Err)
        assert isinstance(result.error, ValidationError)
        assert result.error.message == "Missing required argument: curator_id"

    def test_value_type_must_match_field(
        self, curator_id: CuratorId, url: URI, rating_field: AnnotationField
    ):
        result = Annotation.create(
            curator_id=curator_id, url=url, annotation_field=rating_field, value=DyadValue(value=0.5)
        )
        assert isinstance(result, Err)
        assert isinstance(result.error, TypeMismatchError)
        assert result.error.code == "TYPE_MISMATCH"

    def test_keeps_template_ids(
        self, curator_id: CuratorId, url: URI, dyad_field: AnnotationField
    ):
        template_id = AnnotationTemplateId.generate()
        annotation = Annotation.create(
            curator_id=curator_id,
            url=url,
            annotation_field=dyad_field,
            value=DyadValue(value=0.2),
            annotation_template_ids=[template_id],
        ).unwrap()
        assert annotation.annotation_template_ids == [template_id]


class TestAnnotationTransitions:
    def _make(self, curator_id: CuratorId, url: URI, field: AnnotationField) -> Annotation:
        return Annotation.create(
            curator_id=curator_id, url=url, annotation_field=field, value=RatingValue(rating=2)
        ).unwrap()

    def test_update_value_same_type(
        self, curator_id: CuratorId, url: URI, rating_field: AnnotationField
    ):
        annotation = self._make(curator_id, url, rating_field)
        assert annotation.update_value(RatingValue(rating=5)) == Ok(None)
        assert annotation.value == RatingValue(rating=5)

    def test_update_value_other_type(
        self, curator_id: CuratorId, url: URI, rating_field: AnnotationField
    ):
        annotation = self._make(curator_id, url, rating_field)
        result = annotation.update_value(DyadValue(value=0.1))
        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidValueTypeError)
        assert annotation.value == RatingValue(rating=2)

    def test_mark_as_published(
        self, curator_id: CuratorId, url: URI, rating_field: AnnotationField
    ):
        annotation = self._make(curator_id, url, rating_field)
        record_id = PublishedRecordId(
            uri="at://did:plc:curator123/app.annos.annotation/3kabc", cid="bafy1"
        )
        annotation.mark_as_published(record_id)
        assert annotation.is_published
        assert annotation.published_record_id == record_id
