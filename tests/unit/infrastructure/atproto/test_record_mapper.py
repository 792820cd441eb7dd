"""Unit tests for the annotation -> ledger record mapper."""

from datetime import UTC, datetime

from annos.domain.annotation.model.annotation import Annotation
from annos.domain.annotation.model.batch import AnnotationsFromTemplate
from annos.domain.annotation.model.field import AnnotationField
from annos.domain.annotation.model.template import AnnotationTemplate, TemplateField
from annos.domain.annotation.model.types import DyadValue, TriadValue
from annos.domain.annotation.model.value import (
    URI,
    AnnotationNote,
    CuratorId,
    PublishedRecordId,
)
from annos.infrastructure.atproto.client import CREATE
from annos.infrastructure.atproto.mapper import annotation_to_record, to_create_operations

COLLECTION = "app.annos.annotation"
CURATOR = CuratorId.create("did:plc:curator123").unwrap()
URL = URI.create("https://example.com/a").unwrap()
FIELD_REF = PublishedRecordId(uri="at://did:plc:curator123/app.annos.field/f1", cid="bafyf")
TEMPLATE_REF = PublishedRecordId(uri="at://did:plc:curator123/app.annos.template/t1", cid="bafyt")


def _make_field(published: bool = True) -> AnnotationField:
    return AnnotationField.create(
        curator_id=CURATOR,
        name="Mood",
        description="",
        type="triad",
        definition={"vertexA": "calm", "vertexB": "angry", "vertexC": "sad"},
        published_record_id=FIELD_REF if published else None,
    ).unwrap()


class TestAnnotationToRecord:
    def test_full_record(self):
        field = _make_field()
        template = AnnotationTemplate.create(
            curator_id=CURATOR,
            name="t",
            description="",
            template_fields=[TemplateField(field=field, required=True)],
            published_record_id=TEMPLATE_REF,
        ).unwrap()
        annotation = Annotation.create(
            curator_id=CURATOR,
            url=URL,
            annotation_field=field,
            value=TriadValue(vertex_a=0.5, vertex_b=0.5, vertex_c=0.0),
            note=AnnotationNote.create("hmm").unwrap(),
            created_at=datetime(2026, 3, 1, 12, 0, tzinfo=UTC),
        ).unwrap()

        record = annotation_to_record(annotation, COLLECTION, template)

        assert record == {
            "$type": COLLECTION,
            "url": "https://example.com/a",
            "value": {
                "$type": "app.annos.annotation#triadValue",
                "vertexA": 0.5,
                "vertexB": 0.5,
                "vertexC": 0.0,
            },
            "createdAt": "2026-03-01T12:00:00+00:00",
            "field": {"uri": FIELD_REF.uri, "cid": FIELD_REF.cid},
            "note": "hmm",
            "fromTemplates": [{"uri": TEMPLATE_REF.uri, "cid": TEMPLATE_REF.cid}],
        }

    def test_unpublished_field_has_no_strong_ref(self):
        field = AnnotationField.create(
            curator_id=CURATOR,
            name="Stance",
            description="",
            type="dyad",
            definition={"sideA": "yes", "sideB": "no"},
        ).unwrap()
        annotation = Annotation.create(
            curator_id=CURATOR, url=URL, annotation_field=field, value=DyadValue(value=0.25)
        ).unwrap()

        record = annotation_to_record(annotation, COLLECTION)

        assert "field" not in record
        assert "note" not in record
        assert "fromTemplates" not in record
        assert record["value"] == {"$type": "app.annos.annotation#dyadValue", "value": 0.25}


class TestToCreateOperations:
    def test_one_write_per_annotation_in_order(self):
        first = _make_field()
        second = AnnotationField.create(
            curator_id=CURATOR,
            name="Stance",
            description="",
            type="dyad",
            definition={"sideA": "yes", "sideB": "no"},
        ).unwrap()
        template = AnnotationTemplate.create(
            curator_id=CURATOR,
            name="t",
            description="",
            template_fields=[TemplateField(field=first), TemplateField(field=second)],
        ).unwrap()
        annotations = [
            Annotation.create(
                curator_id=CURATOR,
                url=URL,
                annotation_field=first,
                value=TriadValue(vertex_a=1.0, vertex_b=0.0, vertex_c=0.0),
            ).unwrap(),
            Annotation.create(
                curator_id=CURATOR, url=URL, annotation_field=second, value=DyadValue(value=1.0)
            ).unwrap(),
        ]
        batch = AnnotationsFromTemplate.create(
            annotations=annotations, template=template, curator_id=CURATOR
        ).unwrap()

        writes = to_create_operations(batch, COLLECTION)

        assert [w["$type"] for w in writes] == [CREATE, CREATE]
        assert [w["collection"] for w in writes] == [COLLECTION, COLLECTION]
        assert [w["value"]["value"]["$type"] for w in writes] == [
            "app.annos.annotation#triadValue",
            "app.annos.annotation#dyadValue",
        ]
        assert writes[0]["rkey"] < writes[1]["rkey"]
