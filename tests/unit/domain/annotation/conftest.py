"""Fixtures shared by annotation domain tests."""

from datetime import UTC, datetime

import pytest

from annos.domain.annotation.model.field import AnnotationField
from annos.domain.annotation.model.template import AnnotationTemplate, TemplateField
from annos.domain.annotation.model.value import URI, CuratorId, PublishedRecordId

CURATOR = "did:plc:curator123"


@pytest.fixture
def curator_id() -> CuratorId:
    return CuratorId.create(CURATOR).unwrap()


@pytest.fixture
def url() -> URI:
    return URI.create("https://example.com/article/1").unwrap()


@pytest.fixture
def rating_field(curator_id: CuratorId) -> AnnotationField:
    return AnnotationField.create(
        curator_id=curator_id,
        name="Quality",
        description="How good is it?",
        type="rating",
        definition={"numberOfStars": 5},
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
        published_record_id=PublishedRecordId(
            uri="at://did:plc:curator123/app.annos.field/3kfield0rating", cid="bafyfield1"
        ),
    ).unwrap()


@pytest.fixture
def dyad_field(curator_id: CuratorId) -> AnnotationField:
    return AnnotationField.create(
        curator_id=curator_id,
        name="Stance",
        description="Do you agree?",
        type="dyad",
        definition={"sideA": "Agree", "sideB": "Disagree"},
    ).unwrap()


@pytest.fixture
def template(
    curator_id: CuratorId, rating_field: AnnotationField, dyad_field: AnnotationField
) -> AnnotationTemplate:
    return AnnotationTemplate.create(
        curator_id=curator_id,
        name="Article review",
        description="Rate and react",
        template_fields=[
            TemplateField(field=rating_field, required=True),
            TemplateField(field=dyad_field, required=False),
        ],
        published_record_id=PublishedRecordId(
            uri="at://did:plc:curator123/app.annos.template/3ktemplate000", cid="bafytemplate1"
        ),
    ).unwrap()
