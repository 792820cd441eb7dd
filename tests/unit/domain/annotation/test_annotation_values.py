"""Unit tests for annotation value objects."""

from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from annos.domain.annotation.model.value import (
    URI,
    AnnotationFieldId,
    AnnotationId,
    AnnotationNote,
    CuratorId,
    PublishedRecordId,
)
from annos.domain.shared.error import ValidationError
from annos.domain.shared.result import Err, Ok


class TestEntityIds:
    def test_create_from_string(self):
        raw = str(uuid4())
        result = AnnotationId.create(raw)
        assert isinstance(result, Ok)
        assert str(result.value) == raw

    def test_create_rejects_garbage(self):
        result = AnnotationFieldId.create("not-a-uuid")
        assert isinstance(result, Err)
        assert isinstance(result.error, ValidationError)

    def test_ids_are_hashable_and_compare_by_value(self):
        raw = uuid4()
        assert AnnotationId(raw) == AnnotationId(raw)
        assert len({AnnotationId(raw), AnnotationId(raw)}) == 1

    def test_ids_are_immutable(self):
        aid = AnnotationId.generate()
        before = hash(aid)
        lookup = {aid: "annotation"}

        with pytest.raises(PydanticValidationError):
            aid.root = uuid4()

        assert hash(aid) == before
        assert lookup[aid] == "annotation"

    def test_generate_is_unique(self):
        assert AnnotationId.generate() != AnnotationId.generate()


class TestCuratorId:
    def test_accepts_did(self):
        assert str(CuratorId.create("did:plc:curator123").unwrap()) == "did:plc:curator123"

    def test_rejects_non_did(self):
        result = CuratorId.create("curator123")
        assert isinstance(result, Err)
        assert result.error.code == "VALIDATION_ERROR"


class TestURI:
    @pytest.mark.parametrize(
        "value",
        [
            "https://example.com/article/1",
            "http://localhost:8080/x?y=1",
            "at://did:plc:abc/app.annos.annotation/3lnxh4zet5c2a",
        ],
    )
    def test_accepts(self, value: str):
        result = URI.create(value)
        assert isinstance(result, Ok)
        assert result.value.value == value

    @pytest.mark.parametrize("value", ["", "example.com", "https://exa mple.com", "/relative/path"])
    def test_rejects_invalid(self, value: str):
        result = URI.create(value)
        assert isinstance(result, Err)
        assert "Invalid URI format" in result.error.message

    def test_rejects_malformed_at_uri(self):
        result = URI.create("at://did:plc:abc")
        assert isinstance(result, Err)
        assert "Invalid AT URI format" in result.error.message


class TestAnnotationNote:
    def test_strips_whitespace(self):
        assert str(AnnotationNote.create("  nice  ").unwrap()) == "nice"

    def test_rejects_blank(self):
        assert isinstance(AnnotationNote.create("   "), Err)

    def test_rejects_too_long(self):
        result = AnnotationNote.create("x" * (AnnotationNote.MAX_LENGTH + 1))
        assert isinstance(result, Err)
        assert "maximum length" in result.error.message

    def test_accepts_max_length(self):
        assert isinstance(AnnotationNote.create("x" * AnnotationNote.MAX_LENGTH), Ok)


class TestPublishedRecordId:
    def test_create(self):
        record_id = PublishedRecordId.create(
            "at://did:plc:abc/app.annos.annotation/3lnx", "bafyreib2rxk3rh6kzwq"
        ).unwrap()
        assert record_id.at_uri.rkey == "3lnx"
        assert str(record_id) == "at://did:plc:abc/app.annos.annotation/3lnx#bafyreib2rxk3rh6kzwq"

    def test_rejects_bad_uri(self):
        result = PublishedRecordId.create("https://example.com", "bafy")
        assert isinstance(result, Err)
        assert result.error.field == "uri"

    def test_rejects_bad_cid(self):
        result = PublishedRecordId.create("at://did:plc:abc/app.annos.annotation/3lnx", "no/slash")
        assert isinstance(result, Err)
        assert result.error.field == "cid"
