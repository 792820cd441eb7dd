"""Value objects for the annotation domain."""

from __future__ import annotations

import re
from typing import ClassVar
from urllib.parse import urlparse
from uuid import UUID, uuid4

from pydantic import ConfigDict, RootModel
from pydantic import ValidationError as PydanticValidationError

from annos.domain.atproto.model.value import DID, ATUri
from annos.domain.shared.error import ValidationError
from annos.domain.shared.model.value import RootValueObject, ValueObject
from annos.domain.shared.result import Err, Ok, Result


class _EntityId(RootModel[UUID]):
    """UUID-backed identifier. Subclasses name the entity."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def generate(cls):
        return cls(uuid4())

    @classmethod
    def create(cls, value: str | UUID):
        try:
            return Ok(cls(value if isinstance(value, UUID) else UUID(str(value))))
        except (ValueError, PydanticValidationError):
            return Err(ValidationError(f"Invalid {cls.__name__}: {value!r}", field=cls.__name__))

    def __str__(self) -> str:
        return str(self.root)


class AnnotationId(_EntityId):
    """Unique identifier for an Annotation."""


class AnnotationFieldId(_EntityId):
    """Unique identifier for an AnnotationField."""


class AnnotationTemplateId(_EntityId):
    """Unique identifier for an AnnotationTemplate."""


class CuratorId(RootValueObject[str]):
    """The DID of the curator who authors fields, templates and annotations."""

    @classmethod
    def create(cls, value: str) -> Result[CuratorId, ValidationError]:
        try:
            did = DID(value)
        except PydanticValidationError:
            return Err(ValidationError(f"Invalid curator DID: {value!r}", field="curator_id"))
        return Ok(cls(str(did)))

    @property
    def did(self) -> DID:
        return DID(self.root)


class URI(RootValueObject[str]):
    """An absolute URL or an ``at://`` record URI."""

    @classmethod
    def create(cls, value: str) -> Result[URI, ValidationError]:
        if not isinstance(value, str) or not value or any(c.isspace() for c in value):
            return Err(ValidationError(f"Invalid URI format: {value!r}", field="url"))

        if value.startswith("at://"):
            if not ATUri.matches(value):
                return Err(ValidationError(f"Invalid AT URI format: {value}", field="url"))
            return Ok(cls(value))

        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc or not parsed.scheme[0].isalpha():
            return Err(ValidationError(f"Invalid URI format: {value}", field="url"))
        return Ok(cls(value))

    @property
    def value(self) -> str:
        return self.root


class AnnotationNote(RootValueObject[str]):
    """Free-text note attached to an annotation."""

    MAX_LENGTH: ClassVar[int] = 3000

    @classmethod
    def create(cls, value: str) -> Result[AnnotationNote, ValidationError]:
        text = value.strip() if isinstance(value, str) else ""
        if not text:
            return Err(ValidationError("Note must not be empty", field="note"))
        if len(text) > cls.MAX_LENGTH:
            return Err(
                ValidationError(
                    f"Note exceeds maximum length of {cls.MAX_LENGTH} characters", field="note"
                )
            )
        return Ok(cls(text))


class PublishedRecordId(ValueObject):
    """Ledger coordinate of a written record: its AT-URI and content hash."""

    uri: str
    cid: str

    @classmethod
    def create(cls, uri: str, cid: str) -> Result[PublishedRecordId, ValidationError]:
        if not ATUri.matches(uri):
            return Err(ValidationError(f"Invalid AT URI format: {uri}", field="uri"))
        if not cid or not re.fullmatch(r"[a-zA-Z0-9\-_]+", cid):
            return Err(ValidationError(f"Invalid CID: {cid!r}", field="cid"))
        return Ok(cls(uri=uri, cid=cid))

    @property
    def at_uri(self) -> ATUri:
        return ATUri.parse(self.uri)

    def __str__(self) -> str:
        return f"{self.uri}#{self.cid}"
