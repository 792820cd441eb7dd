from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol

from annos.domain.annotation.model.value import (
    AnnotationFieldId,
    AnnotationId,
    AnnotationTemplateId,
    PublishedRecordId,
)
from annos.domain.shared.port import Port

if TYPE_CHECKING:
    from annos.domain.annotation.model.annotation import Annotation
    from annos.domain.annotation.model.field import AnnotationField
    from annos.domain.annotation.model.template import AnnotationTemplate


class AnnotationFieldRepository(Port, Protocol):
    @abstractmethod
    async def get(self, field_id: AnnotationFieldId) -> AnnotationField | None: ...

    @abstractmethod
    async def save(self, field: AnnotationField) -> None: ...


class AnnotationTemplateRepository(Port, Protocol):
    @abstractmethod
    async def get(self, template_id: AnnotationTemplateId) -> AnnotationTemplate | None: ...

    @abstractmethod
    async def save(self, template: AnnotationTemplate) -> None:
        """Save the template, its fields and the required flags linking them."""
        ...


class AnnotationRepository(Port, Protocol):
    @abstractmethod
    async def get(self, annotation_id: AnnotationId) -> Annotation | None: ...

    @abstractmethod
    async def get_by_published_record_id(
        self, published_record_id: PublishedRecordId
    ) -> Annotation | None: ...

    @abstractmethod
    async def save(self, annotation: Annotation) -> None: ...

    @abstractmethod
    async def delete(self, annotation_id: AnnotationId) -> None: ...
