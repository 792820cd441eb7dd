"""Port for writing annotation batches to the ledger."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol

from annos.domain.annotation.model.value import PublishedRecordId
from annos.domain.shared.error import PublishError
from annos.domain.shared.port import Port
from annos.domain.shared.result import Result

if TYPE_CHECKING:
    from annos.domain.annotation.model.batch import AnnotationsFromTemplate

PublishedAnnotations = dict[str, PublishedRecordId]
"""Annotation id -> ledger coordinate, in batch order."""


class AnnotationsFromTemplatePublisher(Port, Protocol):
    """The only component that talks to the ledger."""

    @abstractmethod
    async def publish(
        self, batch: AnnotationsFromTemplate
    ) -> Result[PublishedAnnotations, PublishError]:
        """Write every annotation in one all-or-nothing request.

        On success the mapping holds exactly one entry per annotation, in
        batch order. On failure nothing is presumed published.
        """
        ...

    @abstractmethod
    async def unpublish(
        self, published_record_ids: list[PublishedRecordId]
    ) -> Result[None, PublishError]:
        """Delete records, one request per owning repository.

        Repositories processed before a failure stay deleted.
        """
        ...
