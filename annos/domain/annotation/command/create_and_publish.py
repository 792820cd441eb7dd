import logging
from datetime import UTC, datetime
from typing import Any

import logfire

from annos.domain.annotation.model.annotation import Annotation
from annos.domain.annotation.model.batch import AnnotationsFromTemplate
from annos.domain.annotation.model.types import create_annotation_value
from annos.domain.annotation.model.value import (
    URI,
    AnnotationFieldId,
    AnnotationNote,
    AnnotationTemplateId,
    CuratorId,
)
from annos.domain.annotation.port.publisher import AnnotationsFromTemplatePublisher
from annos.domain.annotation.port.repository import (
    AnnotationFieldRepository,
    AnnotationRepository,
    AnnotationTemplateRepository,
)
from annos.domain.shared.command import Command, CommandHandler, Response
from annos.domain.shared.error import (
    AnnosError,
    NotFoundError,
    PersistError,
    PublishError,
    TypeMismatchError,
    ValidationError,
)
from annos.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class AnnotationInput(Command):
    annotation_field_id: str
    type: str
    value: dict[str, Any]
    note: str | None = None


class CreateAndPublishAnnotationsFromTemplate(Command):
    curator_id: str
    url: str
    template_id: str
    annotations: list[AnnotationInput]


class AnnotationsPublished(Response):
    annotation_ids: list[str]


class CreateAndPublishAnnotationsFromTemplateHandler(
    CommandHandler[CreateAndPublishAnnotationsFromTemplate, AnnotationsPublished]
):
    annotation_repo: AnnotationRepository
    template_repo: AnnotationTemplateRepository
    field_repo: AnnotationFieldRepository
    publisher: AnnotationsFromTemplatePublisher

    async def run(
        self, cmd: CreateAndPublishAnnotationsFromTemplate
    ) -> Result[AnnotationsPublished, AnnosError]:
        with logfire.span(
            "CreateAndPublishAnnotationsFromTemplate",
            template_id=cmd.template_id,
            annotation_count=len(cmd.annotations),
        ):
            curator_id = CuratorId.create(cmd.curator_id)
            url = URI.create(cmd.url)
            template_id = AnnotationTemplateId.create(cmd.template_id)
            if isinstance(curator_id, Err) or isinstance(url, Err) or isinstance(template_id, Err):
                reasons = [
                    r.error.message for r in (curator_id, url, template_id) if isinstance(r, Err)
                ]
                return Err(ValidationError(f"Invalid common properties: {'; '.join(reasons)}"))

            if not cmd.annotations:
                return Err(
                    ValidationError("At least one annotation is required", field="annotations")
                )

            template = await self.template_repo.get(template_id.value)
            if template is None:
                return Err(NotFoundError(f"Template with ID {cmd.template_id} not found"))

            annotations: list[Annotation] = []
            for item in cmd.annotations:
                annotation = await self._build_annotation(
                    item, curator_id.value, url.value, template_id.value
                )
                if isinstance(annotation, Err):
                    return annotation
                annotations.append(annotation.value)

            batch = AnnotationsFromTemplate.create(
                annotations=annotations,
                template=template,
                curator_id=curator_id.value,
                created_at=datetime.now(UTC),
            )
            if isinstance(batch, Err):
                return batch

            return await self._publish_and_save(batch.value)

    async def _build_annotation(
        self,
        item: AnnotationInput,
        curator_id: CuratorId,
        url: URI,
        template_id: AnnotationTemplateId,
    ) -> Result[Annotation, AnnosError]:
        field_id = AnnotationFieldId.create(item.annotation_field_id)
        if isinstance(field_id, Err):
            return field_id

        field = await self.field_repo.get(field_id.value)
        if field is None:
            return Err(
                NotFoundError(f"Annotation field with ID {item.annotation_field_id} not found")
            )

        if field.definition.type != item.type:
            return Err(
                TypeMismatchError(
                    f"Type mismatch: Field expects {field.definition.type} but got {item.type}"
                )
            )

        note = None
        if item.note:
            note_or_err = AnnotationNote.create(item.note)
            if isinstance(note_or_err, Err):
                return note_or_err
            note = note_or_err.value

        value = create_annotation_value(field.definition, item.value)
        if isinstance(value, Err):
            return value

        return Annotation.create(
            curator_id=curator_id,
            url=url,
            annotation_field=field,
            value=value.value,
            note=note,
            annotation_template_ids=[template_id],
        )

    async def _publish_and_save(
        self, batch: AnnotationsFromTemplate
    ) -> Result[AnnotationsPublished, AnnosError]:
        published = await self.publisher.publish(batch)
        if isinstance(published, Err):
            return Err(
                PublishError(
                    f"Failed to publish annotations: {published.error.message}",
                    cause=published.error,
                )
            )

        # From here on the ledger holds the records; failures are reported, not undone.
        uris = [p.uri for p in published.value.values()]
        logfire.info("Annotations published", count=len(uris), uris=uris)

        marked = batch.mark_all_annotations_as_published(published.value)
        if isinstance(marked, Err):
            logger.error(
                "Ledger and store diverged: could not mark published records %s: %s",
                uris,
                marked.error.message,
            )
            return Err(
                PublishError(
                    f"Failed to publish annotations: {marked.error.message}",
                    cause=marked.error,
                )
            )

        for annotation in batch.annotations:
            try:
                await self.annotation_repo.save(annotation)
            except Exception as e:
                logger.error(
                    "Ledger and store diverged: annotation %s published at %s but not saved: %s",
                    annotation.id,
                    annotation.published_record_id.uri if annotation.published_record_id else None,
                    e,
                )
                return Err(PersistError(f"Failed to save annotation {annotation.id}: {e}", cause=e))

        return Ok(AnnotationsPublished(annotation_ids=[str(a.id) for a in batch.annotations]))
