import logfire

from annos.domain.annotation.model.annotation import Annotation
from annos.domain.annotation.model.value import AnnotationId, CuratorId
from annos.domain.annotation.port.publisher import AnnotationsFromTemplatePublisher
from annos.domain.annotation.port.repository import AnnotationRepository
from annos.domain.shared.command import Command, CommandHandler, Response
from annos.domain.shared.error import (
    AnnosError,
    InvalidStateError,
    InvariantViolationError,
    NotFoundError,
    PersistError,
    PublishError,
    ValidationError,
)
from annos.domain.shared.result import Err, Ok, Result


class UnpublishAnnotations(Command):
    curator_id: str
    annotation_ids: list[str]


class AnnotationsUnpublished(Response):
    annotation_ids: list[str]


class UnpublishAnnotationsHandler(CommandHandler[UnpublishAnnotations, AnnotationsUnpublished]):
    """Revoke published annotations: delete them from the ledger, then locally."""

    annotation_repo: AnnotationRepository
    publisher: AnnotationsFromTemplatePublisher

    async def run(self, cmd: UnpublishAnnotations) -> Result[AnnotationsUnpublished, AnnosError]:
        with logfire.span("UnpublishAnnotations", count=len(cmd.annotation_ids)):
            curator_id = CuratorId.create(cmd.curator_id)
            if isinstance(curator_id, Err):
                return curator_id
            if not cmd.annotation_ids:
                return Err(ValidationError("No annotations to unpublish", field="annotation_ids"))

            annotations: list[Annotation] = []
            for raw_id in cmd.annotation_ids:
                annotation_id = AnnotationId.create(raw_id)
                if isinstance(annotation_id, Err):
                    return annotation_id

                annotation = await self.annotation_repo.get(annotation_id.value)
                if annotation is None:
                    return Err(NotFoundError(f"Annotation with ID {raw_id} not found"))
                if annotation.curator_id != curator_id.value:
                    return Err(
                        InvariantViolationError(
                            f"Annotation {raw_id} does not belong to curator {cmd.curator_id}"
                        )
                    )
                if annotation.published_record_id is None:
                    return Err(InvalidStateError(f"Annotation {raw_id} is not published"))
                annotations.append(annotation)

            record_ids = [a.published_record_id for a in annotations if a.published_record_id]
            unpublished = await self.publisher.unpublish(record_ids)
            if isinstance(unpublished, Err):
                return Err(
                    PublishError(
                        f"Failed to unpublish annotations: {unpublished.error.message}",
                        cause=unpublished.error,
                    )
                )

            for annotation in annotations:
                try:
                    await self.annotation_repo.delete(annotation.id)
                except Exception as e:
                    return Err(
                        PersistError(f"Failed to delete annotation {annotation.id}: {e}", cause=e)
                    )

            logfire.info("Annotations unpublished", count=len(annotations))
            return Ok(AnnotationsUnpublished(annotation_ids=[str(a.id) for a in annotations]))
