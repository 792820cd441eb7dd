"""The batch aggregate: annotations that together fill in one template."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from datetime import UTC, datetime

from annos.domain.annotation.model.annotation import Annotation
from annos.domain.annotation.model.template import AnnotationTemplate
from annos.domain.annotation.model.value import CuratorId, PublishedRecordId
from annos.domain.shared.error import InvariantViolationError
from annos.domain.shared.model.aggregate import Aggregate
from annos.domain.shared.result import Err, Ok, Result


class AnnotationsFromTemplate(Aggregate):
    """Transient aggregate validating a batch of annotations against a template.

    Never stored. It lives for the duration of one publish and hands its
    annotations to the repository individually afterwards.
    """

    template: AnnotationTemplate
    annotations: list[Annotation]
    curator_id: CuratorId
    created_at: datetime

    @classmethod
    def create(
        cls,
        annotations: list[Annotation],
        template: AnnotationTemplate,
        curator_id: CuratorId,
        created_at: datetime | None = None,
    ) -> Result[AnnotationsFromTemplate, InvariantViolationError]:
        foreign = [str(a.id) for a in annotations if a.curator_id != curator_id]
        if foreign:
            return Err(
                InvariantViolationError(
                    f"Annotations {foreign} do not belong to curator {curator_id}"
                )
            )

        counts = Counter(a.annotation_field_id for a in annotations)
        duplicated = [str(field_id) for field_id, n in counts.items() if n > 1]
        if duplicated:
            return Err(
                InvariantViolationError(
                    f"Multiple annotations reference the same field: {', '.join(duplicated)}"
                )
            )

        missing = [f for f in template.get_required_fields() if f.id not in counts]
        if missing:
            names = ", ".join(f"{f.name} ({f.id})" for f in missing)
            return Err(InvariantViolationError(f"Missing required fields: {names}"))

        return Ok(
            cls(
                template=template,
                annotations=list(annotations),
                curator_id=curator_id,
                created_at=created_at or datetime.now(UTC),
            )
        )

    def mark_all_annotations_as_published(
        self, published_record_ids: Mapping[str, PublishedRecordId]
    ) -> Result[None, InvariantViolationError]:
        """Attach ledger ids to every annotation, keyed by annotation id.

        All entries are checked before any annotation is touched.
        """
        missing = [str(a.id) for a in self.annotations if str(a.id) not in published_record_ids]
        if missing:
            return Err(
                InvariantViolationError(
                    f"No published record id for annotations: {', '.join(missing)}"
                )
            )

        for annotation in self.annotations:
            annotation.mark_as_published(published_record_ids[str(annotation.id)])
        return Ok(None)
