"""Annotation domain commands."""

from .create_and_publish import (
    AnnotationInput,
    AnnotationsPublished,
    CreateAndPublishAnnotationsFromTemplate,
    CreateAndPublishAnnotationsFromTemplateHandler,
)
from .unpublish import (
    AnnotationsUnpublished,
    UnpublishAnnotations,
    UnpublishAnnotationsHandler,
)

__all__ = [
    "AnnotationInput",
    "AnnotationsPublished",
    "AnnotationsUnpublished",
    "CreateAndPublishAnnotationsFromTemplate",
    "CreateAndPublishAnnotationsFromTemplateHandler",
    "UnpublishAnnotations",
    "UnpublishAnnotationsHandler",
]
