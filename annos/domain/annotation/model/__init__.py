"""Annotation domain models."""

from .annotation import Annotation
from .batch import AnnotationsFromTemplate
from .field import AnnotationField
from .template import AnnotationTemplate, TemplateField
from .value import (
    URI,
    AnnotationFieldId,
    AnnotationId,
    AnnotationNote,
    AnnotationTemplateId,
    CuratorId,
    PublishedRecordId,
)

__all__ = [
    "Annotation",
    "AnnotationField",
    "AnnotationFieldId",
    "AnnotationId",
    "AnnotationNote",
    "AnnotationTemplate",
    "AnnotationTemplateId",
    "AnnotationsFromTemplate",
    "CuratorId",
    "PublishedRecordId",
    "TemplateField",
    "URI",
]
