"""Annotation domain ports."""

from .publisher import AnnotationsFromTemplatePublisher, PublishedAnnotations
from .repository import (
    AnnotationFieldRepository,
    AnnotationRepository,
    AnnotationTemplateRepository,
)

__all__ = [
    "AnnotationFieldRepository",
    "AnnotationRepository",
    "AnnotationTemplateRepository",
    "AnnotationsFromTemplatePublisher",
    "PublishedAnnotations",
]
