from annos.domain.annotation.util.di.provider import AnnotationProvider

__all__ = ["AnnotationProvider"]
