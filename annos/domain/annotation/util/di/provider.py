from dishka import provide

from annos.domain.annotation.command.create_and_publish import (
    CreateAndPublishAnnotationsFromTemplateHandler,
)
from annos.domain.annotation.command.unpublish import UnpublishAnnotationsHandler
from annos.domain.annotation.query.get_annotation import GetAnnotationByPublishedRecordHandler
from annos.util.di.base import Provider
from annos.util.di.scope import Scope


class AnnotationProvider(Provider):
    # Command Handlers
    create_and_publish_handler = provide(
        CreateAndPublishAnnotationsFromTemplateHandler, scope=Scope.UOW
    )
    unpublish_handler = provide(UnpublishAnnotationsHandler, scope=Scope.UOW)

    # Query Handlers
    get_by_published_record_handler = provide(
        GetAnnotationByPublishedRecordHandler, scope=Scope.UOW
    )
