"""The DI container resolves every handler against a real engine."""

import logging

import pytest

from annos.application.di import create_container
from annos.config import Config, DatabaseConfig
from annos.domain.annotation.command.create_and_publish import (
    CreateAndPublishAnnotationsFromTemplateHandler,
)
from annos.domain.annotation.command.unpublish import UnpublishAnnotationsHandler
from annos.domain.annotation.query.get_annotation import GetAnnotationByPublishedRecordHandler
from annos.infrastructure.atproto.publisher import AtprotoAnnotationsFromTemplatePublisher
from annos.infrastructure.persistence.repository.annotation import SQLAlchemyAnnotationRepository


class TestContainer:
    @pytest.mark.asyncio
    async def test_resolves_handlers(self):
        config = Config(
            database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:", auto_migrate=False)
        )
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        container = create_container(config)
        try:
            async with container() as uow:
                create = await uow.get(CreateAndPublishAnnotationsFromTemplateHandler)
                unpublish = await uow.get(UnpublishAnnotationsHandler)
                query = await uow.get(GetAnnotationByPublishedRecordHandler)
        finally:
            await container.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

        assert isinstance(create.publisher, AtprotoAnnotationsFromTemplatePublisher)
        assert isinstance(create.annotation_repo, SQLAlchemyAnnotationRepository)
        assert unpublish.publisher is create.publisher
        assert isinstance(query.annotation_repo, SQLAlchemyAnnotationRepository)
