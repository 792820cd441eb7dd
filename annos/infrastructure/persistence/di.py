from typing import AsyncIterable

from dishka import from_context, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from annos.config import Config
from annos.domain.annotation.port.repository import (
    AnnotationFieldRepository,
    AnnotationRepository,
    AnnotationTemplateRepository,
)
from annos.infrastructure.persistence.database import create_db_engine, create_session_factory
from annos.infrastructure.persistence.repository.annotation import SQLAlchemyAnnotationRepository
from annos.infrastructure.persistence.repository.field import SQLAlchemyAnnotationFieldRepository
from annos.infrastructure.persistence.repository.template import (
    SQLAlchemyAnnotationTemplateRepository,
)
from annos.util.di.base import Provider
from annos.util.di.scope import Scope


class PersistenceProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)

    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            await session.commit()

    # UOW-scoped repositories
    field_repo = provide(
        SQLAlchemyAnnotationFieldRepository, scope=Scope.UOW, provides=AnnotationFieldRepository
    )
    template_repo = provide(
        SQLAlchemyAnnotationTemplateRepository,
        scope=Scope.UOW,
        provides=AnnotationTemplateRepository,
    )
    annotation_repo = provide(
        SQLAlchemyAnnotationRepository, scope=Scope.UOW, provides=AnnotationRepository
    )
