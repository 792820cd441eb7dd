from dishka import AsyncContainer, make_async_container

from annos.config import Config, configure_logging
from annos.domain.annotation.util.di import AnnotationProvider
from annos.infrastructure.atproto.di import AtprotoProvider
from annos.infrastructure.persistence import PersistenceProvider
from annos.infrastructure.persistence.migrate import run_migrations
from annos.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]
    configure_logging(config.logging)

    if config.database.auto_migrate:
        run_migrations(config.database.url)

    return make_async_container(
        PersistenceProvider(),
        AtprotoProvider(),
        AnnotationProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
